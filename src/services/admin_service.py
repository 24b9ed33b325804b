"""Administration: user management, system stats and catalog cleanup."""

import logging
from datetime import UTC, datetime, timedelta

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from src.models.enums import Role
from src.models.ingredient import Ingredient
from src.models.plan import WeeklyPlan
from src.models.recipe import Recipe, RecipeIngredient
from src.models.shopping_list import ShoppingListItem
from src.models.user import User
from src.schemas.user import AdminUserCreate, AdminUserUpdate
from src.services.auth import create_user, find_conflicting_user, get_password_hash

logger = logging.getLogger(__name__)

ACTIVE_USER_WINDOW = timedelta(days=30)


class AdminService:
    """Service behind the admin endpoints."""

    def __init__(self, db: Session):
        self.db = db

    # --- Users ---

    def get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    def create_user(self, data: AdminUserCreate) -> User:
        conflict = find_conflicting_user(self.db, data.email, data.username)
        if conflict:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=conflict)
        user = create_user(
            self.db,
            email=data.email,
            username=data.username,
            password=data.password,
            first_name=data.first_name,
            last_name=data.last_name,
            role=Role(data.role),
        )
        logger.info(f"Admin created user {user.id} ({user.role})")
        return user

    def update_user(self, user_id: int, data: AdminUserUpdate) -> User:
        user = self.get_user(user_id)
        conflict = find_conflicting_user(self.db, data.email, data.username, exclude_id=user.id)
        if conflict:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=conflict)

        if data.email is not None:
            user.email = data.email
        if data.username is not None:
            user.username = data.username
        if data.password:
            user.password_hash = get_password_hash(data.password)
        if data.is_enabled is not None:
            user.is_enabled = data.is_enabled
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Admin updated user {user.id}")
        return user

    def set_role(self, user_id: int, role: str) -> User:
        user = self.get_user(user_id)
        user.role = Role(role).value
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User {user.id} role set to {user.role}")
        return user

    def set_enabled(self, user_id: int, enabled: bool, acting_user: User) -> User:
        user = self.get_user(user_id)
        if user.id == acting_user.id and not enabled:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You cannot disable your own account",
            )
        user.is_enabled = enabled
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User {user.id} {'enabled' if enabled else 'disabled'}")
        return user

    def delete_user(self, user_id: int, acting_user: User) -> None:
        user = self.get_user(user_id)
        if user.id == acting_user.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You cannot delete your own account",
            )
        for plan in self.db.query(WeeklyPlan).filter(WeeklyPlan.user_id == user.id).all():
            self.db.delete(plan)
        self.db.delete(user)
        self.db.commit()
        logger.info(f"Admin {acting_user.id} deleted user {user_id}")

    # --- Stats ---

    def stats(self) -> dict:
        since = datetime.now(UTC) - ACTIVE_USER_WINDOW

        origin_usage = func.count(Recipe.id).label("usage")
        top_origin = (
            self.db.query(Recipe.origin, origin_usage)
            .filter(Recipe.origin.isnot(None), Recipe.origin != "")
            .group_by(Recipe.origin)
            .order_by(origin_usage.desc(), Recipe.origin)
            .first()
        )
        category_usage = func.count(Ingredient.id).label("usage")
        top_category = (
            self.db.query(Ingredient.basic_category, category_usage)
            .filter(Ingredient.basic_category.isnot(None))
            .group_by(Ingredient.basic_category)
            .order_by(category_usage.desc(), Ingredient.basic_category)
            .first()
        )

        return {
            "total_users": self.db.query(func.count(User.id)).scalar() or 0,
            "total_recipes": self.db.query(func.count(Recipe.id)).scalar() or 0,
            "total_ingredients": self.db.query(func.count(Ingredient.id)).scalar() or 0,
            "total_plans": self.db.query(func.count(WeeklyPlan.id)).scalar() or 0,
            "active_users": (
                self.db.query(func.count(User.id)).filter(User.created_at >= since).scalar() or 0
            ),
            "most_popular_origin": top_origin[0] if top_origin else None,
            "most_used_category": top_category[0] if top_category else None,
        }

    # --- Catalog maintenance ---

    def _orphans_query(self):
        used_by_recipes = select(RecipeIngredient.ingredient_id)
        used_by_lists = select(ShoppingListItem.ingredient_id)
        return self.db.query(Ingredient).filter(
            Ingredient.id.notin_(used_by_recipes),
            Ingredient.id.notin_(used_by_lists),
        )

    def orphan_ingredients(self) -> list[Ingredient]:
        """Catalog ingredients used by no recipe and no shopping list."""
        return self._orphans_query().order_by(Ingredient.name).all()

    def cleanup_orphans(self) -> int:
        orphans = self._orphans_query().all()
        for ingredient in orphans:
            self.db.delete(ingredient)
        self.db.commit()
        logger.info(f"Removed {len(orphans)} orphan ingredients")
        return len(orphans)

    def syncable_ingredient_ids(self) -> list[int]:
        rows = (
            self.db.query(Ingredient.id)
            .filter(Ingredient.barcode.isnot(None), Ingredient.barcode != "")
            .order_by(Ingredient.id)
            .all()
        )
        return [ingredient_id for (ingredient_id,) in rows]
