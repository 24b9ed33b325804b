"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.admin_service import AdminService
from src.services.auth import decode_access_token
from src.services.food_item_service import FoodItemService
from src.services.ingredient_service import IngredientService
from src.services.openfoodfacts import OpenFoodFactsService
from src.services.plan_service import PlanService
from src.services.recipe_service import RecipeService
from src.services.shopping_list_service import ShoppingListService

security = HTTPBearer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_enabled:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is disabled")

    return user


def get_current_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Require the current user to hold the admin role."""
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


def get_openfoodfacts_service() -> OpenFoodFactsService:
    """Get Open Food Facts client instance."""
    return OpenFoodFactsService()


def get_ingredient_service(
    db: Annotated[Session, Depends(get_db)],
    openfoodfacts: Annotated[OpenFoodFactsService, Depends(get_openfoodfacts_service)],
) -> IngredientService:
    """Get ingredient service with dependencies."""
    return IngredientService(db, openfoodfacts)


def get_food_item_service(
    db: Annotated[Session, Depends(get_db)],
    openfoodfacts: Annotated[OpenFoodFactsService, Depends(get_openfoodfacts_service)],
) -> FoodItemService:
    """Get food item service with dependencies."""
    return FoodItemService(db, openfoodfacts)


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(db)


def get_plan_service(
    db: Annotated[Session, Depends(get_db)],
) -> PlanService:
    """Get plan service with dependencies."""
    return PlanService(db)


def get_shopping_list_service(
    db: Annotated[Session, Depends(get_db)],
) -> ShoppingListService:
    """Get shopping list service with dependencies."""
    return ShoppingListService(db)


def get_admin_service(
    db: Annotated[Session, Depends(get_db)],
) -> AdminService:
    """Get admin service with dependencies."""
    return AdminService(db)
