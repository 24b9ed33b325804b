"""Weekly plan operations."""

import logging
from datetime import date, timedelta

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from src.models.plan import PlanRecipe, WeeklyPlan
from src.models.recipe import Recipe
from src.models.user import User
from src.schemas.plan import PlanRecipeCreate, WeeklyPlanCreate, WeeklyPlanUpdate

logger = logging.getLogger(__name__)


def plan_end_date(start_date: date, duration_weeks: int) -> date:
    """Last day covered by a plan of ``duration_weeks`` whole weeks."""
    return start_date + timedelta(days=7 * duration_weeks - 1)


class PlanService:
    """Service for weekly plans owned by a user."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, plan_id: int, user: User) -> WeeklyPlan:
        """Get a plan owned by the user. Other users' plans are reported missing."""
        plan = (
            self.db.query(WeeklyPlan)
            .filter(WeeklyPlan.id == plan_id, WeeklyPlan.user_id == user.id)
            .first()
        )
        if not plan:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")
        return plan

    def list_plans(self, user: User) -> list[WeeklyPlan]:
        return (
            self.db.query(WeeklyPlan)
            .filter(WeeklyPlan.user_id == user.id)
            .order_by(WeeklyPlan.start_date.desc(), WeeklyPlan.id.desc())
            .all()
        )

    def recipe_counts(self, plan_ids: list[int]) -> dict[int, int]:
        """Number of scheduled entries per plan."""
        if not plan_ids:
            return {}
        rows = (
            self.db.query(PlanRecipe.weekly_plan_id, func.count(PlanRecipe.id))
            .filter(PlanRecipe.weekly_plan_id.in_(plan_ids))
            .group_by(PlanRecipe.weekly_plan_id)
            .all()
        )
        return dict(rows)

    def create(self, data: WeeklyPlanCreate, user: User) -> WeeklyPlan:
        plan = WeeklyPlan(
            user_id=user.id,
            name=data.name.strip(),
            start_date=data.start_date,
            duration_weeks=data.duration_weeks,
            end_date=plan_end_date(data.start_date, data.duration_weeks),
            description=data.description,
        )
        self.db.add(plan)
        self.db.commit()
        self.db.refresh(plan)
        logger.info(f"User {user.id} created plan {plan.id}: {plan.name}")
        return plan

    def update(self, plan_id: int, data: WeeklyPlanUpdate, user: User) -> WeeklyPlan:
        plan = self.get(plan_id, user)
        changes = data.model_dump(exclude_unset=True)
        # A plan always has a name; an explicit null description clears it
        if changes.get("name") is not None:
            plan.name = changes["name"].strip()
        if "description" in changes:
            plan.description = changes["description"]
        self.db.commit()
        self.db.refresh(plan)
        return plan

    def delete(self, plan_id: int, user: User) -> None:
        plan = self.get(plan_id, user)
        self.db.delete(plan)
        self.db.commit()
        logger.info(f"User {user.id} deleted plan {plan_id}")

    def copy(self, plan_id: int, start_date: date, user: User) -> WeeklyPlan:
        """Duplicate a plan at a new start date, shifting every entry by the same offset.

        The shopping list is not copied; generate it again on the new plan.
        """
        source = self.get(plan_id, user)
        offset = start_date - source.start_date

        copy = WeeklyPlan(
            user_id=user.id,
            name=f"Copy of {source.name}",
            start_date=start_date,
            duration_weeks=source.duration_weeks,
            end_date=plan_end_date(start_date, source.duration_weeks),
            description=source.description,
        )
        for entry in source.plan_recipes:
            copy.plan_recipes.append(
                PlanRecipe(
                    recipe_id=entry.recipe_id,
                    planned_date=entry.planned_date + offset,
                    meal_type=entry.meal_type,
                    scaled_person=entry.scaled_person,
                )
            )
        self.db.add(copy)
        self.db.commit()
        self.db.refresh(copy)
        logger.info(f"Copied plan {source.id} to plan {copy.id} starting {start_date}")
        return copy

    # --- Entries ---

    def list_entries(self, plan_id: int, user: User) -> list[PlanRecipe]:
        plan = self.get(plan_id, user)
        return (
            self.db.query(PlanRecipe)
            .filter(PlanRecipe.weekly_plan_id == plan.id)
            .order_by(PlanRecipe.planned_date, PlanRecipe.id)
            .all()
        )

    def add_entry(self, plan_id: int, data: PlanRecipeCreate, user: User) -> PlanRecipe:
        plan = self.get(plan_id, user)
        if not plan.covers(data.planned_date):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"Planned date {data.planned_date} is outside the plan "
                    f"({plan.start_date} to {plan.end_date})"
                ),
            )
        recipe = self.db.query(Recipe).filter(Recipe.id == data.recipe_id).first()
        if not recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")

        entry = PlanRecipe(
            weekly_plan_id=plan.id,
            recipe=recipe,
            planned_date=data.planned_date,
            meal_type=data.meal_type,
            scaled_person=data.scaled_person or recipe.person,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info(f"Scheduled recipe {recipe.id} on {entry.planned_date} in plan {plan.id}")
        return entry

    def remove_entry(self, plan_id: int, entry_id: int, user: User) -> None:
        plan = self.get(plan_id, user)
        entry = (
            self.db.query(PlanRecipe)
            .filter(PlanRecipe.id == entry_id, PlanRecipe.weekly_plan_id == plan.id)
            .first()
        )
        if not entry:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan entry not found")
        self.db.delete(entry)
        self.db.commit()
        logger.info(f"Removed entry {entry_id} from plan {plan.id}")
