"""Weekly plan models."""

from datetime import date

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text, event
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class WeeklyPlan(Base, TimestampMixin):
    """Meal plan covering one or more whole weeks."""

    __tablename__ = "weekly_plans"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    duration_weeks = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    created_date = Column(Date, nullable=False, default=date.today)

    # Relationships
    user = relationship("User", backref="weekly_plans")
    plan_recipes = relationship(
        "PlanRecipe",
        back_populates="weekly_plan",
        cascade="all, delete-orphan",
        order_by="PlanRecipe.planned_date",
    )
    shopping_list_items = relationship(
        "ShoppingListItem", back_populates="weekly_plan", cascade="all, delete-orphan"
    )

    def covers(self, day: date) -> bool:
        """Check if a date falls inside the plan's range."""
        return self.start_date <= day <= self.end_date


class PlanRecipe(Base, TimestampMixin):
    """A recipe scheduled on a given day of a plan."""

    __tablename__ = "plan_recipes"

    id = Column(Integer, primary_key=True, index=True)
    weekly_plan_id = Column(Integer, ForeignKey("weekly_plans.id"), nullable=False, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    planned_date = Column(Date, nullable=False)
    meal_type = Column(String(50), nullable=True)  # "lunch", "dinner", ...
    scaled_person = Column(Integer, nullable=True)
    added_date = Column(Date, nullable=False, default=date.today)

    # Relationships
    weekly_plan = relationship("WeeklyPlan", back_populates="plan_recipes")
    recipe = relationship("Recipe", back_populates="plan_entries")


@event.listens_for(PlanRecipe, "before_insert")
def _default_scaled_person(mapper, connection, target: PlanRecipe) -> None:
    if target.scaled_person is None and target.recipe is not None:
        target.scaled_person = target.recipe.person
