"""Weekly plan and shopping list schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.ingredient import IngredientSummary

# --- Weekly Plan ---


class WeeklyPlanCreate(BaseModel):
    """Create a weekly plan."""

    name: str = Field(..., min_length=1, max_length=255)
    start_date: date
    duration_weeks: int = Field(1, ge=1, le=8)
    description: str | None = Field(None, max_length=2000)


class WeeklyPlanUpdate(BaseModel):
    """Update plan metadata. Dates are fixed once created.

    Only fields present in the request body are applied.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)


class WeeklyPlanCopy(BaseModel):
    """Copy a plan to a new start date."""

    start_date: date


class WeeklyPlanResponse(BaseModel):
    """Weekly plan response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    start_date: date
    end_date: date
    duration_weeks: int
    description: str | None
    created_date: date
    recipe_count: int = 0
    created_at: datetime
    updated_at: datetime


# --- Plan Recipe ---


class PlanRecipeCreate(BaseModel):
    """Schedule a recipe in a plan."""

    recipe_id: int
    planned_date: date
    meal_type: str | None = Field(None, max_length=50)
    scaled_person: int | None = Field(None, ge=1, le=100)


class RecipeRef(BaseModel):
    """Minimal recipe reference."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    person: int


class PlanRecipeResponse(BaseModel):
    """Scheduled recipe response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    weekly_plan_id: int
    recipe: RecipeRef
    planned_date: date
    meal_type: str | None
    scaled_person: int | None
    added_date: date


# --- Shopping List ---


class ShoppingListItemUpdate(BaseModel):
    """Edit a shopping list item. Omitted fields are left as they are."""

    quantity_owned: Decimal | None = Field(None, ge=0)
    is_checked: bool | None = None
    is_validated: bool | None = None


class ShoppingListItemResponse(BaseModel):
    """Shopping list item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    weekly_plan_id: int
    ingredient: IngredientSummary
    unit: str
    quantity_needed: float
    quantity_owned: float
    quantity_to_buy: float
    is_checked: bool
    is_validated: bool
