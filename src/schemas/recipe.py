"""Recipe schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RecipeTypeName = Literal["Main course", "Starter", "Dessert", "Appetizer"]

# --- Recipe Ingredient ---


class RecipeIngredientCreate(BaseModel):
    """Ingredient line of a recipe, referencing the catalog by name.

    Unknown names are added to the catalog with the given category.
    """

    ingredient_name: str = Field(..., min_length=1, max_length=255)
    ingredient_category: str | None = Field(None, max_length=100)
    quantity: Decimal = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=50)


class ScaledIngredientResponse(BaseModel):
    """Recipe ingredient line, scaled to the requested servings."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None
    ingredient_id: int | None
    name: str
    quantity: float
    unit: str


# --- Recipe ---


class RecipeCreate(BaseModel):
    """Create or fully replace a recipe."""

    name: str = Field(..., min_length=2, max_length=100)
    type: RecipeTypeName
    description: str | None = Field(None, max_length=1000)
    origin: str | None = Field(None, max_length=50)
    preparation_time: int = Field(0, ge=0, le=1440)
    cooking_time: int | None = Field(None, ge=0, le=1440)
    rest_time: int | None = Field(None, ge=0, le=1440)
    person: int = Field(..., ge=1, le=100)
    is_baby_friendly: bool = False
    ingredients: list[RecipeIngredientCreate] = Field(..., min_length=1)
    steps: list[str] = Field(..., min_length=1)


class NutritionPerPortion(BaseModel):
    """Nutrient totals for one portion. None when no ingredient had data."""

    energy_kcal: float | None = None
    carbohydrates: float | None = None
    sugars: float | None = None
    fiber: float | None = None
    fat: float | None = None
    saturated_fat: float | None = None
    protein: float | None = None
    salt: float | None = None
    sodium: float | None = None

    # Vitamins
    vitamin_a: float | None = None
    vitamin_b1: float | None = None
    vitamin_b2: float | None = None
    vitamin_b3: float | None = None
    vitamin_b5: float | None = None
    vitamin_b6: float | None = None
    vitamin_b7: float | None = None
    vitamin_b9: float | None = None
    vitamin_b12: float | None = None
    vitamin_c: float | None = None
    vitamin_d: float | None = None
    vitamin_e: float | None = None
    vitamin_k: float | None = None

    # Minerals
    calcium: float | None = None
    iron: float | None = None
    magnesium: float | None = None
    phosphorus: float | None = None
    potassium: float | None = None
    zinc: float | None = None
    copper: float | None = None
    manganese: float | None = None
    selenium: float | None = None
    iodine: float | None = None
    chromium: float | None = None
    molybdenum: float | None = None
    fluoride: float | None = None


class RecipeResponse(BaseModel):
    """Recipe scaled to ``scaled_person`` servings."""

    id: int
    name: str
    type: str
    description: str | None
    origin: str | None
    preparation_time: int
    cooking_time: int | None
    rest_time: int | None
    total_time: int
    person: int
    scaled_person: int | None
    is_baby_friendly: bool
    ingredients: list[ScaledIngredientResponse]
    steps: list[str]
    nutrition_per_portion: NutritionPerPortion
    created_at: datetime
    updated_at: datetime


class RecipeCountResponse(BaseModel):
    """Number of recipes in the catalog."""

    count: int
