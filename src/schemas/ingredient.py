"""Ingredient schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NutritionFacts(BaseModel):
    """Nutrient values per 100 g / 100 ml. None means unknown."""

    energy: float | None = Field(None, ge=0)
    energy_kcal: float | None = Field(None, ge=0)
    carbohydrates: float | None = Field(None, ge=0)
    sugars: float | None = Field(None, ge=0)
    fiber: float | None = Field(None, ge=0)
    fat: float | None = Field(None, ge=0)
    saturated_fat: float | None = Field(None, ge=0)
    monounsaturated_fat: float | None = Field(None, ge=0)
    polyunsaturated_fat: float | None = Field(None, ge=0)
    trans_fat: float | None = Field(None, ge=0)
    protein: float | None = Field(None, ge=0)
    salt: float | None = Field(None, ge=0)
    sodium: float | None = Field(None, ge=0)
    alcohol: float | None = Field(None, ge=0)

    # Vitamins
    vitamin_a: float | None = Field(None, ge=0)
    vitamin_b1: float | None = Field(None, ge=0)
    vitamin_b2: float | None = Field(None, ge=0)
    vitamin_b3: float | None = Field(None, ge=0)
    vitamin_b5: float | None = Field(None, ge=0)
    vitamin_b6: float | None = Field(None, ge=0)
    vitamin_b7: float | None = Field(None, ge=0)
    vitamin_b9: float | None = Field(None, ge=0)
    vitamin_b12: float | None = Field(None, ge=0)
    vitamin_c: float | None = Field(None, ge=0)
    vitamin_d: float | None = Field(None, ge=0)
    vitamin_e: float | None = Field(None, ge=0)
    vitamin_k: float | None = Field(None, ge=0)

    # Minerals
    calcium: float | None = Field(None, ge=0)
    iron: float | None = Field(None, ge=0)
    magnesium: float | None = Field(None, ge=0)
    phosphorus: float | None = Field(None, ge=0)
    potassium: float | None = Field(None, ge=0)
    zinc: float | None = Field(None, ge=0)
    copper: float | None = Field(None, ge=0)
    manganese: float | None = Field(None, ge=0)
    selenium: float | None = Field(None, ge=0)
    iodine: float | None = Field(None, ge=0)
    chromium: float | None = Field(None, ge=0)
    molybdenum: float | None = Field(None, ge=0)
    fluoride: float | None = Field(None, ge=0)


class IngredientCreate(NutritionFacts):
    """Create a catalog ingredient."""

    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(None, max_length=255)
    basic_category: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=255)
    barcode: str | None = Field(None, max_length=50)


class IngredientUpdate(NutritionFacts):
    """Update a catalog ingredient.

    Only fields present in the request body are applied.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, max_length=255)
    basic_category: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=255)
    barcode: str | None = Field(None, max_length=50)


class IngredientResponse(NutritionFacts):
    """Catalog ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None  # None for Open Food Facts previews that were not saved
    name: str
    category: str | None
    basic_category: str | None
    brand: str | None
    barcode: str | None
    openfoodfacts_id: str | None
    data_source: str
    last_sync: datetime | None
    has_nutritional_data: bool


class IngredientSummary(BaseModel):
    """Short ingredient reference used inside other responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str | None
    basic_category: str | None


class IngredientStatsResponse(BaseModel):
    """Catalog counters."""

    total: int
    with_nutritional_data: int
    from_openfoodfacts: int
