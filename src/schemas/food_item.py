"""Food item schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.ingredient import NutritionFacts


class FoodItemCreate(NutritionFacts):
    """Create a food item. The category defaults to the basic category."""

    name: str = Field(..., min_length=1, max_length=255)
    basic_category: str = Field(..., min_length=1, max_length=100)
    category: str | None = Field(None, max_length=255)
    brand: str | None = Field(None, max_length=255)
    barcode: str | None = Field(None, max_length=50)


class FoodItemUpdate(NutritionFacts):
    """Update a food item.

    Only fields present in the request body are applied; name and
    categories cannot be cleared.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    basic_category: str | None = Field(None, min_length=1, max_length=100)
    category: str | None = Field(None, min_length=1, max_length=255)
    brand: str | None = Field(None, max_length=255)
    barcode: str | None = Field(None, max_length=50)


class FoodItemResponse(NutritionFacts):
    """Food item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    brand: str | None
    barcode: str | None
    category: str
    basic_category: str
    openfoodfacts_id: str | None
    data_source: str
    last_sync: datetime | None
    has_nutritional_data: bool


class FoodItemStatsResponse(BaseModel):
    """Food item counters."""

    total: int
    with_nutritional_data: int
    from_openfoodfacts: int
    manual: int
