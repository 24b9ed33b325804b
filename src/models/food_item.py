"""Food item model: packaged products tracked apart from the recipe ingredient catalog."""

from sqlalchemy import Column, DateTime, Integer, String

from src.database import Base
from src.models.enums import DataSource
from src.models.mixins import NutritionFactsMixin, TimestampMixin


class FoodItem(Base, TimestampMixin, NutritionFactsMixin):
    """A food product, usually scanned by barcode, with nutrition facts per 100 g."""

    __tablename__ = "food_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    brand = Column(String(255), nullable=True)
    barcode = Column(String(50), nullable=True, unique=True, index=True)
    category = Column(String(255), nullable=False)
    basic_category = Column(String(100), nullable=False, index=True)
    openfoodfacts_id = Column(String(50), nullable=True)
    data_source = Column(String(20), nullable=False, default=DataSource.MANUAL.value)
    last_sync = Column(DateTime(timezone=True), nullable=True)
