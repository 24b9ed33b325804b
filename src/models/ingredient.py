"""Ingredient catalog model."""

from sqlalchemy import Column, DateTime, Integer, String

from src.database import Base
from src.models.enums import DataSource
from src.models.mixins import NutritionFactsMixin, TimestampMixin


class Ingredient(Base, TimestampMixin, NutritionFactsMixin):
    """Catalog ingredient with optional nutrition facts."""

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    category = Column(String(255), nullable=True)
    basic_category = Column(String(100), nullable=True, index=True)
    brand = Column(String(255), nullable=True)
    barcode = Column(String(50), nullable=True, unique=True, index=True)
    openfoodfacts_id = Column(String(50), nullable=True)
    data_source = Column(String(20), nullable=False, default=DataSource.MANUAL.value)
    last_sync = Column(DateTime(timezone=True), nullable=True)
