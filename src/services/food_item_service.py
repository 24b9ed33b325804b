"""Food item operations: packaged products scanned or entered by hand."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from src.models.enums import DataSource
from src.models.food_item import FoodItem
from src.models.mixins import NUTRIENT_COLUMNS
from src.schemas.food_item import FoodItemCreate, FoodItemUpdate
from src.services.nutrition_service import to_decimal
from src.services.openfoodfacts import OpenFoodFactsService, apply_remote_data

logger = logging.getLogger(__name__)


class FoodItemService:
    """Service for food items."""

    def __init__(self, db: Session, openfoodfacts: OpenFoodFactsService | None = None):
        self.db = db
        self.openfoodfacts = openfoodfacts or OpenFoodFactsService()

    def get(self, food_item_id: int) -> FoodItem:
        food_item = self.db.query(FoodItem).filter(FoodItem.id == food_item_id).first()
        if not food_item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Food item not found")
        return food_item

    def find_by_barcode(self, barcode: str) -> FoodItem | None:
        return self.db.query(FoodItem).filter(FoodItem.barcode == barcode).first()

    def list_food_items(
        self, name: str | None = None, basic_category: str | None = None
    ) -> list[FoodItem]:
        query = self.db.query(FoodItem)
        if name:
            query = query.filter(FoodItem.name.ilike(f"%{name}%"))
        if basic_category:
            query = query.filter(func.lower(FoodItem.basic_category) == basic_category.lower())
        return query.order_by(FoodItem.name).all()

    def stats(self) -> dict:
        total = self.db.query(func.count(FoodItem.id)).scalar() or 0
        with_data = (
            self.db.query(func.count(FoodItem.id))
            .filter(FoodItem.with_nutritional_data())
            .scalar()
            or 0
        )
        from_openfoodfacts = (
            self.db.query(func.count(FoodItem.id))
            .filter(FoodItem.data_source == DataSource.OPENFOODFACTS.value)
            .scalar()
            or 0
        )
        return {
            "total": total,
            "with_nutritional_data": with_data,
            "from_openfoodfacts": from_openfoodfacts,
            "manual": total - from_openfoodfacts,
        }

    def _check_barcode(self, barcode: str | None, exclude_id: int | None = None) -> None:
        if not barcode:
            return
        existing = self.find_by_barcode(barcode)
        if existing and existing.id != exclude_id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Barcode {barcode} is already assigned to '{existing.name}'",
            )

    def create(self, data: FoodItemCreate) -> FoodItem:
        self._check_barcode(data.barcode)

        values = data.model_dump()
        values["name"] = data.name.strip()
        values["category"] = data.category or data.basic_category
        for column in NUTRIENT_COLUMNS:
            values[column] = to_decimal(values.get(column))
        food_item = FoodItem(**values, data_source=DataSource.MANUAL.value)
        self.db.add(food_item)
        self.db.commit()
        self.db.refresh(food_item)
        logger.info(f"Created food item {food_item.id}: {food_item.name}")
        return food_item

    def update(self, food_item_id: int, data: FoodItemUpdate) -> FoodItem:
        food_item = self.get(food_item_id)
        changes = data.model_dump(exclude_unset=True)
        self._check_barcode(changes.get("barcode"), exclude_id=food_item.id)

        for field, value in changes.items():
            if field in ("name", "category", "basic_category"):
                if value is None:
                    continue
                value = value.strip()
            if field in NUTRIENT_COLUMNS:
                value = to_decimal(value)
            setattr(food_item, field, value)

        self.db.commit()
        self.db.refresh(food_item)
        return food_item

    def delete(self, food_item_id: int) -> None:
        food_item = self.get(food_item_id)
        self.db.delete(food_item)
        self.db.commit()
        logger.info(f"Deleted food item {food_item_id}")

    async def search_barcode(self, barcode: str) -> FoodItem:
        """Local food items first, then Open Food Facts; remote hits are saved."""
        local = self.find_by_barcode(barcode)
        if local:
            return local

        remote = await self.openfoodfacts.lookup_food_item(barcode)
        if remote is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No product found for barcode {barcode}",
            )
        self.db.add(remote)
        self.db.commit()
        self.db.refresh(remote)
        logger.info(f"Imported food item {remote.id} from Open Food Facts barcode {barcode}")
        return remote

    async def sync(self, food_item_id: int) -> FoodItem:
        """Refresh a food item's data from Open Food Facts."""
        food_item = self.get(food_item_id)
        if not food_item.barcode:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Food item has no barcode to sync",
            )
        remote = await self.openfoodfacts.lookup_food_item(food_item.barcode)
        if remote is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Barcode {food_item.barcode} was not found on Open Food Facts",
            )
        apply_remote_data(food_item, remote)
        self.db.commit()
        self.db.refresh(food_item)
        logger.info(f"Synced food item {food_item.id} from Open Food Facts")
        return food_item
