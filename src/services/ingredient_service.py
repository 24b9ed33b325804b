"""Ingredient catalog operations."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from src.models.enums import DataSource
from src.models.ingredient import Ingredient
from src.models.mixins import NUTRIENT_COLUMNS
from src.models.recipe import RecipeIngredient
from src.models.shopping_list import ShoppingListItem
from src.schemas.ingredient import IngredientCreate, IngredientUpdate
from src.services.nutrition_service import to_decimal
from src.services.openfoodfacts import OpenFoodFactsService, apply_remote_data

logger = logging.getLogger(__name__)

AUTOCOMPLETE_MIN_LENGTH = 2
AUTOCOMPLETE_MAX_LIMIT = 50
POPULAR_MAX_LIMIT = 50


class IngredientService:
    """Service for the shared ingredient catalog."""

    def __init__(self, db: Session, openfoodfacts: OpenFoodFactsService | None = None):
        self.db = db
        self.openfoodfacts = openfoodfacts or OpenFoodFactsService()

    # --- Lookups ---

    def get(self, ingredient_id: int) -> Ingredient:
        ingredient = self.db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()
        if not ingredient:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
        return ingredient

    def find_by_name(self, name: str) -> Ingredient | None:
        """Case-insensitive exact name match."""
        return (
            self.db.query(Ingredient)
            .filter(func.lower(Ingredient.name) == name.strip().lower())
            .first()
        )

    def get_by_name(self, name: str) -> Ingredient:
        ingredient = self.find_by_name(name)
        if not ingredient:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
        return ingredient

    def find_by_barcode(self, barcode: str) -> Ingredient | None:
        return self.db.query(Ingredient).filter(Ingredient.barcode == barcode).first()

    def get_by_barcode(self, barcode: str) -> Ingredient:
        ingredient = self.find_by_barcode(barcode)
        if not ingredient:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
        return ingredient

    def list_ingredients(
        self, name: str | None = None, basic_category: str | None = None
    ) -> list[Ingredient]:
        query = self.db.query(Ingredient)
        if name:
            query = query.filter(Ingredient.name.ilike(f"%{name}%"))
        if basic_category:
            query = query.filter(func.lower(Ingredient.basic_category) == basic_category.lower())
        return query.order_by(Ingredient.name).all()

    def by_category(self, basic_category: str) -> list[Ingredient]:
        return self.list_ingredients(basic_category=basic_category)

    def autocomplete(self, query: str, limit: int = 10) -> list[Ingredient]:
        """Ingredients whose name starts with the query, shortest names first."""
        query = query.strip()
        if len(query) < AUTOCOMPLETE_MIN_LENGTH:
            return []
        limit = max(1, min(limit, AUTOCOMPLETE_MAX_LIMIT))
        return (
            self.db.query(Ingredient)
            .filter(Ingredient.name.ilike(f"{query}%"))
            .order_by(func.length(Ingredient.name), Ingredient.name)
            .limit(limit)
            .all()
        )

    def popular(self, limit: int = 20, from_plans: bool = False) -> list[Ingredient]:
        """Most used ingredients, by recipe lines or by shopping list items."""
        limit = max(1, min(limit, POPULAR_MAX_LIMIT))
        usage = ShoppingListItem if from_plans else RecipeIngredient
        uses = func.count(usage.id)
        return (
            self.db.query(Ingredient)
            .outerjoin(usage, usage.ingredient_id == Ingredient.id)
            .group_by(Ingredient.id)
            .order_by(uses.desc(), Ingredient.name)
            .limit(limit)
            .all()
        )

    def by_data_source(self, data_source: DataSource) -> list[Ingredient]:
        return (
            self.db.query(Ingredient)
            .filter(Ingredient.data_source == data_source.value)
            .order_by(Ingredient.name)
            .all()
        )

    def stats(self) -> dict:
        total = self.db.query(func.count(Ingredient.id)).scalar() or 0
        with_data = (
            self.db.query(func.count(Ingredient.id))
            .filter(Ingredient.with_nutritional_data())
            .scalar()
            or 0
        )
        from_openfoodfacts = (
            self.db.query(func.count(Ingredient.id))
            .filter(
                Ingredient.data_source == DataSource.OPENFOODFACTS.value,
                Ingredient.openfoodfacts_id.isnot(None),
            )
            .scalar()
            or 0
        )
        return {
            "total": total,
            "with_nutritional_data": with_data,
            "from_openfoodfacts": from_openfoodfacts,
        }

    # --- Writes ---

    def _check_unique(
        self, name: str | None, barcode: str | None, exclude_id: int | None = None
    ) -> None:
        if name:
            existing = self.find_by_name(name)
            if existing and existing.id != exclude_id:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Ingredient '{name}' already exists",
                )
        if barcode:
            existing = self.find_by_barcode(barcode)
            if existing and existing.id != exclude_id:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Barcode {barcode} is already assigned to '{existing.name}'",
                )

    def create(self, data: IngredientCreate) -> Ingredient:
        name = data.name.strip()
        self._check_unique(name, data.barcode)

        values = data.model_dump()
        values["name"] = name
        for column in NUTRIENT_COLUMNS:
            values[column] = to_decimal(values.get(column))
        ingredient = Ingredient(**values, data_source=DataSource.MANUAL.value)
        self.db.add(ingredient)
        self.db.commit()
        self.db.refresh(ingredient)
        logger.info(f"Created ingredient {ingredient.id}: {ingredient.name}")
        return ingredient

    def update(self, ingredient_id: int, data: IngredientUpdate) -> Ingredient:
        ingredient = self.get(ingredient_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("name"):
            changes["name"] = changes["name"].strip()
        self._check_unique(changes.get("name"), changes.get("barcode"), exclude_id=ingredient.id)

        for field, value in changes.items():
            if field == "name" and value is None:
                continue
            if field in NUTRIENT_COLUMNS:
                value = to_decimal(value)
            setattr(ingredient, field, value)

        self.db.commit()
        self.db.refresh(ingredient)
        return ingredient

    def delete(self, ingredient_id: int) -> None:
        ingredient = self.get(ingredient_id)
        in_recipes = (
            self.db.query(RecipeIngredient.id)
            .filter(RecipeIngredient.ingredient_id == ingredient.id)
            .first()
        )
        in_lists = (
            self.db.query(ShoppingListItem.id)
            .filter(ShoppingListItem.ingredient_id == ingredient.id)
            .first()
        )
        if in_recipes or in_lists:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Ingredient is used by a recipe or shopping list",
            )
        self.db.delete(ingredient)
        self.db.commit()
        logger.info(f"Deleted ingredient {ingredient_id}")

    def get_or_create_by_name(self, name: str, category: str | None = None) -> Ingredient:
        """Resolve a catalog ingredient by name, adding a manual entry if missing.

        The new ingredient is flushed, not committed; the caller owns the
        transaction.
        """
        name = name.strip()
        ingredient = self.find_by_name(name)
        if ingredient:
            return ingredient
        ingredient = Ingredient(
            name=name,
            category=category,
            basic_category=category,
            data_source=DataSource.MANUAL.value,
        )
        self.db.add(ingredient)
        self.db.flush()
        logger.info(f"Added ingredient '{name}' to the catalog")
        return ingredient

    # --- Open Food Facts ---

    async def preview_barcode(self, barcode: str) -> Ingredient:
        """Look a barcode up remotely without saving anything."""
        remote = await self.openfoodfacts.lookup_ingredient(barcode)
        if remote is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No product found for barcode {barcode}",
            )
        return remote

    async def search_barcode(self, barcode: str) -> Ingredient:
        """Local catalog first, then Open Food Facts; remote hits are saved."""
        local = self.find_by_barcode(barcode)
        if local:
            return local

        remote = await self.preview_barcode(barcode)
        if self.find_by_name(remote.name):
            # Keep names unique: a different product may share the name
            remote.name = f"{remote.name} ({barcode})"
        self.db.add(remote)
        self.db.commit()
        self.db.refresh(remote)
        logger.info(f"Imported ingredient {remote.id} from Open Food Facts barcode {barcode}")
        return remote

    async def sync(self, ingredient_id: int) -> Ingredient:
        """Refresh an ingredient's data from Open Food Facts."""
        ingredient = self.get(ingredient_id)
        if not ingredient.barcode:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Ingredient has no barcode to sync",
            )
        remote = await self.preview_barcode(ingredient.barcode)
        apply_remote_data(ingredient, remote)
        self.db.commit()
        self.db.refresh(ingredient)
        logger.info(f"Synced ingredient {ingredient.id} from Open Food Facts")
        return ingredient
