"""Recipe catalog operations and scaled recipe views."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from src.models.ingredient import Ingredient
from src.models.plan import PlanRecipe
from src.models.recipe import Recipe, RecipeIngredient
from src.schemas.recipe import (
    NutritionPerPortion,
    RecipeCreate,
    RecipeResponse,
    ScaledIngredientResponse,
)
from src.services.ingredient_service import IngredientService
from src.services.nutrition_service import scale_recipe

logger = logging.getLogger(__name__)

AUTOCOMPLETE_MIN_LENGTH = 2
AUTOCOMPLETE_MAX_LIMIT = 50


def to_response(recipe: Recipe, scaled_person: int | None = None) -> RecipeResponse:
    """Build the API view of a recipe scaled to ``scaled_person`` servings."""
    scaled = scale_recipe(recipe, scaled_person)
    return RecipeResponse(
        id=recipe.id,
        name=recipe.name,
        type=recipe.type,
        description=recipe.description,
        origin=recipe.origin,
        preparation_time=recipe.preparation_time,
        cooking_time=recipe.cooking_time,
        rest_time=recipe.rest_time,
        total_time=recipe.total_time,
        person=recipe.person,
        scaled_person=scaled.scaled_person,
        is_baby_friendly=recipe.is_baby_friendly,
        ingredients=[
            ScaledIngredientResponse(
                id=line.id,
                ingredient_id=line.ingredient_id,
                name=line.name,
                quantity=line.quantity,
                unit=line.unit,
            )
            for line in scaled.ingredients
        ],
        steps=list(recipe.steps or []),
        nutrition_per_portion=NutritionPerPortion(**scaled.nutrition),
        created_at=recipe.created_at,
        updated_at=recipe.updated_at,
    )


def _split_names(names: list[str] | None) -> list[str]:
    """Normalize ingredient names, accepting comma-separated values."""
    result = []
    for value in names or []:
        for part in value.split(","):
            part = part.strip().lower()
            if part and part not in result:
                result.append(part)
    return result


class RecipeService:
    """Service for recipe CRUD and search."""

    def __init__(self, db: Session, ingredient_service: IngredientService | None = None):
        self.db = db
        self.ingredient_service = ingredient_service or IngredientService(db)

    def get(self, recipe_id: int) -> Recipe:
        recipe = self.db.query(Recipe).filter(Recipe.id == recipe_id).first()
        if not recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        return recipe

    def list_recipes(self) -> list[Recipe]:
        return self.db.query(Recipe).order_by(Recipe.name).all()

    def search_by_name(self, name: str) -> list[Recipe]:
        return (
            self.db.query(Recipe)
            .filter(Recipe.name.ilike(f"%{name.strip()}%"))
            .order_by(Recipe.name)
            .all()
        )

    def _with_all_ingredients(self, query, names: list[str]):
        for name in names:
            query = query.filter(
                Recipe.ingredients.any(
                    RecipeIngredient.ingredient.has(func.lower(Ingredient.name) == name)
                )
            )
        return query

    def search_by_ingredients(self, names: list[str]) -> list[Recipe]:
        """Recipes that use every one of the named ingredients."""
        names = _split_names(names)
        if not names:
            return []
        query = self._with_all_ingredients(self.db.query(Recipe), names)
        return query.order_by(Recipe.name).all()

    def filter_recipes(
        self,
        search: str | None = None,
        ingredients: list[str] | None = None,
        min_total_time: int | None = None,
        max_total_time: int | None = None,
        origins: list[str] | None = None,
        is_baby_friendly: bool | None = None,
    ) -> list[Recipe]:
        """Combine every given criterion with AND."""
        query = self.db.query(Recipe)
        if search and search.strip():
            term = f"%{search.strip()}%"
            query = query.filter(Recipe.name.ilike(term) | Recipe.description.ilike(term))
        query = self._with_all_ingredients(query, _split_names(ingredients))
        if min_total_time is not None:
            query = query.filter(Recipe.total_time >= min_total_time)
        if max_total_time is not None:
            query = query.filter(Recipe.total_time <= max_total_time)
        origin_names = _split_names(origins)
        if origin_names:
            query = query.filter(func.lower(Recipe.origin).in_(origin_names))
        if is_baby_friendly is not None:
            query = query.filter(Recipe.is_baby_friendly == is_baby_friendly)
        return query.order_by(Recipe.name).all()

    def origins(self) -> list[str]:
        rows = (
            self.db.query(Recipe.origin)
            .filter(Recipe.origin.isnot(None), Recipe.origin != "")
            .distinct()
            .order_by(Recipe.origin)
            .all()
        )
        return [origin for (origin,) in rows]

    def count(self) -> int:
        return self.db.query(func.count(Recipe.id)).scalar() or 0

    def autocomplete(self, query: str, limit: int = 10) -> list[Recipe]:
        query = query.strip()
        if len(query) < AUTOCOMPLETE_MIN_LENGTH:
            return []
        limit = max(1, min(limit, AUTOCOMPLETE_MAX_LIMIT))
        return (
            self.db.query(Recipe)
            .filter(Recipe.name.ilike(f"{query}%"))
            .order_by(Recipe.name)
            .limit(limit)
            .all()
        )

    def popular(self, limit: int = 10) -> list[Recipe]:
        """Recipes scheduled most often across all plans."""
        limit = max(1, min(limit, AUTOCOMPLETE_MAX_LIMIT))
        usage = func.count(PlanRecipe.id).label("usage")
        rows = (
            self.db.query(Recipe, usage)
            .join(PlanRecipe, PlanRecipe.recipe_id == Recipe.id)
            .group_by(Recipe.id)
            .order_by(usage.desc(), Recipe.name)
            .limit(limit)
            .all()
        )
        return [recipe for recipe, _ in rows]

    # --- Writes ---

    def _set_ingredients(self, recipe: Recipe, data: RecipeCreate) -> None:
        recipe.ingredients.clear()
        for line in data.ingredients:
            ingredient = self.ingredient_service.get_or_create_by_name(
                line.ingredient_name, line.ingredient_category
            )
            recipe.ingredients.append(
                RecipeIngredient(ingredient=ingredient, quantity=line.quantity, unit=line.unit)
            )

    def _apply(self, recipe: Recipe, data: RecipeCreate) -> None:
        recipe.name = data.name.strip()
        recipe.type = data.type
        recipe.description = data.description
        recipe.origin = data.origin
        recipe.preparation_time = data.preparation_time
        recipe.cooking_time = data.cooking_time
        recipe.rest_time = data.rest_time
        recipe.person = data.person
        recipe.is_baby_friendly = data.is_baby_friendly
        recipe.steps = [step.strip() for step in data.steps if step.strip()]
        recipe.calculate_total_time()

    def create(self, data: RecipeCreate) -> Recipe:
        recipe = Recipe()
        self._apply(recipe, data)
        self.db.add(recipe)
        self._set_ingredients(recipe, data)
        self.db.commit()
        self.db.refresh(recipe)
        logger.info(f"Created recipe {recipe.id}: {recipe.name}")
        return recipe

    def update(self, recipe_id: int, data: RecipeCreate) -> Recipe:
        """Replace a recipe, including all of its ingredient lines."""
        recipe = self.get(recipe_id)
        self._apply(recipe, data)
        self._set_ingredients(recipe, data)
        self.db.commit()
        self.db.refresh(recipe)
        return recipe

    def delete(self, recipe_id: int) -> None:
        recipe = self.get(recipe_id)
        scheduled = self.db.query(PlanRecipe.id).filter(PlanRecipe.recipe_id == recipe.id).first()
        if scheduled:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Recipe is scheduled in a weekly plan",
            )
        self.db.delete(recipe)
        self.db.commit()
        logger.info(f"Deleted recipe {recipe_id}")
