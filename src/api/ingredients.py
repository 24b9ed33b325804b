"""Ingredient catalog API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_ingredient_service
from src.models.enums import DataSource
from src.models.user import User
from src.schemas.ingredient import (
    IngredientCreate,
    IngredientResponse,
    IngredientStatsResponse,
    IngredientUpdate,
)
from src.services.ingredient_service import IngredientService

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])


@router.get("", response_model=list[IngredientResponse])
async def list_ingredients(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
    name: str | None = None,
    basic_category: str | None = None,
):
    """List catalog ingredients, optionally filtered by name or basic category."""
    return service.list_ingredients(name=name, basic_category=basic_category)


@router.post("", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
async def create_ingredient(
    ingredient_data: IngredientCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Add an ingredient to the catalog."""
    return service.create(ingredient_data)


@router.get("/by-name", response_model=IngredientResponse)
async def get_ingredient_by_name(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
    name: Annotated[str, Query(min_length=1)],
):
    """Get an ingredient by exact name (case-insensitive)."""
    return service.get_by_name(name)


@router.get("/autocomplete", response_model=list[IngredientResponse])
async def autocomplete_ingredients(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
    query: str = "",
    limit: Annotated[int, Query(ge=1)] = 10,
):
    """Suggest ingredients whose name starts with the query."""
    return service.autocomplete(query, limit)


@router.get("/stats", response_model=IngredientStatsResponse)
async def ingredient_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Catalog counters."""
    return service.stats()


@router.get("/popular", response_model=list[IngredientResponse])
async def popular_ingredients(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
    limit: Annotated[int, Query(ge=1)] = 20,
    from_plans: bool = False,
):
    """Most used ingredients, by recipes or, with from_plans, by shopping lists."""
    return service.popular(limit=limit, from_plans=from_plans)


@router.get("/openfoodfacts", response_model=list[IngredientResponse])
async def list_openfoodfacts_ingredients(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """List ingredients imported from Open Food Facts."""
    return service.by_data_source(DataSource.OPENFOODFACTS)


@router.get("/manual", response_model=list[IngredientResponse])
async def list_manual_ingredients(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """List ingredients entered by hand."""
    return service.by_data_source(DataSource.MANUAL)


@router.get("/category/{basic_category}", response_model=list[IngredientResponse])
async def list_ingredients_by_category(
    basic_category: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """List ingredients of one basic category."""
    return service.by_category(basic_category)


@router.get("/barcode/{barcode}", response_model=IngredientResponse)
async def get_ingredient_by_barcode(
    barcode: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Get a catalog ingredient by barcode, without remote lookup."""
    return service.get_by_barcode(barcode)


@router.get("/search-barcode/{barcode}", response_model=IngredientResponse)
async def search_ingredient_by_barcode(
    barcode: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Find a barcode in the catalog, falling back to Open Food Facts.

    Products found remotely are added to the catalog.
    """
    return await service.search_barcode(barcode)


@router.get("/search-openfoodfacts/{barcode}", response_model=IngredientResponse)
async def search_openfoodfacts(
    barcode: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Preview an Open Food Facts product without saving it."""
    return await service.preview_barcode(barcode)


@router.get("/{ingredient_id}", response_model=IngredientResponse)
async def get_ingredient(
    ingredient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Get an ingredient by ID."""
    return service.get(ingredient_id)


@router.put("/{ingredient_id}", response_model=IngredientResponse)
async def update_ingredient(
    ingredient_id: int,
    ingredient_data: IngredientUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Update an ingredient."""
    return service.update(ingredient_id, ingredient_data)


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ingredient(
    ingredient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Delete an ingredient that no recipe or shopping list uses."""
    service.delete(ingredient_id)


@router.post("/{ingredient_id}/sync", response_model=IngredientResponse)
async def sync_ingredient(
    ingredient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Refresh an ingredient's data from Open Food Facts."""
    return await service.sync(ingredient_id)
