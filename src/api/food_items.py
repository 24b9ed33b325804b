"""Food item API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_food_item_service
from src.models.user import User
from src.schemas.food_item import (
    FoodItemCreate,
    FoodItemResponse,
    FoodItemStatsResponse,
    FoodItemUpdate,
)
from src.services.food_item_service import FoodItemService

router = APIRouter(prefix="/api/v1/food-items", tags=["food-items"])


@router.get("", response_model=list[FoodItemResponse])
async def list_food_items(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FoodItemService, Depends(get_food_item_service)],
    name: str | None = None,
    basic_category: str | None = None,
):
    """List food items, optionally filtered by name or basic category."""
    return service.list_food_items(name=name, basic_category=basic_category)


@router.post("", response_model=FoodItemResponse, status_code=status.HTTP_201_CREATED)
async def create_food_item(
    food_item_data: FoodItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FoodItemService, Depends(get_food_item_service)],
):
    """Create a food item."""
    return service.create(food_item_data)


@router.get("/stats", response_model=FoodItemStatsResponse)
async def food_item_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FoodItemService, Depends(get_food_item_service)],
):
    """Food item counters."""
    return service.stats()


@router.get("/search/{barcode}", response_model=FoodItemResponse)
async def search_food_item_by_barcode(
    barcode: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FoodItemService, Depends(get_food_item_service)],
):
    """Find a food item by barcode, importing it from Open Food Facts if needed."""
    return await service.search_barcode(barcode)


@router.get("/category/{basic_category}", response_model=list[FoodItemResponse])
async def list_food_items_by_category(
    basic_category: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FoodItemService, Depends(get_food_item_service)],
):
    """List food items of one basic category."""
    return service.list_food_items(basic_category=basic_category)


@router.get("/{food_item_id}", response_model=FoodItemResponse)
async def get_food_item(
    food_item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FoodItemService, Depends(get_food_item_service)],
):
    """Get a food item by ID."""
    return service.get(food_item_id)


@router.put("/{food_item_id}", response_model=FoodItemResponse)
async def update_food_item(
    food_item_id: int,
    food_item_data: FoodItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FoodItemService, Depends(get_food_item_service)],
):
    """Update a food item."""
    return service.update(food_item_id, food_item_data)


@router.delete("/{food_item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food_item(
    food_item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FoodItemService, Depends(get_food_item_service)],
):
    """Delete a food item."""
    service.delete(food_item_id)


@router.post("/{food_item_id}/sync", response_model=FoodItemResponse)
async def sync_food_item(
    food_item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FoodItemService, Depends(get_food_item_service)],
):
    """Refresh a food item's data from Open Food Facts."""
    return await service.sync(food_item_id)
