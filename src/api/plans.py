"""Weekly plan and shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_plan_service, get_shopping_list_service
from src.models.plan import WeeklyPlan
from src.models.user import User
from src.schemas.plan import (
    PlanRecipeCreate,
    PlanRecipeResponse,
    ShoppingListItemResponse,
    ShoppingListItemUpdate,
    WeeklyPlanCopy,
    WeeklyPlanCreate,
    WeeklyPlanResponse,
    WeeklyPlanUpdate,
)
from src.services.plan_service import PlanService
from src.services.shopping_list_service import ShoppingListService

router = APIRouter(prefix="/api/v1/plans", tags=["plans"])


def plan_response(plan: WeeklyPlan, recipe_count: int | None = None) -> WeeklyPlanResponse:
    response = WeeklyPlanResponse.model_validate(plan)
    response.recipe_count = (
        recipe_count if recipe_count is not None else len(plan.plan_recipes)
    )
    return response


@router.get("", response_model=list[WeeklyPlanResponse])
async def list_plans(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """List the current user's plans, newest first."""
    plans = service.list_plans(current_user)
    counts = service.recipe_counts([plan.id for plan in plans])
    return [plan_response(plan, counts.get(plan.id, 0)) for plan in plans]


@router.post("", response_model=WeeklyPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(
    plan_data: WeeklyPlanCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Create a weekly plan."""
    return plan_response(service.create(plan_data, current_user), 0)


@router.get("/{plan_id}", response_model=WeeklyPlanResponse)
async def get_plan(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Get a plan by ID."""
    return plan_response(service.get(plan_id, current_user))


@router.put("/{plan_id}", response_model=WeeklyPlanResponse)
async def update_plan(
    plan_id: int,
    plan_data: WeeklyPlanUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Rename a plan or change its description."""
    return plan_response(service.update(plan_id, plan_data, current_user))


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Delete a plan with its entries and shopping list."""
    service.delete(plan_id, current_user)


@router.post(
    "/{plan_id}/copy", response_model=WeeklyPlanResponse, status_code=status.HTTP_201_CREATED
)
async def copy_plan(
    plan_id: int,
    copy_data: WeeklyPlanCopy,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Copy a plan to a new start date."""
    return plan_response(service.copy(plan_id, copy_data.start_date, current_user))


# --- Entries ---


@router.get("/{plan_id}/recipes", response_model=list[PlanRecipeResponse])
async def list_plan_recipes(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """List a plan's scheduled recipes by date."""
    return service.list_entries(plan_id, current_user)


@router.post(
    "/{plan_id}/recipes", response_model=PlanRecipeResponse, status_code=status.HTTP_201_CREATED
)
async def add_plan_recipe(
    plan_id: int,
    entry_data: PlanRecipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Schedule a recipe on a day of the plan."""
    return service.add_entry(plan_id, entry_data, current_user)


@router.delete("/{plan_id}/recipes/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_plan_recipe(
    plan_id: int,
    entry_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Remove a scheduled recipe."""
    service.remove_entry(plan_id, entry_id, current_user)


# --- Shopping list ---


@router.post("/{plan_id}/shopping-list/generate", response_model=list[ShoppingListItemResponse])
async def generate_shopping_list(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    plans: Annotated[PlanService, Depends(get_plan_service)],
    shopping_list: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Rebuild the plan's shopping list from its scheduled recipes.

    Owned quantities and checked/validated flags are reset.
    """
    plan = plans.get(plan_id, current_user)
    shopping_list.regenerate(plan.id)
    return shopping_list.get_items(plan.id)


@router.get("/{plan_id}/shopping-list", response_model=list[ShoppingListItemResponse])
async def get_shopping_list(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    plans: Annotated[PlanService, Depends(get_plan_service)],
    shopping_list: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Get the plan's shopping list grouped by ingredient category."""
    plan = plans.get(plan_id, current_user)
    return shopping_list.get_items(plan.id)


@router.put(
    "/{plan_id}/shopping-list/items/{item_id}", response_model=ShoppingListItemResponse
)
async def update_shopping_list_item(
    plan_id: int,
    item_id: int,
    item_data: ShoppingListItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    plans: Annotated[PlanService, Depends(get_plan_service)],
    shopping_list: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Record owned quantity or check/validate an item."""
    plan = plans.get(plan_id, current_user)
    return shopping_list.update_item(plan.id, item_id, item_data.model_dump(exclude_unset=True))
