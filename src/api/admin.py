"""Admin API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_admin_service, get_current_admin
from src.models.user import User
from src.schemas.ingredient import IngredientResponse
from src.schemas.user import (
    AdminStatsResponse,
    AdminUserCreate,
    AdminUserResponse,
    AdminUserUpdate,
    CleanupResponse,
    ResyncResponse,
    RoleUpdate,
)
from src.services.admin_service import AdminService
from src.tasks.ingredient_sync import sync_ingredient_from_openfoodfacts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


# --- Users ---


@router.get("/users", response_model=list[AdminUserResponse])
async def list_users(
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
):
    """List all users."""
    return service.list_users()


@router.post("/users", response_model=AdminUserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: AdminUserCreate,
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Create a user with the given role."""
    return service.create_user(user_data)


@router.get("/users/{user_id}", response_model=AdminUserResponse)
async def get_user(
    user_id: int,
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Get a user by ID."""
    return service.get_user(user_id)


@router.put("/users/{user_id}", response_model=AdminUserResponse)
async def update_user(
    user_id: int,
    user_data: AdminUserUpdate,
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Edit a user's email, username, password or enabled flag."""
    return service.update_user(user_id, user_data)


@router.put("/users/{user_id}/role", response_model=AdminUserResponse)
async def update_user_role(
    user_id: int,
    role_data: RoleUpdate,
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Change a user's role."""
    return service.set_role(user_id, role_data.role)


@router.put("/users/{user_id}/enable", response_model=AdminUserResponse)
async def enable_user(
    user_id: int,
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
    enabled: bool = True,
):
    """Enable or disable a user account."""
    return service.set_enabled(user_id, enabled, admin)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Delete a user and their plans."""
    service.delete_user(user_id, admin)


# --- Stats and maintenance ---


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
):
    """System-wide counters."""
    return service.stats()


@router.get("/ingredients/orphans", response_model=list[IngredientResponse])
async def list_orphan_ingredients(
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Ingredients used by no recipe and no shopping list."""
    return service.orphan_ingredients()


@router.delete("/data/cleanup", response_model=CleanupResponse)
async def cleanup_data(
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Delete orphan ingredients."""
    return CleanupResponse(deleted_count=service.cleanup_orphans())


@router.post("/ingredients/resync", response_model=ResyncResponse)
async def resync_ingredients(
    admin: Annotated[User, Depends(get_current_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Queue an Open Food Facts refresh for every ingredient with a barcode."""
    ingredient_ids = service.syncable_ingredient_ids()
    for ingredient_id in ingredient_ids:
        sync_ingredient_from_openfoodfacts.delay(ingredient_id)
    logger.info(f"Admin {admin.id} queued {len(ingredient_ids)} ingredient syncs")
    return ResyncResponse(queued=len(ingredient_ids))
