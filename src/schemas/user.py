"""User profile and admin schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ProfileUpdate(BaseModel):
    """Update the current user's profile."""

    email: EmailStr | None = Field(None, max_length=255)
    username: str | None = Field(None, min_length=3, max_length=50)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class PasswordChange(BaseModel):
    """Change the current user's password."""

    current_password: str = Field(..., min_length=8, max_length=128)
    new_password: str = Field(..., min_length=8, max_length=128)


# --- Admin ---


class AdminUserCreate(BaseModel):
    """Create a user from the admin console."""

    email: EmailStr = Field(..., max_length=255)
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    role: Literal["USER", "ADMIN"] = "USER"


class AdminUserUpdate(BaseModel):
    """Edit a user from the admin console. Password is only changed when given."""

    email: EmailStr | None = Field(None, max_length=255)
    username: str | None = Field(None, min_length=3, max_length=50)
    password: str | None = Field(None, min_length=8, max_length=128)
    is_enabled: bool | None = None


class RoleUpdate(BaseModel):
    """Replace a user's role."""

    role: Literal["USER", "ADMIN"]


class AdminUserResponse(BaseModel):
    """User as seen by admins."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    first_name: str | None
    last_name: str | None
    role: str
    is_enabled: bool
    created_at: datetime
    updated_at: datetime


class AdminStatsResponse(BaseModel):
    """System-wide counters."""

    total_users: int
    total_recipes: int
    total_ingredients: int
    total_plans: int
    active_users: int  # created in the last 30 days
    most_popular_origin: str | None
    most_used_category: str | None


class CleanupResponse(BaseModel):
    """Result of the orphan data cleanup."""

    deleted_count: int


class ResyncResponse(BaseModel):
    """Result of queueing ingredient re-syncs."""

    queued: int
