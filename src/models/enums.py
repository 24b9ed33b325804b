"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Account roles."""

    USER = "USER"
    ADMIN = "ADMIN"

    def is_admin(self) -> bool:
        """Check if this role grants access to admin endpoints."""
        return self == Role.ADMIN


class DataSource(str, Enum):
    """Where an ingredient's or food item's nutrition data came from."""

    MANUAL = "MANUAL"
    OPENFOODFACTS = "OPENFOODFACTS"


class RecipeType(str, Enum):
    """Course a recipe is served as."""

    MAIN_COURSE = "Main course"
    STARTER = "Starter"
    DESSERT = "Dessert"
    APPETIZER = "Appetizer"
