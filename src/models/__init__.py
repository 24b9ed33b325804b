"""SQLAlchemy models."""

from src.models.food_item import FoodItem
from src.models.ingredient import Ingredient
from src.models.plan import PlanRecipe, WeeklyPlan
from src.models.recipe import Recipe, RecipeIngredient
from src.models.shopping_list import ShoppingListItem
from src.models.user import User

__all__ = [
    "User",
    "Ingredient",
    "FoodItem",
    "Recipe",
    "RecipeIngredient",
    "WeeklyPlan",
    "PlanRecipe",
    "ShoppingListItem",
]
