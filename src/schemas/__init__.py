"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, Token, UserLogin, UserRegister, UserResponse
from src.schemas.food_item import FoodItemCreate, FoodItemResponse, FoodItemUpdate
from src.schemas.ingredient import IngredientCreate, IngredientResponse, IngredientUpdate
from src.schemas.plan import (
    PlanRecipeCreate,
    PlanRecipeResponse,
    ShoppingListItemResponse,
    ShoppingListItemUpdate,
    WeeklyPlanCreate,
    WeeklyPlanResponse,
    WeeklyPlanUpdate,
)
from src.schemas.recipe import RecipeCreate, RecipeResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "Token",
    "AuthResponse",
    "UserResponse",
    "IngredientCreate",
    "IngredientUpdate",
    "IngredientResponse",
    "FoodItemCreate",
    "FoodItemUpdate",
    "FoodItemResponse",
    "RecipeCreate",
    "RecipeResponse",
    "WeeklyPlanCreate",
    "WeeklyPlanUpdate",
    "WeeklyPlanResponse",
    "PlanRecipeCreate",
    "PlanRecipeResponse",
    "ShoppingListItemUpdate",
    "ShoppingListItemResponse",
]
