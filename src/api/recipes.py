"""Recipe API endpoints.

Every read accepts ``scaled_person`` and returns the recipe scaled to that
many servings, with per-portion nutrition.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_recipe_service
from src.models.user import User
from src.schemas.recipe import RecipeCountResponse, RecipeCreate, RecipeResponse
from src.services.recipe_service import RecipeService, to_response

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])

ScaledPerson = Annotated[int | None, Query(ge=1, le=100)]


@router.get("", response_model=list[RecipeResponse])
async def list_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    scaled_person: ScaledPerson = None,
):
    """List all recipes."""
    return [to_response(recipe, scaled_person) for recipe in service.list_recipes()]


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    recipe_data: RecipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Create a recipe. Unknown ingredient names are added to the catalog."""
    return to_response(service.create(recipe_data))


@router.get("/by-name", response_model=list[RecipeResponse])
async def search_recipes_by_name(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    name: Annotated[str, Query(min_length=1)],
    scaled_person: ScaledPerson = None,
):
    """Recipes whose name contains the search term."""
    return [to_response(recipe, scaled_person) for recipe in service.search_by_name(name)]


@router.get("/by-ingredients", response_model=list[RecipeResponse])
async def search_recipes_by_ingredients(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    ingredients: Annotated[list[str], Query()],
    scaled_person: ScaledPerson = None,
):
    """Recipes that use all of the given ingredients.

    Accepts repeated ``ingredients`` parameters or a comma-separated list.
    """
    return [
        to_response(recipe, scaled_person)
        for recipe in service.search_by_ingredients(ingredients)
    ]


@router.get("/filter", response_model=list[RecipeResponse])
async def filter_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    search: str | None = None,
    ingredients: Annotated[list[str] | None, Query()] = None,
    min_total_time: Annotated[int | None, Query(ge=0)] = None,
    max_total_time: Annotated[int | None, Query(ge=0)] = None,
    origins: Annotated[list[str] | None, Query()] = None,
    is_baby_friendly: bool | None = None,
    scaled_person: ScaledPerson = None,
):
    """Filter recipes; all given criteria must match."""
    recipes = service.filter_recipes(
        search=search,
        ingredients=ingredients,
        min_total_time=min_total_time,
        max_total_time=max_total_time,
        origins=origins,
        is_baby_friendly=is_baby_friendly,
    )
    return [to_response(recipe, scaled_person) for recipe in recipes]


@router.get("/origins", response_model=list[str])
async def list_origins(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Distinct recipe origins."""
    return service.origins()


@router.get("/count", response_model=RecipeCountResponse)
async def count_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Number of recipes."""
    return RecipeCountResponse(count=service.count())


@router.get("/autocomplete", response_model=list[RecipeResponse])
async def autocomplete_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    query: str = "",
    limit: Annotated[int, Query(ge=1)] = 10,
):
    """Recipes whose name starts with the query."""
    return [to_response(recipe) for recipe in service.autocomplete(query, limit)]


@router.get("/popular", response_model=list[RecipeResponse])
async def popular_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    limit: Annotated[int, Query(ge=1)] = 10,
    scaled_person: ScaledPerson = None,
):
    """Most frequently planned recipes first."""
    return [to_response(recipe, scaled_person) for recipe in service.popular(limit)]


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    scaled_person: ScaledPerson = None,
):
    """Get a recipe, optionally scaled to another number of servings."""
    return to_response(service.get(recipe_id), scaled_person)


@router.put("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(
    recipe_id: int,
    recipe_data: RecipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Replace a recipe and its ingredient lines."""
    return to_response(service.update(recipe_id, recipe_data))


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Delete a recipe that is not scheduled in any plan."""
    service.delete(recipe_id)
