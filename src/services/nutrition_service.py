"""Portion scaling and per-portion nutrition for recipes.

Everything here is pure: callers hand in recipes that are already loaded and
get plain dataclasses back. Arithmetic is done in ``Decimal`` so the same
ingredient list always rounds the same way.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

HUNDRED = Decimal("100")
RATIO_EXP = Decimal("0.000001")  # quantity / 100 keeps 6 fractional digits
PORTION_EXP = Decimal("0.001")  # per-portion values keep 3


# Ingredient attributes that make up a recipe's per-portion nutrition
TRACKED_NUTRIENTS: tuple[str, ...] = (
    # Macronutrients
    "energy_kcal",
    "carbohydrates",
    "sugars",
    "fiber",
    "fat",
    "saturated_fat",
    "protein",
    "salt",
    "sodium",
    # Vitamins
    "vitamin_a",
    "vitamin_b1",
    "vitamin_b2",
    "vitamin_b3",
    "vitamin_b5",
    "vitamin_b6",
    "vitamin_b7",
    "vitamin_b9",
    "vitamin_b12",
    "vitamin_c",
    "vitamin_d",
    "vitamin_e",
    "vitamin_k",
    # Minerals
    "calcium",
    "iron",
    "magnesium",
    "phosphorus",
    "potassium",
    "zinc",
    "copper",
    "manganese",
    "selenium",
    "iodine",
    "chromium",
    "molybdenum",
    "fluoride",
)


@dataclass
class ScaledIngredient:
    """One recipe line after scaling."""

    id: int | None
    ingredient_id: int | None
    name: str
    quantity: Decimal
    unit: str


@dataclass
class ScaledRecipe:
    """Scaled view of a recipe with per-portion nutrition."""

    person: int | None
    scaled_person: int | None
    factor: Decimal
    ingredients: list[ScaledIngredient] = field(default_factory=list)
    nutrition: dict[str, Decimal | None] = field(default_factory=dict)


def to_decimal(value: Any) -> Decimal | None:
    """Convert numbers coming from the ORM or JSON into Decimal."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging in binary noise
    return Decimal(str(value))


def _scaling_applies(base_person: int | None, requested_person: int | None) -> bool:
    return (
        requested_person is not None
        and requested_person > 0
        and base_person is not None
        and base_person > 0
    )


def scale_factor(base_person: int | None, requested_person: int | None) -> Decimal:
    """Return requested / base, or 1 when no valid scaling was asked for.

    A missing or non-positive serving count on either side means "no
    scaling"; this never divides by zero.
    """
    if not _scaling_applies(base_person, requested_person):
        return Decimal(1)
    return Decimal(requested_person) / Decimal(base_person)


def effective_servings(base_person: int | None, requested_person: int | None) -> int | None:
    """Serving count the scaled view is for."""
    if _scaling_applies(base_person, requested_person):
        return requested_person
    return base_person


def total_nutrient(lines: Iterable[tuple[Any, Decimal]], field_name: str) -> Decimal | None:
    """Sum a nutrient over (ingredient, quantity) pairs.

    Values are per 100 units, so each line contributes
    ``round(quantity / 100, 6) * value``. Lines with no quantity or an
    unknown value are skipped. Returns None when no line contributed, so an
    all-unknown nutrient is reported as absent rather than zero.
    """
    total = Decimal(0)
    contributed = False
    for ingredient, quantity in lines:
        quantity = to_decimal(quantity)
        if quantity is None or quantity <= 0:
            continue
        value = to_decimal(getattr(ingredient, field_name, None))
        if value is None:
            continue
        ratio = (quantity / HUNDRED).quantize(RATIO_EXP, rounding=ROUND_HALF_UP)
        total += value * ratio
        contributed = True
    return total if contributed else None


def nutrient_per_portion(total: Decimal | None, servings: int | None) -> Decimal | None:
    """Divide a recipe total by the serving count, rounded half-up to 3 places."""
    if total is None or servings is None or servings <= 0:
        return None
    return (total / Decimal(servings)).quantize(PORTION_EXP, rounding=ROUND_HALF_UP)


def compute_nutrition(
    lines: Iterable[tuple[Any, Decimal]], servings: int | None
) -> dict[str, Decimal | None]:
    """Per-portion value of every tracked nutrient."""
    lines = list(lines)
    return {
        nutrient: nutrient_per_portion(total_nutrient(lines, nutrient), servings)
        for nutrient in TRACKED_NUTRIENTS
    }


def scale_recipe(recipe: Any, requested_person: int | None = None) -> ScaledRecipe:
    """Build the scaled view of a recipe.

    Ingredient quantities are multiplied by the scale factor with units left
    untouched. Nutrition is summed over the scaled quantities and divided by
    the effective serving count, which gives the same per-portion figures as
    the unscaled recipe.
    """
    factor = scale_factor(recipe.person, requested_person)
    servings = effective_servings(recipe.person, requested_person)

    scaled = []
    for line in recipe.ingredients:
        ingredient = line.ingredient
        scaled.append(
            ScaledIngredient(
                id=line.id,
                ingredient_id=ingredient.id if ingredient is not None else line.ingredient_id,
                name=ingredient.name if ingredient is not None else "",
                quantity=to_decimal(line.quantity) * factor,
                unit=line.unit,
            )
        )

    nutrition = compute_nutrition(
        ((line.ingredient, item.quantity) for line, item in zip(recipe.ingredients, scaled)),
        servings,
    )
    return ScaledRecipe(
        person=recipe.person,
        scaled_person=servings,
        factor=factor,
        ingredients=scaled,
        nutrition=nutrition,
    )
