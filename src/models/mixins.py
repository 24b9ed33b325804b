"""Mixins for SQLAlchemy models."""

from sqlalchemy import Column, DateTime, Numeric, func, or_

NUTRIENT_PRECISION = Numeric(10, 3)

# Any of these being known counts as having nutritional data
HEADLINE_NUTRIENTS = ("energy", "energy_kcal", "carbohydrates", "protein", "fat")


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


def nutrient(unit: str) -> Column:
    """Nullable per-100 g nutrient column; NULL means unknown, not zero."""
    return Column(NUTRIENT_PRECISION, nullable=True, info={"unit": unit})


class NutritionFactsMixin:
    """Nutrient values per 100 g (or 100 ml), shared by ingredients and food items."""

    # Macronutrients
    energy = nutrient("kJ")
    energy_kcal = nutrient("kcal")
    carbohydrates = nutrient("g")
    sugars = nutrient("g")
    fiber = nutrient("g")
    fat = nutrient("g")
    saturated_fat = nutrient("g")
    monounsaturated_fat = nutrient("g")
    polyunsaturated_fat = nutrient("g")
    trans_fat = nutrient("g")
    protein = nutrient("g")
    salt = nutrient("g")
    sodium = nutrient("mg")
    alcohol = nutrient("g")

    # Vitamins
    vitamin_a = nutrient("µg")
    vitamin_b1 = nutrient("mg")
    vitamin_b2 = nutrient("mg")
    vitamin_b3 = nutrient("mg")
    vitamin_b5 = nutrient("mg")
    vitamin_b6 = nutrient("mg")
    vitamin_b7 = nutrient("µg")
    vitamin_b9 = nutrient("µg")
    vitamin_b12 = nutrient("µg")
    vitamin_c = nutrient("mg")
    vitamin_d = nutrient("µg")
    vitamin_e = nutrient("mg")
    vitamin_k = nutrient("µg")

    # Minerals
    calcium = nutrient("mg")
    iron = nutrient("mg")
    magnesium = nutrient("mg")
    phosphorus = nutrient("mg")
    potassium = nutrient("mg")
    zinc = nutrient("mg")
    copper = nutrient("mg")
    manganese = nutrient("mg")
    selenium = nutrient("µg")
    iodine = nutrient("µg")
    chromium = nutrient("µg")
    molybdenum = nutrient("µg")
    fluoride = nutrient("mg")

    @property
    def has_nutritional_data(self) -> bool:
        """Check if any of the headline nutrition facts are known."""
        return any(getattr(self, name) is not None for name in HEADLINE_NUTRIENTS)

    @classmethod
    def with_nutritional_data(cls):
        """SQL filter matching rows where has_nutritional_data holds."""
        return or_(*(getattr(cls, name).isnot(None) for name in HEADLINE_NUTRIENTS))


# Nutrient column -> unit its values are stored in
NUTRIENT_UNITS: dict[str, str] = {
    name: value.info["unit"]
    for name, value in vars(NutritionFactsMixin).items()
    if isinstance(value, Column)
}

NUTRIENT_COLUMNS: tuple[str, ...] = tuple(NUTRIENT_UNITS)
