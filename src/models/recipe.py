"""Recipe and RecipeIngredient models."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    event,
)
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Recipe(Base, TimestampMixin):
    """Recipe written for a base number of servings ("person")."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    origin = Column(String(50), nullable=True, index=True)
    preparation_time = Column(Integer, nullable=False, default=0)  # minutes
    cooking_time = Column(Integer, nullable=True)
    rest_time = Column(Integer, nullable=True)
    total_time = Column(Integer, nullable=False, default=0)
    person = Column(Integer, nullable=False)
    is_baby_friendly = Column(Boolean, nullable=False, default=False)
    steps = Column(JSON, nullable=False, default=list)  # ordered list of instructions

    # Relationships
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.id",
    )
    plan_entries = relationship("PlanRecipe", back_populates="recipe")

    def calculate_total_time(self) -> None:
        """Recompute total_time from the individual durations."""
        self.total_time = (
            (self.preparation_time or 0) + (self.cooking_time or 0) + (self.rest_time or 0)
        )


class RecipeIngredient(Base, TimestampMixin):
    """Quantity of a catalog ingredient used by a recipe."""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    quantity = Column(Numeric(12, 3), nullable=False)
    unit = Column(String(50), nullable=False)  # free text: "g", "ml", "piece", ...

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")
    ingredient = relationship("Ingredient", lazy="joined")


@event.listens_for(Recipe, "before_insert")
@event.listens_for(Recipe, "before_update")
def _recipe_total_time(mapper, connection, target: Recipe) -> None:
    target.calculate_total_time()
