"""Shopping list item model."""

from decimal import Decimal

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String, event
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


def _as_decimal(value) -> Decimal:
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantity_to_buy(needed, owned) -> Decimal:
    """What is left to buy: needed minus owned, floored at zero. Missing values count as zero."""
    return max(Decimal(0), _as_decimal(needed) - _as_decimal(owned))


class ShoppingListItem(Base, TimestampMixin):
    """Aggregated quantity of one ingredient/unit needed for a plan."""

    __tablename__ = "shopping_list_items"
    # Ids of regenerated items must never match a deleted item's id
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    weekly_plan_id = Column(Integer, ForeignKey("weekly_plans.id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    unit = Column(String(50), nullable=False)
    quantity_needed = Column(Numeric(12, 3), nullable=False)
    quantity_owned = Column(Numeric(12, 3), nullable=False, default=Decimal("0"))
    quantity_to_buy = Column(Numeric(12, 3), nullable=False, default=Decimal("0"))
    is_checked = Column(Boolean, nullable=False, default=False)
    is_validated = Column(Boolean, nullable=False, default=False)

    # Relationships
    weekly_plan = relationship("WeeklyPlan", back_populates="shopping_list_items")
    ingredient = relationship("Ingredient", lazy="joined")

    def calculate_quantity_to_buy(self) -> None:
        """Recompute quantity_to_buy, never below zero."""
        self.quantity_to_buy = quantity_to_buy(self.quantity_needed, self.quantity_owned)


@event.listens_for(ShoppingListItem, "before_insert")
@event.listens_for(ShoppingListItem, "before_update")
def _shopping_item_to_buy(mapper, connection, target: ShoppingListItem) -> None:
    target.calculate_quantity_to_buy()
