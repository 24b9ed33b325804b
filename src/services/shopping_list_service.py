"""Shopping list generation for weekly plans."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from src.models.ingredient import Ingredient
from src.models.plan import PlanRecipe, WeeklyPlan
from src.models.shopping_list import ShoppingListItem
from src.services.nutrition_service import scale_factor, to_decimal

logger = logging.getLogger(__name__)

QUANTITY_EXP = Decimal("0.001")


@dataclass
class ShoppingListLine:
    """Total quantity of one (ingredient, unit) pair across a plan."""

    ingredient: Any
    unit: str
    quantity_needed: Decimal

    @property
    def key(self) -> tuple[int, str]:
        return (self.ingredient.id, self.unit)


def aggregate_shopping_list(entries: Iterable[Any]) -> list[ShoppingListLine]:
    """Merge the ingredients of planned recipes into shopping list lines.

    Each entry needs ``recipe`` and ``scaled_person``. Lines merge only when
    both the ingredient id and the unit string match exactly; "g" and "kg"
    of the same ingredient stay separate. Output keeps first-seen order.
    """
    buckets: dict[tuple[int, str], ShoppingListLine] = {}
    for entry in entries:
        recipe = entry.recipe
        factor = scale_factor(recipe.person, entry.scaled_person)
        for line in recipe.ingredients:
            key = (line.ingredient.id, line.unit)
            bucket = buckets.get(key)
            if bucket is None:
                bucket = ShoppingListLine(
                    ingredient=line.ingredient, unit=line.unit, quantity_needed=Decimal(0)
                )
                buckets[key] = bucket
            bucket.quantity_needed += to_decimal(line.quantity) * factor
    return list(buckets.values())


class ShoppingListService:
    """Persisted shopping lists for weekly plans.

    Regeneration and item edits both take a row lock on the plan first, so
    an edit can't land on an item a concurrent regeneration just deleted.
    """

    def __init__(self, db: Session):
        self.db = db

    def _lock_plan(self, plan_id: int) -> WeeklyPlan:
        plan = (
            self.db.query(WeeklyPlan).filter(WeeklyPlan.id == plan_id).with_for_update().first()
        )
        if not plan:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")
        return plan

    def regenerate(self, plan_id: int) -> list[ShoppingListItem]:
        """Replace a plan's shopping list with a fresh aggregate.

        Existing items are deleted first, so owned quantities and
        checked/validated flags do not survive regeneration.
        """
        plan = self._lock_plan(plan_id)

        deleted = (
            self.db.query(ShoppingListItem)
            .filter(ShoppingListItem.weekly_plan_id == plan.id)
            .delete(synchronize_session="fetch")
        )

        entries = (
            self.db.query(PlanRecipe)
            .filter(PlanRecipe.weekly_plan_id == plan.id)
            .order_by(PlanRecipe.planned_date, PlanRecipe.id)
            .all()
        )

        items = []
        for line in aggregate_shopping_list(entries):
            item = ShoppingListItem(
                weekly_plan_id=plan.id,
                ingredient=line.ingredient,
                unit=line.unit,
                quantity_needed=line.quantity_needed.quantize(QUANTITY_EXP, rounding=ROUND_HALF_UP),
                quantity_owned=Decimal(0),
                is_checked=False,
                is_validated=False,
            )
            item.calculate_quantity_to_buy()
            self.db.add(item)
            items.append(item)

        self.db.commit()
        self.db.expire(plan, ["shopping_list_items"])
        for item in items:
            self.db.refresh(item)

        logger.info(
            f"Regenerated shopping list for plan {plan.id}: "
            f"{len(items)} items from {len(entries)} entries ({deleted} replaced)"
        )
        return items

    def get_items(self, plan_id: int) -> list[ShoppingListItem]:
        """Items of a plan, grouped by ingredient category."""
        return (
            self.db.query(ShoppingListItem)
            .join(Ingredient, ShoppingListItem.ingredient_id == Ingredient.id)
            .filter(ShoppingListItem.weekly_plan_id == plan_id)
            .order_by(Ingredient.basic_category, Ingredient.name, ShoppingListItem.unit)
            .all()
        )

    def update_item(self, plan_id: int, item_id: int, changes: dict) -> ShoppingListItem:
        """Apply owned quantity / checked / validated edits to one item."""
        self._lock_plan(plan_id)

        item = (
            self.db.query(ShoppingListItem)
            .filter(
                ShoppingListItem.id == item_id,
                ShoppingListItem.weekly_plan_id == plan_id,
            )
            .first()
        )
        if not item:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Shopping list item not found"
            )

        if changes.get("quantity_owned") is not None:
            item.quantity_owned = to_decimal(changes["quantity_owned"])
        if changes.get("is_checked") is not None:
            item.is_checked = changes["is_checked"]
        if changes.get("is_validated") is not None:
            item.is_validated = changes["is_validated"]
        item.calculate_quantity_to_buy()

        self.db.commit()
        self.db.refresh(item)
        logger.debug(f"Updated shopping list item {item.id}: {item.quantity_to_buy} to buy")
        return item
