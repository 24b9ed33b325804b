"""Celery tasks for refreshing ingredients from Open Food Facts."""

import asyncio
import logging

from src.celery_app import app as celery_app
from src.database import SessionLocal
from src.models.ingredient import Ingredient
from src.services.openfoodfacts import OpenFoodFactsService, apply_remote_data

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def sync_ingredient_from_openfoodfacts(self, ingredient_id: int) -> dict:
    """Refresh one ingredient's catalog data from its barcode.

    Args:
        ingredient_id: ID of the Ingredient to refresh

    Returns:
        dict with sync result
    """
    db = SessionLocal()
    try:
        ingredient = db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()
        if not ingredient:
            return {"error": "Ingredient not found"}
        if not ingredient.barcode:
            return {"skipped": True, "reason": "No barcode"}

        remote = asyncio.run(OpenFoodFactsService().lookup_ingredient(ingredient.barcode))
        if remote is None:
            logger.warning(
                f"No Open Food Facts product for ingredient {ingredient_id} "
                f"(barcode {ingredient.barcode})"
            )
            return {"success": False, "reason": "Product not found"}

        apply_remote_data(ingredient, remote)
        db.commit()
        logger.info(f"Synced ingredient {ingredient_id}: {ingredient.name}")
        return {"success": True, "ingredient_id": ingredient_id}

    except Exception as e:
        logger.error(f"Error syncing ingredient {ingredient_id}: {e}", exc_info=True)
        db.rollback()

        if self.request.retries < self.max_retries:
            raise self.retry(exc=e, countdown=60) from e

        return {"error": str(e)}
    finally:
        db.close()
