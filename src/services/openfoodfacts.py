"""Barcode lookup against the Open Food Facts database."""

import logging
from datetime import UTC, datetime
from decimal import Decimal

import httpx

from src.config import get_settings
from src.models.enums import DataSource
from src.models.food_item import FoodItem
from src.models.ingredient import Ingredient
from src.models.mixins import NUTRIENT_COLUMNS, NUTRIENT_UNITS
from src.services.nutrition_service import to_decimal

logger = logging.getLogger(__name__)

DEFAULT_BASIC_CATEGORY = "Other"

# Substrings of the Open Food Facts category tags -> our basic categories.
# First match wins, so more specific groups come first.
CATEGORY_MAPPING: list[tuple[str, str]] = [
    ("legumes", "Legumes"),
    ("beans", "Legumes"),
    ("lentils", "Legumes"),
    ("chickpeas", "Legumes"),
    ("fruits", "Fruits and vegetables"),
    ("vegetables", "Fruits and vegetables"),
    ("cereals", "Starches"),
    ("bread", "Starches"),
    ("pasta", "Starches"),
    ("rice", "Starches"),
    ("potatoes", "Starches"),
    ("meats", "Meat, fish and eggs"),
    ("fish", "Meat, fish and eggs"),
    ("seafood", "Meat, fish and eggs"),
    ("poultry", "Meat, fish and eggs"),
    ("eggs", "Meat, fish and eggs"),
    ("dairies", "Dairy"),
    ("dairy", "Dairy"),
    ("milk", "Dairy"),
    ("yogurt", "Dairy"),
    ("cheese", "Dairy"),
    ("fats", "Fats"),
    ("oils", "Fats"),
    ("butter", "Fats"),
    ("sweet", "Sweets"),
    ("chocolate", "Sweets"),
    ("desserts", "Sweets"),
    ("cookies", "Sweets"),
]

# Nutrient column -> nutriment keys to try, per-100g value first
NUTRIMENT_KEYS: dict[str, tuple[str, ...]] = {
    "energy": ("energy-kj_100g", "energy-kj"),
    "energy_kcal": ("energy-kcal_100g", "energy-kcal"),
    "carbohydrates": ("carbohydrates_100g", "carbohydrates"),
    "sugars": ("sugars_100g", "sugars"),
    "fiber": ("fiber_100g", "fiber"),
    "fat": ("fat_100g", "fat"),
    "saturated_fat": ("saturated-fat_100g", "saturated-fat"),
    "monounsaturated_fat": ("monounsaturated-fat_100g", "monounsaturated-fat"),
    "polyunsaturated_fat": ("polyunsaturated-fat_100g", "polyunsaturated-fat"),
    "trans_fat": ("trans-fat_100g", "trans-fat"),
    "protein": ("proteins_100g", "proteins"),
    "salt": ("salt_100g", "salt"),
    "sodium": ("sodium_100g", "sodium"),
    "alcohol": ("alcohol_100g", "alcohol"),
    "vitamin_a": ("vitamin-a_100g", "vitamin-a"),
    "vitamin_b1": ("vitamin-b1_100g", "vitamin-b1"),
    "vitamin_b2": ("vitamin-b2_100g", "vitamin-b2"),
    "vitamin_b3": ("vitamin-pp_100g", "vitamin-b3_100g", "vitamin-pp"),
    "vitamin_b5": ("pantothenic-acid_100g", "vitamin-b5_100g", "pantothenic-acid"),
    "vitamin_b6": ("vitamin-b6_100g", "vitamin-b6"),
    "vitamin_b7": ("biotin_100g", "vitamin-b7_100g", "biotin"),
    "vitamin_b9": ("vitamin-b9_100g", "vitamin-b9"),
    "vitamin_b12": ("vitamin-b12_100g", "vitamin-b12"),
    "vitamin_c": ("vitamin-c_100g", "vitamin-c"),
    "vitamin_d": ("vitamin-d_100g", "vitamin-d"),
    "vitamin_e": ("vitamin-e_100g", "vitamin-e"),
    "vitamin_k": ("vitamin-k_100g", "vitamin-k"),
    "calcium": ("calcium_100g", "calcium"),
    "iron": ("iron_100g", "iron"),
    "magnesium": ("magnesium_100g", "magnesium"),
    "phosphorus": ("phosphorus_100g", "phosphorus"),
    "potassium": ("potassium_100g", "potassium"),
    "zinc": ("zinc_100g", "zinc"),
    "copper": ("copper_100g", "copper"),
    "manganese": ("manganese_100g", "manganese"),
    "selenium": ("selenium_100g", "selenium"),
    "iodine": ("iodine_100g", "iodine"),
    "chromium": ("chromium_100g", "chromium"),
    "molybdenum": ("molybdenum_100g", "molybdenum"),
    "fluoride": ("fluoride_100g", "fluoride"),
}


# Column unit -> multiplier from the grams Open Food Facts reports masses in.
# Energy columns (kJ, kcal) are stored as reported.
GRAM_FACTORS: dict[str, Decimal] = {
    "g": Decimal(1),
    "mg": Decimal(1000),
    "µg": Decimal(1000000),
}


def _text_value(product: dict, *keys: str) -> str | None:
    for key in keys:
        value = product.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _number_value(nutriments: dict, *keys: str) -> Decimal | None:
    for key in keys:
        value = nutriments.get(key)
        if isinstance(value, bool) or not isinstance(value, int | float):
            continue
        if value >= 0:
            return to_decimal(value)
    return None


def nutriment_values(nutriments: dict) -> dict[str, Decimal | None]:
    """Read every tracked nutrient, converted to the unit of its column."""
    values = {}
    for field, keys in NUTRIMENT_KEYS.items():
        value = _number_value(nutriments, *keys)
        factor = GRAM_FACTORS.get(NUTRIENT_UNITS[field])
        if value is not None and factor is not None:
            value = value * factor
        values[field] = value
    return values


def map_basic_category(categories: str | None) -> str:
    """Map an Open Food Facts categories string to one of our basic categories."""
    if not categories:
        return DEFAULT_BASIC_CATEGORY
    lowered = categories.lower()
    for needle, basic_category in CATEGORY_MAPPING:
        if needle in lowered:
            return basic_category
    return DEFAULT_BASIC_CATEGORY


def product_values(product: dict, barcode: str) -> dict:
    """Column values for a catalog record built from an Open Food Facts product."""
    categories = _text_value(product, "categories")
    basic_category = map_basic_category(categories)
    return {
        "name": _text_value(product, "product_name", "product_name_en", "generic_name") or barcode,
        "brand": _text_value(product, "brands"),
        "barcode": barcode,
        "openfoodfacts_id": barcode,
        "data_source": DataSource.OPENFOODFACTS.value,
        "last_sync": datetime.now(UTC),
        "basic_category": basic_category,
        "category": categories or basic_category,
        **nutriment_values(product.get("nutriments") or {}),
    }


def product_to_ingredient(product: dict, barcode: str) -> Ingredient:
    """Build an unsaved Ingredient from an Open Food Facts product."""
    return Ingredient(**product_values(product, barcode))


def product_to_food_item(product: dict, barcode: str) -> FoodItem:
    """Build an unsaved FoodItem from an Open Food Facts product."""
    return FoodItem(**product_values(product, barcode))


def apply_remote_data(record: Ingredient | FoodItem, remote: Ingredient | FoodItem) -> None:
    """Copy Open Food Facts data onto an existing ingredient or food item.

    The local name is kept; brand and categories are only filled when the
    remote record has them.
    """
    for column in NUTRIENT_COLUMNS:
        setattr(record, column, getattr(remote, column))
    if remote.brand:
        record.brand = remote.brand
    if remote.category:
        record.category = remote.category
    if remote.basic_category:
        record.basic_category = remote.basic_category
    record.openfoodfacts_id = remote.openfoodfacts_id
    record.data_source = DataSource.OPENFOODFACTS.value
    record.last_sync = remote.last_sync or datetime.now(UTC)


class OpenFoodFactsService:
    """Best-effort client for the Open Food Facts product API."""

    def __init__(self) -> None:
        settings = get_settings()
        self.base_url = settings.openfoodfacts_base_url.rstrip("/")
        self.timeout = settings.openfoodfacts_timeout_seconds
        self.headers = {"User-Agent": settings.openfoodfacts_user_agent}

    async def fetch_product(self, barcode: str) -> dict | None:
        """Fetch the raw product for a barcode.

        Returns None when the product does not exist or the API could not be
        reached; lookups never raise.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers) as client:
                response = await client.get(f"{self.base_url}/product/{barcode}")
                if response.status_code == 404:
                    return None
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Open Food Facts lookup failed for barcode {barcode}: {e}")
            return None

        if data.get("status") != 1:
            logger.debug(f"Barcode {barcode} not found in Open Food Facts")
            return None
        return data.get("product")

    async def lookup_ingredient(self, barcode: str) -> Ingredient | None:
        """Look up a barcode and map it to an unsaved Ingredient."""
        product = await self.fetch_product(barcode)
        if not product:
            return None
        return product_to_ingredient(product, barcode)

    async def lookup_food_item(self, barcode: str) -> FoodItem | None:
        """Look up a barcode and map it to an unsaved FoodItem."""
        product = await self.fetch_product(barcode)
        if not product:
            return None
        return product_to_food_item(product, barcode)
