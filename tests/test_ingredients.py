"""Ingredient catalog and Open Food Facts tests."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from src.services.openfoodfacts import (
    OpenFoodFactsService,
    map_basic_category,
    product_to_ingredient,
)

NUTELLA = {
    "product_name": "Hazelnut spread",
    "brands": "Ferrero",
    "categories": "Breakfasts, Spreads, Sweet spreads, Cocoa and hazelnuts spreads",
    "nutriments": {
        "energy-kcal_100g": 539,
        "energy-kj_100g": 2252,
        "fat_100g": 30.9,
        "saturated-fat_100g": 10.6,
        "carbohydrates_100g": 57.5,
        "sugars_100g": 56.3,
        "proteins_100g": 6.3,
        "salt_100g": 0.107,
        "calcium_100g": -1,
        "iron": 0.004,
    },
}

FORTIFIED_DRINK = {
    "product_name": "Fortified oat drink",
    "categories": "Beverages, Plant-based milk substitutes",
    "nutriments": {
        "energy-kj_100g": 197,
        "sugars_100g": 4.1,
        "sodium_100g": 0.4,
        "vitamin-b12_100g": 0.0000025,
        "vitamin-d_100g": 0.0000011,
        "calcium_100g": 0.12,
    },
}


def off_lookup(product):
    """Patch the Open Food Facts fetch to return ``product`` (or None)."""
    return patch.object(OpenFoodFactsService, "fetch_product", AsyncMock(return_value=product))


# --- Mapping ---


class TestProductMapping:
    """Tests for turning Open Food Facts products into ingredients."""

    def test_maps_names_and_nutrients(self):
        ingredient = product_to_ingredient(NUTELLA, "3017620422003")

        assert ingredient.name == "Hazelnut spread"
        assert ingredient.brand == "Ferrero"
        assert ingredient.barcode == "3017620422003"
        assert ingredient.openfoodfacts_id == "3017620422003"
        assert ingredient.data_source == "OPENFOODFACTS"
        assert ingredient.last_sync is not None
        assert ingredient.energy_kcal == Decimal("539")
        assert ingredient.fat == Decimal("30.9")
        assert ingredient.protein == Decimal("6.3")

    def test_falls_back_to_unsuffixed_keys(self):
        ingredient = product_to_ingredient(NUTELLA, "1")
        assert ingredient.iron == Decimal("4")

    def test_converts_grams_to_column_units(self):
        ingredient = product_to_ingredient(FORTIFIED_DRINK, "1")

        assert ingredient.vitamin_b12 == Decimal("2.5")  # µg
        assert ingredient.vitamin_d == Decimal("1.1")  # µg
        assert ingredient.sodium == Decimal("400")  # mg
        assert ingredient.calcium == Decimal("120")  # mg
        assert ingredient.sugars == Decimal("4.1")  # g
        assert ingredient.energy == Decimal("197")  # kJ

    def test_ignores_negative_and_missing_values(self):
        ingredient = product_to_ingredient(NUTELLA, "1")
        assert ingredient.calcium is None
        assert ingredient.vitamin_c is None

    def test_name_falls_back_to_barcode(self):
        ingredient = product_to_ingredient({"product_name": "  "}, "12345")
        assert ingredient.name == "12345"
        assert ingredient.basic_category == "Other"

    @pytest.mark.parametrize(
        ("categories", "expected"),
        [
            ("Plant-based foods, Legumes, Lentils", "Legumes"),
            ("Dairies, Cheeses", "Dairy"),
            ("Fresh vegetables", "Fruits and vegetables"),
            ("Cereals and potatoes, Pasta", "Starches"),
            ("Snacks, Sweet snacks, Chocolates", "Sweets"),
            ("Beverages", "Other"),
            (None, "Other"),
        ],
    )
    def test_basic_category(self, categories, expected):
        assert map_basic_category(categories) == expected


class TestOpenFoodFactsClient:
    """Tests for the HTTP client."""

    @staticmethod
    def mock_http(response=None, error=None):
        http = MagicMock()
        if error:
            http.get = AsyncMock(side_effect=error)
        else:
            http.get = AsyncMock(return_value=response)
        client_cls = MagicMock()
        client_cls.return_value.__aenter__.return_value = http
        return patch("src.services.openfoodfacts.httpx.AsyncClient", client_cls), http

    @pytest.mark.asyncio
    async def test_fetch_product(self):
        request = httpx.Request("GET", "https://example.test")
        response = httpx.Response(200, json={"status": 1, "product": NUTELLA}, request=request)
        patcher, http = self.mock_http(response)

        with patcher:
            product = await OpenFoodFactsService().fetch_product("3017620422003")

        assert product == NUTELLA
        assert http.get.call_args.args[0].endswith("/product/3017620422003")

    @pytest.mark.asyncio
    async def test_unknown_product(self):
        request = httpx.Request("GET", "https://example.test")
        response = httpx.Response(200, json={"status": 0}, request=request)
        patcher, _ = self.mock_http(response)

        with patcher:
            assert await OpenFoodFactsService().lookup_ingredient("000") is None

    @pytest.mark.asyncio
    async def test_network_error_returns_none(self):
        patcher, _ = self.mock_http(error=httpx.ConnectError("unreachable"))

        with patcher:
            assert await OpenFoodFactsService().fetch_product("000") is None

    @pytest.mark.asyncio
    async def test_server_error_returns_none(self):
        request = httpx.Request("GET", "https://example.test")
        patcher, _ = self.mock_http(httpx.Response(503, request=request))

        with patcher:
            assert await OpenFoodFactsService().fetch_product("000") is None


# --- API ---


def create_ingredient(client, headers, **body):
    response = client.post("/api/v1/ingredients", headers=headers, json=body)
    assert response.status_code == 201
    return response.json()


def test_create_ingredient(client, auth_headers):
    """Test creating a catalog ingredient with nutrition facts."""
    data = create_ingredient(
        client,
        auth_headers,
        name="Oat flakes",
        basic_category="Starches",
        energy_kcal=372,
        protein=13.5,
    )
    assert data["name"] == "Oat flakes"
    assert data["data_source"] == "MANUAL"
    assert data["energy_kcal"] == 372
    assert data["fat"] is None
    assert data["has_nutritional_data"] is True


def test_create_duplicate_ingredient(client, auth_headers):
    """Test names are unique regardless of case."""
    create_ingredient(client, auth_headers, name="Butter")
    response = client.post("/api/v1/ingredients", headers=auth_headers, json={"name": "butter"})
    assert response.status_code == 409


def test_negative_nutrients_rejected(client, auth_headers):
    """Test nutrient values cannot be negative."""
    response = client.post(
        "/api/v1/ingredients", headers=auth_headers, json={"name": "Bad", "fat": -1}
    )
    assert response.status_code == 422


def test_list_and_filter_ingredients(client, auth_headers):
    """Test listing by name fragment and category."""
    create_ingredient(client, auth_headers, name="Carrot", basic_category="Fruits and vegetables")
    create_ingredient(client, auth_headers, name="Cabbage", basic_category="Fruits and vegetables")
    create_ingredient(client, auth_headers, name="Rice", basic_category="Starches")

    names = [i["name"] for i in client.get("/api/v1/ingredients", headers=auth_headers).json()]
    assert names == ["Cabbage", "Carrot", "Rice"]

    response = client.get("/api/v1/ingredients", headers=auth_headers, params={"name": "ca"})
    assert [i["name"] for i in response.json()] == ["Cabbage", "Carrot"]

    response = client.get("/api/v1/ingredients/category/Starches", headers=auth_headers)
    assert [i["name"] for i in response.json()] == ["Rice"]


def test_autocomplete(client, auth_headers):
    """Test prefix suggestions need two characters."""
    create_ingredient(client, auth_headers, name="Tomato")
    create_ingredient(client, auth_headers, name="Tomato paste")
    create_ingredient(client, auth_headers, name="Potato")

    response = client.get(
        "/api/v1/ingredients/autocomplete", headers=auth_headers, params={"query": "tom"}
    )
    assert [i["name"] for i in response.json()] == ["Tomato", "Tomato paste"]

    response = client.get(
        "/api/v1/ingredients/autocomplete", headers=auth_headers, params={"query": "t"}
    )
    assert response.json() == []


def test_update_ingredient(client, auth_headers):
    """Test partial updates only touch the given fields."""
    ingredient = create_ingredient(client, auth_headers, name="Milk", protein=3.4, fat=3.6)
    response = client.put(
        f"/api/v1/ingredients/{ingredient['id']}",
        headers=auth_headers,
        json={"fat": 1.5, "basic_category": "Dairy"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["fat"] == 1.5
    assert data["protein"] == 3.4
    assert data["basic_category"] == "Dairy"


def test_delete_ingredient(client, auth_headers):
    """Test deleting an unused ingredient."""
    ingredient = create_ingredient(client, auth_headers, name="Parsley")
    response = client.delete(f"/api/v1/ingredients/{ingredient['id']}", headers=auth_headers)
    assert response.status_code == 204
    response = client.get(f"/api/v1/ingredients/{ingredient['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_delete_ingredient_in_use(client, auth_headers):
    """Test an ingredient used by a recipe cannot be deleted."""
    client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json={
            "name": "Toast",
            "type": "Starter",
            "person": 1,
            "ingredients": [{"ingredient_name": "Bread", "quantity": 1, "unit": "slice"}],
            "steps": ["Toast it"],
        },
    )
    bread = client.get(
        "/api/v1/ingredients/by-name", headers=auth_headers, params={"name": "Bread"}
    ).json()

    response = client.delete(f"/api/v1/ingredients/{bread['id']}", headers=auth_headers)
    assert response.status_code == 409


def test_ingredient_stats(client, auth_headers):
    """Test catalog counters."""
    create_ingredient(client, auth_headers, name="Salt", salt=100)
    create_ingredient(client, auth_headers, name="Bay leaf")
    create_ingredient(client, auth_headers, name="Honey", energy_kcal=304)

    response = client.get("/api/v1/ingredients/stats", headers=auth_headers)
    assert response.json() == {"total": 3, "with_nutritional_data": 1, "from_openfoodfacts": 0}


def test_popular_ingredients(client, auth_headers):
    """Test ingredients are ranked by how many recipes use them."""
    for name, lines in [
        ("Omelette", ["Egg", "Butter"]),
        ("Pancakes", ["Egg", "Flour", "Butter"]),
        ("Boiled egg", ["Egg"]),
    ]:
        client.post(
            "/api/v1/recipes",
            headers=auth_headers,
            json={
                "name": name,
                "type": "Main course",
                "person": 2,
                "ingredients": [
                    {"ingredient_name": line, "quantity": 1, "unit": "piece"} for line in lines
                ],
                "steps": ["Cook"],
            },
        )
    create_ingredient(client, auth_headers, name="Anise")

    response = client.get("/api/v1/ingredients/popular", headers=auth_headers)
    assert response.status_code == 200
    assert [i["name"] for i in response.json()] == ["Egg", "Butter", "Flour", "Anise"]

    response = client.get(
        "/api/v1/ingredients/popular", headers=auth_headers, params={"limit": 2}
    )
    assert [i["name"] for i in response.json()] == ["Egg", "Butter"]


def test_popular_ingredients_from_plans(client, auth_headers):
    """Test ranking by shopping list usage."""
    recipe = client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json={
            "name": "Salad",
            "type": "Starter",
            "person": 1,
            "ingredients": [{"ingredient_name": "Lettuce", "quantity": 1, "unit": "piece"}],
            "steps": ["Wash"],
        },
    ).json()
    create_ingredient(client, auth_headers, name="Apple")
    plan = client.post(
        "/api/v1/plans", headers=auth_headers, json={"name": "Week", "start_date": "2026-01-05"}
    ).json()
    client.post(
        f"/api/v1/plans/{plan['id']}/recipes",
        headers=auth_headers,
        json={"recipe_id": recipe["id"], "planned_date": "2026-01-06"},
    )
    client.post(f"/api/v1/plans/{plan['id']}/shopping-list/generate", headers=auth_headers)

    response = client.get(
        "/api/v1/ingredients/popular", headers=auth_headers, params={"from_plans": True}
    )
    assert [i["name"] for i in response.json()] == ["Lettuce", "Apple"]


def test_list_by_data_source(client, auth_headers):
    """Test manual and imported ingredients are listed separately."""
    create_ingredient(client, auth_headers, name="Sugar")
    with off_lookup(NUTELLA):
        client.get("/api/v1/ingredients/search-barcode/3017620422003", headers=auth_headers)

    manual = client.get("/api/v1/ingredients/manual", headers=auth_headers).json()
    imported = client.get("/api/v1/ingredients/openfoodfacts", headers=auth_headers).json()
    assert [i["name"] for i in manual] == ["Sugar"]
    assert [i["name"] for i in imported] == ["Hazelnut spread"]


# --- Barcodes ---


def test_get_by_barcode_is_local_only(client, auth_headers):
    """Test the plain barcode lookup never calls Open Food Facts."""
    create_ingredient(client, auth_headers, name="Chickpeas", barcode="111")

    with off_lookup(None) as lookup:
        assert client.get("/api/v1/ingredients/barcode/111", headers=auth_headers).status_code == 200
        assert client.get("/api/v1/ingredients/barcode/222", headers=auth_headers).status_code == 404
        lookup.assert_not_called()


def test_search_barcode_imports_remote_product(client, auth_headers):
    """Test unknown barcodes are fetched from Open Food Facts and saved."""
    with off_lookup(NUTELLA):
        response = client.get("/api/v1/ingredients/search-barcode/3017620422003", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] is not None
    assert data["data_source"] == "OPENFOODFACTS"
    assert data["energy_kcal"] == 539

    # Now found locally
    with off_lookup(None) as lookup:
        response = client.get("/api/v1/ingredients/search-barcode/3017620422003", headers=auth_headers)
        assert response.json()["id"] == data["id"]
        lookup.assert_not_called()


def test_imported_micronutrients_survive_storage(client, auth_headers):
    """Test tiny per-gram values are stored in the column unit, not rounded to zero."""
    with off_lookup(FORTIFIED_DRINK):
        imported = client.get("/api/v1/ingredients/search-barcode/555", headers=auth_headers).json()

    data = client.get(f"/api/v1/ingredients/{imported['id']}", headers=auth_headers).json()
    assert data["vitamin_b12"] == 2.5
    assert data["vitamin_d"] == 1.1
    assert data["sodium"] == 400
    assert data["calcium"] == 120


def test_search_barcode_not_found(client, auth_headers):
    """Test a barcode unknown everywhere is a 404."""
    with off_lookup(None):
        response = client.get("/api/v1/ingredients/search-barcode/000", headers=auth_headers)
    assert response.status_code == 404


def test_search_barcode_keeps_names_unique(client, auth_headers):
    """Test an imported product whose name is taken gets the barcode appended."""
    create_ingredient(client, auth_headers, name="Hazelnut spread")
    with off_lookup(NUTELLA):
        response = client.get("/api/v1/ingredients/search-barcode/301", headers=auth_headers)
    assert response.json()["name"] == "Hazelnut spread (301)"


def test_search_openfoodfacts_does_not_save(client, auth_headers):
    """Test the remote preview leaves the catalog untouched."""
    with off_lookup(NUTELLA):
        response = client.get(
            "/api/v1/ingredients/search-openfoodfacts/3017620422003", headers=auth_headers
        )
    assert response.status_code == 200
    assert response.json()["id"] is None
    assert response.json()["brand"] == "Ferrero"
    assert client.get("/api/v1/ingredients", headers=auth_headers).json() == []


def test_sync_ingredient(client, auth_headers):
    """Test refreshing a local ingredient from its barcode keeps its name."""
    ingredient = create_ingredient(client, auth_headers, name="Spread", barcode="3017620422003")

    with off_lookup(NUTELLA):
        response = client.post(
            f"/api/v1/ingredients/{ingredient['id']}/sync", headers=auth_headers
        )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Spread"
    assert data["sugars"] == 56.3
    assert data["data_source"] == "OPENFOODFACTS"
    assert data["last_sync"] is not None


def test_sync_without_barcode(client, auth_headers):
    """Test syncing needs a barcode."""
    ingredient = create_ingredient(client, auth_headers, name="Homemade stock")
    response = client.post(f"/api/v1/ingredients/{ingredient['id']}/sync", headers=auth_headers)
    assert response.status_code == 400
