"""Recipe API tests."""

import pytest


def recipe_payload(name="Pasta", person=2, ingredients=None, **overrides):
    payload = {
        "name": name,
        "type": "Main course",
        "description": "Fresh pasta",
        "origin": "Italy",
        "preparation_time": 20,
        "cooking_time": 10,
        "rest_time": 30,
        "person": person,
        "ingredients": ingredients
        or [
            {"ingredient_name": "Flour", "quantity": 200, "unit": "g"},
            {"ingredient_name": "Egg", "quantity": 100, "unit": "g"},
        ],
        "steps": ["Mix flour and eggs", "Knead", "Cut and boil"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def catalog(client, auth_headers):
    """Flour and egg with known energy values."""
    for name, kcal, protein in (("Flour", 364, 10), ("Egg", 155, 13)):
        response = client.post(
            "/api/v1/ingredients",
            headers=auth_headers,
            json={
                "name": name,
                "basic_category": "Starches" if name == "Flour" else "Meat, fish and eggs",
                "energy_kcal": kcal,
                "protein": protein,
            },
        )
        assert response.status_code == 201


def test_create_recipe(client, auth_headers, catalog):
    """Test creating a recipe with ingredients."""
    response = client.post("/api/v1/recipes", headers=auth_headers, json=recipe_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Pasta"
    assert data["person"] == 2
    assert data["scaled_person"] == 2
    assert data["total_time"] == 60
    assert data["steps"] == ["Mix flour and eggs", "Knead", "Cut and boil"]
    assert [(i["name"], i["quantity"], i["unit"]) for i in data["ingredients"]] == [
        ("Flour", 200, "g"),
        ("Egg", 100, "g"),
    ]
    assert data["nutrition_per_portion"]["energy_kcal"] == 441.5


def test_create_recipe_adds_unknown_ingredients(client, auth_headers):
    """Test unknown ingredient names are added to the catalog."""
    response = client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json=recipe_payload(
            ingredients=[
                {
                    "ingredient_name": "Saffron",
                    "ingredient_category": "Spices",
                    "quantity": 1,
                    "unit": "g",
                }
            ]
        ),
    )
    assert response.status_code == 201

    response = client.get(
        "/api/v1/ingredients/by-name", headers=auth_headers, params={"name": "saffron"}
    )
    assert response.status_code == 200
    assert response.json()["basic_category"] == "Spices"
    assert response.json()["data_source"] == "MANUAL"


def test_ingredient_names_resolve_case_insensitively(client, auth_headers, catalog):
    """Test recipe lines reuse existing catalog entries regardless of case."""
    response = client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json=recipe_payload(
            ingredients=[{"ingredient_name": "FLOUR", "quantity": 100, "unit": "g"}]
        ),
    )
    assert response.json()["ingredients"][0]["name"] == "Flour"
    assert len(client.get("/api/v1/ingredients", headers=auth_headers).json()) == 2


def test_get_recipe_scaled(client, auth_headers, catalog):
    """Test reading a recipe for more people scales quantities, not per-portion values."""
    recipe_id = client.post(
        "/api/v1/recipes", headers=auth_headers, json=recipe_payload()
    ).json()["id"]

    response = client.get(
        f"/api/v1/recipes/{recipe_id}", headers=auth_headers, params={"scaled_person": 4}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["person"] == 2
    assert data["scaled_person"] == 4
    assert [i["quantity"] for i in data["ingredients"]] == [400, 200]
    assert data["nutrition_per_portion"]["energy_kcal"] == 441.5
    assert data["nutrition_per_portion"]["protein"] == 16.5
    assert data["nutrition_per_portion"]["vitamin_c"] is None


def test_get_recipe_invalid_scaled_person(client, auth_headers, catalog):
    """Test scaled_person is validated."""
    recipe_id = client.post(
        "/api/v1/recipes", headers=auth_headers, json=recipe_payload()
    ).json()["id"]
    response = client.get(
        f"/api/v1/recipes/{recipe_id}", headers=auth_headers, params={"scaled_person": 0}
    )
    assert response.status_code == 422


def test_get_recipe_not_found(client, auth_headers):
    """Test getting a missing recipe."""
    response = client.get("/api/v1/recipes/9999", headers=auth_headers)
    assert response.status_code == 404


def test_create_recipe_validation(client, auth_headers):
    """Test recipes need steps, ingredients and a known type."""
    assert (
        client.post(
            "/api/v1/recipes", headers=auth_headers, json=recipe_payload(steps=[])
        ).status_code
        == 422
    )
    assert (
        client.post(
            "/api/v1/recipes", headers=auth_headers, json=recipe_payload(type="Brunch")
        ).status_code
        == 422
    )
    assert (
        client.post(
            "/api/v1/recipes", headers=auth_headers, json=recipe_payload(person=0)
        ).status_code
        == 422
    )


def test_update_recipe_replaces_ingredients(client, auth_headers, catalog):
    """Test updating replaces every ingredient line."""
    recipe_id = client.post(
        "/api/v1/recipes", headers=auth_headers, json=recipe_payload()
    ).json()["id"]

    response = client.put(
        f"/api/v1/recipes/{recipe_id}",
        headers=auth_headers,
        json=recipe_payload(
            name="Egg Pasta",
            person=1,
            cooking_time=5,
            ingredients=[{"ingredient_name": "Egg", "quantity": 50, "unit": "g"}],
        ),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Egg Pasta"
    assert data["total_time"] == 55
    assert [(i["name"], i["quantity"]) for i in data["ingredients"]] == [("Egg", 50)]
    assert data["nutrition_per_portion"]["energy_kcal"] == 77.5


def test_list_recipes(client, auth_headers, catalog):
    """Test listing recipes, optionally scaled."""
    client.post("/api/v1/recipes", headers=auth_headers, json=recipe_payload())

    response = client.get("/api/v1/recipes", headers=auth_headers, params={"scaled_person": 1})
    assert response.status_code == 200
    recipes = response.json()
    assert len(recipes) == 1
    assert [i["quantity"] for i in recipes[0]["ingredients"]] == [100, 50]


def test_search_by_name(client, auth_headers, catalog):
    """Test searching recipes by name fragment."""
    client.post("/api/v1/recipes", headers=auth_headers, json=recipe_payload())
    client.post("/api/v1/recipes", headers=auth_headers, json=recipe_payload(name="Omelette"))

    response = client.get("/api/v1/recipes/by-name", headers=auth_headers, params={"name": "past"})
    assert [r["name"] for r in response.json()] == ["Pasta"]


def test_search_by_ingredients_requires_all(client, auth_headers, catalog):
    """Test ingredient search only returns recipes containing every ingredient."""
    client.post("/api/v1/recipes", headers=auth_headers, json=recipe_payload())
    client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json=recipe_payload(
            name="Omelette",
            ingredients=[{"ingredient_name": "Egg", "quantity": 150, "unit": "g"}],
        ),
    )

    response = client.get(
        "/api/v1/recipes/by-ingredients", headers=auth_headers, params={"ingredients": "egg"}
    )
    assert sorted(r["name"] for r in response.json()) == ["Omelette", "Pasta"]

    response = client.get(
        "/api/v1/recipes/by-ingredients",
        headers=auth_headers,
        params={"ingredients": "egg,flour"},
    )
    assert [r["name"] for r in response.json()] == ["Pasta"]


def test_filter_recipes(client, auth_headers, catalog):
    """Test combined recipe filters."""
    client.post("/api/v1/recipes", headers=auth_headers, json=recipe_payload())
    client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json=recipe_payload(
            name="Tortilla",
            origin="Spain",
            preparation_time=5,
            cooking_time=5,
            rest_time=None,
            is_baby_friendly=True,
        ),
    )

    def names(**params):
        response = client.get("/api/v1/recipes/filter", headers=auth_headers, params=params)
        assert response.status_code == 200
        return [r["name"] for r in response.json()]

    assert names(max_total_time=30) == ["Tortilla"]
    assert names(min_total_time=30) == ["Pasta"]
    assert names(origins="italy") == ["Pasta"]
    assert names(is_baby_friendly=True) == ["Tortilla"]
    assert names(search="fresh", origins="Spain") == ["Tortilla"]
    assert names(ingredients="flour", is_baby_friendly=False) == ["Pasta"]


def test_origins_count_and_autocomplete(client, auth_headers, catalog):
    """Test the small catalog helpers."""
    client.post("/api/v1/recipes", headers=auth_headers, json=recipe_payload())
    client.post(
        "/api/v1/recipes", headers=auth_headers, json=recipe_payload(name="Paella", origin="Spain")
    )

    assert client.get("/api/v1/recipes/origins", headers=auth_headers).json() == ["Italy", "Spain"]
    assert client.get("/api/v1/recipes/count", headers=auth_headers).json() == {"count": 2}

    response = client.get(
        "/api/v1/recipes/autocomplete", headers=auth_headers, params={"query": "pa"}
    )
    assert [r["name"] for r in response.json()] == ["Paella", "Pasta"]

    response = client.get(
        "/api/v1/recipes/autocomplete", headers=auth_headers, params={"query": "p"}
    )
    assert response.json() == []


def test_popular_recipes(client, auth_headers, catalog):
    """Test popular recipes are ordered by how often they are planned."""
    pasta = client.post("/api/v1/recipes", headers=auth_headers, json=recipe_payload()).json()
    paella = client.post(
        "/api/v1/recipes", headers=auth_headers, json=recipe_payload(name="Paella")
    ).json()
    plan = client.post(
        "/api/v1/plans", headers=auth_headers, json={"name": "Week", "start_date": "2026-03-02"}
    ).json()
    for recipe_id, day in ((paella["id"], "2026-03-02"), (paella["id"], "2026-03-03")):
        client.post(
            f"/api/v1/plans/{plan['id']}/recipes",
            headers=auth_headers,
            json={"recipe_id": recipe_id, "planned_date": day},
        )
    client.post(
        f"/api/v1/plans/{plan['id']}/recipes",
        headers=auth_headers,
        json={"recipe_id": pasta["id"], "planned_date": "2026-03-04"},
    )

    response = client.get("/api/v1/recipes/popular", headers=auth_headers)
    assert [r["name"] for r in response.json()] == ["Paella", "Pasta"]


def test_delete_recipe(client, auth_headers, catalog):
    """Test deleting a recipe."""
    recipe_id = client.post(
        "/api/v1/recipes", headers=auth_headers, json=recipe_payload()
    ).json()["id"]

    response = client.delete(f"/api/v1/recipes/{recipe_id}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get(f"/api/v1/recipes/{recipe_id}", headers=auth_headers).status_code == 404


def test_delete_scheduled_recipe_conflicts(client, auth_headers, catalog):
    """Test a recipe still used by a plan cannot be deleted."""
    recipe_id = client.post(
        "/api/v1/recipes", headers=auth_headers, json=recipe_payload()
    ).json()["id"]
    plan = client.post(
        "/api/v1/plans", headers=auth_headers, json={"name": "Week", "start_date": "2026-03-02"}
    ).json()
    client.post(
        f"/api/v1/plans/{plan['id']}/recipes",
        headers=auth_headers,
        json={"recipe_id": recipe_id, "planned_date": "2026-03-02"},
    )

    response = client.delete(f"/api/v1/recipes/{recipe_id}", headers=auth_headers)
    assert response.status_code == 409
