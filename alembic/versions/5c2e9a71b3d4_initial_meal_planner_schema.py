"""Initial meal planner schema

Revision ID: 5c2e9a71b3d4
Revises:
Create Date: 2026-10-17 09:12:44.118203

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c2e9a71b3d4"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# Per-100 g nutrient columns on ingredients, all nullable
NUTRIENT_COLUMNS = [
    "energy",
    "energy_kcal",
    "carbohydrates",
    "sugars",
    "fiber",
    "fat",
    "saturated_fat",
    "monounsaturated_fat",
    "polyunsaturated_fat",
    "trans_fat",
    "protein",
    "salt",
    "sodium",
    "alcohol",
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
]


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="USER"),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        *timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=255), nullable=True),
        sa.Column("basic_category", sa.String(length=100), nullable=True),
        sa.Column("brand", sa.String(length=255), nullable=True),
        sa.Column("barcode", sa.String(length=50), nullable=True),
        sa.Column("openfoodfacts_id", sa.String(length=50), nullable=True),
        sa.Column("data_source", sa.String(length=20), nullable=False, server_default="MANUAL"),
        sa.Column("last_sync", sa.DateTime(timezone=True), nullable=True),
        *[sa.Column(name, sa.Numeric(10, 3), nullable=True) for name in NUTRIENT_COLUMNS],
        *timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ingredients_id"), "ingredients", ["id"], unique=False)
    op.create_index(op.f("ix_ingredients_name"), "ingredients", ["name"], unique=True)
    op.create_index(op.f("ix_ingredients_barcode"), "ingredients", ["barcode"], unique=True)
    op.create_index(
        op.f("ix_ingredients_basic_category"), "ingredients", ["basic_category"], unique=False
    )

    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("origin", sa.String(length=50), nullable=True),
        sa.Column("preparation_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cooking_time", sa.Integer(), nullable=True),
        sa.Column("rest_time", sa.Integer(), nullable=True),
        sa.Column("total_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("person", sa.Integer(), nullable=False),
        sa.Column("is_baby_friendly", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("steps", sa.JSON(), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_recipes_id"), "recipes", ["id"], unique=False)
    op.create_index(op.f("ix_recipes_name"), "recipes", ["name"], unique=False)
    op.create_index(op.f("ix_recipes_origin"), "recipes", ["origin"], unique=False)

    op.create_table(
        "recipe_ingredients",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("recipe_id", sa.Integer(), nullable=False),
        sa.Column("ingredient_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"]),
        sa.ForeignKeyConstraint(["ingredient_id"], ["ingredients.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_recipe_ingredients_id"), "recipe_ingredients", ["id"], unique=False)
    op.create_index(
        op.f("ix_recipe_ingredients_recipe_id"), "recipe_ingredients", ["recipe_id"], unique=False
    )
    op.create_index(
        op.f("ix_recipe_ingredients_ingredient_id"),
        "recipe_ingredients",
        ["ingredient_id"],
        unique=False,
    )

    op.create_table(
        "weekly_plans",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("duration_weeks", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_date", sa.Date(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_weekly_plans_id"), "weekly_plans", ["id"], unique=False)
    op.create_index(op.f("ix_weekly_plans_user_id"), "weekly_plans", ["user_id"], unique=False)

    op.create_table(
        "plan_recipes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("weekly_plan_id", sa.Integer(), nullable=False),
        sa.Column("recipe_id", sa.Integer(), nullable=False),
        sa.Column("planned_date", sa.Date(), nullable=False),
        sa.Column("meal_type", sa.String(length=50), nullable=True),
        sa.Column("scaled_person", sa.Integer(), nullable=True),
        sa.Column("added_date", sa.Date(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(["weekly_plan_id"], ["weekly_plans.id"]),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_plan_recipes_id"), "plan_recipes", ["id"], unique=False)
    op.create_index(
        op.f("ix_plan_recipes_weekly_plan_id"), "plan_recipes", ["weekly_plan_id"], unique=False
    )
    op.create_index(op.f("ix_plan_recipes_recipe_id"), "plan_recipes", ["recipe_id"], unique=False)

    op.create_table(
        "shopping_list_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("weekly_plan_id", sa.Integer(), nullable=False),
        sa.Column("ingredient_id", sa.Integer(), nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=False),
        sa.Column("quantity_needed", sa.Numeric(12, 3), nullable=False),
        sa.Column("quantity_owned", sa.Numeric(12, 3), nullable=False, server_default="0"),
        sa.Column("quantity_to_buy", sa.Numeric(12, 3), nullable=False, server_default="0"),
        sa.Column("is_checked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_validated", sa.Boolean(), nullable=False, server_default=sa.false()),
        *timestamps(),
        sa.ForeignKeyConstraint(["weekly_plan_id"], ["weekly_plans.id"]),
        sa.ForeignKeyConstraint(["ingredient_id"], ["ingredients.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_shopping_list_items_id"), "shopping_list_items", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_shopping_list_items_weekly_plan_id"),
        "shopping_list_items",
        ["weekly_plan_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_shopping_list_items_ingredient_id"),
        "shopping_list_items",
        ["ingredient_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_table("shopping_list_items")
    op.drop_table("plan_recipes")
    op.drop_table("weekly_plans")
    op.drop_table("recipe_ingredients")
    op.drop_table("recipes")
    op.drop_table("ingredients")
    op.drop_table("users")
