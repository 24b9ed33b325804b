"""Add food items

Revision ID: 8d41f0c2a6e7
Revises: 5c2e9a71b3d4
Create Date: 2026-10-17 15:40:02.581930

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8d41f0c2a6e7"
down_revision: str | None = "5c2e9a71b3d4"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# Same per-100 g nutrient columns as ingredients
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


def upgrade() -> None:
    op.create_table(
        "food_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("brand", sa.String(length=255), nullable=True),
        sa.Column("barcode", sa.String(length=50), nullable=True),
        sa.Column("category", sa.String(length=255), nullable=False),
        sa.Column("basic_category", sa.String(length=100), nullable=False),
        sa.Column("openfoodfacts_id", sa.String(length=50), nullable=True),
        sa.Column("data_source", sa.String(length=20), nullable=False, server_default="MANUAL"),
        sa.Column("last_sync", sa.DateTime(timezone=True), nullable=True),
        *[sa.Column(name, sa.Numeric(10, 3), nullable=True) for name in NUTRIENT_COLUMNS],
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_food_items_id"), "food_items", ["id"], unique=False)
    op.create_index(op.f("ix_food_items_name"), "food_items", ["name"], unique=False)
    op.create_index(op.f("ix_food_items_barcode"), "food_items", ["barcode"], unique=True)
    op.create_index(
        op.f("ix_food_items_basic_category"), "food_items", ["basic_category"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_food_items_basic_category"), table_name="food_items")
    op.drop_index(op.f("ix_food_items_barcode"), table_name="food_items")
    op.drop_index(op.f("ix_food_items_name"), table_name="food_items")
    op.drop_index(op.f("ix_food_items_id"), table_name="food_items")
    op.drop_table("food_items")
