"""init catalog: categories, products, skus

Revision ID: 20260301_0001
Revises:
Create Date: 2026-03-01 09:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "20260301_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.String(500), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_categories_id", "categories", ["id"])
    op.create_index("ix_categories_created_at", "categories", ["created_at"])

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("brand", sa.String(100), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("name", "category_id", name="uq_products_name_category"),
    )
    op.create_index("ix_products_id", "products", ["id"])
    op.create_index("ix_products_name", "products", ["name"])
    op.create_index("ix_products_category_id", "products", ["category_id"])
    op.create_index("ix_products_created_at", "products", ["created_at"])

    op.create_table(
        "skus",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sku_code", sa.String(50), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("attributes", sa.String(500), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "product_id",
            sa.Integer(),
            sa.ForeignKey("products.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_skus_id", "skus", ["id"])
    op.create_index("ix_skus_sku_code", "skus", ["sku_code"], unique=True)
    op.create_index("ix_skus_product_id", "skus", ["product_id"])
    op.create_index("ix_skus_created_at", "skus", ["created_at"])


def downgrade() -> None:
    op.drop_table("skus")
    op.drop_table("products")
    op.drop_table("categories")
