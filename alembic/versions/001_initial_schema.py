"""Initial schema - products, trends, filter state, profiles, keyword research.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# SQLAlchemy stores enum member names
seller_type_enum = sa.Enum("FBA", "EASY_SHIP", "SELLER_FULFILLED", name="sellertype")
subscription_tier_enum = sa.Enum("FREE", "PRO", "PREMIUM", name="subscriptiontier")


def upgrade() -> None:
    # Create products table
    op.create_table(
        "products",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("category", sa.String(200), nullable=False, index=True),
        sa.Column("subcategory", sa.String(200), nullable=False, server_default=""),
        sa.Column("brand", sa.String(200), nullable=False, server_default=""),
        # Pricing
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("mrp", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("margin", sa.Numeric(8, 4), nullable=False),
        # Market data
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default="0"),
        sa.Column("review_count", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("bsr", sa.BigInteger(), nullable=False),
        sa.Column("estimated_monthly_sales", sa.BigInteger(), nullable=False, server_default="0"),
        # Fulfillment
        sa.Column("available_stock", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("seller_type", seller_type_enum, nullable=False, server_default="FBA"),
        sa.Column("weight_kg", sa.Numeric(8, 3), nullable=True),
        # Media
        sa.Column("images", sa.JSON(), nullable=False, server_default="[]"),
        # Timestamps
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("last_modified", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Create product_trends table
    op.create_table(
        "product_trends",
        sa.Column(
            "product_id",
            sa.String(64),
            sa.ForeignKey("products.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("rising_star", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("review_growth_spike", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("price_increase_trend", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("seasonal_demand_pattern", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Create filter_states table
    op.create_table(
        "filter_states",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("session_id", sa.String(255), nullable=False, index=True),
        sa.Column("storage_key", sa.String(100), nullable=False),
        sa.Column("payload", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("session_id", "storage_key"),
    )

    # Create user_profiles table
    op.create_table(
        "user_profiles",
        sa.Column("principal", sa.String(255), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("subscription_tier", subscription_tier_enum, nullable=False, server_default="FREE"),
        sa.Column("alert_preferences", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("saved_product_lists", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Create keyword_research table
    op.create_table(
        "keyword_research",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("keyword", sa.String(255), nullable=False, index=True),
        sa.Column("search_volume_estimate", sa.BigInteger(), nullable=True),
        sa.Column("keyword_difficulty_score", sa.Numeric(5, 2), nullable=True),
        sa.Column("cpc_estimate", sa.Numeric(10, 2), nullable=True),
        sa.Column("long_tail_suggestions", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("keyword_research")
    op.drop_table("user_profiles")
    op.drop_table("filter_states")
    op.drop_table("product_trends")
    op.drop_table("products")

    # Drop enums
    op.execute("DROP TYPE IF EXISTS subscriptiontier")
    op.execute("DROP TYPE IF EXISTS sellertype")
