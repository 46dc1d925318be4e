"""Add seller_analyses table.

Revision ID: 002
Revises: 001
Create Date: 2026-10-17

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create seller_analyses table
    op.create_table(
        "seller_analyses",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "product_id",
            sa.String(64),
            sa.ForeignKey("products.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("average_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("average_reviews", sa.BigInteger(), nullable=True),
        sa.Column("average_rating", sa.Numeric(3, 2), nullable=True),
        sa.Column("weakness_detection", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("listing_quality_score", sa.Numeric(5, 2), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("seller_analyses")
