"""Baseline schema — satellite image catalog and orders.

Revision ID: 001_baseline
Revises: None
Create Date: 2025-02-06

Databases created by ``satorder init`` are stamped at this revision
without running it; ``satorder upgrade`` applies it to an empty database.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "satellite_images",
        sa.Column("catalog_id", sa.String(255), primary_key=True),
        sa.Column("coverage_area", sa.Text, nullable=False),
        sa.Column("created_at", sa.Text, nullable=False),
    )
    op.create_index("ix_satellite_images_created_at", "satellite_images", ["created_at"])

    op.create_table(
        "orders",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column(
            "image_id",
            sa.String(255),
            sa.ForeignKey("satellite_images.catalog_id"),
            nullable=False,
        ),
        sa.Column("price", sa.String(255), nullable=False),
        sa.Column("created_at", sa.Text, nullable=False),
    )
    op.create_index("ix_orders_created_at", "orders", ["created_at"])
    op.create_index("ix_orders_image_id", "orders", ["image_id"])


def downgrade() -> None:
    op.drop_index("ix_orders_image_id", table_name="orders")
    op.drop_index("ix_orders_created_at", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_satellite_images_created_at", table_name="satellite_images")
    op.drop_table("satellite_images")
