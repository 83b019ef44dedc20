"""SQLAlchemy Core table definitions for the satorder database.

Geometry is kept as canonical GeoJSON text in SRID 4326 and timestamps as
fixed-width UTC text (see :mod:`satorder.domain.timestamps`). Prices are
exact decimal text compared through the ``DECIMAL_CMP`` SQL function.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, MetaData, String, Table, Text

metadata = MetaData()

satellite_images = Table(
    "satellite_images",
    metadata,
    Column("catalog_id", String(255), primary_key=True),
    Column("coverage_area", Text, nullable=False),  # GeoJSON Polygon, SRID 4326
    Column("created_at", Text, nullable=False),
)

orders = Table(
    "orders",
    metadata,
    Column("id", String(255), primary_key=True),
    Column(
        "image_id",
        String(255),
        ForeignKey("satellite_images.catalog_id"),
        nullable=False,
    ),
    Column("price", String(255), nullable=False),  # decimal text
    Column("created_at", Text, nullable=False),
)

# ---------------------------------------------------------------------------
# Indexes for filtered and ordered columns
# ---------------------------------------------------------------------------

Index("ix_satellite_images_created_at", satellite_images.c.created_at)
Index("ix_orders_created_at", orders.c.created_at)
Index("ix_orders_image_id", orders.c.image_id)
