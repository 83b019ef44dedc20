"""SQLite database engine, schema, and SQL functions via SQLAlchemy Core."""

from satorder.infrastructure.database.engine import create_db_engine, init_database
from satorder.infrastructure.database.schema import metadata, orders, satellite_images

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "orders",
    "satellite_images",
]
