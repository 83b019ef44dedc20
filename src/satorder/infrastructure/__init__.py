"""Infrastructure layer — database, SQL functions, repositories, store handle.

This layer depends on stdlib and third-party libs (SQLAlchemy, shapely, Alembic).
It may read domain value objects but must never import from services,
commands, api, or output.
"""
