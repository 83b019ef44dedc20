"""Alembic environment for the satorder store.

Online runs connect through the same per-connection setup as the
application engine, so migrations see ``foreign_keys=ON`` and the
``ST_Intersects`` / ``DECIMAL_CMP`` functions. SQLite cannot ``ALTER``
most constraints in place, so autogenerate and upgrades use batch mode.
"""

from __future__ import annotations

from typing import Any

from alembic import context
from sqlalchemy import create_engine, event, pool

from satorder.infrastructure.database.engine import configure_connection
from satorder.infrastructure.database.schema import metadata

SATORDER_TABLES = frozenset(metadata.tables)


def _include_object(obj: Any, name: str | None, type_: str, reflected: bool, compare_to: Any) -> bool:
    # Tables the store does not own (e.g. a shared file) are invisible to autogenerate.
    if type_ == "table":
        return name in SATORDER_TABLES
    return True


def _store_url() -> str:
    url = context.config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError("sqlalchemy.url is not set; build the config with build_config()")
    return url


def _configure(**kwargs: Any) -> None:
    context.configure(
        target_metadata=metadata,
        render_as_batch=True,
        include_object=_include_object,
        **kwargs,
    )


if context.is_offline_mode():
    _configure(url=_store_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()
else:
    engine = create_engine(_store_url(), poolclass=pool.NullPool)
    event.listen(engine, "connect", configure_connection)
    with engine.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()
