"""Database engine setup for SQLite with WAL mode.

SQLite is the persistence layer: WAL mode for concurrent readers while a
request writes, foreign keys enforced so ``orders.image_id`` is checked by
the store itself, and satorder's SQL functions (spatial intersection,
decimal comparison) registered on every connection.

SQLAlchemy Core (not ORM) is used: every request runs a handful of
statements and returns plain rows, with no identity map to maintain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from satorder.infrastructure.database.functions import register_functions
from satorder.infrastructure.database.schema import metadata

DEFAULT_BUSY_TIMEOUT = 5.0


def configure_connection(dbapi_conn: Any, _: Any = None) -> None:
    """Per-connection setup shared by the app engine and Alembic."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    register_functions(dbapi_conn)


def create_db_engine(db_path: Path, *, busy_timeout: float = DEFAULT_BUSY_TIMEOUT) -> Engine:
    """Create a SQLite engine with WAL mode, foreign keys, and SQL functions.

    ``busy_timeout`` bounds how long a statement waits on a locked database
    before failing with ``OperationalError``.
    """
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False, "timeout": busy_timeout},
    )
    event.listen(engine, "connect", configure_connection)
    return engine


def init_database(db_path: Path, *, busy_timeout: float = DEFAULT_BUSY_TIMEOUT) -> Engine:
    """Initialize the satorder database at *db_path*.

    Creates the parent directory and all tables from :data:`schema.metadata`.
    Idempotent: safe to call on an existing database.

    Returns the engine ready for use.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path, busy_timeout=busy_timeout)
    metadata.create_all(engine)
    return engine
