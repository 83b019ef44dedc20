"""Store — the explicit store handle injected into every service.

The process entry point (CLI context or HTTP lifespan) constructs one
``Store`` at start-up and calls :meth:`Store.close` at shutdown. The core
holds no other shared state: no module-level pool, no caches, no counters.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text

from satorder.infrastructure.database.engine import init_database

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from satorder.config.settings import SatSettings

logger = logging.getLogger(__name__)


class Store:
    """Owns the SQLAlchemy engine (and its connection pool) for one process."""

    def __init__(self, settings: SatSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            settings.database_path,
            busy_timeout=settings.database.busy_timeout,
        )

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine."""
        return self._engine

    @property
    def settings(self) -> SatSettings:
        """The resolved settings this store was opened with."""
        return self._settings

    @property
    def db_path(self) -> Path:
        return self._settings.database_path

    def ping(self) -> None:
        """Round-trip a trivial statement; raises if the store is unreachable."""
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.debug("Database connection successful: %s", self.db_path)

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a connection inside one transaction (commit or roll back as a unit)."""
        with self._engine.begin() as conn:
            yield conn

    def close(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
