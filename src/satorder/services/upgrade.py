"""UpgradeService — keeps the store's schema at the Alembic head.

The store creates its tables from metadata at start-up, so a database is
in one of three states when the upgrade runs:

- stamped: ``alembic_version`` names a revision, pending revisions are applied;
- unstamped with every satorder table present: recorded at head, no DDL;
- unstamped and empty: the baseline revision builds the schema.

An unstamped database holding only part of the satorder schema cannot be
reconciled automatically and is reported as ``SCHEMA_MISMATCH``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from alembic.util import CommandError
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from satorder.infrastructure.database.migrations import build_config, sqlite_url
from satorder.infrastructure.database.schema import metadata
from satorder.services.base import BaseService
from satorder.services.result import ServiceResult

logger = logging.getLogger(__name__)

MIGRATION_FAILED = "MIGRATION_FAILED"
SCHEMA_MISMATCH = "SCHEMA_MISMATCH"


@dataclass(frozen=True)
class SchemaState:
    """Revision bookkeeping plus which satorder tables exist."""

    current: str | None
    head: str | None
    pending: list[dict[str, str]] = field(default_factory=list)
    missing_tables: list[str] = field(default_factory=list)

    @property
    def partial_schema(self) -> bool:
        return 0 < len(self.missing_tables) < len(metadata.tables)

    def to_data(self) -> dict[str, Any]:
        return {
            "pending_count": len(self.pending),
            "pending": self.pending,
            "current": self.current,
            "head": self.head,
            "missing_tables": self.missing_tables,
        }


class UpgradeService(BaseService):
    """Database schema migrations for the satorder store."""

    def _config(self) -> Config:
        return build_config(sqlite_url(self._store.db_path))

    def _schema_state(self) -> SchemaState:
        script = ScriptDirectory.from_config(self._config())
        head = script.get_current_head()
        with self._store.engine.connect() as conn:
            current = MigrationContext.configure(conn).get_current_revision()
            present = set(inspect(conn).get_table_names())

        pending: list[dict[str, str]] = []
        for revision in script.walk_revisions():
            if revision.revision == current:
                break
            pending.append({"revision": revision.revision, "description": revision.doc or ""})
        pending.reverse()

        return SchemaState(
            current=current,
            head=head,
            pending=pending,
            missing_tables=sorted(set(metadata.tables) - present),
        )

    def _failed(self, op: str, exc: Exception) -> ServiceResult:
        if isinstance(exc, SQLAlchemyError):
            return self._store_failure(op, exc, db_path=str(self._store.db_path))
        logger.warning("Migration step failed: %s", exc)
        return ServiceResult.failure(op, MIGRATION_FAILED, f"Migration failed: {exc}")

    def check_pending(self) -> ServiceResult:
        """Report pending revisions and missing tables without changing anything."""
        op = "check_migrations"
        try:
            state = self._schema_state()
        except (SQLAlchemyError, CommandError) as exc:
            return self._failed(op, exc)
        return ServiceResult(ok=True, op=op, data=state.to_data())

    def apply(self) -> ServiceResult:
        """Bring the database to the head revision."""
        op = "upgrade"
        try:
            state = self._schema_state()
        except (SQLAlchemyError, CommandError) as exc:
            return self._failed(op, exc)

        if not state.pending:
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "applied_count": 0,
                    "current": state.current,
                    "message": "Database is already up to date",
                },
            )

        if state.current is None and state.partial_schema:
            return ServiceResult.failure(
                op,
                SCHEMA_MISMATCH,
                "Unversioned database is missing tables: " + ", ".join(state.missing_tables),
                {"missing_tables": state.missing_tables},
            )

        stamped_only = state.current is None and not state.missing_tables
        try:
            if stamped_only:
                command.stamp(self._config(), "head")
            else:
                command.upgrade(self._config(), "head")
        except (SQLAlchemyError, CommandError) as exc:
            return self._failed(op, exc)

        logger.info(
            "Database %s at %s (%d revision(s))",
            "stamped" if stamped_only else "upgraded",
            state.head,
            len(state.pending),
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "applied_count": len(state.pending),
                "current": state.head,
                "stamped_only": stamped_only,
            },
        )

    def stamp_current(self) -> ServiceResult:
        """Record the head revision on a freshly created, unversioned database.

        Used by ``satorder init``. A database that already carries a
        revision is left alone.
        """
        op = "stamp"
        try:
            state = self._schema_state()
            if state.current is not None:
                return ServiceResult(
                    ok=True,
                    op=op,
                    data={"stamped": False, "current": state.current, "head": state.head},
                )
            command.stamp(self._config(), "head")
        except (SQLAlchemyError, CommandError) as exc:
            return self._failed(op, exc)
        return ServiceResult(
            ok=True, op=op, data={"stamped": True, "current": state.head, "head": state.head}
        )
