"""Command: bring the satorder database schema to the current revision."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from satorder.commands._base import SatCommand

if TYPE_CHECKING:
    from satorder.commands._context import AppContext

PENDING_MIGRATIONS = "PENDING_MIGRATIONS"


@click.command(
    cls=SatCommand,
    examples="""\
  satorder upgrade
  satorder upgrade --check
  satorder --json upgrade --check --fail-on-pending""",
)
@click.option(
    "--check",
    "check_only",
    is_flag=True,
    help="Report pending revisions and missing tables; change nothing.",
)
@click.option(
    "--fail-on-pending",
    is_flag=True,
    help="With --check, exit 1 while revisions are pending.",
)
@click.pass_obj
def upgrade(app: AppContext, check_only: bool, fail_on_pending: bool) -> None:
    """Apply pending schema revisions to the satorder database."""
    from satorder.services.result import ServiceResult
    from satorder.services.upgrade import UpgradeService

    service = UpgradeService(app.store)
    if not check_only:
        app.emit(service.apply())
        return

    result = service.check_pending()
    pending = result.data.get("pending_count", 0) if result.ok else 0
    if fail_on_pending and pending:
        failed = ServiceResult.failure(
            result.op,
            PENDING_MIGRATIONS,
            f"{pending} revision(s) pending; run 'satorder upgrade'",
            {"pending": result.data["pending"]},
        )
        result = failed.model_copy(update={"data": result.data})
    app.emit(result)
