"""Command: project initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from satorder.commands._base import SatCommand
from satorder.config.discovery import CONFIG_FILENAME
from satorder.services.result import ServiceResult

if TYPE_CHECKING:
    from satorder.commands._context import AppContext

_INIT_EXAMPLES = """\
  satorder init
  satorder init --seed
  satorder -c deploy/satorder.toml init"""

_CONFIG_TEMPLATE = """\
# satorder configuration. Only overrides belong here; defaults are built in.

[database]
path = "{db_path}"

[pagination]
default_limit = {default_limit}
max_limit = {max_limit}

[api]
host = "{host}"
port = {port}
"""


@click.command("init", cls=SatCommand, examples=_INIT_EXAMPLES)
@click.option("--seed", is_flag=True, help="Load the bundled sample image.")
@click.option("--no-config", is_flag=True, help="Do not write satorder.toml.")
@click.pass_obj
def init_cmd(app: AppContext, seed: bool, no_config: bool) -> None:
    """Create the database, record its schema revision, and write satorder.toml."""
    from satorder.services.catalog import CatalogService
    from satorder.services.upgrade import UpgradeService

    settings = app.settings
    warnings: list[str] = []

    config_written = False
    if not no_config and settings.config_path is None:
        target = settings.project_root / CONFIG_FILENAME
        target.write_text(
            _CONFIG_TEMPLATE.format(
                db_path=settings.database.path,
                default_limit=settings.pagination.default_limit,
                max_limit=settings.pagination.max_limit,
                host=settings.api.host,
                port=settings.api.port,
            ),
            encoding="utf-8",
        )
        config_written = True

    stamp = UpgradeService(app.store).stamp_current()
    if not stamp.ok:
        app.emit(stamp)

    data: dict[str, object] = {
        "database": str(settings.database_path),
        "revision": stamp.data["current"],
        "config_written": config_written,
    }
    if seed:
        seeded = CatalogService(app.store).seed()
        if not seeded.ok:
            app.emit(seeded)
        data["seeded"] = seeded.data["inserted"]
        warnings.extend(seeded.warnings)

    app.emit(ServiceResult(ok=True, op="init", data=data, warnings=warnings))
