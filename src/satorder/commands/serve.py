"""serve — run the HTTP API under uvicorn."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from satorder.commands._base import SatCommand

if TYPE_CHECKING:
    from satorder.commands._context import AppContext


@click.command(
    cls=SatCommand,
    examples="""\
  # Serve on the configured [api] host/port (default 127.0.0.1:3000)
  satorder serve

  # Bind all interfaces on a custom port
  satorder serve --host 0.0.0.0 --port 8080""",
)
@click.option("--host", default=None, help="Bind address (defaults to [api] host).")
@click.option("--port", default=None, type=int, help="Listen port (defaults to [api] port).")
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None) -> None:
    """Start the HTTP API."""
    import uvicorn

    from satorder.api.app import create_app

    settings = app.settings
    uvicorn.run(
        create_app(settings),
        host=host or settings.api.host,
        port=port or settings.api.port,
        log_config=None,
    )
