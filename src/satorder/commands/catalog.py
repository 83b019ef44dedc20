"""Command group: catalog maintenance."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, TextIO

import click

from satorder.commands._base import SatGroup
from satorder.services.catalog import CatalogService

if TYPE_CHECKING:
    from satorder.commands._context import AppContext


@click.group(
    cls=SatGroup,
    examples="""\
  satorder catalog import images.json
  satorder catalog seed""",
)
@click.pass_obj
def catalog(app: AppContext) -> None:
    """Load images into the catalog."""


@catalog.command(
    "import",
    examples="""\
  satorder catalog import images.json
  cat images.json | satorder --json catalog import -""",
)
@click.argument("file", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def import_cmd(app: AppContext, file: TextIO) -> None:
    """Import images from a JSON array (or an object with an "images" array)."""
    try:
        payload = json.load(file)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="FILE") from exc

    records = payload.get("images") if isinstance(payload, dict) else payload
    if not isinstance(records, list):
        raise click.BadParameter("expected a JSON array of image records", param_hint="FILE")
    app.emit(CatalogService(app.store).ingest(records))


@catalog.command(examples="  satorder catalog seed")
@click.pass_obj
def seed(app: AppContext) -> None:
    """Load the bundled sample image."""
    app.emit(CatalogService(app.store).seed())
