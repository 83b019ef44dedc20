"""Command group: catalog image search and lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from satorder.commands._base import SatGroup
from satorder.services.images import ImageService

if TYPE_CHECKING:
    from satorder.commands._context import AppContext

_IMAGES_EXAMPLES = """\
  satorder images search
  satorder images search --start-date 2025-01-10 --end-date 2025-01-31
  satorder images search --area-file munich.geojson --limit 10
  satorder images get 103401008B2340"""


@click.group(cls=SatGroup, examples=_IMAGES_EXAMPLES)
@click.pass_obj
def images(app: AppContext) -> None:
    """Search and retrieve catalog images."""


@images.command(
    examples="""\
  satorder images search --page 2 --limit 5
  satorder images search --start-date 2025-01-10
  satorder images search --area '{"type":"Polygon","coordinates":[[[11.5,48.1],[11.6,48.1],[11.6,48.2],[11.5,48.1]]]}'
  satorder --json images search --area-file aoi.geojson"""
)
@click.option("--page", default=None, type=int, help="Page number (1-based).")
@click.option("--limit", default=None, type=int, help="Results per page.")
@click.option("--start-date", default=None, help="Created on or after (ISO 8601).")
@click.option("--end-date", default=None, help="Created on or before (ISO 8601; a bare date covers the day).")
@click.option("--area", default=None, help="GeoJSON Polygon the coverage must intersect.")
@click.option(
    "--area-file",
    default=None,
    type=click.File("r", encoding="utf-8"),
    help="Read the --area polygon from a file.",
)
@click.pass_obj
def search(
    app: AppContext,
    page: int | None,
    limit: int | None,
    start_date: str | None,
    end_date: str | None,
    area: str | None,
    area_file: TextIO | None,
) -> None:
    """Paginated search by date range and area of interest."""
    if area is not None and area_file is not None:
        raise click.UsageError("Use either --area or --area-file, not both.")
    if area_file is not None:
        area = area_file.read()
    result = ImageService(app.store).search(
        page=page,
        limit=limit,
        start_date=start_date,
        end_date=end_date,
        area=area,
    )
    app.emit(result)


@images.command(
    examples="""\
  satorder images get 103401008B2340
  satorder --json images get 103401008B2340"""
)
@click.argument("catalog_id")
@click.pass_obj
def get(app: AppContext, catalog_id: str) -> None:
    """Retrieve one image by catalog id."""
    app.emit(ImageService(app.store).get(catalog_id))
