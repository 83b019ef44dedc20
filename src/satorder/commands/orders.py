"""Command group: order placement and order history."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from satorder.commands._base import SatGroup
from satorder.services.orders import OrderService

if TYPE_CHECKING:
    from satorder.commands._context import AppContext

_ORDERS_EXAMPLES = """\
  satorder orders create 103401008B2340 149.99
  satorder orders list
  satorder orders list --min-price 100 --max-price 200"""


@click.group(cls=SatGroup, examples=_ORDERS_EXAMPLES)
@click.pass_obj
def orders(app: AppContext) -> None:
    """Place orders and review order history."""


@orders.command(
    examples="""\
  satorder orders create 103401008B2340 149.99
  satorder --json orders create 103401008B2340 1200"""
)
@click.argument("image_id")
@click.argument("price")
@click.pass_obj
def create(app: AppContext, image_id: str, price: str) -> None:
    """Order IMAGE_ID at PRICE (a positive decimal)."""
    app.emit(OrderService(app.store).create(image_id, price))


@orders.command(
    name="list",
    examples="""\
  satorder orders list --page 2 --limit 2
  satorder orders list --min-price 10.50 --start-date 2025-01-01
  satorder --json orders list --end-date 2025-02-01""",
)
@click.option("--page", default=None, type=int, help="Page number (1-based).")
@click.option("--limit", default=None, type=int, help="Results per page.")
@click.option("--min-price", default=None, help="Inclusive lower price bound.")
@click.option("--max-price", default=None, help="Inclusive upper price bound.")
@click.option("--start-date", default=None, help="Created on or after (ISO 8601).")
@click.option("--end-date", default=None, help="Created on or before (ISO 8601).")
@click.pass_obj
def list_cmd(
    app: AppContext,
    page: int | None,
    limit: int | None,
    min_price: str | None,
    max_price: str | None,
    start_date: str | None,
    end_date: str | None,
) -> None:
    """Order history, most recent first."""
    result = OrderService(app.store).list(
        page=page,
        limit=limit,
        min_price=min_price,
        max_price=max_price,
        start_date=start_date,
        end_date=end_date,
    )
    app.emit(result)
