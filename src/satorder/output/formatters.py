"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables for listings,
key-value blocks for single records) or machines (``--json``).
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from satorder.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from satorder.services.result import ServiceResult

# Column order and styles per item shape; keyed by an identifying field.
_COLUMNS: dict[str, list[tuple[str, str]]] = {
    "catalog_id": [("catalog_id", "sat.id"), ("created_at", "sat.time"), ("geometry", "")],
    "image_id": [
        ("id", "sat.id"),
        ("image_id", ""),
        ("price", "sat.price"),
        ("created_at", "sat.time"),
    ],
}


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return "" if value is None else str(value)


def _columns_for(item: dict[str, Any]) -> list[tuple[str, str]]:
    for marker, columns in _COLUMNS.items():
        if marker in item:
            return columns
    return [(key, "") for key in item]


def _render_items(console: Console, items: list[dict[str, Any]]) -> None:
    if not items:
        console.print("  (no results)", style="sat.key")
        return
    columns = _columns_for(items[0])
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    for name, style in columns:
        # Geometry is long; let it wrap rather than squeeze the id columns.
        table.add_column(name, style=style or None, overflow="fold")
    for item in items:
        table.add_row(*(escape(_cell(item.get(name))) for name, _ in columns))
    console.print(table)


def _render_pagination(console: Console, data: dict[str, Any]) -> None:
    console.print(
        f"page {data['page']}/{data['total_pages']} "
        f"· {data['total']} total · limit {data['limit']}",
        style="sat.key",
    )


def _format_data_human(console: Console, data: dict[str, Any]) -> None:
    """Listings become a table plus a pagination footer; other data key-value lines."""
    if isinstance(data.get("items"), list):
        _render_items(console, data["items"])
        if "total_pages" in data:
            _render_pagination(console, data)
        return
    for key, value in data.items():
        console.print(f"  [sat.key]{key}:[/sat.key] {escape(_cell(value))}")


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    no_color: bool = True,
    width: int | None = None,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        no_color: Strip ANSI codes from human output.
        width: Console width for human output.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=no_color, width=width)
    if result.ok:
        console.print(f"[sat.ok]OK[/sat.ok]: [sat.op]{result.op}[/sat.op]")
        if result.data:
            _format_data_human(console, result.data)
    else:
        error_msg = result.error.message if result.error else "Unknown error"
        code = f" ({result.error.code})" if result.error else ""
        console.print(
            f"[sat.error]ERROR[/sat.error]: [sat.op]{result.op}[/sat.op]{code} - {escape(error_msg)}"
        )
    return get_output(console).rstrip("\n")
