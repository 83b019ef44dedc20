"""Rich Console factory and theme for satorder output.

Consoles render to a StringIO buffer so formatters keep a plain
``format_result() -> str`` contract. Outside a TTY (tests, pipes) Rich
drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO
from typing import cast

from rich.console import Console
from rich.theme import Theme

SAT_THEME = Theme(
    {
        "sat.ok": "bold green",
        "sat.error": "bold red",
        "sat.warning": "bold yellow",
        "sat.op": "bold cyan",
        "sat.key": "dim",
        "sat.id": "bold blue",
        "sat.price": "magenta",
        "sat.time": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SAT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    return cast(StringIO, console.file).getvalue()
