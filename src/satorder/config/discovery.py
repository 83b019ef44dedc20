"""Locate the ``satorder.toml`` in effect.

Resolution order: an explicit path (``--config``), then ``SATORDER_CONFIG``,
then the nearest ``satorder.toml`` in the start directory or one of its
parents. Explicit and environment paths must name an existing file, so a
deployment pointed at a missing config stops at start-up instead of
serving with the built-in defaults.
"""

from __future__ import annotations

import os
from pathlib import Path

import click

CONFIG_FILENAME = "satorder.toml"
CONFIG_ENV_VAR = "SATORDER_CONFIG"


class ConfigNotFoundError(click.ClickException):
    """An explicitly named config file does not exist."""


def _nearest(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def find_config(start: Path | None = None, *, explicit: str | Path | None = None) -> Path | None:
    """Return the config file to load, or ``None`` to run on defaults.

    Raises:
        ConfigNotFoundError: *explicit* or ``SATORDER_CONFIG`` names a missing file.
    """
    source, named = "--config", explicit
    if not named:
        source, named = CONFIG_ENV_VAR, os.environ.get(CONFIG_ENV_VAR)
    if named:
        path = Path(named).expanduser()
        if not path.is_file():
            raise ConfigNotFoundError(f"{source} names a missing file: {path}")
        return path
    return _nearest((start or Path.cwd()).resolve())
