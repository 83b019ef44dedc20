"""Subcommand modules for satorder.

``register_commands()`` uses deferred imports to keep ``satorder --help``
fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root group."""
    # --- Groups ---
    from satorder.commands.catalog import catalog
    from satorder.commands.images import images
    from satorder.commands.orders import orders

    cli.add_command(images)
    cli.add_command(orders)
    cli.add_command(catalog)

    # --- Standalone commands ---
    from satorder.commands.init_cmd import init_cmd
    from satorder.commands.serve import serve
    from satorder.commands.upgrade import upgrade

    cli.add_command(init_cmd)
    cli.add_command(upgrade)
    cli.add_command(serve)
