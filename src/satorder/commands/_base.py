"""Click base classes with ``--examples`` support.

Commands take an ``examples`` string that ``--examples`` prints instead
of crowding ``--help``. On a group, ``--examples`` also walks the
subcommands, so ``satorder orders --examples`` shows ``orders create``
and ``orders list`` together.
"""

from __future__ import annotations

from typing import Any

import click


def _collect_examples(cmd: click.Command, path: str) -> list[tuple[str, str]]:
    found: list[tuple[str, str]] = []
    examples = getattr(cmd, "examples", None)
    if examples:
        found.append((path, examples))
    if isinstance(cmd, click.Group):
        for name in sorted(cmd.commands):
            found.extend(_collect_examples(cmd.commands[name], f"{path} {name}"))
    return found


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    for path, examples in _collect_examples(ctx.command, ctx.command_path):
        click.echo(f"Examples for '{path}':\n")
        click.echo(examples.rstrip("\n"))
        click.echo()
    ctx.exit(0)


def _examples_option() -> click.Option:
    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_print_examples,
        help="Show usage examples.",
    )


class SatCommand(click.Command):
    """Command with an ``--examples`` flag when it has examples."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option())


class SatGroup(click.Group):
    """Group whose ``--examples`` covers its own examples and every subcommand's."""

    command_class = SatCommand
    group_class = type

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.params.append(_examples_option())
