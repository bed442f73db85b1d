"""Click command classes that take an ``examples=`` block.

Commands built with examples grow an eager ``--examples`` flag that
prints the block and exits; commands without examples get no flag.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    command = ctx.command
    assert isinstance(command, _ExamplesMixin)
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(command.examples)
    ctx.exit(0)


class _ExamplesMixin(click.Command):
    examples: str | None

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.dedent(examples).rstrip() if examples else None

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params = [*super().get_params(ctx)]
        if self.examples:
            params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_show_examples,
                    help="Show usage examples.",
                )
            )
        return params


class LineupCommand(_ExamplesMixin, click.Command):
    """Command accepting ``examples=``."""


class LineupGroup(_ExamplesMixin, click.Group):
    """Group accepting ``examples=``; its subcommands default to LineupCommand."""

    command_class = LineupCommand
