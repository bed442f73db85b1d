"""Subcommand modules for lineup.

Provides register_commands() which uses deferred imports to keep
``lineup --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from lineup.commands.catalog import catalog
    from lineup.commands.order import order
    from lineup.commands.team import team

    cli.add_command(team)
    cli.add_command(order)
    cli.add_command(catalog)

    # --- Standalone commands ---
    from lineup.commands.catalog import categories

    cli.add_command(categories)
