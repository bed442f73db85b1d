"""Catalog browsing: categories and part templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lineup.commands._base import LineupCommand, LineupGroup
from lineup.domain.types import EntityKind
from lineup.services.catalog import CatalogService

if TYPE_CHECKING:
    from lineup.commands._context import AppContext


def _service(app: AppContext) -> CatalogService:
    return CatalogService(app.registry, app.catalog, plugins=app.plugins)


@click.command(
    cls=LineupCommand,
    examples="""\
  lineup categories
  lineup categories --kind pizza""",
)
@click.option(
    "--kind",
    type=click.Choice([str(k) for k in EntityKind]),
    default=None,
    help="Only show categories for one entity kind.",
)
@click.pass_obj
def categories(app: AppContext, kind: str | None) -> None:
    """List divisions and pizza styles with their rules."""
    app.emit(_service(app).list_categories(kind))


@click.group(cls=LineupGroup)
@click.pass_obj
def catalog(app: AppContext) -> None:
    """Browse reusable part templates."""


@catalog.command("list")
@click.pass_obj
def list_templates(app: AppContext) -> None:
    """List template keys and their part counts."""
    app.emit(_service(app).list_templates())


@catalog.command(examples="  lineup catalog show margherita")
@click.argument("key")
@click.pass_obj
def show(app: AppContext, key: str) -> None:
    """Show the parts stored under KEY."""
    app.emit(_service(app).show_template(key))
