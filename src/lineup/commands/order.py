"""Command group: pizza orders."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from lineup.commands._base import LineupGroup
from lineup.services.orders import OrderService

if TYPE_CHECKING:
    from lineup.commands._context import AppContext


@click.group(cls=LineupGroup)
@click.pass_obj
def order(app: AppContext) -> None:
    """Build and total pizza orders."""


@order.command(
    examples="""\
  lineup order place order.json
  lineup --json order place order.json --id ORD-0042"""
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--id", "order_id", default=None, help="Override the order id from FILE.")
@click.pass_obj
def place(app: AppContext, file: Path, order_id: str | None) -> None:
    """Place the order described in a JSON FILE.

    FILE holds ``{"id": ..., "pizzas": [...]}`` where each pizza has a
    ``style`` and optional ``size``, ``crust``, ``template``, and
    ``toppings``.
    """
    try:
        raw = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON in {file}: {exc}") from exc
    if not isinstance(raw, dict):
        raise click.ClickException(f"{file} must contain an order object")

    resolved_id = order_id or raw.get("id")
    if not resolved_id:
        raise click.UsageError("Order id missing: set 'id' in FILE or pass --id")

    pizzas = raw.get("pizzas", [])
    if not isinstance(pizzas, list):
        raise click.ClickException(f"'pizzas' in {file} must be a list")

    service = OrderService(app.registry, app.catalog, plugins=app.plugins)
    app.emit(service.place_order(str(resolved_id), pizzas))
