"""Command group: team registration (register, batch)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from lineup.commands._base import LineupGroup
from lineup.services.teams import TeamService

if TYPE_CHECKING:
    from lineup.commands._context import AppContext


def _parse_player(value: str) -> tuple[str, int]:
    """Parse ``LABEL:NUMBER`` into a player tuple."""
    label, sep, number = value.rpartition(":")
    if not sep or not label.strip():
        raise click.BadParameter(f"{value!r} is not LABEL:NUMBER", param_hint="--player")
    try:
        return label.strip(), int(number)
    except ValueError:
        raise click.BadParameter(
            f"{value!r}: number must be an integer", param_hint="--player"
        ) from None


def _service(app: AppContext) -> TeamService:
    return TeamService(app.registry, app.catalog, plugins=app.plugins)


_TEAM_EXAMPLES = """\
  lineup team register Tigres --division Sub-17 --template starting-seven
  lineup team register Pumas -d Masculina -t starting-eleven -p "Reserve:12" --coach Rosa
  lineup team batch league.json --partial"""


@click.group(cls=LineupGroup, examples=_TEAM_EXAMPLES)
@click.pass_obj
def team(app: AppContext) -> None:
    """Build and register league teams."""


@team.command(
    examples="""\
  lineup team register Tigres --division Sub-17 --template starting-seven
  lineup team register Aguilas -d Femenina -t starting-eleven --captain "Ana" --color azul"""
)
@click.argument("name")
@click.option("-d", "--division", required=True, help="Division name (see 'lineup categories').")
@click.option("-p", "--player", "players", multiple=True, help="Player as LABEL:NUMBER.")
@click.option("-t", "--template", "templates", multiple=True, help="Catalog roster to add.")
@click.option("--coach", default=None, help="Coach name.")
@click.option("--captain", default=None, help="Captain name.")
@click.option("--color", default=None, help="Kit color.")
@click.pass_obj
def register(
    app: AppContext,
    name: str,
    division: str,
    players: tuple[str, ...],
    templates: tuple[str, ...],
    coach: str | None,
    captain: str | None,
    color: str | None,
) -> None:
    """Build a team under DIVISION rules and register it as NAME."""
    parsed = [_parse_player(p) for p in players]
    app.emit(
        _service(app).register_team(
            name,
            division=division,
            players=parsed,
            templates=list(templates),
            coach=coach,
            captain=captain,
            color=color,
        )
    )


@team.command(
    examples="""\
  lineup team batch league.json
  lineup team batch league.json --partial"""
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--partial", is_flag=True, help="Keep going past failed teams.")
@click.pass_obj
def batch(app: AppContext, file: Path, partial: bool) -> None:
    """Register every team listed in a JSON FILE.

    FILE holds a list of team objects (or ``{"teams": [...]}``) with
    ``name``, ``division``, and optional ``players``, ``templates``,
    ``coach``, ``captain``, and ``color``.
    """
    try:
        raw: Any = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON in {file}: {exc}") from exc

    items = raw.get("teams", []) if isinstance(raw, dict) else raw
    if not isinstance(items, list):
        raise click.ClickException(f"{file} must contain a list of teams")
    app.emit(_service(app).register_batch(items, partial=partial))
