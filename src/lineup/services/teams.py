"""TeamService: team assembly and registration.

Pipeline: RESOLVE DIVISION → BUILD (templates, then players) → REGISTER → EVENT → RESPOND
"""

from __future__ import annotations

import logging
from typing import Any

from lineup.domain.builder import TeamBuilder
from lineup.domain.categories import get_category
from lineup.domain.entities import Entity
from lineup.domain.errors import LineupError
from lineup.domain.types import EntityKind
from lineup.services.base import BaseService
from lineup.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def _team_data(entity: Entity) -> dict[str, Any]:
    data = entity.to_dict()
    data["fee"] = data.pop("price")
    data["players"] = data.pop("parts")
    return data


def _batch_item(item: Any) -> tuple[str, dict[str, Any]]:
    """Unpack one batch entry into ``register_team`` arguments.

    Raises:
        ValueError: If the entry or one of its players is malformed.
    """
    if not isinstance(item, dict):
        msg = "team entry must be an object"
        raise ValueError(msg)

    raw_players = item.get("players") or []
    if not isinstance(raw_players, list):
        msg = "'players' must be a list"
        raise ValueError(msg)
    players: list[tuple[str, int]] = []
    for raw in raw_players:
        if not isinstance(raw, dict) or "name" not in raw or "number" not in raw:
            msg = "each player needs 'name' and 'number'"
            raise ValueError(msg)
        number = raw["number"]
        if isinstance(number, bool) or not isinstance(number, (int, str)):
            msg = f"player number {number!r} is not an integer"
            raise ValueError(msg)
        try:
            players.append((str(raw["name"]), int(number)))
        except ValueError:
            msg = f"player number {number!r} is not an integer"
            raise ValueError(msg) from None

    templates = item.get("templates") or []
    if not isinstance(templates, list):
        msg = "'templates' must be a list of catalog keys"
        raise ValueError(msg)

    return str(item.get("name", "")), {
        "division": str(item.get("division", "")),
        "players": players,
        "templates": [str(key) for key in templates],
        "coach": item.get("coach"),
        "captain": item.get("captain"),
        "color": item.get("color"),
    }


class TeamService(BaseService):
    """Builds teams under a division's rules and registers them."""

    def register_team(
        self,
        name: str,
        *,
        division: str,
        players: list[tuple[str, int]] | None = None,
        templates: list[str] | None = None,
        coach: str | None = None,
        captain: str | None = None,
        color: str | None = None,
    ) -> ServiceResult:
        """Build a team and register it under *name*.

        Template rosters are added first, in the given order, followed
        by the explicit *players*.
        """
        op = "register_team"
        warnings: list[str] = []
        try:
            builder = TeamBuilder().select_category(get_category(division)).identity(name)
            for key in templates or []:
                builder.add_parts(self._catalog.retrieve(key))
            for player_name, number in players or []:
                builder.add_player(player_name, number)
            if coach:
                builder.coach(coach)
            if captain:
                builder.captain(captain)
            if color:
                builder.color(color)
            entity = self._registry.register(builder.build())
        except LineupError as exc:
            logger.info("Team '%s' rejected: %s", name, exc)
            return ServiceResult.failure(op, exc, name=name)

        self._dispatch_event(
            "post_register",
            {"kind": str(entity.kind), "identity": entity.identity, "category": entity.category},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data=_team_data(entity),
            warnings=warnings,
            meta={"label": self._registry.label},
        )

    def register_batch(
        self,
        items: list[Any],
        *,
        partial: bool = False,
    ) -> ServiceResult:
        """Register several teams. Stops at the first failure unless *partial* is True.

        Teams registered before a failure stay registered. A malformed entry
        is recorded as an ``INVALID_OPTION`` error like any other failure.
        """
        registered: list[dict[str, Any]] = []
        errors: list[dict[str, Any]] = []
        error: ServiceError | None

        for i, item in enumerate(items):
            try:
                name, options = _batch_item(item)
            except ValueError as exc:
                error = ServiceError(code="INVALID_OPTION", message=str(exc))
                name = item.get("name") if isinstance(item, dict) else None
            else:
                result = self.register_team(name, **options)
                if result.ok:
                    registered.append(result.data)
                    continue
                error = result.error

            errors.append(
                {
                    "index": i,
                    "name": name,
                    "code": error.code if error else "",
                    "error": error.message if error else "",
                }
            )
            if not partial:
                return ServiceResult(
                    ok=False,
                    op="register_batch",
                    error=ServiceError(
                        code="BATCH_FAILED",
                        message=f"Item {i} failed: {errors[-1]['error']}",
                    ),
                    data={"registered": registered, "errors": errors},
                )

        all_ok = len(errors) == 0
        return ServiceResult(
            ok=all_ok,
            op="register_batch",
            data={"registered": registered, "errors": errors},
            error=ServiceError(
                code="BATCH_PARTIAL",
                message=f"{len(errors)} of {len(items)} items failed",
            )
            if not all_ok
            else None,
            meta={"label": self._registry.label},
        )

    def list_teams(self) -> ServiceResult:
        """All registered teams in registration order."""
        teams = [_team_data(e) for e in self._registry.of_kind(EntityKind.TEAM)]
        return ServiceResult(
            ok=True,
            op="list_teams",
            data={"count": len(teams), "items": teams},
            meta={"label": self._registry.label},
        )
