"""Tests for TeamService."""

from __future__ import annotations

from typing import Any

import pytest

from lineup.domain.catalog import TemplateCatalog
from lineup.infrastructure.registry import EntityRegistry
from lineup.plugins import hookimpl
from lineup.plugins.manager import PluginManager
from lineup.services.teams import TeamService


def _players(numbers: range | list[int]) -> list[tuple[str, int]]:
    return [(f"Player {n}", n) for n in numbers]


class _Recorder:
    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []

    @hookimpl
    def post_register(self, kind: str, identity: str, category: str) -> None:
        self.events.append({"kind": kind, "identity": identity, "category": category})


class _Broken:
    @hookimpl
    def post_register(self, kind: str, identity: str, category: str) -> None:
        raise RuntimeError("plugin exploded")


@pytest.fixture
def service(registry: EntityRegistry, catalog: TemplateCatalog) -> TeamService:
    return TeamService(registry, catalog)


class TestRegisterTeam:
    def test_success(self, service: TeamService, registry: EntityRegistry) -> None:
        result = service.register_team(
            "Tigres",
            division="Sub-17",
            players=_players(range(1, 8)),
            coach="Rosa",
            captain="Player 1",
            color="naranja",
        )
        assert result.ok
        assert result.op == "register_team"
        assert result.data["id"] == "Tigres"
        assert result.data["category"] == "Sub-17"
        assert result.data["fee"] == "320.00"
        assert [p["discriminator"] for p in result.data["players"]] == list(range(1, 8))
        assert result.data["details"]["coach"] == "Rosa"
        assert result.data["params"]["match_minutes"] == 70
        assert result.meta == {"label": "Temporada de prueba"}
        assert "Tigres" in registry

    def test_template_then_players(self, service: TeamService) -> None:
        result = service.register_team(
            "Pumas",
            division="Masculina",
            templates=["starting-eleven", "reserve-keeper"],
            players=[("Suplente", 14)],
        )
        assert result.ok
        numbers = [p["discriminator"] for p in result.data["players"]]
        assert numbers == [*range(1, 12), 12, 14]
        assert result.data["fee"] == "825.00"

    def test_too_few_players(self, service: TeamService, registry: EntityRegistry) -> None:
        result = service.register_team("Pumas", division="Masculina", players=_players(range(1, 10)))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "OUT_OF_BOUNDS"
        assert result.error.detail["actual"] == 9
        assert result.data == {"name": "Pumas"}
        assert len(registry) == 0

    def test_invalid_number(self, service: TeamService) -> None:
        result = service.register_team(
            "Tigres", division="Sub-17", players=_players([*range(1, 8), 51])
        )
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_DISCRIMINATOR"

    def test_unknown_division(self, service: TeamService) -> None:
        result = service.register_team("Tigres", division="Veteranos")
        assert result.error is not None
        assert result.error.code == "UNKNOWN_CATEGORY"

    def test_unknown_template(self, service: TeamService) -> None:
        result = service.register_team("Tigres", division="Sub-17", templates=["nope"])
        assert result.error is not None
        assert result.error.code == "UNKNOWN_TEMPLATE"

    def test_duplicate_name(self, service: TeamService) -> None:
        assert service.register_team("Tigres", division="Sub-17", templates=["starting-seven"]).ok
        result = service.register_team("Tigres", division="Sub-17", templates=["starting-seven"])
        assert result.error is not None
        assert result.error.code == "DUPLICATE_IDENTITY"

    def test_post_register_event(
        self, registry: EntityRegistry, catalog: TemplateCatalog
    ) -> None:
        plugins = PluginManager()
        recorder = _Recorder()
        plugins.register_plugin(recorder)
        service = TeamService(registry, catalog, plugins=plugins)
        service.register_team("Tigres", division="Sub-17", templates=["starting-seven"])
        assert recorder.events == [{"kind": "team", "identity": "Tigres", "category": "Sub-17"}]

    def test_plugin_failure_is_warning(
        self, registry: EntityRegistry, catalog: TemplateCatalog
    ) -> None:
        plugins = PluginManager()
        plugins.register_plugin(_Broken())
        service = TeamService(registry, catalog, plugins=plugins)
        result = service.register_team("Tigres", division="Sub-17", templates=["starting-seven"])
        assert result.ok
        assert result.warnings == ["Event dispatch failed for post_register"]
        assert "Tigres" in registry


class TestRegisterBatch:
    def _item(self, name: str, division: str = "Sub-17", **extra: Any) -> dict[str, Any]:
        item: dict[str, Any] = {"name": name, "division": division, "templates": ["starting-seven"]}
        item.update(extra)
        return item

    def test_all_succeed(self, service: TeamService) -> None:
        result = service.register_batch([self._item("A"), self._item("B")])
        assert result.ok
        assert [t["id"] for t in result.data["registered"]] == ["A", "B"]
        assert result.data["errors"] == []

    def test_stops_at_first_failure(self, service: TeamService, registry: EntityRegistry) -> None:
        items = [self._item("A"), self._item("B", division="Masculina"), self._item("C")]
        result = service.register_batch(items)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "BATCH_FAILED"
        assert [t["id"] for t in result.data["registered"]] == ["A"]
        assert result.data["errors"][0]["index"] == 1
        assert result.data["errors"][0]["code"] == "OUT_OF_BOUNDS"
        assert [e.identity for e in registry.entities()] == ["A"]

    def test_partial(self, service: TeamService, registry: EntityRegistry) -> None:
        items = [self._item("A"), self._item("B", division="Masculina"), self._item("C")]
        result = service.register_batch(items, partial=True)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "BATCH_PARTIAL"
        assert result.error.message == "1 of 3 items failed"
        assert [e.identity for e in registry.entities()] == ["A", "C"]

    def test_explicit_players(self, service: TeamService) -> None:
        item = {
            "name": "Leonas",
            "division": "Femenina",
            "players": [{"name": f"J{n}", "number": n} for n in range(1, 12)],
        }
        result = service.register_batch([item])
        assert result.ok
        assert result.data["registered"][0]["fee"] == "670.00"


class TestListTeams:
    def test_empty(self, service: TeamService) -> None:
        result = service.list_teams()
        assert result.ok
        assert result.data == {"count": 0, "items": []}

    def test_registration_order(self, service: TeamService) -> None:
        for name in ("Tigres", "Pumas"):
            service.register_team(name, division="Sub-17", templates=["starting-seven"])
        result = service.list_teams()
        assert result.data["count"] == 2
        assert [t["id"] for t in result.data["items"]] == ["Tigres", "Pumas"]


class TestRegisterBatchMalformed:
    def _good(self, name: str) -> dict[str, Any]:
        return {"name": name, "division": "Sub-17", "templates": ["starting-seven"]}

    @pytest.mark.parametrize(
        ("item", "message"),
        [
            ({"name": "B", "division": "Sub-17", "players": [{"name": "X"}]}, "'number'"),
            (
                {"name": "B", "division": "Sub-17", "players": [{"name": "X", "number": "ten"}]},
                "not an integer",
            ),
            (
                {"name": "B", "division": "Sub-17", "players": [{"name": "X", "number": True}]},
                "not an integer",
            ),
            ({"name": "B", "division": "Sub-17", "players": "X:1"}, "must be a list"),
            ({"name": "B", "division": "Sub-17", "templates": "starting-seven"}, "must be a list"),
            ("B", "must be an object"),
        ],
    )
    def test_partial_skips_malformed_entry(
        self, service: TeamService, registry: EntityRegistry, item: object, message: str
    ) -> None:
        result = service.register_batch([self._good("A"), item, self._good("C")], partial=True)
        assert result.error is not None
        assert result.error.code == "BATCH_PARTIAL"
        [error] = result.data["errors"]
        assert error["index"] == 1
        assert error["code"] == "INVALID_OPTION"
        assert message in error["error"]
        assert [e.identity for e in registry.entities()] == ["A", "C"]

    def test_strict_mode_stops_at_malformed_entry(
        self, service: TeamService, registry: EntityRegistry
    ) -> None:
        bad = {"name": "B", "division": "Sub-17", "players": [{"name": "X"}]}
        result = service.register_batch([self._good("A"), bad, self._good("C")])
        assert result.error is not None
        assert result.error.code == "BATCH_FAILED"
        assert result.data["errors"][0]["name"] == "B"
        assert [e.identity for e in registry.entities()] == ["A"]

    def test_numeric_string_player_number(self, service: TeamService) -> None:
        item = {
            "name": "Leonas",
            "division": "Sub-17",
            "players": [{"name": f"J{n}", "number": str(n)} for n in range(1, 8)],
        }
        result = service.register_batch([item])
        assert result.ok
        assert result.data["registered"][0]["players"][0]["discriminator"] == 1
