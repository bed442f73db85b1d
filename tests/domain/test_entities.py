"""Tests for built entities and the Order aggregate."""

from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest

from lineup.domain.builder import PizzaBuilder
from lineup.domain.categories import (
    FemeninaDivision,
    NeapolitanStyle,
    NewYorkStyle,
    Sub17Division,
)
from lineup.domain.entities import Entity, Order
from lineup.domain.types import EntityKind
from tests.conftest import build_team


def _pizza(identity: str, factory, size: str, toppings: list[str]) -> Entity:
    builder = PizzaBuilder().select_category(factory).identity(identity).size(size)
    for key in toppings:
        builder.add_topping(key)
    return builder.build()


class TestEntity:
    def test_team_values_come_from_bundle(self) -> None:
        team = build_team("Halcones", Sub17Division(), list(range(1, 8)))
        assert team.kind == EntityKind.TEAM
        assert team.category == "Sub-17"
        assert team.price == Decimal("320.00")
        assert team.tax_rate == Decimal("0")
        assert team.tax == Decimal("0.00")
        assert team.param("match_minutes") == 70
        assert team.params["halves"] == 2

    def test_pizza_values_come_from_bundle(self) -> None:
        pizza = _pizza("p1", NewYorkStyle(), "small", ["pepperoni", "bacon"])
        assert pizza.price == Decimal("12.00")
        assert pizza.tax_rate == Decimal("0.08875")
        assert pizza.tax == Decimal("1.07")
        assert pizza.param("bake_temp_c") == 290
        assert pizza.param("bake_minutes") == 12

    def test_unknown_param(self) -> None:
        team = build_team("Halcones", Sub17Division(), list(range(1, 8)))
        with pytest.raises(KeyError):
            team.param("bake_minutes")

    def test_is_immutable(self) -> None:
        team = build_team("Halcones", Sub17Division(), list(range(1, 8)))
        with pytest.raises(dataclasses.FrozenInstanceError):
            team.identity = "Other"  # type: ignore[misc]
        with pytest.raises(TypeError):
            team.details["coach"] = "X"  # type: ignore[index]
        with pytest.raises(TypeError):
            team.params["match_minutes"] = 1  # type: ignore[index]
        assert isinstance(team.parts, tuple)

    def test_entities_share_bundle_without_interference(self) -> None:
        factory = FemeninaDivision()
        a = build_team("A", factory, list(range(1, 12)))
        b = build_team("B", factory, list(range(1, 16)))
        assert a.price == Decimal("670.00")
        assert b.price == Decimal("750.00")

    def test_equality_ignores_policy(self) -> None:
        a = build_team("A", Sub17Division(), list(range(1, 8)))
        b = build_team("A", Sub17Division(), list(range(1, 8)))
        assert a == b
        assert a.policy is not b.policy

    def test_to_dict(self) -> None:
        pizza = _pizza("p1", NeapolitanStyle(), "medium", ["basil"])
        data = pizza.to_dict()
        assert data["id"] == "p1"
        assert data["kind"] == "pizza"
        assert data["category"] == "Neapolitan"
        assert data["parts"] == [{"label": "Basil", "discriminator": "basil"}]
        assert data["details"] == {"size": "medium", "crust": "regular"}
        assert data["price"] == "11.00"
        assert data["tax_rate"] == "0.10"
        assert data["params"] == {"bake_temp_c": 485, "bake_minutes": 2}


class TestOrder:
    def test_neapolitan_totals(self) -> None:
        """Two Neapolitan lines at 10.00 and 12.00 with 10% tax."""
        lines = (
            _pizza("o1/1", NeapolitanStyle(), "medium", []),
            _pizza("o1/2", NeapolitanStyle(), "medium", ["basil", "garlic"]),
        )
        order = Order("o1", lines)
        assert [line.price for line in order.lines] == [Decimal("10.00"), Decimal("12.00")]
        assert order.subtotal == Decimal("22.00")
        assert order.tax == Decimal("2.20")
        assert order.total == Decimal("24.20")

    def test_mixed_styles_use_each_line_rate(self) -> None:
        lines = (
            _pizza("o2/1", NewYorkStyle(), "large", []),
            _pizza("o2/2", NeapolitanStyle(), "small", []),
        )
        order = Order("o2", lines)
        # 14.00 * 0.08875 + 8.00 * 0.10 = 1.2425 + 0.80
        assert order.subtotal == Decimal("22.00")
        assert order.tax == Decimal("2.04")
        assert order.total == Decimal("24.04")

    def test_empty_order(self) -> None:
        order = Order("empty")
        assert order.subtotal == Decimal("0.00")
        assert order.total == Decimal("0.00")

    def test_lines_are_tuple(self) -> None:
        line = _pizza("o3/1", NewYorkStyle(), "small", [])
        order = Order("o3", [line])  # type: ignore[arg-type]
        assert order.lines == (line,)

    def test_to_dict(self) -> None:
        order = Order("o4", (_pizza("o4/1", NeapolitanStyle(), "large", ["tomato"]),))
        data = order.to_dict()
        assert data["id"] == "o4"
        assert len(data["lines"]) == 1
        assert data["subtotal"] == "14.00"
        assert data["tax"] == "1.40"
        assert data["total"] == "15.40"
