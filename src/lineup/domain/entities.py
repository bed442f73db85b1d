"""Built entities and the order aggregate.

Entities are immutable snapshots produced by a builder. All derived
values (fee or price, tax, operational parameters) are read from the
entity's own PolicyBundle, never recomputed from display text.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from lineup.domain.policies import Part, PolicyBundle, to_cents
from lineup.domain.types import EntityKind


@dataclass(frozen=True)
class Entity:
    """A built team or pizza.

    ``policy`` is shared with every other entity of the same build and
    is excluded from equality.
    """

    identity: str
    category: str
    policy: PolicyBundle = field(compare=False, repr=False)
    parts: tuple[Part, ...] = ()
    details: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple(self.parts))
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @property
    def kind(self) -> EntityKind:
        return self.policy.kind

    @property
    def part_count(self) -> int:
        return len(self.parts)

    @property
    def price(self) -> Decimal:
        """Registration fee for teams, line price for pizzas."""
        return self.policy.price_for(self.parts, self.details)

    @property
    def tax_rate(self) -> Decimal:
        return self.policy.tax_rate

    @property
    def tax(self) -> Decimal:
        return to_cents(self.price * self.tax_rate)

    @property
    def params(self) -> Mapping[str, int]:
        """Operational parameters (match length, oven settings)."""
        return self.policy.params

    def param(self, name: str) -> int:
        return self.policy.params[name]

    def detail(self, key: str, default: str | None = None) -> str | None:
        return self.details.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data summary for service payloads and output renderers."""
        return {
            "id": self.identity,
            "kind": str(self.kind),
            "category": self.category,
            "parts": [{"label": p.label, "discriminator": p.discriminator} for p in self.parts],
            "details": dict(self.details),
            "price": str(self.price),
            "tax_rate": str(self.tax_rate),
            "params": dict(self.params),
        }


@dataclass(frozen=True)
class Order:
    """Read-only projection over a sequence of pizza entities.

    Tax is the sum of each line's price times that line's own rate,
    rounded once.
    """

    identity: str
    lines: tuple[Entity, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))

    @property
    def subtotal(self) -> Decimal:
        return to_cents(sum((line.price for line in self.lines), Decimal("0")))

    @property
    def tax(self) -> Decimal:
        return to_cents(sum((line.price * line.tax_rate for line in self.lines), Decimal("0")))

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.identity,
            "lines": [line.to_dict() for line in self.lines],
            "subtotal": str(self.subtotal),
            "tax": str(self.tax),
            "total": str(self.total),
        }
