"""Parts and policy bundles.

A PolicyBundle is the immutable rule set a category hands to the
builder: part-count bounds, the per-part validator, the pricing
formula, the category's own tax rate, and operational parameters
(match length, oven settings).

INVARIANT: A bundle is never mutated after creation, so any number of
entities may share one by reference.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType

from lineup.domain.types import EntityKind

Discriminator = int | str

CENTS = Decimal("0.01")


def to_cents(amount: Decimal) -> Decimal:
    """Round a money amount half-up to two decimal places."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Part:
    """A single entity part: a player or a topping.

    ``discriminator`` is the jersey number for players and the topping
    key for pizzas. It must be unique within one entity.
    """

    label: str
    discriminator: Discriminator


Validator = Callable[[Discriminator], bool]
Pricing = Callable[[Sequence[Part], Mapping[str, str]], Decimal]


@dataclass(frozen=True)
class PolicyBundle:
    """Category-specific rules consumed by the builder and the entity."""

    kind: EntityKind
    min_parts: int
    max_parts: int
    validator: Validator
    pricing: Pricing
    tax_rate: Decimal = Decimal("0")
    params: Mapping[str, int] = field(default_factory=dict)
    detail_choices: Mapping[str, frozenset[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.min_parts < 0 or self.max_parts < self.min_parts:
            msg = f"Invalid part bounds: [{self.min_parts}, {self.max_parts}]"
            raise ValueError(msg)
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        object.__setattr__(self, "detail_choices", MappingProxyType(dict(self.detail_choices)))

    def accepts(self, discriminator: Discriminator) -> bool:
        """Whether *discriminator* is legal for a part in this category."""
        return bool(self.validator(discriminator))

    def rejected_details(self, details: Mapping[str, str]) -> list[tuple[str, str]]:
        """Detail entries whose value is outside the declared choices."""
        return [
            (key, details[key])
            for key, choices in self.detail_choices.items()
            if key in details and details[key] not in choices
        ]

    def within_bounds(self, count: int) -> bool:
        return self.min_parts <= count <= self.max_parts

    def price_for(self, parts: Sequence[Part], details: Mapping[str, str]) -> Decimal:
        """Apply the category pricing formula, rounded to cents."""
        return to_cents(self.pricing(parts, details))
