"""Validating, single-use entity builders.

State flow: ``unconfigured -> configuring -> built``.

- ``select_category()`` captures the category name and a fresh bundle.
- ``add_part()`` checks each discriminator against the bundle as it
  arrives; a rejected part leaves the builder untouched.
- ``build()`` checks completeness, the descriptive fields the bundle
  restricts, part-count bounds, and discriminator uniqueness, then
  snapshots an immutable Entity.

INVARIANT: No operation is legal once ``build()`` has returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import StrEnum
from typing import ClassVar, Self

from lineup.domain.categories import CategoryFactory
from lineup.domain.entities import Entity
from lineup.domain.errors import (
    BuilderUsageError,
    CategoryNotSelectedError,
    DuplicatePartError,
    IncompleteConfigurationError,
    InvalidDetailError,
    InvalidDiscriminatorError,
    OutOfBoundsError,
)
from lineup.domain.policies import Discriminator, Part, PolicyBundle
from lineup.domain.types import Crust, EntityKind, PizzaSize

logger = logging.getLogger(__name__)


class BuilderState(StrEnum):
    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    BUILT = "built"


class EntityBuilder:
    """Fluent builder for any entity kind.

    Kind-specific subclasses set ``kind`` so that only matching
    categories can be selected.
    """

    kind: ClassVar[EntityKind | None] = None

    def __init__(self) -> None:
        self._state = BuilderState.UNCONFIGURED
        self._identity: str | None = None
        self._category: str | None = None
        self._policy: PolicyBundle | None = None
        self._parts: list[Part] = []
        self._details: dict[str, str] = {}

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def policy(self) -> PolicyBundle | None:
        return self._policy

    def select_category(self, factory: CategoryFactory) -> Self:
        """Pick the category whose rules govern this build."""
        self._ensure_open("select a category")
        if self._state is BuilderState.CONFIGURING:
            raise BuilderUsageError(f"Category already selected: '{self._category}'")
        if self.kind is not None and factory.kind != self.kind:
            raise BuilderUsageError(
                f"Category '{factory.name}' is for {factory.kind} entities, not {self.kind}"
            )
        self._category = factory.name
        self._policy = factory.create()
        self._state = BuilderState.CONFIGURING
        return self

    def identity(self, value: str) -> Self:
        self._ensure_open("set the identity")
        self._identity = value
        return self

    def detail(self, key: str, value: str) -> Self:
        """Set a descriptive field (coach, color, size, ...)."""
        self._ensure_open(f"set '{key}'")
        self._details[key] = value
        return self

    def add_part(self, label: str, discriminator: Discriminator) -> Self:
        """Append a part after checking it against the category validator."""
        self._ensure_open("add parts")
        if self._policy is None or self._category is None:
            raise CategoryNotSelectedError()
        if not self._policy.accepts(discriminator):
            raise InvalidDiscriminatorError(self._category, label, discriminator)
        self._parts.append(Part(label=label, discriminator=discriminator))
        return self

    def add_parts(self, parts: Part | Iterable[Part]) -> Self:
        """Append catalog parts in order. Stops at the first rejected part."""
        if isinstance(parts, Part):
            parts = [parts]
        for part in parts:
            self.add_part(part.label, part.discriminator)
        return self

    def build(self) -> Entity:
        """Validate the accumulated configuration and produce the entity."""
        self._ensure_open("build")

        missing: list[str] = []
        if self._policy is None:
            missing.append("category")
        if not self._identity:
            missing.append("identity")
        if missing:
            raise IncompleteConfigurationError(missing)
        assert self._policy is not None and self._category is not None
        assert self._identity is not None

        for key, value in self._policy.rejected_details(self._details):
            allowed = sorted(self._policy.detail_choices[key])
            raise InvalidDetailError(self._category, key, value, allowed)

        count = len(self._parts)
        if not self._policy.within_bounds(count):
            raise OutOfBoundsError(count, self._policy.min_parts, self._policy.max_parts)

        seen: set[Discriminator] = set()
        for part in self._parts:
            if part.discriminator in seen:
                raise DuplicatePartError(part.discriminator)
            seen.add(part.discriminator)

        entity = Entity(
            identity=self._identity,
            category=self._category,
            policy=self._policy,
            parts=tuple(self._parts),
            details=dict(self._details),
        )
        self._state = BuilderState.BUILT
        logger.debug(
            "Built %s '%s' in category '%s' with %d parts",
            entity.kind,
            entity.identity,
            entity.category,
            count,
        )
        return entity

    def _ensure_open(self, action: str) -> None:
        if self._state is BuilderState.BUILT:
            raise BuilderUsageError(f"Cannot {action}: builder has already built its entity")


class TeamBuilder(EntityBuilder):
    """Builder for league teams. Parts are players keyed by jersey number."""

    kind: ClassVar[EntityKind | None] = EntityKind.TEAM

    def coach(self, name: str) -> Self:
        return self.detail("coach", name)

    def captain(self, name: str) -> Self:
        return self.detail("captain", name)

    def color(self, value: str) -> Self:
        return self.detail("color", value)

    def add_player(self, name: str, number: int) -> Self:
        return self.add_part(name, number)


class PizzaBuilder(EntityBuilder):
    """Builder for pizza order lines. Parts are toppings keyed by name."""

    kind: ClassVar[EntityKind | None] = EntityKind.PIZZA

    def __init__(self) -> None:
        super().__init__()
        self._details["size"] = str(PizzaSize.MEDIUM)
        self._details["crust"] = str(Crust.REGULAR)

    def size(self, value: PizzaSize | str) -> Self:
        return self.detail("size", str(PizzaSize(value)))

    def crust(self, value: Crust | str) -> Self:
        return self.detail("crust", str(Crust(value)))

    def add_topping(self, key: str, label: str | None = None) -> Self:
        return self.add_part(label or topping_label(key), key)


def topping_label(key: str) -> str:
    """Display label for a topping key: ``olive_oil`` -> ``Olive oil``."""
    return key.replace("_", " ").capitalize()
