"""Category factory ABC and lookup table.

Each category (a league division or a pizza style) is a stateless
factory that hands out a fresh PolicyBundle on every ``create()`` call.
Adding a category means adding a factory; builders and entities never
change.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from decimal import Decimal

from lineup.domain.errors import UnknownCategoryError
from lineup.domain.policies import Discriminator, Part, PolicyBundle
from lineup.domain.types import Crust, Division, EntityKind, PizzaSize, PizzaStyle


class CategoryFactory(ABC):
    """Abstract base class for category factories.

    Implementations must be pure: ``create()`` has no side effects and
    returns equivalent bundles on every call.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Canonical category name (e.g. 'Masculina', 'New York')."""
        ...

    @property
    @abstractmethod
    def kind(self) -> EntityKind:
        """The entity kind this category applies to."""
        ...

    @abstractmethod
    def create(self) -> PolicyBundle:
        """Build a fresh policy bundle for this category."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


CATEGORY_REGISTRY: dict[str, CategoryFactory] = {}


# ---------------------------------------------------------------------------
# Rule building blocks
# ---------------------------------------------------------------------------


def _number_in_range(value: Discriminator, *, low: int, high: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and low <= value <= high


def _topping_allowed(value: Discriminator, *, allowed: frozenset[str]) -> bool:
    return isinstance(value, str) and value in allowed


def _roster_fee(
    parts: Sequence[Part],
    details: Mapping[str, str],
    *,
    base: Decimal,
    per_player: Decimal,
) -> Decimal:
    return base + per_player * len(parts)


def _pizza_price(
    parts: Sequence[Part],
    details: Mapping[str, str],
    *,
    size_prices: Mapping[str, Decimal],
    per_topping: Decimal,
) -> Decimal:
    size = details.get("size", str(PizzaSize.MEDIUM))
    try:
        base = size_prices[size]
    except KeyError:
        msg = f"No price for pizza size {size!r}"
        raise ValueError(msg) from None
    return base + per_topping * len(parts)


# ---------------------------------------------------------------------------
# Team divisions
# ---------------------------------------------------------------------------


class DivisionFactory(CategoryFactory):
    """Shared bundle construction for league divisions.

    Subclasses set the roster bounds, number range, registration fee,
    and match length.
    """

    division: Division
    min_players: int
    max_players: int
    max_number: int
    base_fee: Decimal
    fee_per_player: Decimal
    match_minutes: int

    @property
    def name(self) -> str:
        return str(self.division)

    @property
    def kind(self) -> EntityKind:
        return EntityKind.TEAM

    def create(self) -> PolicyBundle:
        return PolicyBundle(
            kind=EntityKind.TEAM,
            min_parts=self.min_players,
            max_parts=self.max_players,
            validator=functools.partial(_number_in_range, low=1, high=self.max_number),
            pricing=functools.partial(
                _roster_fee,
                base=self.base_fee,
                per_player=self.fee_per_player,
            ),
            params={"match_minutes": self.match_minutes, "halves": 2},
        )


class MasculinaDivision(DivisionFactory):
    division = Division.MASCULINA
    min_players = 11
    max_players = 25
    max_number = 99
    base_fee = Decimal("500.00")
    fee_per_player = Decimal("25.00")
    match_minutes = 90


class FemeninaDivision(DivisionFactory):
    division = Division.FEMENINA
    min_players = 11
    max_players = 25
    max_number = 99
    base_fee = Decimal("450.00")
    fee_per_player = Decimal("20.00")
    match_minutes = 90


class Sub17Division(DivisionFactory):
    """Youth division: seven-a-side minimum, shorter matches."""

    division = Division.SUB17
    min_players = 7
    max_players = 20
    max_number = 50
    base_fee = Decimal("250.00")
    fee_per_player = Decimal("10.00")
    match_minutes = 70


# ---------------------------------------------------------------------------
# Pizza styles
# ---------------------------------------------------------------------------


class PizzaStyleFactory(CategoryFactory):
    """Shared bundle construction for pizza styles.

    Prices are a size base plus a flat surcharge per topping; the tax
    rate and oven settings belong to the style.
    """

    style: PizzaStyle
    toppings: frozenset[str]
    max_toppings: int
    size_prices: Mapping[str, Decimal]
    per_topping: Decimal
    tax_rate: Decimal
    bake_temp_c: int
    bake_minutes: int

    @property
    def name(self) -> str:
        return str(self.style)

    @property
    def kind(self) -> EntityKind:
        return EntityKind.PIZZA

    def create(self) -> PolicyBundle:
        return PolicyBundle(
            kind=EntityKind.PIZZA,
            min_parts=0,
            max_parts=self.max_toppings,
            validator=functools.partial(_topping_allowed, allowed=self.toppings),
            pricing=functools.partial(
                _pizza_price,
                size_prices=dict(self.size_prices),
                per_topping=self.per_topping,
            ),
            tax_rate=self.tax_rate,
            params={"bake_temp_c": self.bake_temp_c, "bake_minutes": self.bake_minutes},
            detail_choices={
                "size": frozenset(str(size) for size in self.size_prices),
                "crust": frozenset(str(crust) for crust in Crust),
            },
        )


class NewYorkStyle(PizzaStyleFactory):
    style = PizzaStyle.NEW_YORK
    toppings = frozenset(
        {
            "pepperoni",
            "sausage",
            "mushrooms",
            "onions",
            "green_peppers",
            "black_olives",
            "extra_cheese",
            "bacon",
            "garlic",
            "jalapenos",
        }
    )
    max_toppings = 8
    size_prices = {
        PizzaSize.SMALL: Decimal("9.00"),
        PizzaSize.MEDIUM: Decimal("11.00"),
        PizzaSize.LARGE: Decimal("14.00"),
    }
    per_topping = Decimal("1.50")
    tax_rate = Decimal("0.08875")
    bake_temp_c = 290
    bake_minutes = 12


class NeapolitanStyle(PizzaStyleFactory):
    """Wood-fired style: few toppings, very hot and very short bake."""

    style = PizzaStyle.NEAPOLITAN
    toppings = frozenset(
        {
            "tomato",
            "mozzarella",
            "basil",
            "olive_oil",
            "garlic",
            "oregano",
            "anchovies",
            "prosciutto",
            "mushrooms",
            "ricotta",
        }
    )
    max_toppings = 5
    size_prices = {
        PizzaSize.SMALL: Decimal("8.00"),
        PizzaSize.MEDIUM: Decimal("10.00"),
        PizzaSize.LARGE: Decimal("13.00"),
    }
    per_topping = Decimal("1.00")
    tax_rate = Decimal("0.10")
    bake_temp_c = 485
    bake_minutes = 2


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def get_category(name: str) -> CategoryFactory:
    """Look up a category factory by its canonical name.

    Raises:
        UnknownCategoryError: If no factory is registered under *name*.
    """
    try:
        return CATEGORY_REGISTRY[name]
    except KeyError:
        raise UnknownCategoryError(name, sorted(CATEGORY_REGISTRY)) from None


def categories_for(kind: EntityKind | str) -> list[CategoryFactory]:
    """Registered factories for one entity kind, in registration order."""
    return [f for f in CATEGORY_REGISTRY.values() if f.kind == kind]


def register_category(factory: CategoryFactory) -> None:
    """Register an additional category factory.

    Built-in names are reserved. Re-registering the same factory object
    is a no-op; a different factory under an existing name is rejected.
    """
    if not isinstance(factory, CategoryFactory):
        msg = f"Category {factory!r} must extend CategoryFactory"
        raise TypeError(msg)

    name = factory.name.strip()
    if not name:
        msg = "Category name must not be empty"
        raise ValueError(msg)

    if name in _builtin_category_map():
        msg = f"Category {name!r} conflicts with a built-in category"
        raise ValueError(msg)

    existing = CATEGORY_REGISTRY.get(name)
    if existing is not None and existing is not factory:
        msg = f"Category {name!r} is already registered"
        raise ValueError(msg)

    CATEGORY_REGISTRY[name] = factory


def _builtin_category_map() -> dict[str, CategoryFactory]:
    factories: list[CategoryFactory] = [
        MasculinaDivision(),
        FemeninaDivision(),
        Sub17Division(),
        NewYorkStyle(),
        NeapolitanStyle(),
    ]
    return {f.name: f for f in factories}


def _register_categories() -> None:
    """Populate :data:`CATEGORY_REGISTRY` with the built-in categories."""
    CATEGORY_REGISTRY.update(_builtin_category_map())


_register_categories()
