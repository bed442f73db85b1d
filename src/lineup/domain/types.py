"""Entity kinds and built-in category enums."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """The two families of composite entities."""

    TEAM = "team"
    PIZZA = "pizza"


class Division(StrEnum):
    """League divisions for team registration."""

    MASCULINA = "Masculina"
    FEMENINA = "Femenina"
    SUB17 = "Sub-17"


class PizzaStyle(StrEnum):
    """Pizza styles, each with its own oven and pricing rules."""

    NEW_YORK = "New York"
    NEAPOLITAN = "Neapolitan"


class PizzaSize(StrEnum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Crust(StrEnum):
    THIN = "thin"
    REGULAR = "regular"
    THICK = "thick"
