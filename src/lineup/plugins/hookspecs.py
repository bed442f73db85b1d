"""Pluggy hook specifications for lineup.

One setup-time hook lets plugins contribute category factories; two
lifecycle events fire after registrations succeed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from lineup.domain.categories import CategoryFactory

hookspec = pluggy.HookspecMarker("lineup")


class LineupHookSpec:
    """Hook specifications for the lineup plugin system."""

    @hookspec
    def register_categories(self) -> list[CategoryFactory] | None:
        """Return category factories to add to CATEGORY_REGISTRY."""

    @hookspec
    def post_register(self, kind: str, identity: str, category: str) -> None:
        """Called after an entity is registered."""

    @hookspec
    def post_order(self, order_id: str, total: str) -> None:
        """Called after an order is placed."""
