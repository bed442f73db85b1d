"""OrderService: pizza order assembly.

Pipeline: BUILD EACH LINE → REGISTER ALL LINES → EVENT → RESPOND

Line identities are ``{order_id}/{n}`` (1-based). Lines are registered
all-or-nothing, so a failed order leaves the registry untouched.
"""

from __future__ import annotations

import logging
from typing import Any

from lineup.domain.builder import PizzaBuilder
from lineup.domain.categories import get_category
from lineup.domain.entities import Entity, Order
from lineup.domain.errors import LineupError
from lineup.services.base import BaseService
from lineup.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class OrderService(BaseService):
    """Builds pizzas under their style's rules and totals the order."""

    def place_order(self, order_id: str, pizzas: list[Any]) -> ServiceResult:
        """Build every pizza in *pizzas* and register the order's lines.

        Each pizza is a mapping with ``style`` (required), ``size``,
        ``crust``, ``template`` (a catalog key), and ``toppings`` (keys).
        """
        op = "place_order"
        warnings: list[str] = []

        if not pizzas:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="EMPTY_ORDER", message="An order needs at least one pizza"),
            )

        lines: list[Entity] = []
        for n, entry in enumerate(pizzas, start=1):
            try:
                lines.append(self._build_line(f"{order_id}/{n}", entry))
            except LineupError as exc:
                logger.info("Order '%s' line %d rejected: %s", order_id, n, exc)
                return ServiceResult.failure(op, exc, order_id=order_id, line=n)
            except ValueError as exc:
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(
                        code="INVALID_OPTION",
                        message=f"Line {n}: {exc}",
                        detail={"line": n},
                    ),
                    data={"order_id": order_id, "line": n},
                )

        try:
            self._registry.register_many(lines)
        except LineupError as exc:
            return ServiceResult.failure(op, exc, order_id=order_id)

        order = Order(identity=order_id, lines=tuple(lines))
        self._dispatch_event(
            "post_order", {"order_id": order_id, "total": str(order.total)}, warnings
        )
        return ServiceResult(
            ok=True,
            op=op,
            data=order.to_dict(),
            warnings=warnings,
            meta={"label": self._registry.label},
        )

    def _build_line(self, identity: str, entry: Any) -> Entity:
        if not isinstance(entry, dict):
            msg = "pizza entry must be an object"
            raise ValueError(msg)
        style = entry.get("style")
        if not style:
            msg = "pizza is missing 'style'"
            raise ValueError(msg)

        builder = PizzaBuilder().select_category(get_category(str(style))).identity(identity)
        if entry.get("size"):
            builder.size(str(entry["size"]))
        if entry.get("crust"):
            builder.crust(str(entry["crust"]))
        if entry.get("template"):
            builder.add_parts(self._catalog.retrieve(str(entry["template"])))
        toppings = entry.get("toppings", [])
        if not isinstance(toppings, list):
            msg = "'toppings' must be a list of topping keys"
            raise ValueError(msg)
        for key in toppings:
            builder.add_topping(str(key))
        return builder.build()
