"""CatalogService: read-only views over categories and templates."""

from __future__ import annotations

from typing import Any

from lineup.domain.categories import CATEGORY_REGISTRY, categories_for
from lineup.domain.errors import LineupError
from lineup.domain.policies import Part
from lineup.services.base import BaseService
from lineup.services.result import ServiceResult


def _part_dict(part: Part) -> dict[str, Any]:
    return {"label": part.label, "discriminator": part.discriminator}


class CatalogService(BaseService):
    """Lists categories and templates for display."""

    def list_categories(self, kind: str | None = None) -> ServiceResult:
        """Describe each category's bundle: bounds, tax rate, and parameters."""
        factories = categories_for(kind) if kind else list(CATEGORY_REGISTRY.values())
        items: list[dict[str, Any]] = []
        for factory in factories:
            bundle = factory.create()
            items.append(
                {
                    "name": factory.name,
                    "kind": str(factory.kind),
                    "min_parts": bundle.min_parts,
                    "max_parts": bundle.max_parts,
                    "tax_rate": str(bundle.tax_rate),
                    "params": dict(bundle.params),
                }
            )
        return ServiceResult(
            ok=True, op="list_categories", data={"count": len(items), "items": items}
        )

    def list_templates(self) -> ServiceResult:
        items = []
        for key in self._catalog.keys():
            parts = self._catalog.retrieve_parts(key)
            items.append({"key": key, "parts": len(parts)})
        return ServiceResult(
            ok=True, op="list_templates", data={"count": len(items), "items": items}
        )

    def show_template(self, key: str) -> ServiceResult:
        try:
            parts = self._catalog.retrieve_parts(key)
        except LineupError as exc:
            return ServiceResult.failure("show_template", exc)
        return ServiceResult(
            ok=True,
            op="show_template",
            data={"key": key, "parts": [_part_dict(p) for p in parts]},
        )
