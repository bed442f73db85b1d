"""Template catalog: canned parts and part lists.

The catalog owns the canonical copy of every template. Retrieval always
returns a deep copy, so callers may mutate what they get back without
affecting the stored template or any earlier copy.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator

from lineup.domain.errors import UnknownTemplateError
from lineup.domain.policies import Part

Template = Part | list[Part]


class TemplateCatalog:
    """Keyed store of reusable part templates."""

    def __init__(self) -> None:
        self._templates: dict[str, Template] = {}

    def store(self, key: str, template: Template) -> None:
        """Store *template* under *key*, replacing any previous entry."""
        self._templates[key] = copy.deepcopy(template)

    def retrieve(self, key: str) -> Template:
        """Return an independent copy of the template stored under *key*.

        Raises:
            UnknownTemplateError: If *key* is not in the catalog.
        """
        try:
            template = self._templates[key]
        except KeyError:
            raise UnknownTemplateError(key) from None
        return copy.deepcopy(template)

    def retrieve_parts(self, key: str) -> list[Part]:
        """Like :meth:`retrieve`, but always returns a list."""
        template = self.retrieve(key)
        if isinstance(template, Part):
            return [template]
        return template

    def keys(self) -> list[str]:
        """Template keys, sorted alphabetically."""
        return sorted(self._templates)

    def __contains__(self, key: object) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
