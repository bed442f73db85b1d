"""EntityRegistry: identity-unique store for built entities.

Constructed explicitly by whoever owns the run (the CLI's AppContext,
or a test) and passed to the services that need it. There is no hidden
module-level instance.

INVARIANT: An identity is registered at most once. The check and the
insert happen under one lock acquisition, so two concurrent
registrations of the same identity can never both succeed.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from lineup.domain.entities import Entity
from lineup.domain.errors import DuplicateIdentityError
from lineup.domain.types import EntityKind

logger = logging.getLogger(__name__)


class EntityRegistry:
    """Insertion-ordered registry of entities keyed by identity.

    Args:
        label: Season or service-day label, fixed for the registry's lifetime.
    """

    def __init__(self, label: str) -> None:
        self._label = label
        self._entities: dict[str, Entity] = {}
        self._lock = threading.Lock()

    @property
    def label(self) -> str:
        return self._label

    def register(self, entity: Entity) -> Entity:
        """Add *entity* to the registry.

        Raises:
            DuplicateIdentityError: If the identity is already registered.
        """
        with self._lock:
            if entity.identity in self._entities:
                raise DuplicateIdentityError(entity.identity)
            self._entities[entity.identity] = entity
        logger.debug("Registered %s '%s' (%s)", entity.kind, entity.identity, self._label)
        return entity

    def register_many(self, entities: Iterable[Entity]) -> list[Entity]:
        """Register several entities, all or nothing.

        Raises:
            DuplicateIdentityError: If any identity is already registered or
                repeats within *entities*. Nothing is registered in that case.
        """
        batch = list(entities)
        with self._lock:
            seen: set[str] = set()
            for entity in batch:
                if entity.identity in self._entities or entity.identity in seen:
                    raise DuplicateIdentityError(entity.identity)
                seen.add(entity.identity)
            for entity in batch:
                self._entities[entity.identity] = entity
        logger.debug("Registered %d entities (%s)", len(batch), self._label)
        return batch

    def entities(self) -> tuple[Entity, ...]:
        """Snapshot of all registered entities in registration order."""
        with self._lock:
            return tuple(self._entities.values())

    def of_kind(self, kind: EntityKind | str) -> tuple[Entity, ...]:
        return tuple(e for e in self.entities() if e.kind == kind)

    def get(self, identity: str) -> Entity | None:
        with self._lock:
            return self._entities.get(identity)

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._entities

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)
