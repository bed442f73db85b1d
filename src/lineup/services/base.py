"""BaseService: shared foundation for lineup services.

Every service receives the registry and template catalog it works
against at construction time. Plugin dispatch is optional.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lineup.domain.catalog import TemplateCatalog
    from lineup.infrastructure.registry import EntityRegistry
    from lineup.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class TeamService(BaseService):
            def register_team(self, name: str, ...) -> ServiceResult:
                entity = TeamBuilder()...build()
                self._registry.register(entity)
    """

    def __init__(
        self,
        registry: EntityRegistry,
        catalog: TemplateCatalog,
        *,
        plugins: PluginManager | None = None,
    ) -> None:
        self._registry = registry
        self._catalog = catalog
        self._plugins = plugins

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any], warnings: list[str]) -> None:
        """Dispatch a lifecycle event. No-op without a plugin manager.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return
        try:
            self._plugins.dispatch(hook_name, **payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
