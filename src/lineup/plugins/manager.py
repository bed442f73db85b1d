"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery from ``.lineup/plugins/``.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import Any

import pluggy

from lineup.plugins.hookspecs import LineupHookSpec

PROJECT_NAME = "lineup"
ENTRY_POINT_GROUP = "lineup.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(LineupHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Plugin-provided categories are registered once everything is loaded.
        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        for plugin in self._pm.get_plugins():
            self._register_plugin_categories(plugin, self._plugin_name(plugin))
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._register_plugin_categories(plugin, resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def list_plugin_names(self) -> list[str]:
        return [self._plugin_name(p) for p in self._pm.get_plugins()]

    def dispatch(self, hook_name: str, **payload: Any) -> None:
        """Call every implementation of *hook_name* with *payload*."""
        getattr(self._pm.hook, hook_name)(**payload)

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes inside it that carry ``@hookimpl`` methods are
        instantiated and registered. A broken file is logged and skipped.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"lineup_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue
                if not self._has_hook_impls(obj):
                    continue
                try:
                    self._pm.register(obj(), name=f"{module_name}.{obj.__name__}")
                    logger.debug("Loaded local plugin %s from %s", obj.__name__, py_file)
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace entry-point plugin classes with instances.

        Hook dispatch against class objects leaves ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not self._has_hook_impls(plugin):
                continue

            plugin_name = self._plugin_name(plugin)
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)

    @staticmethod
    def _register_plugin_categories(plugin: object, plugin_name: str) -> None:
        """Register category factories exposed by a single plugin."""
        from lineup.domain.categories import register_category

        hook = getattr(plugin, "register_categories", None)
        if hook is None:
            return

        try:
            factories = hook()
        except Exception:
            logger.warning(
                "Failed to collect categories from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return

        if not factories:
            return

        for factory in factories:
            try:
                register_category(factory)
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping category %r from plugin %s",
                    factory,
                    plugin_name,
                    exc_info=True,
                )

    def _plugin_name(self, plugin: object) -> str:
        return self._pm.get_name(plugin) or plugin.__class__.__name__

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("lineup")`` sets a ``lineup_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "lineup_impl", None):
                return True
        return False
