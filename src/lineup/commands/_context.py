"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Owns the run's registry, catalog, and plugins, and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import click

from lineup.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from lineup.config.settings import LineupSettings
    from lineup.domain.catalog import TemplateCatalog
    from lineup.infrastructure.registry import EntityRegistry
    from lineup.plugins.manager import PluginManager
    from lineup.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The registry, catalog, and plugin manager are created lazily on first
    use so ``--help`` and ``--version`` stay cheap. The registry is
    created exactly once even under concurrent first access.
    """

    def __init__(self, settings: LineupSettings) -> None:
        self.settings = settings
        self._registry: EntityRegistry | None = None
        self._catalog: TemplateCatalog | None = None
        self._plugins: PluginManager | None = None
        self._lock = threading.Lock()

        from lineup.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def registry(self) -> EntityRegistry:
        """The run's entity registry (created once, on first access)."""
        if self._registry is None:
            with self._lock:
                if self._registry is None:
                    from lineup.infrastructure.registry import EntityRegistry

                    self._registry = EntityRegistry(self.settings.registry.label)
        return self._registry

    @property
    def catalog(self) -> TemplateCatalog:
        """Packaged templates plus the configured user catalog file."""
        if self._catalog is None:
            from lineup.infrastructure.catalog_loader import CatalogFileError, load_catalog

            path = self.settings.catalog.path
            try:
                self._catalog = load_catalog(self.settings.resolve(path) if path else None)
            except CatalogFileError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._catalog

    @property
    def plugins(self) -> PluginManager | None:
        """Loaded plugin manager, or None when plugins are disabled."""
        if not self.settings.plugins.enabled:
            return None
        if self._plugins is None:
            from lineup.plugins.manager import PluginManager

            manager = PluginManager()
            local_dir = self.settings.resolve(self.settings.plugins.local_dir)
            manager.discover_and_load(local_dir=local_dir)
            self._plugins = manager
        return self._plugins

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
