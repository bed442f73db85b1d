"""Extension layer: plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus single-file plugins from a local directory.
INVARIANT: Plugin failures are warnings, never errors.
"""

import pluggy

from lineup.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("lineup")

__all__ = ["PluginManager", "hookimpl"]
