"""Locate ``lineup.toml`` for a run.

``LINEUP_CONFIG`` names the file explicitly. Without it the nearest
``lineup.toml`` at or above the starting directory is used, the way git
finds ``.git/``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "lineup.toml"
CONFIG_ENV_VAR = "LINEUP_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file to use, or None when there is none.

    An ``LINEUP_CONFIG`` value that is not an existing file disables
    discovery rather than falling back to the walk-up search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
