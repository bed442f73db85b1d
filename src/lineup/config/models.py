"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, lineup.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RegistryConfig(BaseModel):
    """[registry] section."""

    model_config = {"frozen": True}

    label: str = Field(default="Temporada 2024", min_length=1)


class CatalogConfig(BaseModel):
    """[catalog] section. ``path`` is resolved against the config directory."""

    model_config = {"frozen": True}

    path: str | None = None


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".lineup/plugins"

