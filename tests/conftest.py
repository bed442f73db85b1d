"""Shared pytest fixtures and test helpers for lineup tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from lineup.domain.builder import TeamBuilder
from lineup.domain.catalog import TemplateCatalog
from lineup.domain.categories import CATEGORY_REGISTRY, CategoryFactory
from lineup.domain.entities import Entity
from lineup.infrastructure.catalog_loader import load_catalog
from lineup.infrastructure.registry import EntityRegistry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> EntityRegistry:
    """A fresh registry per test."""
    return EntityRegistry("Temporada de prueba")


@pytest.fixture
def catalog() -> TemplateCatalog:
    """The packaged default catalog."""
    return load_catalog()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temp directory with no config overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test classes.
    """
    monkeypatch.delenv("LINEUP_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def _restore_categories() -> Generator[None]:
    """Undo category registrations made during a test."""
    snapshot = dict(CATEGORY_REGISTRY)
    yield
    CATEGORY_REGISTRY.clear()
    CATEGORY_REGISTRY.update(snapshot)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def build_team(name: str, factory: CategoryFactory, numbers: list[int]) -> Entity:
    """Build a team with one player per number, asserting success."""
    builder = TeamBuilder().select_category(factory).identity(name)
    for number in numbers:
        builder.add_player(f"Player {number}", number)
    return builder.build()
