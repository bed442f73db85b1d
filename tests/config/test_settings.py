"""Tests for LineupSettings: unified settings with TOML source."""

from pathlib import Path

import click
import pydantic
import pytest

from lineup.config.settings import LineupSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("LINEUP_CONFIG", "LINEUP_VERBOSE", "LINEUP_REGISTRY__LABEL"):
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = LineupSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.registry.label == "Temporada 2024"
        assert settings.catalog.path is None
        assert settings.plugins.enabled is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = LineupSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "lineup.toml").write_text(
            '[registry]\nlabel = "Apertura 2025"\n[catalog]\npath = "extra.yaml"\n'
        )
        settings = LineupSettings.from_cli(root=tmp_path)
        assert settings.registry.label == "Apertura 2025"
        assert settings.catalog.path == "extra.yaml"
        assert settings.plugins.enabled is True

    def test_root_defaults_to_config_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "lineup.toml").write_text("")
        child = tmp_path / "sub"
        child.mkdir()
        monkeypatch.chdir(child)
        settings = LineupSettings.from_cli()
        assert settings.root == tmp_path.resolve()
        assert settings.config_path == tmp_path.resolve() / "lineup.toml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[registry]\nlabel = "Custom"\n')
        settings = LineupSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.registry.label == "Custom"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "lineup.toml").write_text("[registry\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            LineupSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = LineupSettings.from_cli(root=tmp_path, json_output=True, quiet=True)
        assert settings.json_output is True
        assert settings.quiet is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "lineup.toml").write_text('[registry]\nlabel = "From TOML"\n')
        monkeypatch.setenv("LINEUP_REGISTRY__LABEL", "From env")
        settings = LineupSettings.from_cli(root=tmp_path)
        assert settings.registry.label == "From env"

    def test_cli_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINEUP_VERBOSE", "true")
        assert LineupSettings.from_cli(root=tmp_path).verbose is True
        assert LineupSettings.from_cli(root=tmp_path, verbose=False).verbose is False


class TestResolve:
    def test_relative(self, tmp_path: Path) -> None:
        settings = LineupSettings.from_cli(root=tmp_path)
        assert settings.resolve("extra.yaml") == tmp_path / "extra.yaml"

    def test_absolute(self, tmp_path: Path) -> None:
        settings = LineupSettings.from_cli(root=tmp_path)
        target = tmp_path / "abs.yaml"
        assert settings.resolve(str(target)) == target


class TestSectionModels:
    def test_empty_registry_label_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "lineup.toml").write_text('[registry]\nlabel = ""\n')
        with pytest.raises(pydantic.ValidationError):
            LineupSettings.from_cli(root=tmp_path)

    def test_sections_are_frozen(self, tmp_path: Path) -> None:
        settings = LineupSettings.from_cli(root=tmp_path)
        with pytest.raises(pydantic.ValidationError):
            settings.plugins.enabled = False  # type: ignore[misc]
