"""Tests for SquareSettings — TOML, env, and CLI precedence."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from squarectl.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config
from squarectl.config.settings import SquareSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (CONFIG_ENV_VAR, "SQUARECTL_STORE__DATA_DIR", "SQUARECTL_STORE__LOCK_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = SquareSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.store.data_dir == Path("Data")
        assert settings.store.filename == "squares.json"
        assert settings.store.lock_timeout == 10.0
        assert settings.data_dir == tmp_path / "Data"
        assert settings.json_output is False

    def test_frozen(self, tmp_path: Path) -> None:
        settings = SquareSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_store_section(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            '[store]\ndata_dir = "var/squares"\nlock_timeout = 2.5\n'
        )
        settings = SquareSettings.from_cli(project_root=tmp_path)
        assert settings.data_dir == tmp_path / "var" / "squares"
        assert settings.store.lock_timeout == 2.5
        assert settings.store.filename == "squares.json"

    def test_absolute_data_dir(self, tmp_path: Path) -> None:
        target = tmp_path / "abs"
        (tmp_path / CONFIG_FILENAME).write_text(f'[store]\ndata_dir = "{target.as_posix()}"\n')
        settings = SquareSettings.from_cli(project_root=tmp_path / "elsewhere")
        assert settings.data_dir == target

    def test_project_root_from_discovered_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[store]\nfilename = 'grid.json'\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = SquareSettings.from_cli()
        assert settings.project_root == tmp_path.resolve()
        assert settings.store.filename == "grid.json"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "conf" / "custom.toml"
        custom.parent.mkdir()
        custom.write_text('[store]\nfilename = "custom.json"\n')
        settings = SquareSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.config_path == custom
        assert settings.store.filename == "custom.json"

    def test_invalid_toml_raises_click_exception(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[store\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            SquareSettings.from_cli(project_root=tmp_path)

    def test_invalid_lock_timeout_rejected(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[store]\nlock_timeout = 0\n")
        with pytest.raises(Exception):
            SquareSettings.from_cli(project_root=tmp_path)


class TestPrecedence:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[store]\ndata_dir = "from-toml"\n')
        monkeypatch.setenv("SQUARECTL_STORE__DATA_DIR", "from-env")
        settings = SquareSettings.from_cli(project_root=tmp_path)
        assert settings.store.data_dir == Path("from-env")

    def test_cli_data_dir_overrides_everything(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[store]\ndata_dir = "from-toml"\nlock_timeout = 3\n')
        monkeypatch.setenv("SQUARECTL_STORE__DATA_DIR", "from-env")
        settings = SquareSettings.from_cli(project_root=tmp_path, data_dir="from-cli")
        assert settings.store.data_dir == Path("from-cli")
        assert settings.store.lock_timeout == 3

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = SquareSettings.from_cli(project_root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True


class TestFindConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        config = tmp_path / CONFIG_FILENAME
        config.write_text("")
        nested = tmp_path / "x" / "y"
        nested.mkdir(parents=True)
        assert find_config(nested) == config.resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config = tmp_path / "elsewhere.toml"
        config.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config))
        assert find_config(tmp_path) == config

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None
