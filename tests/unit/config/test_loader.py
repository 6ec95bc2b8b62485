"""Unit tests for the layered TOML configuration loader."""

import tomllib
from pathlib import Path

import pytest

from stockroom.config import loader
from stockroom.config.loader import (
    deep_merge,
    get_config_dir,
    get_environment,
    load_config,
    load_toml,
    read_layers,
)


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Config directory with a minimal default.toml, selected via the environment."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "default.toml").write_text(
        '[storage]\nbackend = "inmemory"\n\n[storage.postgres]\nmax_pool_size = 10\n'
    )
    monkeypatch.setenv("STOCKROOM_CONFIG_DIR", str(config_dir))
    return config_dir


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_overlay_changes_one_nested_key(self) -> None:
        base = {"storage": {"backend": "inmemory", "postgres": {"max_pool_size": 10}}}
        overlay = {"storage": {"backend": "postgres"}}

        assert deep_merge(base, overlay) == {
            "storage": {"backend": "postgres", "postgres": {"max_pool_size": 10}}
        }

    def test_arrays_are_replaced(self) -> None:
        base = {"api": {"cors_origins": ["*"]}}
        overlay = {"api": {"cors_origins": ["https://shop.example"]}}

        assert deep_merge(base, overlay)["api"]["cors_origins"] == ["https://shop.example"]

    def test_inputs_unmodified(self) -> None:
        base = {"api": {"port": 5000}}
        overlay = {"api": {"port": 8080}}

        deep_merge(base, overlay)

        assert base == {"api": {"port": 5000}}
        assert overlay == {"api": {"port": 8080}}

    def test_value_over_table_rejected(self) -> None:
        """A scalar overlaying a table names the offending key."""
        base = {"storage": {"postgres": {"max_pool_size": 10}}}

        with pytest.raises(ValueError, match="storage.postgres"):
            deep_merge(base, {"storage": {"postgres": "postgresql://db"}})

    def test_table_over_value_rejected(self) -> None:
        with pytest.raises(ValueError, match="'debug'"):
            deep_merge({"debug": False}, {"debug": {"enabled": True}})


class TestLoadToml:
    """Tests for load_toml."""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_toml(tmp_path / "nonexistent.toml")

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("backend = [unclosed")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml(invalid_file)


class TestGetEnvironment:
    """Tests for get_environment."""

    def test_returns_env_var_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STOCKROOM_ENV", "production")
        assert get_environment() == "production"

    @pytest.mark.parametrize("value", [None, ""])
    def test_defaults_to_development(
        self, monkeypatch: pytest.MonkeyPatch, value: str | None
    ) -> None:
        if value is None:
            monkeypatch.delenv("STOCKROOM_ENV", raising=False)
        else:
            monkeypatch.setenv("STOCKROOM_ENV", value)
        assert get_environment() == "development"


class TestGetConfigDir:
    """Tests for get_config_dir."""

    def test_env_var_wins(self, config_dir: Path) -> None:
        assert get_config_dir() == config_dir

    def test_missing_env_dir_raises(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("STOCKROOM_CONFIG_DIR", str(tmp_path / "missing"))

        with pytest.raises(FileNotFoundError):
            get_config_dir()

    def test_found_above_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Running from a subdirectory of the checkout still finds config/."""
        monkeypatch.delenv("STOCKROOM_CONFIG_DIR", raising=False)
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "default.toml").write_text("debug = false\n")
        nested = tmp_path / "deploy" / "scripts"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert get_config_dir() == tmp_path / "config"

    def test_config_dir_without_defaults_skipped(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An unrelated config/ folder does not shadow the bundled one."""
        monkeypatch.delenv("STOCKROOM_CONFIG_DIR", raising=False)
        (tmp_path / "config").mkdir()
        monkeypatch.chdir(tmp_path)

        assert get_config_dir() == loader._BUNDLED_CONFIG_DIR


class TestReadLayers:
    """Tests for read_layers and load_config."""

    def test_defaults_only(self, config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STOCKROOM_ENV", "staging")

        layers = read_layers()

        assert layers.environment == "staging"
        assert layers.files == [config_dir / "default.toml"]
        assert layers.values["storage"]["backend"] == "inmemory"

    def test_overlay_merged_in_order(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (config_dir / "production.toml").write_text('[storage]\nbackend = "postgres"\n')
        monkeypatch.setenv("STOCKROOM_ENV", "production")

        layers = read_layers()

        assert layers.files == [config_dir / "default.toml", config_dir / "production.toml"]
        assert layers.values == {
            "storage": {"backend": "postgres", "postgres": {"max_pool_size": 10}}
        }
        assert load_config() == layers.values

    def test_missing_default_raises(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        monkeypatch.setenv("STOCKROOM_CONFIG_DIR", str(empty))

        with pytest.raises(FileNotFoundError, match="default.toml"):
            read_layers()


class TestShippedConfig:
    """The config/ files in the repository load and merge cleanly."""

    @pytest.fixture
    def repo_config_dir(self) -> Path:
        return Path(__file__).resolve().parents[3] / "config"

    def test_bundled_dir_is_repository_config(self, repo_config_dir: Path) -> None:
        assert loader._BUNDLED_CONFIG_DIR == repo_config_dir

    def test_production_selects_postgres(
        self, repo_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Production overrides the storage backend and keeps the defaults."""
        monkeypatch.setenv("STOCKROOM_CONFIG_DIR", str(repo_config_dir))
        monkeypatch.setenv("STOCKROOM_ENV", "production")

        result = load_config()
        assert result["storage"]["backend"] == "postgres"
        assert result["storage"]["postgres"]["max_pool_size"] == 10
        assert result["api"]["prefix"] == "/api"

    def test_development_uses_console_logging(
        self, repo_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("STOCKROOM_CONFIG_DIR", str(repo_config_dir))
        monkeypatch.setenv("STOCKROOM_ENV", "development")

        result = load_config()
        assert result["observability"]["logging"]["format"] == "console"
        assert result["storage"]["backend"] == "inmemory"
