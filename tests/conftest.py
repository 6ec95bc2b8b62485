"""Shared test fixtures for the Stockroom test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from stockroom.audit.stores.inmemory import InMemoryAuditLog
from stockroom.catalog.coordinator import MutationCoordinator
from stockroom.catalog.queries import QueryService
from stockroom.catalog.stores.inmemory import InMemoryProductStore


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            toml_file = test_config_dir / filename
            toml_file.write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            original = self.original_env[key]
            if original is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original


@pytest.fixture
def env_override() -> Generator[Callable[[dict[str, str]], EnvOverrideContext], None, None]:
    """Context manager for temporarily setting environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"STOCKROOM_DEBUG": "true"}):
                # test code here
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    yield _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear cached and pinned settings before and after each test.

    This ensures test isolation for configuration and API tests.
    """
    from stockroom.api.dependencies import use_settings
    from stockroom.config import get_settings
    from stockroom.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    use_settings(None)
    yield
    use_settings(None)
    set_toml_config({})
    get_settings.cache_clear()


@pytest.fixture
def product_store() -> InMemoryProductStore:
    """In-memory product store."""
    return InMemoryProductStore()


@pytest.fixture
def audit_log() -> InMemoryAuditLog:
    """In-memory audit log."""
    return InMemoryAuditLog()


@pytest.fixture
def coordinator(
    product_store: InMemoryProductStore,
    audit_log: InMemoryAuditLog,
) -> MutationCoordinator:
    """Mutation coordinator over the in-memory stores."""
    return MutationCoordinator(product_store, audit_log)


@pytest.fixture
def queries(
    product_store: InMemoryProductStore,
    audit_log: InMemoryAuditLog,
) -> QueryService:
    """Query service over the in-memory stores."""
    return QueryService(product_store, audit_log)


@pytest.fixture
def widget_fields() -> dict[str, Any]:
    """A valid product payload."""
    return {"name": "Widget", "price": 9.99, "stock": 5, "category": "Tools"}
