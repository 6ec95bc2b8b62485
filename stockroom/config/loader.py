"""Layered TOML configuration for Stockroom.

The service reads `default.toml` and then the file named after
STOCKROOM_ENV from one config directory. Tables from the environment
file are merged key by key into the defaults, so `production.toml` only
has to name what it changes (usually `[storage] backend = "postgres"`).
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_ENVIRONMENT = "development"

# Repository checkout: stockroom/config/loader.py -> <root>/config
_BUNDLED_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


@dataclass
class ConfigLayers:
    """The merged configuration and where it came from."""

    directory: Path
    environment: str
    files: list[Path] = field(default_factory=list)
    values: dict[str, Any] = field(default_factory=dict)


def get_environment() -> str:
    """Name of the environment overlay (STOCKROOM_ENV, default development)."""
    return os.environ.get("STOCKROOM_ENV") or DEFAULT_ENVIRONMENT


def get_config_dir() -> Path:
    """Locate the directory holding default.toml.

    STOCKROOM_CONFIG_DIR wins and must exist. Otherwise the nearest
    `config/default.toml` at or above the working directory is used,
    then the one shipped next to the package in a source checkout.
    """
    configured = os.environ.get("STOCKROOM_CONFIG_DIR")
    if configured:
        path = Path(configured)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {configured}")
        return path

    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        if (directory / "config" / "default.toml").is_file():
            return directory / "config"
    return _BUNDLED_CONFIG_DIR


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(
    base: dict[str, Any], override: dict[str, Any], path: str = ""
) -> dict[str, Any]:
    """Merge override into a copy of base, table by table.

    Scalars and arrays in override replace those in base. A table and a
    scalar never replace each other: that is always a typo in an overlay
    (`storage = "postgres"` instead of `[storage] backend = ...`).

    Raises:
        ValueError: naming the dotted key whose kind differs
    """
    result = base.copy()
    for key, value in override.items():
        dotted = f"{path}.{key}" if path else key
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value, dotted)
        elif key in result and isinstance(current, dict) != isinstance(value, dict):
            raise ValueError(f"Config key '{dotted}' mixes a table and a value")
        else:
            result[key] = value
    return result


def read_layers() -> ConfigLayers:
    """Read default.toml and the environment overlay, if there is one."""
    layers = ConfigLayers(directory=get_config_dir(), environment=get_environment())

    default_path = layers.directory / "default.toml"
    if not default_path.is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            "Create config/default.toml or set STOCKROOM_CONFIG_DIR."
        )
    layers.values = load_toml(default_path)
    layers.files.append(default_path)

    overlay_path = layers.directory / f"{layers.environment}.toml"
    if overlay_path.is_file():
        layers.values = deep_merge(layers.values, load_toml(overlay_path))
        layers.files.append(overlay_path)

    return layers


def load_config() -> dict[str, Any]:
    """Merged configuration values for Settings."""
    return read_layers().values
