"""TOML configuration loader with deep merge support."""

import os
import tomllib
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_FILE = "default.toml"


def get_config_dir() -> Path:
    """Locate the configuration directory.

    ``HYDRANT_CONFIG_DIR`` wins when set. Otherwise the nearest ``config/``
    holding a default.toml is used, searching from the working directory
    up to four parents.
    """
    config_dir_env = os.environ.get("HYDRANT_CONFIG_DIR")
    if config_dir_env:
        path = Path(config_dir_env)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
        return path

    current = Path.cwd()
    for candidate in [current, *list(current.parents)[:4]]:
        if (candidate / "config" / DEFAULT_CONFIG_FILE).exists():
            return candidate / "config"

    return Path("config")


def get_environment() -> str:
    """Current environment name from HYDRANT_ENV, 'development' by default."""
    return os.environ.get("HYDRANT_ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``, recursing into nested tables."""
    result = base.copy()

    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_config(config_dir: Path | None = None, env: str | None = None) -> dict[str, Any]:
    """Load default.toml and overlay the optional {env}.toml on top of it.

    Args:
        config_dir: Directory to read from; located automatically when omitted
        env: Environment name; read from HYDRANT_ENV when omitted

    Returns:
        Merged configuration dictionary
    """
    config_dir = config_dir or get_config_dir()
    env = env or get_environment()

    default_path = config_dir / DEFAULT_CONFIG_FILE
    if not default_path.exists():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            "Create config/default.toml or set HYDRANT_CONFIG_DIR."
        )

    config = load_toml(default_path)

    env_path = config_dir / f"{env}.toml"
    if env_path.exists():
        config = deep_merge(config, load_toml(env_path))

    return config
