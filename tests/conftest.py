"""Shared test fixtures for the Hydrant Ledger test suite."""

import os
from collections.abc import Callable, Generator
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from hydrant_ledger.hydrants.models import HydrantFields
from hydrant_ledger.hydrants.service import HydrantService
from hydrant_ledger.hydrants.stores.inmemory import InMemoryHydrantStore


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
            (test_config_dir / filename).write_text(content)

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
def env_override() -> Callable[[dict[str, str]], EnvOverrideContext]:
    """Temporarily set environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"HYDRANT_DEBUG": "true"}):
                ...
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    return _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Reset cached settings and loaded TOML around each test."""
    from hydrant_ledger.config import get_settings
    from hydrant_ledger.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture
def hydrant_fields() -> HydrantFields:
    """A complete, valid field set."""
    return HydrantFields(
        name="H1",
        location="L1",
        inspection_date=date(2024, 5, 14),
        defects="Cap missing",
        checked_by="J. Smith",
    )


@pytest.fixture
def minimal_fields() -> HydrantFields:
    """Only the required fields; the optional ones stay None."""
    return HydrantFields(name="H1", location="L1")


@pytest.fixture
def store() -> InMemoryHydrantStore:
    """A fresh in-memory hydrant store."""
    return InMemoryHydrantStore()


@pytest.fixture
def service(store: InMemoryHydrantStore) -> HydrantService:
    """A HydrantService over the in-memory store."""
    return HydrantService(store)
