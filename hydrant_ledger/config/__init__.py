"""Configuration loading for Hydrant Ledger.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from hydrant_ledger.config import get_settings

    settings = get_settings()
    port = settings.api.port
    dsn = settings.database.dsn
"""

from functools import lru_cache

import structlog

from hydrant_ledger.config.loader import load_config
from hydrant_ledger.config.settings import Settings, set_toml_config

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{HYDRANT_ENV}.toml (environment overrides)
    4. HYDRANT_* environment variables (runtime overrides)

    A missing default.toml is not fatal: the model defaults and the
    environment still apply.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.
    """
    try:
        config_dict = load_config()
    except FileNotFoundError as e:
        logger.warning("config_file_not_found", msg="Using default configuration", error=str(e))
        config_dict = {}
    set_toml_config(config_dict)

    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
