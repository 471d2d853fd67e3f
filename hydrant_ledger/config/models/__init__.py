"""Configuration model exports.

    from hydrant_ledger.config.models import APIConfig, DatabaseConfig
"""

from hydrant_ledger.config.models.api import APIConfig
from hydrant_ledger.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from hydrant_ledger.config.models.storage import DatabaseConfig

__all__ = [
    "APIConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
]
