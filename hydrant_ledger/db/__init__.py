"""Database utilities: connection pool, schema bootstrap and store errors."""

from hydrant_ledger.db.errors import (
    ConflictError,
    ConnectionError,
    StoreError,
    ValidationError,
)

__all__ = [
    "StoreError",
    "ConnectionError",
    "ConflictError",
    "ValidationError",
]
