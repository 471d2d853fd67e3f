"""Store error hierarchy.

Backend-specific failures are wrapped in one of these so callers can handle
them without importing the database driver.
"""


class StoreError(Exception):
    """Base exception for all store errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConnectionError(StoreError):
    """Raised when the store cannot be reached or a query fails in transit.

    Examples:
        - Pool creation or connection timeout
        - Server closed the connection mid-transaction
    """


class ConflictError(StoreError):
    """Raised when a write violates an integrity constraint.

    Examples:
        - A ledger entry already superseded by another entry
        - Foreign key to a missing history entry
    """


class ValidationError(StoreError):
    """Raised when the store rejects a value.

    Examples:
        - Unknown history action
        - Value too long for its column
    """
