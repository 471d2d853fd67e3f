"""API exception hierarchy.

Routes raise these; the handler registered in ``create_app`` turns
``status_code`` and ``error_code`` into an ErrorResponse.
"""

from hydrant_ledger.api.models.errors import ErrorCode


class HydrantAPIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class HydrantNotFoundError(HydrantAPIError):
    """Raised when no live hydrant has the requested id."""

    status_code = 404
    error_code = ErrorCode.HYDRANT_NOT_FOUND

    def __init__(self, hydrant_id: int) -> None:
        super().__init__(f"Hydrant with id {hydrant_id} not found")
        self.hydrant_id = hydrant_id


class HistoryEntryNotFoundError(HydrantAPIError):
    """Raised when no ledger entry has the requested id."""

    status_code = 404
    error_code = ErrorCode.HISTORY_ENTRY_NOT_FOUND

    def __init__(self, entry_id: int) -> None:
        super().__init__(f"History entry with id {entry_id} not found")
        self.entry_id = entry_id
