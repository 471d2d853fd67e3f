"""Errors raised by the hydrant service."""


class LineageError(Exception):
    """Raised when a ledger chain does not lead back to a single create entry.

    Seeing this means the ledger was corrupted outside the service.
    """

    def __init__(self, message: str, entry_id: int) -> None:
        super().__init__(message)
        self.entry_id = entry_id
