"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in error responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (malformed JSON, missing or blank fields)."""

    HYDRANT_NOT_FOUND = "HYDRANT_NOT_FOUND"
    """No live hydrant has the requested id."""

    HISTORY_ENTRY_NOT_FOUND = "HISTORY_ENTRY_NOT_FOUND"
    """No ledger entry has the requested id."""

    STORE_ERROR = "STORE_ERROR"
    """The database failed; the change was rolled back."""

    LINEAGE_BROKEN = "LINEAGE_BROKEN"
    """A ledger chain does not lead back to its create entry."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level information for a validation failure."""

    field: str | None = None
    message: str


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    Example:
        {
            "error": {
                "code": "HYDRANT_NOT_FOUND",
                "message": "Hydrant with id 7 not found"
            }
        }
    """

    error: ErrorBody
