"""API request and response models."""

from hydrant_ledger.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from hydrant_ledger.api.models.health import ComponentHealth, HealthResponse
from hydrant_ledger.api.models.hydrants import HydrantDeleted

__all__ = [
    "ComponentHealth",
    "ErrorBody",
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "HydrantDeleted",
]
