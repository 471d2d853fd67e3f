"""API middleware package."""

from hydrant_ledger.api.middleware.context import REQUEST_ID_HEADER, RequestContextMiddleware

__all__ = ["REQUEST_ID_HEADER", "RequestContextMiddleware"]
