"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, route registration and the store lifecycle.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hydrant_ledger import __version__
from hydrant_ledger.api.exceptions import HydrantAPIError
from hydrant_ledger.api.middleware.context import RequestContextMiddleware
from hydrant_ledger.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from hydrant_ledger.api.routes import register_routes
from hydrant_ledger.bootstrap import open_service
from hydrant_ledger.config import get_settings
from hydrant_ledger.config.settings import Settings
from hydrant_ledger.db.errors import StoreError
from hydrant_ledger.hydrants.errors import LineageError
from hydrant_ledger.hydrants.service import HydrantService
from hydrant_ledger.observability.logging import get_logger

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    service: HydrantService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; loaded with ``get_settings`` when omitted
        service: Ready-made service to serve. When omitted, the lifespan
            opens one from ``settings.database`` at startup and closes its
            store at shutdown.

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "hydrant_service", None) is not None:
            yield
            return

        async with open_service(settings.database) as opened:
            app.state.hydrant_service = opened
            logger.info("app_started", backend=settings.database.backend)
            try:
                yield
            finally:
                app.state.hydrant_service = None
                logger.info("app_stopped")

    app = FastAPI(
        title="Hydrant Ledger API",
        description="Fire-hydrant inspection records with an append-only history ledger",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.hydrant_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)
    register_routes(app, settings)

    logger.info(
        "app_created",
        debug=settings.debug,
        cors_origins=settings.api.cors_origins,
    )

    return app


def _error_response(status_code: int, body: ErrorBody) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=body).model_dump(mode="json", exclude_none=True),
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """Map exceptions to ErrorResponse bodies and status codes."""

    @app.exception_handler(HydrantAPIError)
    async def hydrant_api_error_handler(request: Request, exc: HydrantAPIError) -> JSONResponse:
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        return _error_response(exc.status_code, ErrorBody(code=exc.error_code, message=exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Reject malformed input with 400 and one detail per offending field."""
        errors = exc.errors()
        logger.warning("validation_error", error_count=len(errors), path=request.url.path)

        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
            )
            for error in errors
        ]
        return _error_response(
            400,
            ErrorBody(
                code=ErrorCode.INVALID_REQUEST,
                message="Request validation failed",
                details=details,
            ),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(
            "store_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(
            500,
            ErrorBody(code=ErrorCode.STORE_ERROR, message="The database operation failed"),
        )

    @app.exception_handler(LineageError)
    async def lineage_error_handler(request: Request, exc: LineageError) -> JSONResponse:
        logger.error("lineage_broken", error=str(exc), entry_id=exc.entry_id, path=request.url.path)
        return _error_response(500, ErrorBody(code=ErrorCode.LINEAGE_BROKEN, message=str(exc)))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(
            500,
            ErrorBody(code=ErrorCode.INTERNAL_ERROR, message="An unexpected error occurred"),
        )
