"""API route registration."""

from fastapi import APIRouter, FastAPI

from hydrant_ledger.config.settings import Settings
from hydrant_ledger.observability.logging import get_logger

logger = get_logger(__name__)


def create_api_router() -> APIRouter:
    """Router holding the hydrant and history endpoints under /api."""
    from hydrant_ledger.api.routes.history import router as history_router
    from hydrant_ledger.api.routes.hydrants import router as hydrants_router

    router = APIRouter(prefix="/api")
    router.include_router(hydrants_router, tags=["Hydrants"])
    router.include_router(history_router, tags=["History"])
    return router


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Settings deciding whether metrics are exposed
    """
    from hydrant_ledger.api.routes.health import get_metrics
    from hydrant_ledger.api.routes.health import router as health_router

    app.include_router(create_api_router())
    app.include_router(health_router, tags=["Health"])

    metrics = settings.observability.metrics
    if metrics.enabled:
        app.add_api_route(metrics.path, get_metrics, methods=["GET"], tags=["Health"])

    logger.info("routes_registered", metrics_enabled=metrics.enabled)
