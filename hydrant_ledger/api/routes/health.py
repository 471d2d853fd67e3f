"""Health check and metrics endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from hydrant_ledger import __version__
from hydrant_ledger.api.dependencies import HydrantServiceDep
from hydrant_ledger.api.models.health import ComponentHealth, HealthResponse
from hydrant_ledger.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(service: HydrantServiceDep) -> HealthResponse:
    """Report whether the hydrant store answers."""
    start = time.perf_counter()
    healthy = await service.store.health_check()
    latency_ms = (time.perf_counter() - start) * 1000

    component = ComponentHealth(
        name="hydrant_store",
        status="healthy" if healthy else "unhealthy",
        latency_ms=latency_ms,
        message=None if healthy else "Store did not answer",
    )

    logger.debug("health_check_completed", status=component.status)

    return HealthResponse(
        status=component.status,
        version=__version__,
        components=[component],
        timestamp=datetime.now(UTC),
    )


async def get_metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
