"""Dependency injection for API routes.

The service is attached to ``app.state`` by ``create_app``; routes reach it
through ``HydrantServiceDep``, which tests can override.
"""

from typing import Annotated

from fastapi import Depends, Request

from hydrant_ledger.hydrants.service import HydrantService


def get_hydrant_service(request: Request) -> HydrantService:
    """The HydrantService of the running application."""
    service: HydrantService | None = getattr(request.app.state, "hydrant_service", None)
    if service is None:
        raise RuntimeError("Hydrant service is not initialized; is the app lifespan running?")
    return service


HydrantServiceDep = Annotated[HydrantService, Depends(get_hydrant_service)]
