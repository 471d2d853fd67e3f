"""Hydrant endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path

from hydrant_ledger.api.dependencies import HydrantServiceDep
from hydrant_ledger.api.exceptions import HydrantNotFoundError
from hydrant_ledger.api.models.hydrants import HydrantDeleted
from hydrant_ledger.hydrants.models import MAX_ID, HistoryEntry, Hydrant, HydrantFields
from hydrant_ledger.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/hydrants")

HydrantId = Annotated[int, Path(gt=0, le=MAX_ID, description="Hydrant identifier")]


@router.get("", response_model=list[Hydrant])
async def list_hydrants(service: HydrantServiceDep) -> list[Hydrant]:
    """List live hydrants, most recently created first."""
    return await service.list_all()


@router.post("", response_model=Hydrant, status_code=201)
async def create_hydrant(fields: HydrantFields, service: HydrantServiceDep) -> Hydrant:
    """Create a hydrant and its first history entry."""
    logger.debug("create_hydrant_request", name=fields.name)
    return await service.create(fields)


@router.get("/{hydrant_id}", response_model=Hydrant)
async def get_hydrant(hydrant_id: HydrantId, service: HydrantServiceDep) -> Hydrant:
    """Get a live hydrant by id.

    Raises:
        HydrantNotFoundError: If no live hydrant has this id
    """
    hydrant = await service.get(hydrant_id)
    if hydrant is None:
        raise HydrantNotFoundError(hydrant_id)
    return hydrant


@router.put("/{hydrant_id}", response_model=Hydrant)
async def update_hydrant(
    hydrant_id: HydrantId,
    fields: HydrantFields,
    service: HydrantServiceDep,
) -> Hydrant:
    """Replace all fields of a hydrant.

    The body must carry the full field set; omitted optional fields are
    cleared.

    Raises:
        HydrantNotFoundError: If no live hydrant has this id
    """
    logger.debug("update_hydrant_request", hydrant_id=hydrant_id)
    hydrant = await service.update(hydrant_id, fields)
    if hydrant is None:
        raise HydrantNotFoundError(hydrant_id)
    return hydrant


@router.delete("/{hydrant_id}", response_model=HydrantDeleted)
async def delete_hydrant(hydrant_id: HydrantId, service: HydrantServiceDep) -> HydrantDeleted:
    """Delete a hydrant. Its history stays in the ledger.

    Raises:
        HydrantNotFoundError: If no live hydrant has this id
    """
    logger.debug("delete_hydrant_request", hydrant_id=hydrant_id)
    entry = await service.delete(hydrant_id)
    if entry is None:
        raise HydrantNotFoundError(hydrant_id)
    return HydrantDeleted(id=hydrant_id)


@router.get("/{hydrant_id}/history", response_model=list[HistoryEntry])
async def get_hydrant_history(
    hydrant_id: HydrantId, service: HydrantServiceDep
) -> list[HistoryEntry]:
    """Ledger entries of a live hydrant, newest first, back to its creation.

    Raises:
        HydrantNotFoundError: If no live hydrant has this id
    """
    chain = await service.hydrant_history(hydrant_id)
    if chain is None:
        raise HydrantNotFoundError(hydrant_id)
    return chain
