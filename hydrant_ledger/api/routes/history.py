"""History ledger endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path

from hydrant_ledger.api.dependencies import HydrantServiceDep
from hydrant_ledger.api.exceptions import HistoryEntryNotFoundError
from hydrant_ledger.hydrants.models import MAX_ID, HistoryDaySummary, HistoryEntry

router = APIRouter(prefix="/history")


@router.get("", response_model=list[HistoryEntry])
async def list_history(service: HydrantServiceDep) -> list[HistoryEntry]:
    """The full ledger, oldest entry first."""
    return await service.list_history()


@router.get("/summary", response_model=list[HistoryDaySummary])
async def history_summary(service: HydrantServiceDep) -> list[HistoryDaySummary]:
    """Number of ledger entries per day."""
    return await service.history_summary()


@router.get("/{entry_id}/lineage", response_model=list[HistoryEntry])
async def get_lineage(
    entry_id: Annotated[int, Path(gt=0, le=MAX_ID, description="History entry identifier")],
    service: HydrantServiceDep,
) -> list[HistoryEntry]:
    """Chain of entries from ``entry_id`` back to its create entry, newest first.

    Works for deleted hydrants too: pass the id of their delete entry.

    Raises:
        HistoryEntryNotFoundError: If no ledger entry has this id
    """
    chain = await service.trace_lineage(entry_id)
    if chain is None:
        raise HistoryEntryNotFoundError(entry_id)
    return chain
