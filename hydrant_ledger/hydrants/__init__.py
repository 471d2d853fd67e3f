"""Hydrant records and their history ledger."""

from hydrant_ledger.hydrants.errors import LineageError
from hydrant_ledger.hydrants.models import (
    HistoryAction,
    HistoryDaySummary,
    HistoryEntry,
    Hydrant,
    HydrantFields,
)
from hydrant_ledger.hydrants.service import HydrantService
from hydrant_ledger.hydrants.store import HydrantStore, HydrantTransaction

__all__ = [
    "HistoryAction",
    "HistoryDaySummary",
    "HistoryEntry",
    "Hydrant",
    "HydrantFields",
    "HydrantService",
    "HydrantStore",
    "HydrantTransaction",
    "LineageError",
]
