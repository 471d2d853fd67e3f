"""In-memory implementation of HydrantStore."""

import asyncio
from collections import Counter
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from hydrant_ledger.db.errors import ConflictError, ConnectionError
from hydrant_ledger.hydrants.models import (
    HistoryAction,
    HistoryDaySummary,
    HistoryEntry,
    Hydrant,
    HydrantFields,
)
from hydrant_ledger.hydrants.store import HydrantStore, HydrantTransaction


class InMemoryTransaction(HydrantTransaction):
    """Stages writes against copies of the store's tables."""

    def __init__(self, store: "InMemoryHydrantStore") -> None:
        self._store = store
        self.hydrants: dict[int, Hydrant] = dict(store._hydrants)
        self.history: dict[int, HistoryEntry] = dict(store._history)

    def _maybe_fail(self, operation: str) -> None:
        error = self._store._failures.pop(operation, None)
        if error is not None:
            raise error

    async def lock_hydrant(self, hydrant_id: int) -> Hydrant | None:
        self._maybe_fail("lock_hydrant")
        return self.hydrants.get(hydrant_id)

    async def append_history(
        self,
        action: HistoryAction,
        previous_entry_id: int | None,
        fields: HydrantFields | None,
    ) -> HistoryEntry:
        self._maybe_fail("append_history")
        if (action is HistoryAction.CREATE) != (previous_entry_id is None):
            raise ConflictError(
                f"{action.value} entry has invalid previous entry {previous_entry_id}"
            )
        if previous_entry_id is not None:
            if previous_entry_id not in self.history:
                raise ConflictError(f"History entry {previous_entry_id} does not exist")
            if any(e.previous_entry_id == previous_entry_id for e in self.history.values()):
                raise ConflictError(f"History entry {previous_entry_id} is already superseded")

        snapshot = fields.model_dump() if fields is not None else {}
        entry = HistoryEntry(
            id=self._store._next_id("history"),
            action=action,
            previous_entry_id=previous_entry_id,
            created_at=datetime.now(UTC),
            **snapshot,
        )
        self.history[entry.id] = entry
        return entry

    async def insert_hydrant(self, history_entry_id: int, fields: HydrantFields) -> Hydrant:
        self._maybe_fail("insert_hydrant")
        self._check_entry(history_entry_id)
        hydrant = Hydrant(
            id=self._store._next_id("hydrants"),
            history_entry_id=history_entry_id,
            **fields.model_dump(),
        )
        self.hydrants[hydrant.id] = hydrant
        return hydrant

    async def replace_hydrant(
        self, hydrant_id: int, history_entry_id: int, fields: HydrantFields
    ) -> Hydrant:
        self._maybe_fail("replace_hydrant")
        self._check_entry(history_entry_id)
        hydrant = Hydrant(id=hydrant_id, history_entry_id=history_entry_id, **fields.model_dump())
        self.hydrants[hydrant_id] = hydrant
        return hydrant

    async def remove_hydrant(self, hydrant_id: int) -> None:
        self._maybe_fail("remove_hydrant")
        self.hydrants.pop(hydrant_id, None)

    def _check_entry(self, entry_id: int) -> None:
        if entry_id not in self.history:
            raise ConflictError(f"History entry {entry_id} does not exist")


class InMemoryHydrantStore(HydrantStore):
    """In-memory implementation of HydrantStore for testing and development.

    Transactions are serialized by a lock and stage their writes on copies
    of the tables; the copies replace the live tables only on commit. Ids
    come from counters that never go back, so a rolled-back id is not
    handed out again. Not suitable for production use.
    """

    def __init__(self) -> None:
        self._hydrants: dict[int, Hydrant] = {}
        self._history: dict[int, HistoryEntry] = {}
        self._sequences: Counter[str] = Counter()
        self._lock = asyncio.Lock()
        self._failures: dict[str, Exception] = {}

    def _next_id(self, table: str) -> int:
        self._sequences[table] += 1
        return self._sequences[table]

    def inject_failure(self, operation: str, error: Exception | None = None) -> None:
        """Make the next call to a transaction operation raise.

        Args:
            operation: Name of a HydrantTransaction method, e.g. "insert_hydrant"
            error: Exception to raise; a ConnectionError by default
        """
        self._failures[operation] = error or ConnectionError(f"Injected failure in {operation}")

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[InMemoryTransaction]:
        async with self._lock:
            tx = InMemoryTransaction(self)
            yield tx
            self._hydrants = tx.hydrants
            self._history = tx.history

    async def list_hydrants(self) -> list[Hydrant]:
        return sorted(self._hydrants.values(), key=lambda h: h.id, reverse=True)

    async def get_hydrant(self, hydrant_id: int) -> Hydrant | None:
        return self._hydrants.get(hydrant_id)

    async def list_history(self) -> list[HistoryEntry]:
        return sorted(self._history.values(), key=lambda e: e.id)

    async def get_history_entry(self, entry_id: int) -> HistoryEntry | None:
        return self._history.get(entry_id)

    async def history_summary(self) -> list[HistoryDaySummary]:
        per_day = Counter(entry.created_at.astimezone(UTC).date() for entry in self._history.values())
        return [
            HistoryDaySummary(date=day, total_changes=count)
            for day, count in sorted(per_day.items())
        ]

    async def health_check(self) -> bool:
        return True
