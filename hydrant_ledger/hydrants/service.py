"""Hydrant mutation service.

The only writer of the hydrant table and the history ledger. Every mutation
appends its ledger entry and changes the hydrant row inside one store
transaction, so the row's ``history_entry_id`` always names the entry that
produced its current values.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from hydrant_ledger.hydrants.errors import LineageError
from hydrant_ledger.hydrants.models import (
    HistoryAction,
    HistoryDaySummary,
    HistoryEntry,
    Hydrant,
    HydrantFields,
)
from hydrant_ledger.hydrants.store import HydrantStore
from hydrant_ledger.observability.logging import get_logger
from hydrant_ledger.observability.metrics import (
    MUTATION_LATENCY,
    MUTATIONS,
    OUTCOME_ERROR,
    OUTCOME_NOT_FOUND,
    OUTCOME_SUCCESS,
)

logger = get_logger(__name__)


@contextmanager
def _observe(action: HistoryAction, **context: Any) -> Iterator[None]:
    """Time a mutation and count it as failed if it raises."""
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        MUTATIONS.labels(action=action.value, outcome=OUTCOME_ERROR).inc()
        logger.error(
            "hydrant_mutation_failed",
            action=action.value,
            error=str(e),
            error_type=type(e).__name__,
            **context,
        )
        raise
    finally:
        MUTATION_LATENCY.labels(action=action.value).observe(time.perf_counter() - start)


class HydrantService:
    """Create, update and delete hydrants while keeping the ledger in step.

    Holds no state of its own between calls; everything lives in the store.
    Missing targets are reported by returning None, store failures propagate
    after the transaction has been rolled back.
    """

    def __init__(self, store: HydrantStore) -> None:
        self._store = store

    @property
    def store(self) -> HydrantStore:
        return self._store

    async def list_all(self) -> list[Hydrant]:
        """All live hydrants, most recently created first."""
        return await self._store.list_hydrants()

    async def get(self, hydrant_id: int) -> Hydrant | None:
        """A live hydrant, or None if there is no such hydrant."""
        return await self._store.get_hydrant(hydrant_id)

    async def create(self, fields: HydrantFields) -> Hydrant:
        """Record a new hydrant together with its ``create`` ledger entry."""
        with _observe(HistoryAction.CREATE, name=fields.name):
            async with self._store.transaction() as tx:
                entry = await tx.append_history(HistoryAction.CREATE, None, fields)
                hydrant = await tx.insert_hydrant(entry.id, fields)

        MUTATIONS.labels(action=HistoryAction.CREATE.value, outcome=OUTCOME_SUCCESS).inc()
        logger.info(
            "hydrant_created",
            hydrant_id=hydrant.id,
            history_entry_id=hydrant.history_entry_id,
        )
        return hydrant

    async def update(self, hydrant_id: int, fields: HydrantFields) -> Hydrant | None:
        """Replace a hydrant's fields and link a new ``update`` entry to its lineage.

        Returns:
            The updated hydrant, or None if it does not exist (nothing is written)
        """
        with _observe(HistoryAction.UPDATE, hydrant_id=hydrant_id):
            async with self._store.transaction() as tx:
                current = await tx.lock_hydrant(hydrant_id)
                if current is None:
                    hydrant = None
                else:
                    entry = await tx.append_history(
                        HistoryAction.UPDATE, current.history_entry_id, fields
                    )
                    hydrant = await tx.replace_hydrant(hydrant_id, entry.id, fields)

        if hydrant is None:
            MUTATIONS.labels(action=HistoryAction.UPDATE.value, outcome=OUTCOME_NOT_FOUND).inc()
            logger.info("hydrant_update_not_found", hydrant_id=hydrant_id)
            return None

        MUTATIONS.labels(action=HistoryAction.UPDATE.value, outcome=OUTCOME_SUCCESS).inc()
        logger.info(
            "hydrant_updated",
            hydrant_id=hydrant_id,
            previous_entry_id=current.history_entry_id,
            history_entry_id=hydrant.history_entry_id,
        )
        return hydrant

    async def delete(self, hydrant_id: int) -> HistoryEntry | None:
        """Remove a hydrant, closing its lineage with a ``delete`` entry.

        Returns:
            The terminal ledger entry, or None if the hydrant does not exist
            (nothing is written)
        """
        with _observe(HistoryAction.DELETE, hydrant_id=hydrant_id):
            async with self._store.transaction() as tx:
                current = await tx.lock_hydrant(hydrant_id)
                if current is None:
                    entry = None
                else:
                    entry = await tx.append_history(
                        HistoryAction.DELETE, current.history_entry_id, None
                    )
                    await tx.remove_hydrant(hydrant_id)

        if entry is None:
            MUTATIONS.labels(action=HistoryAction.DELETE.value, outcome=OUTCOME_NOT_FOUND).inc()
            logger.info("hydrant_delete_not_found", hydrant_id=hydrant_id)
            return None

        MUTATIONS.labels(action=HistoryAction.DELETE.value, outcome=OUTCOME_SUCCESS).inc()
        logger.info("hydrant_deleted", hydrant_id=hydrant_id, history_entry_id=entry.id)
        return entry

    async def list_history(self) -> list[HistoryEntry]:
        """The whole ledger, oldest entry first."""
        return await self._store.list_history()

    async def history_summary(self) -> list[HistoryDaySummary]:
        """Ledger entry counts per day."""
        return await self._store.history_summary()

    async def trace_lineage(self, entry_id: int) -> list[HistoryEntry] | None:
        """Follow ``previous_entry_id`` links from ``entry_id`` back to its create entry.

        Returns:
            The chain newest first, or None if ``entry_id`` does not exist

        Raises:
            LineageError: If a link is missing, the chain loops, or it does
                not end at a create entry
        """
        entry = await self._store.get_history_entry(entry_id)
        if entry is None:
            return None

        chain = [entry]
        seen = {entry.id}
        while entry.previous_entry_id is not None:
            if entry.action is HistoryAction.CREATE:
                raise LineageError(f"Create entry {entry.id} has a previous entry", entry_id)
            previous = await self._store.get_history_entry(entry.previous_entry_id)
            if previous is None:
                raise LineageError(
                    f"Entry {entry.id} points at missing entry {entry.previous_entry_id}",
                    entry_id,
                )
            if previous.id in seen:
                raise LineageError(f"Lineage loops at entry {previous.id}", entry_id)
            if previous.action is HistoryAction.DELETE:
                raise LineageError(f"Entry {entry.id} follows delete entry {previous.id}", entry_id)
            chain.append(previous)
            seen.add(previous.id)
            entry = previous

        if not entry.is_root:
            raise LineageError(f"Lineage ends at {entry.action.value} entry {entry.id}", entry_id)

        return chain

    async def hydrant_history(self, hydrant_id: int) -> list[HistoryEntry] | None:
        """Lineage of a live hydrant, newest first; None if it does not exist."""
        hydrant = await self._store.get_hydrant(hydrant_id)
        if hydrant is None:
            return None

        chain = await self.trace_lineage(hydrant.history_entry_id)
        if chain is None:
            raise LineageError(
                f"Hydrant {hydrant_id} points at missing entry {hydrant.history_entry_id}",
                hydrant.history_entry_id,
            )
        return chain
