"""Tests for the in-memory hydrant store."""

from datetime import UTC, date, datetime

import pytest

from hydrant_ledger.db.errors import ConflictError, ConnectionError
from hydrant_ledger.hydrants.models import HistoryAction, HistoryEntry, HydrantFields
from hydrant_ledger.hydrants.stores.inmemory import InMemoryHydrantStore


class TestTransaction:
    """Commit and rollback behaviour."""

    async def test_commit_makes_writes_visible(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        async with store.transaction() as tx:
            entry = await tx.append_history(HistoryAction.CREATE, None, minimal_fields)
            hydrant = await tx.insert_hydrant(entry.id, minimal_fields)
            assert await store.get_hydrant(hydrant.id) is None

        assert await store.get_hydrant(hydrant.id) == hydrant
        assert await store.get_history_entry(entry.id) == entry

    async def test_exception_discards_writes(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        with pytest.raises(RuntimeError):
            async with store.transaction() as tx:
                entry = await tx.append_history(HistoryAction.CREATE, None, minimal_fields)
                await tx.insert_hydrant(entry.id, minimal_fields)
                raise RuntimeError("boom")

        assert await store.list_hydrants() == []
        assert await store.list_history() == []

    async def test_ids_not_reused_after_rollback(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        with pytest.raises(RuntimeError):
            async with store.transaction() as tx:
                await tx.append_history(HistoryAction.CREATE, None, minimal_fields)
                raise RuntimeError("boom")

        async with store.transaction() as tx:
            entry = await tx.append_history(HistoryAction.CREATE, None, minimal_fields)

        assert entry.id == 2

    async def test_injected_failure_fires_once(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        store.inject_failure("append_history")

        with pytest.raises(ConnectionError, match="append_history"):
            async with store.transaction() as tx:
                await tx.append_history(HistoryAction.CREATE, None, minimal_fields)

        async with store.transaction() as tx:
            entry = await tx.append_history(HistoryAction.CREATE, None, minimal_fields)
        assert entry.action is HistoryAction.CREATE

    async def test_injected_custom_error(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        store.inject_failure("lock_hydrant", ValueError("custom"))
        with pytest.raises(ValueError, match="custom"):
            async with store.transaction() as tx:
                await tx.lock_hydrant(1)


class TestLedgerConstraints:
    """The store refuses writes that would break a lineage."""

    async def _root(self, store: InMemoryHydrantStore, fields: HydrantFields) -> HistoryEntry:
        async with store.transaction() as tx:
            return await tx.append_history(HistoryAction.CREATE, None, fields)

    async def test_create_with_previous_rejected(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        root = await self._root(store, minimal_fields)
        with pytest.raises(ConflictError):
            async with store.transaction() as tx:
                await tx.append_history(HistoryAction.CREATE, root.id, minimal_fields)

    async def test_update_without_previous_rejected(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        with pytest.raises(ConflictError):
            async with store.transaction() as tx:
                await tx.append_history(HistoryAction.UPDATE, None, minimal_fields)

    async def test_previous_must_exist(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        with pytest.raises(ConflictError, match="does not exist"):
            async with store.transaction() as tx:
                await tx.append_history(HistoryAction.UPDATE, 42, minimal_fields)

    async def test_entry_superseded_only_once(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        root = await self._root(store, minimal_fields)
        async with store.transaction() as tx:
            await tx.append_history(HistoryAction.UPDATE, root.id, minimal_fields)

        with pytest.raises(ConflictError, match="already superseded"):
            async with store.transaction() as tx:
                await tx.append_history(HistoryAction.UPDATE, root.id, minimal_fields)

        assert len(await store.list_history()) == 2

    async def test_hydrant_must_reference_existing_entry(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        with pytest.raises(ConflictError):
            async with store.transaction() as tx:
                await tx.insert_hydrant(99, minimal_fields)

    async def test_delete_entry_has_empty_snapshot(
        self, store: InMemoryHydrantStore, hydrant_fields: HydrantFields
    ) -> None:
        root = await self._root(store, hydrant_fields)
        async with store.transaction() as tx:
            entry = await tx.append_history(HistoryAction.DELETE, root.id, None)

        assert entry.name is None
        assert entry.location is None
        assert entry.previous_entry_id == root.id


class TestQueries:
    """Read-side ordering and aggregation."""

    async def test_list_hydrants_newest_first(self, store: InMemoryHydrantStore) -> None:
        for name in ("A", "B", "C"):
            fields = HydrantFields(name=name, location="L")
            async with store.transaction() as tx:
                entry = await tx.append_history(HistoryAction.CREATE, None, fields)
                await tx.insert_hydrant(entry.id, fields)

        assert [h.name for h in await store.list_hydrants()] == ["C", "B", "A"]

    async def test_list_history_in_storage_order(
        self, store: InMemoryHydrantStore, minimal_fields: HydrantFields
    ) -> None:
        async with store.transaction() as tx:
            root = await tx.append_history(HistoryAction.CREATE, None, minimal_fields)
            await tx.append_history(HistoryAction.UPDATE, root.id, minimal_fields)

        assert [e.id for e in await store.list_history()] == [1, 2]

    async def test_history_summary_groups_by_utc_day(self, store: InMemoryHydrantStore) -> None:
        def entry(entry_id: int, created_at: datetime) -> HistoryEntry:
            return HistoryEntry(
                id=entry_id,
                action=HistoryAction.CREATE,
                name="H",
                location="L",
                created_at=created_at,
            )

        store._history = {
            1: entry(1, datetime(2024, 5, 14, 8, 0, tzinfo=UTC)),
            2: entry(2, datetime(2024, 5, 14, 23, 59, tzinfo=UTC)),
            3: entry(3, datetime(2024, 5, 13, 10, 0, tzinfo=UTC)),
        }

        summary = await store.history_summary()

        assert [(s.date, s.total_changes) for s in summary] == [
            (date(2024, 5, 13), 1),
            (date(2024, 5, 14), 2),
        ]

    async def test_health_check(self, store: InMemoryHydrantStore) -> None:
        assert await store.health_check() is True
