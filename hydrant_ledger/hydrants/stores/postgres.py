"""PostgreSQL implementation of HydrantStore.

Uses asyncpg through the shared PostgresPool. Column names follow the
persisted layout (``hydrant`` holds the name, ``history_id`` and
``previous_event_id`` hold the ledger links).
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from hydrant_ledger.db.errors import StoreError
from hydrant_ledger.db.pool import DRIVER_ERRORS, PostgresPool, translate_error
from hydrant_ledger.hydrants.models import (
    HistoryAction,
    HistoryDaySummary,
    HistoryEntry,
    Hydrant,
    HydrantFields,
)
from hydrant_ledger.hydrants.store import HydrantStore, HydrantTransaction
from hydrant_ledger.observability.logging import get_logger

logger = get_logger(__name__)

HYDRANT_COLUMNS = "id, history_id, hydrant, location, inspection_date, defects, checked_by"
HISTORY_COLUMNS = (
    "id, action, previous_event_id, hydrant, location, "
    "inspection_date, defects, checked_by, created_at"
)


def _row_to_hydrant(row: asyncpg.Record) -> Hydrant:
    return Hydrant(
        id=row["id"],
        history_entry_id=row["history_id"],
        name=row["hydrant"],
        location=row["location"],
        inspection_date=row["inspection_date"],
        defects=row["defects"],
        checked_by=row["checked_by"],
    )


def _row_to_history_entry(row: asyncpg.Record) -> HistoryEntry:
    return HistoryEntry(
        id=row["id"],
        action=HistoryAction(row["action"]),
        previous_entry_id=row["previous_event_id"],
        name=row["hydrant"],
        location=row["location"],
        inspection_date=row["inspection_date"],
        defects=row["defects"],
        checked_by=row["checked_by"],
        created_at=row["created_at"],
    )


class PostgresTransaction(HydrantTransaction):
    """Runs statements on the connection of one open transaction."""

    def __init__(self, conn: asyncpg.Connection) -> None:
        self._conn = conn

    async def lock_hydrant(self, hydrant_id: int) -> Hydrant | None:
        row = await self._conn.fetchrow(
            f"""
            SELECT {HYDRANT_COLUMNS}
            FROM hydrants
            WHERE id = $1
            FOR UPDATE
            """,  # noqa: S608
            hydrant_id,
        )
        return _row_to_hydrant(row) if row else None

    async def append_history(
        self,
        action: HistoryAction,
        previous_entry_id: int | None,
        fields: HydrantFields | None,
    ) -> HistoryEntry:
        row = await self._conn.fetchrow(
            f"""
            INSERT INTO history (
                action, previous_event_id, hydrant, location,
                inspection_date, defects, checked_by
            ) VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING {HISTORY_COLUMNS}
            """,  # noqa: S608
            action.value,
            previous_entry_id,
            fields.name if fields else None,
            fields.location if fields else None,
            fields.inspection_date if fields else None,
            fields.defects if fields else None,
            fields.checked_by if fields else None,
        )
        return _row_to_history_entry(row)

    async def insert_hydrant(self, history_entry_id: int, fields: HydrantFields) -> Hydrant:
        row = await self._conn.fetchrow(
            f"""
            INSERT INTO hydrants (
                history_id, hydrant, location, inspection_date, defects, checked_by
            ) VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {HYDRANT_COLUMNS}
            """,  # noqa: S608
            history_entry_id,
            fields.name,
            fields.location,
            fields.inspection_date,
            fields.defects,
            fields.checked_by,
        )
        return _row_to_hydrant(row)

    async def replace_hydrant(
        self, hydrant_id: int, history_entry_id: int, fields: HydrantFields
    ) -> Hydrant:
        row = await self._conn.fetchrow(
            f"""
            UPDATE hydrants
            SET history_id = $2, hydrant = $3, location = $4,
                inspection_date = $5, defects = $6, checked_by = $7
            WHERE id = $1
            RETURNING {HYDRANT_COLUMNS}
            """,  # noqa: S608
            hydrant_id,
            history_entry_id,
            fields.name,
            fields.location,
            fields.inspection_date,
            fields.defects,
            fields.checked_by,
        )
        return _row_to_hydrant(row)

    async def remove_hydrant(self, hydrant_id: int) -> None:
        await self._conn.execute("DELETE FROM hydrants WHERE id = $1", hydrant_id)


class PostgresHydrantStore(HydrantStore):
    """PostgreSQL implementation of HydrantStore.

    Ledger rows are append-only; the schema's trigger rejects any UPDATE or
    DELETE on the history table.
    """

    def __init__(self, pool: PostgresPool) -> None:
        """Initialize with connection pool.

        Args:
            pool: PostgreSQL connection pool
        """
        self._pool = pool

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[PostgresTransaction]:
        async with self._pool.transaction() as conn:
            yield PostgresTransaction(conn)

    async def list_hydrants(self) -> list[Hydrant]:
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    f"SELECT {HYDRANT_COLUMNS} FROM hydrants ORDER BY id DESC"  # noqa: S608
                )
                return [_row_to_hydrant(row) for row in rows]
        except (StoreError, *DRIVER_ERRORS) as e:
            logger.error("postgres_list_hydrants_error", error=str(e))
            raise translate_error(e, "Failed to list hydrants") from e

    async def get_hydrant(self, hydrant_id: int) -> Hydrant | None:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {HYDRANT_COLUMNS} FROM hydrants WHERE id = $1",  # noqa: S608
                    hydrant_id,
                )
                return _row_to_hydrant(row) if row else None
        except (StoreError, *DRIVER_ERRORS) as e:
            logger.error("postgres_get_hydrant_error", hydrant_id=hydrant_id, error=str(e))
            raise translate_error(e, "Failed to get hydrant") from e

    async def list_history(self) -> list[HistoryEntry]:
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    f"SELECT {HISTORY_COLUMNS} FROM history ORDER BY id"  # noqa: S608
                )
                return [_row_to_history_entry(row) for row in rows]
        except (StoreError, *DRIVER_ERRORS) as e:
            logger.error("postgres_list_history_error", error=str(e))
            raise translate_error(e, "Failed to list history") from e

    async def get_history_entry(self, entry_id: int) -> HistoryEntry | None:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {HISTORY_COLUMNS} FROM history WHERE id = $1",  # noqa: S608
                    entry_id,
                )
                return _row_to_history_entry(row) if row else None
        except (StoreError, *DRIVER_ERRORS) as e:
            logger.error("postgres_get_history_entry_error", entry_id=entry_id, error=str(e))
            raise translate_error(e, "Failed to get history entry") from e

    async def history_summary(self) -> list[HistoryDaySummary]:
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    """
                    SELECT (created_at AT TIME ZONE 'UTC')::date AS day,
                           COUNT(*) AS total_changes
                    FROM history
                    GROUP BY day
                    ORDER BY day ASC
                    """
                )
                return [
                    HistoryDaySummary(date=row["day"], total_changes=row["total_changes"])
                    for row in rows
                ]
        except (StoreError, *DRIVER_ERRORS) as e:
            logger.error("postgres_history_summary_error", error=str(e))
            raise translate_error(e, "Failed to summarize history") from e

    async def health_check(self) -> bool:
        return await self._pool.health_check()
