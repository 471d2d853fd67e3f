"""HydrantStore abstract interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from hydrant_ledger.hydrants.models import (
    HistoryAction,
    HistoryDaySummary,
    HistoryEntry,
    Hydrant,
    HydrantFields,
)


class HydrantTransaction(ABC):
    """Statements available inside one store transaction.

    An instance is only valid inside the ``HydrantStore.transaction()`` block
    that produced it. Nothing written through it is visible to other callers
    until the block exits normally.
    """

    @abstractmethod
    async def lock_hydrant(self, hydrant_id: int) -> Hydrant | None:
        """Read a hydrant and hold it against concurrent writers."""
        pass

    @abstractmethod
    async def append_history(
        self,
        action: HistoryAction,
        previous_entry_id: int | None,
        fields: HydrantFields | None,
    ) -> HistoryEntry:
        """Append a ledger entry and return it with its assigned id."""
        pass

    @abstractmethod
    async def insert_hydrant(self, history_entry_id: int, fields: HydrantFields) -> Hydrant:
        """Insert a hydrant row pointing at ``history_entry_id``."""
        pass

    @abstractmethod
    async def replace_hydrant(
        self, hydrant_id: int, history_entry_id: int, fields: HydrantFields
    ) -> Hydrant:
        """Overwrite a hydrant's fields and current ledger entry."""
        pass

    @abstractmethod
    async def remove_hydrant(self, hydrant_id: int) -> None:
        """Delete a hydrant row."""
        pass


class HydrantStore(ABC):
    """Abstract interface for the hydrant table and the history ledger.

    Reads run on their own; writes go through ``transaction()`` so that a
    hydrant row and its ledger entry are committed together or not at all.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[HydrantTransaction]:
        """Open a unit of work.

        Commits when the block exits normally; on an exception the work is
        rolled back and the exception propagates.
        """
        pass

    @abstractmethod
    async def list_hydrants(self) -> list[Hydrant]:
        """All live hydrants, highest id first."""
        pass

    @abstractmethod
    async def get_hydrant(self, hydrant_id: int) -> Hydrant | None:
        """A live hydrant by id."""
        pass

    @abstractmethod
    async def list_history(self) -> list[HistoryEntry]:
        """The whole ledger in id order."""
        pass

    @abstractmethod
    async def get_history_entry(self, entry_id: int) -> HistoryEntry | None:
        """A ledger entry by id."""
        pass

    @abstractmethod
    async def history_summary(self) -> list[HistoryDaySummary]:
        """Ledger entry counts per UTC day, oldest day first."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the backend is reachable."""
        pass
