"""HydrantStore implementations."""

from hydrant_ledger.hydrants.stores.inmemory import InMemoryHydrantStore
from hydrant_ledger.hydrants.stores.postgres import PostgresHydrantStore

__all__ = ["InMemoryHydrantStore", "PostgresHydrantStore"]
