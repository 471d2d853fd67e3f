"""Wire the hydrant service to the configured store.

The store client is created here, once per process, and handed to the
service; its lifetime is the lifetime of the ``open_service`` block.

Example usage:

    from hydrant_ledger.bootstrap import open_service
    from hydrant_ledger.config import get_settings

    async with open_service(get_settings().database) as service:
        hydrants = await service.list_all()
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from hydrant_ledger.config.models.storage import DatabaseConfig
from hydrant_ledger.db.pool import PostgresPool
from hydrant_ledger.db.schema import ensure_schema
from hydrant_ledger.hydrants.service import HydrantService
from hydrant_ledger.hydrants.stores.inmemory import InMemoryHydrantStore
from hydrant_ledger.hydrants.stores.postgres import PostgresHydrantStore
from hydrant_ledger.observability.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def open_service(config: DatabaseConfig) -> AsyncIterator[HydrantService]:
    """Yield a HydrantService backed by the configured store.

    For the postgres backend the pool is connected (and the schema created
    when ``create_schema`` is set) before yielding, and closed afterwards
    whatever happens inside the block.
    """
    if config.backend == "inmemory":
        logger.info("hydrant_store_initialized", store_type="inmemory")
        yield HydrantService(InMemoryHydrantStore())
        return

    pool = PostgresPool.from_config(config)
    await pool.connect()
    try:
        if config.create_schema:
            await ensure_schema(pool)
        logger.info("hydrant_store_initialized", store_type="postgres", host=config.host)
        yield HydrantService(PostgresHydrantStore(pool))
    finally:
        await pool.close()
