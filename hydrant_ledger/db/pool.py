"""PostgreSQL connection pool management.

The pool is constructed explicitly at startup and handed to the stores that
need it; nothing in this module holds a process-wide instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg
import structlog

from hydrant_ledger.config.models.storage import DatabaseConfig
from hydrant_ledger.db.errors import ConflictError, ConnectionError, StoreError, ValidationError

logger = structlog.get_logger(__name__)

# Failures raised by the driver or the socket beneath it
DRIVER_ERRORS = (OSError, asyncpg.PostgresError, asyncpg.InterfaceError)


def translate_error(error: Exception, message: str) -> StoreError:
    """Wrap a driver error in the matching StoreError subclass."""
    if isinstance(error, StoreError):
        return error
    if isinstance(
        error,
        asyncpg.IntegrityConstraintViolationError | asyncpg.exceptions.RaiseError,
    ):
        return ConflictError(f"{message}: {error}", cause=error)
    if isinstance(error, asyncpg.DataError):
        return ValidationError(f"{message}: {error}", cause=error)
    return ConnectionError(f"{message}: {error}", cause=error)


class PostgresPool:
    """Manages an asyncpg connection pool.

    At most ``max_size`` connections are open at once; callers beyond that
    wait in asyncpg's acquire queue rather than opening new connections.

    Usage:
        pool = PostgresPool(dsn="postgresql://...")
        await pool.connect()
        try:
            async with pool.transaction() as conn:
                await conn.execute("INSERT ...")
        finally:
            await pool.close()
    """

    def __init__(
        self,
        dsn: str,
        min_size: int = 1,
        max_size: int = 10,
        max_inactive_connection_lifetime: float = 300.0,
        command_timeout: float = 60.0,
    ) -> None:
        """Initialize pool configuration.

        Args:
            dsn: Database connection string.
            min_size: Minimum number of connections to keep open.
            max_size: Maximum number of connections in the pool.
            max_inactive_connection_lifetime: Close connections idle longer than this (seconds).
            command_timeout: Default timeout for queries (seconds).
        """
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._max_inactive_connection_lifetime = max_inactive_connection_lifetime
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> "PostgresPool":
        """Build an unconnected pool from the database settings."""
        return cls(
            dsn=config.dsn,
            min_size=config.min_pool_size,
            max_size=config.max_pool_size,
            max_inactive_connection_lifetime=config.max_inactive_connection_lifetime,
            command_timeout=config.command_timeout,
        )

    async def connect(self) -> None:
        """Open the connection pool. Does nothing if already open."""
        if self._pool is not None:
            return

        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                max_inactive_connection_lifetime=self._max_inactive_connection_lifetime,
                command_timeout=self._command_timeout,
            )
        except DRIVER_ERRORS as e:
            logger.error("postgres_pool_connection_failed", error=str(e))
            raise ConnectionError(f"Failed to connect to PostgreSQL: {e}", cause=e) from e

        logger.info(
            "postgres_pool_connected",
            min_size=self._min_size,
            max_size=self._max_size,
        )

    async def close(self) -> None:
        """Close the connection pool gracefully."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("postgres_pool_closed")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """Borrow a connection, returning it to the pool on every exit path.

        Driver errors raised while the connection is held are re-raised as
        StoreError subclasses. Auto-connects if not already connected.
        """
        if self._pool is None:
            await self.connect()
        assert self._pool is not None

        try:
            async with self._pool.acquire() as connection:
                yield connection
        except DRIVER_ERRORS as e:
            logger.error("postgres_connection_error", error=str(e))
            raise translate_error(e, "PostgreSQL error") from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection]:
        """Borrow a connection with an open transaction.

        Commits when the block exits normally. On any exception the rollback
        completes before the connection goes back to the pool, and the
        exception is re-raised.
        """
        async with self.acquire() as connection:
            async with connection.transaction():
                yield connection

    async def health_check(self) -> bool:
        """Return True if the pool is connected and answers a trivial query."""
        if self._pool is None:
            return False

        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except DRIVER_ERRORS as e:
            logger.warning("postgres_health_check_failed", error=str(e))
            return False

    @property
    def is_connected(self) -> bool:
        """Check if pool is initialized."""
        return self._pool is not None

    @property
    def size(self) -> int:
        """Current number of open connections."""
        if self._pool is None:
            return 0
        return self._pool.get_size()

    @property
    def free_size(self) -> int:
        """Number of idle connections in the pool."""
        if self._pool is None:
            return 0
        return self._pool.get_idle_size()
