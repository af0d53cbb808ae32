from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import psycopg
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from smartsummary.config import Settings
from smartsummary.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class DatabasePool:
    """Process-wide connection pool, opened at startup and closed on shutdown."""

    _pool: AsyncConnectionPool | None = None

    @classmethod
    async def get_pool(cls, settings: Settings) -> AsyncConnectionPool:
        if cls._pool is None:
            pool = AsyncConnectionPool(
                conninfo=settings.database_url,
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
                open=False,
            )
            # Don't block startup on the database; requests report 500 until it is up.
            await pool.open(wait=False)
            cls._pool = pool
        return cls._pool

    @classmethod
    async def close(cls) -> None:
        if cls._pool is not None:
            await cls._pool.close()
            cls._pool = None


class BaseRepository:
    def __init__(self, pool: AsyncConnectionPool) -> None:
        self.pool = pool

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[psycopg.AsyncConnection]:
        """Borrow a connection; driver and pool faults become StorageUnavailableError."""
        try:
            async with self.pool.connection() as conn:
                yield conn
        except (psycopg.Error, PoolTimeout) as exc:
            logger.error("database error: %s", exc)
            raise StorageUnavailableError(
                "Database unavailable", details=str(exc) or type(exc).__name__
            ) from exc
