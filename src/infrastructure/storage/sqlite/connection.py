"""
Async SQLite connection pool with aiosqlite.

All stores share one process-wide pool. Writes that must land together
(an order header and its lines) go through ``get_transaction``, which takes
the database write lock up front with ``BEGIN IMMEDIATE``.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """
    Up to ``pool_size`` aiosqlite connections, opened on first use.

    Idle connections wait in a LIFO stack so a hot connection is reused
    before a cold one.
    """

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.LifoQueue[aiosqlite.Connection] = asyncio.LifoQueue()
        self._slots = asyncio.Semaphore(pool_size)
        self._opened: list[aiosqlite.Connection] = []
        self._closed = False

    @property
    def open_connections(self) -> int:
        return len(self._opened)

    async def initialize(self) -> None:
        """Open one connection eagerly so a bad path fails at startup."""
        async with self.acquire():
            pass
        logger.info(
            "connection_pool_initialized",
            db_path=str(self.db_path),
            pool_size=self.pool_size,
        )

    async def _open(self) -> aiosqlite.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(self.db_path)
        for pragma in PRAGMAS:
            await conn.execute(pragma)
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        self._opened.append(conn)
        logger.debug("connection_opened", open_connections=len(self._opened))
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection for the duration of the block.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        if self._closed:
            raise RuntimeError("connection pool is closed")

        async with self._slots:
            conn = self._idle.get_nowait() if not self._idle.empty() else await self._open()
            try:
                yield conn
            finally:
                # A borrower may leave work uncommitted; never hand that to the next one.
                if conn.in_transaction:
                    await conn.rollback()
                self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection inside BEGIN IMMEDIATE; commit on success, else roll back."""
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        self._closed = True
        while self._opened:
            await self._opened.pop().close()
        self._idle = asyncio.LifoQueue()
        logger.info("connection_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or create the global connection pool from storage settings."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    """Close the global connection pool."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
