"""Async connection pool used by the audit log."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from src.db.connection import ensure_utc


def create_pool(database_url: str, *, max_size: int = 5, timeout: float = 10.0) -> AsyncConnectionPool:
    """Create a (closed) pool of UTC sessions; open it with `await pool.open()` at startup."""

    return AsyncConnectionPool(
        conninfo=database_url,
        min_size=1,
        max_size=max_size,
        timeout=timeout,
        open=False,
        configure=ensure_utc,
    )


@asynccontextmanager
async def get_conn(pool: AsyncConnectionPool) -> AsyncIterator[AsyncConnection]:
    async with pool.connection() as conn:
        yield conn
