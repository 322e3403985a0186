"""Append-only audit log of generated scripts.

Each generated (or rejected) request is stored as one `request_logs` row. Writing is best effort:
a failing database must never block or fail script generation. Writes run as background tasks,
and errors are logged and swallowed at this boundary.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from src.db.pool import get_conn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogEntry:
    """One audit record."""

    timestamp: datetime
    user: str
    request: str
    script: str

    @classmethod
    def now(cls, *, user: str, request: str, script: str) -> LogEntry:
        return cls(timestamp=datetime.now(UTC), user=user, request=request, script=script)


async def insert_log_entry(conn: AsyncConnection, entry: LogEntry) -> None:
    """Insert one entry (parameterized; the caller owns the transaction)."""

    async with conn.cursor() as cur:
        await cur.execute(
            "INSERT INTO request_logs (logged_at, username, request, script) VALUES (%s, %s, %s, %s)",
            (entry.timestamp, entry.user, entry.request, entry.script),
        )


class AuditLog:
    """Audit sink backed by an optional connection pool.

    Without a pool the sink is disabled and only records a debug line.
    """

    def __init__(self, pool: AsyncConnectionPool | None = None) -> None:
        self.pool = pool
        self._pending: set[asyncio.Task[bool]] = set()

    @property
    def enabled(self) -> bool:
        return self.pool is not None

    async def open(self) -> None:
        """Start connecting in the background; an unreachable database does not delay startup."""

        if self.pool is not None:
            await self.pool.open(wait=False)

    async def close(self) -> None:
        # Closing first makes writes still waiting for a connection fail fast.
        if self.pool is not None:
            await self.pool.close()
        await self.drain()

    async def write(self, entry: LogEntry) -> bool:
        """Persist `entry`; return whether it was stored."""

        if self.pool is None:
            logger.debug("audit disabled user=%s request=%r", entry.user, entry.request)
            return False

        # noinspection PyBroadException
        try:
            async with get_conn(self.pool) as conn:
                await insert_log_entry(conn, entry)
                await conn.commit()
        except Exception:
            logger.exception("audit log write failed user=%s", entry.user)
            return False
        return True

    def submit(self, entry: LogEntry) -> asyncio.Task[bool]:
        """Schedule `write(entry)` without waiting for it."""

        task = asyncio.get_running_loop().create_task(self.write(entry))
        self._pending.add(task)
        task.add_done_callback(self._collect)
        return task

    def _collect(self, task: asyncio.Task[bool]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning("audit log write cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error("audit log task failed", exc_info=exc)

    async def drain(self) -> None:
        """Wait for every scheduled write to finish."""

        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
