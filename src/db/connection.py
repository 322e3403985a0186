"""Postgres connection helpers for the audit log.

Audit timestamps are stored as `TIMESTAMPTZ`; every session (sync for migrations, async for the
request path) is locked to UTC so stored and displayed times agree.
"""

from __future__ import annotations

import os

import psycopg
from psycopg import AsyncConnection

UTC_STATEMENT = "SET TIME ZONE 'UTC'"


def require_database_url() -> str:
    """Read `DATABASE_URL` from the environment or raise a clear error."""

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise RuntimeError("DATABASE_URL is required (set it in .env or environment)")
    return database_url


def connect_utc(database_url: str) -> psycopg.Connection:
    """Open a sync connection (used by the migrations CLI) with a UTC session."""

    conn = psycopg.connect(database_url)
    conn.execute(UTC_STATEMENT, prepare=False)
    return conn


async def ensure_utc(conn: AsyncConnection) -> None:
    """Pool `configure` hook: lock an async session to UTC."""

    async with conn.cursor() as cur:
        await cur.execute(UTC_STATEMENT, prepare=False)
    # `SET` opens a transaction when autocommit is off; commit so the pool doesn't see INTRANS.
    await conn.commit()
