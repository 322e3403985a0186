"""Integration tests for the audit log against a real Postgres database.

They apply the migrations to an isolated schema and write entries through the audit helpers.
They are skipped if `DATABASE_URL` is not configured or the DB is unreachable.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Iterator
from typing import LiteralString, NoReturn, cast

import psycopg
import pytest
from dotenv import load_dotenv
from psycopg import sql

from src.db.audit import LogEntry, insert_log_entry
from src.db.connection import connect_utc, ensure_utc
from src.db.migrate import list_migration_files


def _skip(reason: str) -> NoReturn:
    pytest.skip(reason)


def _require_database_url() -> str:
    load_dotenv(".env")
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        _skip("DATABASE_URL is not set; skipping integration tests")
    return database_url


@pytest.fixture
def prepared_schema() -> Iterator[str]:
    """Create an isolated schema and apply every migration to it."""

    database_url = _require_database_url()
    schema = f"it_{uuid.uuid4().hex}"

    try:
        conn_ctx = connect_utc(database_url)
    except psycopg.OperationalError as exc:
        _skip(f"Postgres is unreachable ({exc}); skipping integration tests")

    with conn_ctx as conn:
        with conn.transaction():
            conn.execute(
                sql.SQL("CREATE SCHEMA {}").format(sql.Identifier(schema)),
                prepare=False,
            )
            conn.execute(
                sql.SQL("SET search_path TO {}").format(sql.Identifier(schema)),
                prepare=False,
            )
            for migration in list_migration_files():
                sql_text = migration.read_text(encoding="utf-8")
                conn.execute(cast(LiteralString, sql_text), prepare=False)

    yield schema

    # noinspection PyBroadException
    try:
        with psycopg.connect(database_url) as conn:
            with conn.transaction():
                conn.execute(
                    sql.SQL("DROP SCHEMA IF EXISTS {} CASCADE").format(sql.Identifier(schema)),
                    prepare=False,
                )
    except Exception:
        # Cleanup best-effort: do not fail test run on teardown.
        pass


@pytest.mark.asyncio
async def test_log_entries_are_appended(prepared_schema: str) -> None:
    database_url = _require_database_url()
    entries = [
        LogEntry.now(user="jdoe", request="delete x for user 1", script="\nBEGIN TRANSACTION;"),
        LogEntry.now(user="jdoe", request="gibberish text", script="/* No match found */"),
    ]

    async with await psycopg.AsyncConnection.connect(database_url) as conn:
        await conn.execute(
            sql.SQL("SET search_path TO {}").format(sql.Identifier(prepared_schema)),
            prepare=False,
        )
        await ensure_utc(conn)

        for entry in entries:
            await insert_log_entry(conn, entry)
        await conn.commit()

        cur = await conn.execute(
            "SELECT username, request, script, logged_at FROM request_logs ORDER BY id"
        )
        rows = await cur.fetchall()

        cur = await conn.execute("SHOW TimeZone")
        tz_row = await cur.fetchone()

    assert [(r[0], r[1], r[2]) for r in rows] == [
        (e.user, e.request, e.script) for e in entries
    ]
    assert rows[0][3] == entries[0].timestamp
    assert tz_row is not None and tz_row[0] == "UTC"
