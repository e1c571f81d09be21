"""
Async database access (raw SQL) using asyncpg.

`Database` owns one connection pool. FastAPI creates it in the app lifespan,
keeps it on `app.state.db` and hands it to route handlers through the
`get_db` dependency (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, TypeVar
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from . import settings

T = TypeVar("T")


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    name = "DATABASE_TEST_URL" if settings.app_env() == "test" else "DATABASE_URL"
    url = settings.env_str(name)
    if not url:
        raise RuntimeError(f"{name} is not set.")
    return _sanitize_database_url(url)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    """
    Thin gateway over an asyncpg pool.

    `timeout` bounds the whole call, waiting for a free pool connection
    included. Each request issues a single statement, so this is also the
    per-request timeout.
    """

    def __init__(self, pool: asyncpg.Pool, *, timeout: float | None = None) -> None:
        self._pool = pool
        self.timeout = timeout if timeout is not None else settings.db_command_timeout_s()

    @classmethod
    async def connect(cls, dsn: str | None = None) -> Database:
        pool = await asyncpg.create_pool(
            dsn=dsn or database_url(),
            min_size=settings.db_pool_min_size(),
            max_size=settings.db_pool_max_size(),
            command_timeout=settings.db_command_timeout_s(),
        )
        return cls(pool)

    async def close(self) -> None:
        await self._pool.close()

    async def _run(self, call: Callable[[asyncpg.Connection], Awaitable[T]]) -> T:
        async def acquire_and_call() -> T:
            async with self._pool.acquire() as con:
                return await call(con)

        return await asyncio.wait_for(acquire_and_call(), timeout=self.timeout)

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self._run(lambda con: con.fetchrow(sql, *args))
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self._run(lambda con: con.fetch(sql, *args))
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return its status tag,
        e.g. "DELETE 1".
        """
        return await self._run(lambda con: con.execute(sql, *args))


def affected_rows(status: str) -> int:
    # "DELETE 3" / "UPDATE 0" / "INSERT 0 1"
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (ValueError, AttributeError):
        return 0


def get_db(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database is not initialized. It is created in the app lifespan.")
    return db
