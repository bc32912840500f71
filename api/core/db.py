"""
Async database access helpers (raw SQL) using asyncpg.

`Database` wraps one connection pool. The application creates it in the
lifespan hook (see `api/main.py`) and hands it to route handlers through
`get_database`, so nothing here is a process-wide global.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

from typing import Any

import asyncpg
from fastapi import Request

from . import config


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self._pool.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self._pool.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return its status tag.
        """
        return await self._pool.execute(sql, *args)

    async def close(self) -> None:
        await self._pool.close()


async def connect(dsn: str | None = None) -> Database:
    pool = await asyncpg.create_pool(
        dsn=dsn or config.database_url(),
        min_size=config.pool_min_size(),
        max_size=config.pool_max_size(),
        command_timeout=config.command_timeout(),
    )
    return Database(pool)


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialized. It is created on application startup.")
    return database
