"""
Shared fixtures: an in-memory stand-in for `core.db.Database`.

`FakeDatabase` understands exactly the SQL shapes the property builders emit
and keeps rows and columns in memory, so the repository, reconciler and HTTP
layer can run end to end without Postgres.
"""

from __future__ import annotations

import re
from typing import Any

import asyncpg
import pytest

_CATALOG_TYPES = {
    "VARCHAR": "character varying",
    "TEXT": "text",
    "NUMERIC": "numeric",
    "INTEGER": "integer",
    "BOOLEAN": "boolean",
    "DATE": "date",
    "TIMESTAMP": "timestamp without time zone",
}

_INSERT_RE = re.compile(r"^INSERT INTO (\w+) \((.*)\) VALUES \((.*)\) RETURNING \*$")
_UPDATE_RE = re.compile(r"^UPDATE (\w+) SET (.*) WHERE id = \$(\d+) RETURNING \*$")
_SELECT_RE = re.compile(r"^SELECT \* FROM (\w+)(?: WHERE id = \$1)?$")
_DELETE_RE = re.compile(r"^DELETE FROM (\w+) WHERE id = \$1$")
_CREATE_RE = re.compile(r"^CREATE TABLE (\w+) \((.*)\)$")
_ADD_RE = re.compile(r"^ALTER TABLE (\w+) ADD COLUMN (\w+) (\w+)$")
_RENAME_RE = re.compile(r"^ALTER TABLE (\w+) RENAME COLUMN (\w+) TO (\w+)$")
_DROP_RE = re.compile(r"^ALTER TABLE (\w+) DROP COLUMN (\w+)$")


class FakeDatabaseError(asyncpg.PostgresError):
    pass


class FakeDatabase:
    def __init__(self, columns: dict[str, str] | None = None, *, table_exists: bool = True) -> None:
        self.table_exists = table_exists
        # column name -> catalog data_type
        self.columns: dict[str, str] = {"id": "integer"}
        for name, column_type in (columns or {}).items():
            self.columns[name] = _CATALOG_TYPES.get(column_type.upper(), column_type)
        self.rows: dict[int, dict[str, Any]] = {}
        self.next_id = 1
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []
        self.fail_on: set[str] = set()

    @property
    def writes(self) -> list[tuple[str, str, tuple[Any, ...]]]:
        """Calls other than catalog lookups and plain selects."""
        return [call for call in self.calls if not call[1].lstrip().upper().startswith("SELECT")]

    @property
    def ddl(self) -> list[str]:
        return [sql for _, sql, _ in self.calls if sql.startswith(("ALTER TABLE", "CREATE TABLE"))]

    def _record(self, method: str, sql: str, args: tuple[Any, ...]) -> str:
        self.calls.append((method, sql, args))
        for fragment in self.fail_on:
            if fragment in sql:
                raise FakeDatabaseError(f"forced failure for {fragment}")
        return sql.strip()

    def _catalog_columns(self) -> list[dict[str, Any]]:
        if not self.table_exists:
            return []
        return [{"column_name": name, "data_type": data_type} for name, data_type in self.columns.items()]

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        text = self._record("fetch_all", sql, args)
        if "information_schema.columns" in text:
            return self._catalog_columns()
        match = _SELECT_RE.match(text)
        if match is None:
            raise AssertionError(f"unexpected fetch_all SQL: {text}")
        if args:
            row = self.rows.get(args[0])
            return [dict(row)] if row else []
        return [dict(row) for row in self.rows.values()]

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        text = self._record("fetch_one", sql, args)
        if "information_schema.tables" in text:
            return {"exists": self.table_exists}

        match = _SELECT_RE.match(text)
        if match is not None:
            row = self.rows.get(args[0]) if args else next(iter(self.rows.values()), None)
            return dict(row) if row else None

        match = _INSERT_RE.match(text)
        if match is not None:
            keys = [key.strip() for key in match.group(2).split(",")]
            row = {name: None for name in self.columns}
            row.update(zip(keys, args))
            row["id"] = self.next_id
            self.rows[self.next_id] = row
            self.next_id += 1
            return dict(row)

        match = _UPDATE_RE.match(text)
        if match is not None:
            keys = [part.split(" = ")[0].strip() for part in match.group(2).split(", ")]
            row = self.rows.get(args[-1])
            if row is None:
                return None
            row.update(zip(keys, args[: len(keys)]))
            return dict(row)

        raise AssertionError(f"unexpected fetch_one SQL: {text}")

    async def execute(self, sql: str, *args: Any) -> str:
        text = self._record("execute", sql, args)

        match = _DELETE_RE.match(text)
        if match is not None:
            removed = self.rows.pop(args[0], None)
            return f"DELETE {1 if removed else 0}"

        match = _CREATE_RE.match(text)
        if match is not None:
            self.table_exists = True
            self.columns = {}
            for definition in match.group(2).split(", "):
                name, column_type = definition.split(" ", 1)
                self.columns[name] = "integer" if name == "id" else _CATALOG_TYPES[column_type]
            return "CREATE TABLE"

        match = _ADD_RE.match(text)
        if match is not None:
            name, column_type = match.group(2), match.group(3)
            if name in self.columns:
                raise FakeDatabaseError(f'column "{name}" of relation "{match.group(1)}" already exists')
            self.columns[name] = _CATALOG_TYPES[column_type]
            return "ALTER TABLE"

        match = _RENAME_RE.match(text)
        if match is not None:
            old, new = match.group(2), match.group(3)
            if old not in self.columns:
                raise FakeDatabaseError(f'column "{old}" does not exist')
            self.columns = {new if key == old else key: value for key, value in self.columns.items()}
            for row in self.rows.values():
                row[new] = row.pop(old, None)
            return "ALTER TABLE"

        match = _DROP_RE.match(text)
        if match is not None:
            name = match.group(2)
            if name not in self.columns:
                raise FakeDatabaseError(f'column "{name}" of relation "{match.group(1)}" does not exist')
            del self.columns[name]
            for row in self.rows.values():
                row.pop(name, None)
            return "ALTER TABLE"

        raise AssertionError(f"unexpected execute SQL: {text}")

    async def close(self) -> None:
        return None


BASELINE_TYPES = {
    "property_name": "VARCHAR",
    "address": "VARCHAR",
    "total_area_in_sqft": "NUMERIC",
    "price_in_cr": "NUMERIC",
    "listed_date": "DATE",
    "status": "VARCHAR",
    "total_earnings": "NUMERIC",
}


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase(BASELINE_TYPES)


@pytest.fixture
def make_fake_db():
    return FakeDatabase
