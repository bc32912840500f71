"""
Parameterized row queries for dynamic column sets.

Identifiers (table and column names) are validated and interpolated; values
are always bound through positional placeholders ($1, $2, ...). Keys are used
in mapping order, and `Query.values` follows the placeholder order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

from .identifiers import validate_identifier


class Query(NamedTuple):
    text: str
    values: list[Any]


def _assignments(keys: Sequence[str], *, start: int = 1) -> list[str]:
    return [f"{validate_identifier(key)} = ${start + i}" for i, key in enumerate(keys)]


def _select_list(columns: Sequence[str]) -> str:
    return ", ".join(column if column == "*" else validate_identifier(column) for column in columns)


def build_select(
    table: str,
    conditions: Mapping[str, Any] | None = None,
    columns: Sequence[str] = ("*",),
) -> Query:
    conditions = conditions or {}
    keys = list(conditions)
    where_clause = " WHERE " + " AND ".join(_assignments(keys)) if keys else ""

    text = f"SELECT {_select_list(columns)} FROM {validate_identifier(table)}{where_clause}"
    return Query(text, list(conditions.values()))


def build_insert(table: str, data: Mapping[str, Any]) -> Query:
    # Empty `data` produces invalid SQL; callers filter and check first.
    keys = [validate_identifier(key) for key in data]
    placeholders = ", ".join(f"${i + 1}" for i in range(len(keys)))

    text = (
        f"INSERT INTO {validate_identifier(table)} ({', '.join(keys)}) "
        f"VALUES ({placeholders}) RETURNING *"
    )
    return Query(text, list(data.values()))


def build_update(table: str, data: Mapping[str, Any], conditions: Mapping[str, Any]) -> Query:
    data_keys = list(data)
    set_clause = ", ".join(_assignments(data_keys))
    where_clause = " AND ".join(_assignments(list(conditions), start=len(data_keys) + 1))

    text = f"UPDATE {validate_identifier(table)} SET {set_clause} WHERE {where_clause} RETURNING *"
    return Query(text, [*data.values(), *conditions.values()])


def build_delete(table: str, conditions: Mapping[str, Any]) -> Query:
    where_clause = " AND ".join(_assignments(list(conditions)))

    text = f"DELETE FROM {validate_identifier(table)} WHERE {where_clause}"
    return Query(text, list(conditions.values()))
