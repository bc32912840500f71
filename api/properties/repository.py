"""
Property persistence (raw SQL over dynamic columns).

Incoming row data is filtered against the table's current columns before any
SQL is built, so only catalog-known names reach the query builder.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.db import Database

from . import column_builder, query_builder, schema, values
from .errors import ColumnExistsError, NoValidColumnsError

TABLE = schema.PROPERTY_TABLE


def _filter_known_columns(data: Mapping[str, Any], columns: list[dict]) -> dict[str, Any]:
    column_types = {column["column_name"]: column["data_type"] for column in columns}
    known = {key: value for key, value in data.items() if key in column_types}
    return values.coerce_row(known, column_types)


async def fetch_all_properties(database: Database) -> list[dict[str, Any]]:
    query = query_builder.build_select(TABLE)
    return await database.fetch_all(query.text, *query.values)


async def fetch_property_by_id(database: Database, property_id: int) -> dict[str, Any] | None:
    query = query_builder.build_select(TABLE, {"id": property_id})
    return await database.fetch_one(query.text, *query.values)


async def insert_property(database: Database, new_property: Mapping[str, Any]) -> dict[str, Any]:
    """
    Insert a row using only the keys that are current table columns.
    """
    columns = await schema.get_columns(database, TABLE)
    property_data = _filter_known_columns(new_property, columns)
    if not property_data:
        raise NoValidColumnsError("No valid columns found to insert")

    query = query_builder.build_insert(TABLE, property_data)
    row = await database.fetch_one(query.text, *query.values)
    if row is None:
        raise RuntimeError("Failed to insert property.")
    return row


async def update_property(
    database: Database,
    property_id: int,
    updates: Mapping[str, Any],
) -> dict[str, Any] | None:
    """
    Partially update a row. Returns None when no row has `property_id`.
    """
    columns = await schema.get_columns(database, TABLE)
    update_data = _filter_known_columns(updates, columns)
    if not update_data:
        raise NoValidColumnsError("No valid columns found to update")

    query = query_builder.build_update(TABLE, update_data, {"id": property_id})
    return await database.fetch_one(query.text, *query.values)


async def delete_property(database: Database, property_id: int) -> None:
    query = query_builder.build_delete(TABLE, {"id": property_id})
    await database.execute(query.text, *query.values)


async def add_column(database: Database, column_name: str, column_type: str) -> None:
    # Not atomic with the DDL below; a concurrent add of the same name fails in Postgres.
    existing = await schema.get_column_names(database, TABLE)
    if column_name in existing:
        raise ColumnExistsError(f"Column '{column_name}' already exists in the {TABLE} table.")

    await database.execute(column_builder.build_add_column(column_name, column_type, table=TABLE))


async def rename_column(database: Database, old_column_name: str, new_column_name: str) -> None:
    await database.execute(column_builder.build_rename_column(old_column_name, new_column_name, table=TABLE))


async def delete_column(database: Database, column_name: str) -> None:
    await database.execute(column_builder.build_delete_column(column_name, table=TABLE))


async def get_table_columns(database: Database) -> list[dict]:
    return await schema.get_columns(database, TABLE)
