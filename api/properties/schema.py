"""
Catalog access and startup schema reconciliation for `property_data`.

Reconciliation is additive: it creates the table when missing and adds any
baseline column that is not there yet. It never drops or renames columns.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from core.db import Database

from . import column_builder

logger = logging.getLogger(__name__)

PROPERTY_TABLE = column_builder.DEFAULT_TABLE


@dataclass(frozen=True)
class ColumnDefinition:
    name: str
    data_type: str


BASELINE_COLUMNS: tuple[ColumnDefinition, ...] = (
    ColumnDefinition("property_name", "VARCHAR"),
    ColumnDefinition("address", "VARCHAR"),
    ColumnDefinition("total_area_in_sqft", "NUMERIC"),
    ColumnDefinition("price_in_cr", "NUMERIC"),
    ColumnDefinition("listed_date", "DATE"),
    ColumnDefinition("status", "VARCHAR"),
    ColumnDefinition("total_earnings", "NUMERIC"),
)


@dataclass
class ReconcileResult:
    table: str
    created: bool = False
    added: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.created or bool(self.added)


async def get_columns(database: Database, table: str = PROPERTY_TABLE) -> list[dict]:
    """
    Current columns as `{"column_name", "data_type"}` rows, in table order.
    """
    query = column_builder.build_get_columns(table)
    rows = await database.fetch_all(query.text, *query.values)
    return [{"column_name": str(row["column_name"]), "data_type": str(row["data_type"])} for row in rows]


async def get_column_names(database: Database, table: str = PROPERTY_TABLE) -> list[str]:
    return [row["column_name"] for row in await get_columns(database, table)]


async def table_exists(database: Database, table: str = PROPERTY_TABLE) -> bool:
    query = column_builder.build_table_exists(table)
    row = await database.fetch_one(query.text, *query.values)
    return bool(row and row.get("exists"))


async def ensure_schema(
    database: Database,
    *,
    table: str = PROPERTY_TABLE,
    baseline: Sequence[ColumnDefinition] = BASELINE_COLUMNS,
) -> ReconcileResult:
    """
    Make sure `table` exists and carries every baseline column.

    Errors from the existence check or CREATE TABLE propagate to the caller.
    A failed ADD COLUMN is logged and the remaining columns are still tried.
    """
    result = ReconcileResult(table=table)

    if not await table_exists(database, table):
        logger.info("schema_table_missing table=%s", table)
        ddl = column_builder.build_create_table(table, [(c.name, c.data_type) for c in baseline])
        await database.execute(ddl)
        result.created = True
        logger.info("schema_table_created table=%s columns=%s", table, len(baseline))
        return result

    existing = set(await get_column_names(database, table))
    for column in baseline:
        if column.name in existing:
            continue
        try:
            await database.execute(column_builder.build_add_column(column.name, column.data_type, table=table))
        except Exception:
            logger.exception("schema_column_add_failed table=%s column=%s", table, column.name)
            result.failed.append(column.name)
            continue
        result.added.append(column.name)
        logger.info("schema_column_added table=%s column=%s type=%s", table, column.name, column.data_type)

    if not result.changed and not result.failed:
        logger.info("schema_up_to_date table=%s", table)
    return result
