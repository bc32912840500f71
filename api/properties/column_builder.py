"""
DDL and catalog queries for runtime column management.

Column types come from a fixed allowlist and are upper-cased in the emitted
DDL. Names go through the shared identifier check.
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import InvalidColumnTypeError
from .identifiers import validate_identifier
from .query_builder import Query

VALID_COLUMN_TYPES = frozenset({"VARCHAR", "TEXT", "NUMERIC", "INTEGER", "BOOLEAN", "DATE", "TIMESTAMP"})

DEFAULT_TABLE = "property_data"


def validate_column_type(column_type: object) -> bool:
    if not isinstance(column_type, str):
        return False
    return column_type.strip().upper() in VALID_COLUMN_TYPES


def _normalize_type(column_type: object) -> str:
    if not validate_column_type(column_type):
        raise InvalidColumnTypeError("Invalid column type")
    return str(column_type).strip().upper()


def build_add_column(column_name: str, column_type: str, *, table: str = DEFAULT_TABLE) -> str:
    normalized = _normalize_type(column_type)
    return f"ALTER TABLE {validate_identifier(table)} ADD COLUMN {validate_identifier(column_name)} {normalized}"


def build_rename_column(old_column_name: str, new_column_name: str, *, table: str = DEFAULT_TABLE) -> str:
    return (
        f"ALTER TABLE {validate_identifier(table)} "
        f"RENAME COLUMN {validate_identifier(old_column_name)} TO {validate_identifier(new_column_name)}"
    )


def build_delete_column(column_name: str, *, table: str = DEFAULT_TABLE) -> str:
    return f"ALTER TABLE {validate_identifier(table)} DROP COLUMN {validate_identifier(column_name)}"


def build_get_columns(table: str = DEFAULT_TABLE) -> Query:
    text = """
        SELECT column_name, data_type
        FROM information_schema.columns
        WHERE table_schema = current_schema()
          AND table_name = $1
        ORDER BY ordinal_position
        """
    return Query(text, [validate_identifier(table)])


def build_table_exists(table: str = DEFAULT_TABLE) -> Query:
    text = """
        SELECT EXISTS (
          SELECT 1
          FROM information_schema.tables
          WHERE table_schema = current_schema()
            AND table_name = $1
        ) AS exists
        """
    return Query(text, [validate_identifier(table)])


def build_create_table(table: str, columns: Iterable[tuple[str, str]]) -> str:
    """
    CREATE TABLE with a SERIAL `id` primary key followed by `columns`.
    """
    definitions = ["id SERIAL PRIMARY KEY"]
    definitions.extend(f"{validate_identifier(name)} {_normalize_type(column_type)}" for name, column_type in columns)
    return f"CREATE TABLE {validate_identifier(table)} ({', '.join(definitions)})"
