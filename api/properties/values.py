"""
Adapt JSON request values to the Python types asyncpg expects.

asyncpg encodes parameters by the column's Postgres type and does not parse
strings for us: a `date` column needs a `datetime.date`, a `numeric` column a
`Decimal`, and so on. The target type comes from the catalog's `data_type` and
the parsing is done by pydantic.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import TypeAdapter, ValidationError

_TEXT = TypeAdapter(str)
_DECIMAL = TypeAdapter(Decimal)
_INT = TypeAdapter(int)
_FLOAT = TypeAdapter(float)
_BOOL = TypeAdapter(bool)
_DATE = TypeAdapter(date)
_DATETIME = TypeAdapter(datetime)

_ADAPTERS: dict[str, TypeAdapter] = {
    "character varying": _TEXT,
    "character": _TEXT,
    "text": _TEXT,
    "numeric": _DECIMAL,
    "integer": _INT,
    "smallint": _INT,
    "bigint": _INT,
    "real": _FLOAT,
    "double precision": _FLOAT,
    "boolean": _BOOL,
    "date": _DATE,
    "timestamp without time zone": _DATETIME,
    "timestamp with time zone": _DATETIME,
}


def _naive_utc(value: datetime) -> datetime:
    # `timestamp without time zone` stores wall-clock UTC.
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _aware_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


_NORMALIZERS: dict[str, Callable[[Any], Any]] = {
    "timestamp without time zone": _naive_utc,
    "timestamp with time zone": _aware_utc,
}


def coerce_value(column_name: str, data_type: str | None, value: Any) -> Any:
    if value is None:
        return None
    key = (data_type or "").lower()
    adapter = _ADAPTERS.get(key)
    if adapter is None:
        return value
    try:
        coerced = adapter.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"Invalid value for column '{column_name}' ({data_type}): {value!r}") from exc
    normalize = _NORMALIZERS.get(key)
    return normalize(coerced) if normalize is not None else coerced


def coerce_row(data: Mapping[str, Any], column_types: Mapping[str, str]) -> dict[str, Any]:
    return {key: coerce_value(key, column_types.get(key), value) for key, value in data.items()}
