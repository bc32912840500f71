"""
SQL identifier checks shared by the query and column builders.

Table and column names are interpolated into SQL text (identifiers cannot be
bound as parameters), so every name must pass `validate_identifier` first.
Names are left unquoted, which rules out PostgreSQL's reserved key words.
"""

from __future__ import annotations

import re

from .errors import InvalidIdentifierError

# PostgreSQL truncates identifiers longer than NAMEDATALEN - 1.
MAX_IDENTIFIER_LENGTH = 63

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Key words PostgreSQL marks "reserved" or "reserved (can be function or type)";
# neither kind is accepted as an unquoted column name.
RESERVED_KEYWORDS = frozenset(
    """
    all analyse analyze and any array as asc asymmetric authorization binary both
    case cast check collate collation column concurrently constraint create cross
    current_catalog current_date current_role current_schema current_time
    current_timestamp current_user default deferrable desc distinct do else end
    except false fetch for foreign freeze from full grant group having ilike in
    initially inner intersect into is isnull join lateral leading left like limit
    localtime localtimestamp natural not notnull null offset on only or order
    outer overlaps placing primary references returning right select session_user
    similar some symmetric system_user table tablesample then to trailing true
    union unique user using variadic verbose when where window with
    """.split()
)


def is_valid_identifier(name: object) -> bool:
    if not isinstance(name, str):
        return False
    if len(name) > MAX_IDENTIFIER_LENGTH:
        return False
    if _IDENTIFIER_RE.fullmatch(name) is None:
        return False
    return name.lower() not in RESERVED_KEYWORDS


def validate_identifier(name: object) -> str:
    if not is_valid_identifier(name):
        raise InvalidIdentifierError(f"Invalid identifier: {name!r}")
    return name  # type: ignore[return-value]
