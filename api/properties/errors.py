"""
Domain errors raised by the property feature.

Database driver errors (asyncpg) are not wrapped; they propagate as-is.
"""

from __future__ import annotations


class PropertyError(RuntimeError):
    pass


class InvalidIdentifierError(PropertyError, ValueError):
    pass


class InvalidColumnTypeError(PropertyError, ValueError):
    pass


class NoValidColumnsError(PropertyError):
    pass


class ColumnExistsError(PropertyError):
    pass
