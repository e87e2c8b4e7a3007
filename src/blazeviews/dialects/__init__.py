"""
Dialect strategy registry.
"""

from .base import Dialect, DialectCapabilities
from .mysql import MySQLDialect
from .oracle import OracleDialect
from .postgres import PostgresDialect
from .sqlite import SQLiteDialect

_REGISTRY: dict[str, type] = {
    "sqlite": SQLiteDialect,
    "postgresql": PostgresDialect,
    "postgres": PostgresDialect,
    "mysql": MySQLDialect,
    "oracle": OracleDialect,
}


def get_dialect(name: str) -> Dialect:
    """
    Instantiate a bundled dialect by name (case-insensitive).
    """

    try:
        return _REGISTRY[name.lower()]()
    except KeyError:
        known = ", ".join(sorted(_REGISTRY))
        raise ValueError(f"Unknown dialect '{name}'. Known dialects: {known}") from None


__all__ = [
    "Dialect",
    "DialectCapabilities",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "OracleDialect",
    "get_dialect",
]
