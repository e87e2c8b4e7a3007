"""
SQLite dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import DialectCapabilities


class SQLiteDialect:
    """
    SQLite dialect: plain views with column lists (3.9+), nothing else.
    """

    name: Final[str] = "sqlite"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_views=True,
        supports_materialized_views=False,
        supports_functions=False,
        supports_view_columns_definition=True,
        supports_transactional_ddl=True,
    )

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace('"', '""')
        return f'"{escaped}"'

    def format_table(self, table_name: str) -> str:
        return self.quote_identifier(table_name)
