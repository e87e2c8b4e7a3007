"""
Oracle dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import DialectCapabilities, split_qualified_name


class OracleDialect:
    """
    Oracle dialect: the only bundled dialect that renders PL/SQL functions.

    Oracle folds unquoted identifiers to upper case, so callers that want
    case-insensitive names should pass them upper-cased.
    """

    name: Final[str] = "oracle"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_views=True,
        supports_materialized_views=True,
        supports_functions=True,
        supports_view_columns_definition=True,
        supports_transactional_ddl=False,
    )

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace('"', '""')
        return f'"{escaped}"'

    def format_table(self, table_name: str) -> str:
        schema, table = split_qualified_name(table_name)
        if schema is not None:
            return f"{self.quote_identifier(schema)}.{self.quote_identifier(table)}"
        return self.quote_identifier(table)
