"""
PostgreSQL dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import DialectCapabilities, split_qualified_name


class PostgresDialect:
    """
    PostgreSQL dialect using percent positional parameters.

    ``CREATE OR REPLACE FUNCTION ... IS`` is PL/SQL syntax, so function
    creation is reported as unsupported here.
    """

    name: Final[str] = "postgresql"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_views=True,
        supports_materialized_views=True,
        supports_functions=False,
        supports_view_columns_definition=True,
        supports_transactional_ddl=True,
    )

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace('"', '""')
        return f'"{escaped}"'

    def format_table(self, table_name: str) -> str:
        schema, table = split_qualified_name(table_name)
        if schema is not None:
            return f"{self.quote_identifier(schema)}.{self.quote_identifier(table)}"
        return self.quote_identifier(table)

    def parameter_placeholder(self) -> str:
        return "%s"
