"""
MySQL dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import DialectCapabilities, split_qualified_name


class MySQLDialect:
    """
    MySQL dialect using backtick quoting and percent-style placeholders.
    """

    name: Final[str] = "mysql"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_views=True,
        supports_materialized_views=False,
        supports_functions=False,
        supports_view_columns_definition=True,
        supports_transactional_ddl=False,
    )

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace("`", "``")
        return f"`{escaped}`"

    def format_table(self, table_name: str) -> str:
        schema, table = split_qualified_name(table_name)
        if schema is not None:
            return f"{self.quote_identifier(schema)}.{self.quote_identifier(table)}"
        return self.quote_identifier(table)

    def parameter_placeholder(self) -> str:
        return "%s"
