"""
Dialect strategy interfaces describing DDL rendering behaviors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing backend capabilities.

    The virtual-table flags decide whether view, materialized view and function
    statements are emitted at all; ``supports_view_columns_definition`` decides
    whether ``CREATE VIEW name (col, ...)`` syntax may be used.
    ``supports_transactional_ddl`` means a failed DDL statement can be undone
    with ``ROLLBACK TO SAVEPOINT`` without ending the surrounding transaction.
    """

    supports_views: bool = True
    supports_materialized_views: bool = False
    supports_functions: bool = False
    supports_view_columns_definition: bool = False
    supports_transactional_ddl: bool = False


class Dialect(Protocol):
    """
    Strategy interface consumed across schema and adapter layers.
    """

    @property
    def name(self) -> str: ...

    @property
    def capabilities(self) -> DialectCapabilities: ...

    def quote_identifier(self, identifier: str) -> str: ...

    def format_table(self, table_name: str) -> str: ...


def split_qualified_name(table_name: str) -> tuple[str | None, str]:
    """
    Split ``schema.table`` into its parts; the schema is None when absent.
    """

    if "." in table_name:
        schema, table = table_name.split(".", 1)
        return schema, table
    return None, table_name
