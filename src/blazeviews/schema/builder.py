"""
Schema builder converting view, mapping and function definitions into DDL.
"""

from __future__ import annotations

from ..dialects.base import Dialect
from ..utils import get_logger
from .definitions import (
    MappingDefinition,
    ParamDefinition,
    ViewDefinition,
    VirtualTableKind,
    VirtualTableOptions,
    quote_all,
)


class ViewSchemaBuilder:
    """
    Produces dialect-specific SQL for virtual tables and stored functions.

    Rendering is a pure function of its inputs; capability checks that decide
    whether a statement is emitted at all live in ``SchemaStatements``.
    """

    def __init__(self, dialect: Dialect) -> None:
        self.dialect = dialect
        self.logger = get_logger("schema.builder")

    def create_virtual_table_sql(
        self,
        name: str,
        kind: VirtualTableKind,
        definition: ViewDefinition,
        options: VirtualTableOptions | None = None,
    ) -> str:
        options = options or VirtualTableOptions()
        pieces = [f"CREATE {kind.keyword} {self.dialect.format_table(name)}"]
        column_list = definition.render()
        if column_list and self.dialect.capabilities.supports_view_columns_definition:
            pieces.append(column_list)
        pieces.append(f"AS {definition.select_query}")
        sql = " ".join(pieces)
        if options.check_option:
            sql += f" WITH {options.check_option} CHECK OPTION"
        return sql

    def create_mapping_view_sql(
        self, old_name: str, new_name: str, mapping: MappingDefinition
    ) -> str:
        view_columns, select_columns = mapping.render()
        pieces = [f"CREATE VIEW {self.dialect.format_table(new_name)}"]
        # Unlike plain views the column list is emitted whenever the dialect allows it.
        if self.dialect.capabilities.supports_view_columns_definition:
            pieces.append(f"({quote_all(self.dialect, view_columns)})")
        pieces.append(
            f"AS SELECT {quote_all(self.dialect, select_columns)} "
            f"FROM {self.dialect.format_table(old_name)}"
        )
        return " ".join(pieces)

    def drop_virtual_table_sql(
        self,
        name: str,
        kind: VirtualTableKind,
        options: VirtualTableOptions | None = None,
    ) -> str:
        options = options or VirtualTableOptions()
        sql = f"DROP {kind.keyword} {self.dialect.format_table(name)}"
        if options.drop_behavior:
            sql += f" {options.drop_behavior}"
        return sql

    def create_function_sql(
        self, name: str, function_definition: str, params: ParamDefinition
    ) -> str:
        return (
            f"CREATE OR REPLACE FUNCTION {self.dialect.format_table(name)}"
            f"{params.render()} IS {function_definition}"
        )

    def drop_table_cascade_sql(self, table_name: str) -> str:
        table = self.dialect.format_table(table_name)
        self.logger.warning(
            "DROP TABLE ... CASCADE CONSTRAINTS generated for %s; dependent constraints are dropped too.",
            table,
        )
        return f"DROP TABLE {table} CASCADE CONSTRAINTS"
