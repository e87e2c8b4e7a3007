"""
Capability-aware execution of view, function and cascading-drop DDL.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Optional

from ..adapters.base import DatabaseAdapter
from ..dialects import get_dialect
from ..dialects.base import Dialect, DialectCapabilities
from ..utils import get_logger
from .builder import ViewSchemaBuilder
from .definitions import (
    MappingDefinition,
    ParamDefinition,
    ViewDefinition,
    VirtualTableKind,
    VirtualTableOptions,
)
from .errors import DefinitionError

_KIND_CAPABILITIES: dict[VirtualTableKind, Callable[[DialectCapabilities], bool]] = {
    VirtualTableKind.VIEW: lambda caps: caps.supports_views,
    VirtualTableKind.MATERIALIZED_VIEW: lambda caps: caps.supports_materialized_views,
}

_FORCE_DROP_SAVEPOINT = "blazeviews_force_drop"


class DDLStatus(Enum):
    EXECUTED = "executed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class DDLResult:
    """
    Outcome of a schema statement call.

    ``SKIPPED`` means the dialect lacks the feature and nothing was sent to the
    database; ``sql`` is None in that case.
    """

    status: DDLStatus
    sql: str | None = None
    cursor: Any = None

    @property
    def executed(self) -> bool:
        return self.status is DDLStatus.EXECUTED

    @property
    def skipped(self) -> bool:
        return self.status is DDLStatus.SKIPPED


class SchemaStatements:
    """
    Creates and drops views, materialized views and functions through an adapter.

    Statements the dialect cannot express are skipped rather than failing.
    Every executed statement is committed in its own transaction, together
    with the ``force`` pre-drop when one is requested.
    """

    def __init__(self, adapter: DatabaseAdapter, dialect: Dialect | str | None = None) -> None:
        self.adapter = adapter
        if isinstance(dialect, str):
            dialect = get_dialect(dialect)
        self.dialect: Dialect = dialect or adapter.dialect
        self.builder = ViewSchemaBuilder(self.dialect)
        self.logger = get_logger("schema.statements")

    # ------------------------------------------------------------------ #
    # Capabilities
    # ------------------------------------------------------------------ #
    def supports(self, kind: VirtualTableKind) -> bool:
        return _KIND_CAPABILITIES[kind](self.dialect.capabilities)

    def _skip(self, what: str, name: str) -> DDLResult:
        self.logger.debug(
            "%s not supported by %s dialect; skipping %s", what, self.dialect.name, name
        )
        return DDLResult(DDLStatus.SKIPPED)

    # ------------------------------------------------------------------ #
    # Views & materialized views
    # ------------------------------------------------------------------ #
    def create_view(
        self,
        name: str,
        select_query: str,
        *,
        force: bool = False,
        check_option: str | None = None,
        populate: Optional[Callable[[ViewDefinition], Any]] = None,
    ) -> DDLResult:
        options = VirtualTableOptions(force=force, check_option=check_option)
        return self.create_virtual_table(name, select_query, VirtualTableKind.VIEW, options, populate)

    def create_materialized_view(
        self,
        name: str,
        select_query: str,
        *,
        force: bool = False,
        check_option: str | None = None,
        populate: Optional[Callable[[ViewDefinition], Any]] = None,
    ) -> DDLResult:
        options = VirtualTableOptions(force=force, check_option=check_option)
        return self.create_virtual_table(
            name, select_query, VirtualTableKind.MATERIALIZED_VIEW, options, populate
        )

    def create_virtual_table(
        self,
        name: str,
        select_query: str,
        kind: VirtualTableKind,
        options: VirtualTableOptions | None = None,
        populate: Optional[Callable[[ViewDefinition], Any]] = None,
    ) -> DDLResult:
        """
        Create a view or materialized view from ``select_query``.

        ``populate`` receives the ``ViewDefinition`` and may declare explicit
        output columns. With ``options.force`` an existing object of the same
        name is dropped first; failure of that drop is ignored.
        """

        if not self.supports(kind):
            return self._skip(kind.keyword, name)
        options = options or VirtualTableOptions()

        definition = ViewDefinition(self.dialect, select_query)
        if populate is not None:
            populate(definition)

        sql = self.builder.create_virtual_table_sql(name, kind, definition, options)
        return self._submit(sql, replace=(name, kind) if options.force else None)

    def create_mapping_view(
        self,
        old_name: str,
        new_name: str,
        populate: Optional[Callable[[MappingDefinition], Any]] = None,
        *,
        force: bool = False,
    ) -> DDLResult:
        """
        Create ``new_name`` as a view renaming columns of the table ``old_name``.

        ``populate`` is required and must call ``map(old, new)`` for every column
        the view exposes; unknown source columns raise ``InvalidColumnError``.
        A populate that maps no column at all raises ``DefinitionError`` instead
        of submitting ``CREATE VIEW ... () AS SELECT  FROM ...``, which no
        database accepts.
        """

        if not self.supports(VirtualTableKind.VIEW):
            return self._skip(VirtualTableKind.VIEW.keyword, new_name)
        if populate is None:
            raise DefinitionError(f"create_mapping_view('{new_name}') requires a populate callback.")

        column_names = [column.name for column in self.adapter.columns(old_name)]
        mapping = MappingDefinition(column_names, table=old_name)
        populate(mapping)
        if not mapping.select_columns:
            raise DefinitionError(f"Mapping view '{new_name}' does not map any columns.")

        sql = self.builder.create_mapping_view_sql(old_name, new_name, mapping)
        return self._submit(sql, replace=(new_name, VirtualTableKind.VIEW) if force else None)

    def drop_view(self, name: str, *, drop_behavior: str | None = None) -> DDLResult:
        options = VirtualTableOptions(drop_behavior=drop_behavior)
        return self.drop_virtual_table(name, VirtualTableKind.VIEW, options)

    def drop_materialized_view(self, name: str, *, drop_behavior: str | None = None) -> DDLResult:
        options = VirtualTableOptions(drop_behavior=drop_behavior)
        return self.drop_virtual_table(name, VirtualTableKind.MATERIALIZED_VIEW, options)

    def drop_virtual_table(
        self,
        name: str,
        kind: VirtualTableKind,
        options: VirtualTableOptions | None = None,
    ) -> DDLResult:
        if not self.supports(kind):
            return self._skip(kind.keyword, name)
        sql = self.builder.drop_virtual_table_sql(name, kind, options)
        return self._submit(sql)

    def _drop_ignoring_errors(self, name: str, kind: VirtualTableKind) -> None:
        sql = self.builder.drop_virtual_table_sql(name, kind)
        # A failed statement poisons the transaction on transactional-DDL backends.
        fenced = self.dialect.capabilities.supports_transactional_ddl
        savepoint = self.dialect.quote_identifier(_FORCE_DROP_SAVEPOINT)
        if fenced:
            self.adapter.execute(f"SAVEPOINT {savepoint}")
        try:
            self._execute(sql)
        except Exception as exc:
            if fenced:
                self.adapter.execute(f"ROLLBACK TO SAVEPOINT {savepoint}")
            self.logger.debug("Ignoring failed drop of %s %s before create: %s", kind.keyword, name, exc)
        else:
            if fenced:
                self.adapter.execute(f"RELEASE SAVEPOINT {savepoint}")

    # ------------------------------------------------------------------ #
    # Functions & tables
    # ------------------------------------------------------------------ #
    def create_function(
        self,
        name: str,
        function_definition: str,
        *,
        return_type: str | None = None,
        populate: Optional[Callable[[ParamDefinition], Any]] = None,
    ) -> DDLResult:
        """
        Create or replace a stored function whose body is ``function_definition``.

        ``populate`` receives the ``ParamDefinition`` and may add parameters.
        """

        if not self.dialect.capabilities.supports_functions:
            return self._skip("FUNCTION", name)

        params = ParamDefinition(return_type)
        if populate is not None:
            populate(params)

        sql = self.builder.create_function_sql(name, function_definition, params)
        return self._submit(sql)

    def drop_table_with_cascade(self, table_name: str) -> DDLResult:
        return self._submit(self.builder.drop_table_cascade_sql(table_name))

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        self.adapter.begin()
        try:
            yield
        except Exception:
            self.adapter.rollback()
            raise
        else:
            self.adapter.commit()

    def _submit(self, sql: str, *, replace: tuple[str, VirtualTableKind] | None = None) -> DDLResult:
        """
        Run ``sql`` in its own committed transaction.

        ``replace`` names an object to drop first, ignoring failure of that drop.
        """

        with self._transaction():
            if replace is not None:
                self._drop_ignoring_errors(*replace)
            cursor = self._execute(sql)
        return DDLResult(DDLStatus.EXECUTED, sql=sql, cursor=cursor)

    def _execute(self, sql: str) -> Any:
        self.logger.info("Executing DDL: %s", sql)
        return self.adapter.execute(sql)
