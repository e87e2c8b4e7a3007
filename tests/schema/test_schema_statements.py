import logging

import pytest

from blazeviews.adapters import ColumnDescriptor
from blazeviews.dialects import MySQLDialect, OracleDialect, PostgresDialect, SQLiteDialect
from blazeviews.schema import (
    DDLStatus,
    DefinitionError,
    InvalidColumnError,
    SchemaStatements,
    VirtualTableKind,
    VirtualTableOptions,
)


class FakeCursor:
    def __init__(self, sql):
        self.sql = sql


class RecordingAdapter:
    def __init__(self, dialect, tables=None, failures=None):
        self.dialect = dialect
        self.tables = tables or {}
        self.failures = failures or {}
        self.statements = []
        self.introspected = []
        self.transactions = []

    def execute(self, sql, params=None):
        self.statements.append(sql)
        for prefix, exc in self.failures.items():
            if sql.startswith(prefix):
                raise exc
        return FakeCursor(sql)

    def columns(self, table_name):
        self.introspected.append(table_name)
        return [ColumnDescriptor(name=name) for name in self.tables.get(table_name, [])]

    def begin(self):
        self.transactions.append("begin")

    def commit(self):
        self.transactions.append("commit")

    def rollback(self):
        self.transactions.append("rollback")


class ViewMissing(Exception):
    pass


SAVEPOINT = 'SAVEPOINT "blazeviews_force_drop"'
ROLLBACK_TO_SAVEPOINT = 'ROLLBACK TO SAVEPOINT "blazeviews_force_drop"'
RELEASE_SAVEPOINT = 'RELEASE SAVEPOINT "blazeviews_force_drop"'


def test_create_view_without_populate_has_no_column_clause():
    adapter = RecordingAdapter(PostgresDialect())
    result = SchemaStatements(adapter).create_view("v", "SELECT 1")
    assert adapter.statements == ['CREATE VIEW "v" AS SELECT 1']
    assert result.status is DDLStatus.EXECUTED
    assert result.executed and not result.skipped
    assert result.sql == 'CREATE VIEW "v" AS SELECT 1'
    assert result.cursor.sql == result.sql


def test_create_view_with_columns_and_check_option():
    adapter = RecordingAdapter(PostgresDialect())
    statements = SchemaStatements(adapter)
    statements.create_view(
        "adults",
        "SELECT id, name FROM people WHERE age >= 18",
        check_option="CASCADED",
        populate=lambda view: view.add_column("id").add_column("name"),
    )
    assert adapter.statements == [
        'CREATE VIEW "adults" ("id", "name") AS SELECT id, name FROM people WHERE age >= 18 '
        "WITH CASCADED CHECK OPTION"
    ]


def test_create_materialized_view_skipped_when_unsupported():
    adapter = RecordingAdapter(MySQLDialect())
    calls = []
    result = SchemaStatements(adapter).create_materialized_view(
        "totals", "SELECT 1", force=True, populate=calls.append
    )
    assert result.status is DDLStatus.SKIPPED
    assert result.sql is None
    assert adapter.statements == []
    assert calls == []


@pytest.mark.parametrize(
    "operation",
    [
        lambda s: s.create_materialized_view("mv", "SELECT 1"),
        lambda s: s.drop_materialized_view("mv", drop_behavior="CASCADE"),
        lambda s: s.create_function("f", "BEGIN RETURN 1; END;", return_type="NUMBER"),
    ],
)
def test_unsupported_operations_never_execute(operation):
    adapter = RecordingAdapter(SQLiteDialect())
    result = operation(SchemaStatements(adapter))
    assert result.skipped
    assert adapter.statements == []


def test_force_create_ignores_failed_drop():
    adapter = RecordingAdapter(PostgresDialect(), failures={"DROP VIEW": ViewMissing("no such view")})
    result = SchemaStatements(adapter).create_view("v", "SELECT 1", force=True)
    assert adapter.statements == [
        SAVEPOINT,
        'DROP VIEW "v"',
        ROLLBACK_TO_SAVEPOINT,
        'CREATE VIEW "v" AS SELECT 1',
    ]
    assert result.sql == 'CREATE VIEW "v" AS SELECT 1'
    assert result.executed
    assert adapter.transactions == ["begin", "commit"]


def test_force_drop_failure_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="blazeviews.schema.statements")
    adapter = RecordingAdapter(PostgresDialect(), failures={"DROP": ViewMissing("gone")})
    SchemaStatements(adapter).create_materialized_view("mv", "SELECT 1", force=True)
    assert any("Ignoring failed drop" in record.message for record in caplog.records)


def test_create_errors_propagate():
    adapter = RecordingAdapter(PostgresDialect(), failures={"CREATE": ViewMissing("boom")})
    with pytest.raises(ViewMissing):
        SchemaStatements(adapter).create_view("v", "SELECT 1", force=True)
    assert adapter.statements[-2:] == [RELEASE_SAVEPOINT, 'CREATE VIEW "v" AS SELECT 1']
    assert adapter.transactions == ["begin", "rollback"]


def test_drop_view_with_and_without_behavior():
    adapter = RecordingAdapter(PostgresDialect())
    statements = SchemaStatements(adapter)
    statements.drop_view("v", drop_behavior="CASCADE")
    statements.drop_view("v")
    assert adapter.statements == ['DROP VIEW "v" CASCADE', 'DROP VIEW "v"']


def test_drop_view_errors_propagate():
    adapter = RecordingAdapter(PostgresDialect(), failures={"DROP": ViewMissing("missing")})
    with pytest.raises(ViewMissing):
        SchemaStatements(adapter).drop_view("v")


def test_drop_virtual_table_accepts_options():
    adapter = RecordingAdapter(OracleDialect())
    SchemaStatements(adapter).drop_virtual_table(
        "SALES_MV", VirtualTableKind.MATERIALIZED_VIEW, VirtualTableOptions(drop_behavior="RESTRICT")
    )
    assert adapter.statements == ['DROP MATERIALIZED VIEW "SALES_MV" RESTRICT']


def test_create_mapping_view():
    adapter = RecordingAdapter(PostgresDialect(), tables={"old": ["id", "name", "legacy_flag"]})

    def populate(mapper):
        mapper.map("id", "id")
        mapper.map("name", "full_name")

    result = SchemaStatements(adapter).create_mapping_view("old", "new", populate)
    assert adapter.introspected == ["old"]
    assert result.sql == 'CREATE VIEW "new" ("id", "full_name") AS SELECT "id", "name" FROM "old"'
    assert adapter.statements == [result.sql]


def test_create_mapping_view_invalid_column_emits_nothing():
    adapter = RecordingAdapter(PostgresDialect(), tables={"old": ["id"]})
    with pytest.raises(InvalidColumnError):
        SchemaStatements(adapter).create_mapping_view(
            "old", "new", lambda mapper: mapper.map("missing", "x"), force=True
        )
    assert adapter.statements == []


def test_create_mapping_view_requires_populate():
    adapter = RecordingAdapter(PostgresDialect(), tables={"old": ["id"]})
    with pytest.raises(DefinitionError):
        SchemaStatements(adapter).create_mapping_view("old", "new")
    assert adapter.introspected == []
    assert adapter.statements == []


def test_create_mapping_view_requires_mapped_columns():
    adapter = RecordingAdapter(PostgresDialect(), tables={"old": ["id"]})
    with pytest.raises(DefinitionError):
        SchemaStatements(adapter).create_mapping_view("old", "new", lambda mapper: None)
    assert adapter.statements == []


def test_create_mapping_view_force_drops_first():
    adapter = RecordingAdapter(
        PostgresDialect(), tables={"old": ["id"]}, failures={"DROP": ViewMissing("absent")}
    )
    SchemaStatements(adapter).create_mapping_view(
        "old", "new", lambda mapper: mapper.map("id", "ident"), force=True
    )
    assert adapter.statements == [
        SAVEPOINT,
        'DROP VIEW "new"',
        ROLLBACK_TO_SAVEPOINT,
        'CREATE VIEW "new" ("ident") AS SELECT "id" FROM "old"',
    ]


def test_create_function_with_params():
    adapter = RecordingAdapter(OracleDialect())

    def populate(params):
        params.add_param("IN", "p_customer", "NUMBER")
        params.add_param("IN", "p_since", "DATE")

    result = SchemaStatements(adapter).create_function(
        "CUSTOMER_TOTAL",
        "BEGIN RETURN 0; END;",
        return_type="NUMBER",
        populate=populate,
    )
    assert result.sql == (
        'CREATE OR REPLACE FUNCTION "CUSTOMER_TOTAL"(IN p_customer NUMBER, IN p_since DATE) '
        "RETURN NUMBER IS BEGIN RETURN 0; END;"
    )


def test_drop_table_with_cascade_is_unconditional():
    adapter = RecordingAdapter(SQLiteDialect())
    result = SchemaStatements(adapter).drop_table_with_cascade("orders")
    assert result.executed
    assert adapter.statements == ['DROP TABLE "orders" CASCADE CONSTRAINTS']


def test_dialect_override_by_name():
    adapter = RecordingAdapter(SQLiteDialect())
    statements = SchemaStatements(adapter, dialect="oracle")
    assert statements.supports(VirtualTableKind.MATERIALIZED_VIEW)
    statements.create_materialized_view("MV", "SELECT 1 FROM dual")
    assert adapter.statements == ['CREATE MATERIALIZED VIEW "MV" AS SELECT 1 FROM dual']


def test_identical_calls_render_identical_sql():
    adapter = RecordingAdapter(PostgresDialect())
    statements = SchemaStatements(adapter)
    for _ in range(2):
        statements.create_view(
            "v", "SELECT a FROM t", check_option="LOCAL", populate=lambda view: view.add_column("a")
        )
    assert adapter.statements[0] == adapter.statements[1]


def test_executed_ddl_logged_at_info(caplog):
    caplog.set_level(logging.INFO, logger="blazeviews.schema.statements")
    SchemaStatements(RecordingAdapter(SQLiteDialect())).drop_view("v")
    assert any('Executing DDL: DROP VIEW "v"' in record.getMessage() for record in caplog.records)


def test_each_statement_commits_in_its_own_transaction():
    adapter = RecordingAdapter(PostgresDialect())
    statements = SchemaStatements(adapter)
    statements.create_view("v", "SELECT 1")
    statements.drop_view("v")
    assert adapter.transactions == ["begin", "commit", "begin", "commit"]


def test_failed_drop_rolls_back_without_commit():
    adapter = RecordingAdapter(SQLiteDialect(), failures={"DROP": ViewMissing("missing")})
    with pytest.raises(ViewMissing):
        SchemaStatements(adapter).drop_view("v")
    assert adapter.transactions == ["begin", "rollback"]


def test_force_create_releases_savepoint_after_successful_drop():
    adapter = RecordingAdapter(SQLiteDialect())
    SchemaStatements(adapter).create_view("v", "SELECT 1", force=True)
    assert adapter.statements == [
        SAVEPOINT,
        'DROP VIEW "v"',
        RELEASE_SAVEPOINT,
        'CREATE VIEW "v" AS SELECT 1',
    ]
    assert adapter.transactions == ["begin", "commit"]


@pytest.mark.parametrize(
    "dialect, drop_sql",
    [
        (MySQLDialect(), "DROP VIEW `v`"),
        (OracleDialect(), 'DROP VIEW "v"'),
    ],
)
def test_force_create_without_transactional_ddl_skips_savepoint(dialect, drop_sql):
    adapter = RecordingAdapter(dialect, failures={"DROP": ViewMissing("missing")})
    result = SchemaStatements(adapter).create_view("v", "SELECT 1", force=True)
    assert adapter.statements == [drop_sql, result.sql]
    assert adapter.transactions == ["begin", "commit"]


def test_skipped_operations_open_no_transaction():
    adapter = RecordingAdapter(MySQLDialect())
    SchemaStatements(adapter).create_materialized_view("mv", "SELECT 1", force=True)
    assert adapter.transactions == []


def test_rejected_mapping_opens_no_transaction():
    adapter = RecordingAdapter(PostgresDialect(), tables={"old": ["id"]})
    with pytest.raises(DefinitionError):
        SchemaStatements(adapter).create_mapping_view("old", "new", lambda mapper: None)
    assert adapter.transactions == []
