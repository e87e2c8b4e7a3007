import sqlite3

import pytest

from blazeviews.adapters import ConnectionConfig, SQLiteAdapter
from blazeviews.schema import InvalidColumnError, SchemaStatements


@pytest.fixture
def adapter(tmp_path):
    adapter = SQLiteAdapter()
    adapter.connect(ConnectionConfig(url=f"sqlite:///{tmp_path / 'views.db'}", autocommit=True))
    adapter.execute("CREATE TABLE people (ID INTEGER PRIMARY KEY, NAME TEXT NOT NULL, AGE INTEGER)")
    adapter.execute("INSERT INTO people (NAME, AGE) VALUES ('Ada', 36), ('Tim', 12)")
    yield adapter
    adapter.close()


def view_names(adapter):
    rows = adapter.execute("SELECT name FROM sqlite_master WHERE type = 'view' ORDER BY name").fetchall()
    return [row["name"] for row in rows]


def test_create_view_with_explicit_columns(adapter):
    statements = SchemaStatements(adapter)
    statements.create_view(
        "adults",
        "SELECT NAME, AGE FROM people WHERE AGE >= 18",
        populate=lambda view: view.add_column("name").add_column("age"),
    )
    rows = adapter.execute('SELECT "name", "age" FROM adults').fetchall()
    assert [tuple(row) for row in rows] == [("Ada", 36)]


def test_force_create_on_missing_view(adapter):
    result = SchemaStatements(adapter).create_view("everyone", "SELECT * FROM people", force=True)
    assert result.executed
    assert view_names(adapter) == ["everyone"]


def test_force_create_replaces_existing_view(adapter):
    statements = SchemaStatements(adapter)
    statements.create_view("names", "SELECT NAME FROM people")
    statements.create_view("names", "SELECT NAME, AGE FROM people", force=True)
    columns = [column.name for column in adapter.columns("names")]
    assert columns == ["NAME", "AGE"]


def test_create_without_force_fails_when_view_exists(adapter):
    statements = SchemaStatements(adapter)
    statements.create_view("names", "SELECT NAME FROM people")
    with pytest.raises(sqlite3.OperationalError):
        statements.create_view("names", "SELECT NAME FROM people")


def test_mapping_view_renames_columns(adapter):
    statements = SchemaStatements(adapter)

    def populate(mapper):
        mapper.map("ID", "id")
        mapper.map("NAME", "full_name")

    statements.create_mapping_view("people", "persons", populate)
    rows = adapter.execute("SELECT id, full_name FROM persons ORDER BY id").fetchall()
    assert [tuple(row) for row in rows] == [(1, "Ada"), (2, "Tim")]


def test_mapping_view_rejects_unknown_column(adapter):
    with pytest.raises(InvalidColumnError):
        SchemaStatements(adapter).create_mapping_view(
            "people", "persons", lambda mapper: mapper.map("EMAIL", "email")
        )
    assert view_names(adapter) == []


def test_drop_missing_view_propagates(adapter):
    with pytest.raises(sqlite3.OperationalError):
        SchemaStatements(adapter).drop_view("nope")


def test_drop_view(adapter):
    statements = SchemaStatements(adapter)
    statements.create_view("everyone", "SELECT * FROM people")
    statements.drop_view("everyone")
    assert view_names(adapter) == []


def test_materialized_views_and_functions_are_skipped(adapter):
    statements = SchemaStatements(adapter)
    assert statements.create_materialized_view("mv", "SELECT 1").skipped
    assert statements.create_function("f", "BEGIN RETURN 1; END;").skipped
    assert view_names(adapter) == []


def test_drop_table_with_cascade_is_attempted(adapter):
    # SQLite has no CASCADE CONSTRAINTS; the statement is still sent.
    with pytest.raises(sqlite3.OperationalError):
        SchemaStatements(adapter).drop_table_with_cascade("people")
