"""
BlazeViews public package initialization.

Exposes the schema statement API together with the adapters and dialects it
runs against.
"""

from .adapters import (  # noqa: F401
    ConnectionConfig,
    MySQLAdapter,
    PostgresAdapter,
    SQLiteAdapter,
)
from .dialects import (  # noqa: F401
    MySQLDialect,
    OracleDialect,
    PostgresDialect,
    SQLiteDialect,
    get_dialect,
)
from .schema import (  # noqa: F401
    DDLResult,
    DDLStatus,
    DefinitionError,
    InvalidColumnError,
    SchemaStatements,
    ViewSchemaBuilder,
    VirtualTableKind,
    VirtualTableOptions,
)

__all__ = [
    "ConnectionConfig",
    "SQLiteAdapter",
    "PostgresAdapter",
    "MySQLAdapter",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "OracleDialect",
    "get_dialect",
    "SchemaStatements",
    "ViewSchemaBuilder",
    "VirtualTableKind",
    "VirtualTableOptions",
    "DDLResult",
    "DDLStatus",
    "DefinitionError",
    "InvalidColumnError",
]
