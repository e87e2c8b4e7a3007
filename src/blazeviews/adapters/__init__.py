"""
Database adapter interfaces and implementations.
"""

from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    ColumnDescriptor,
    ConnectionConfig,
    DatabaseAdapter,
    ParsedDSN,
)
from .mysql import MySQLAdapter
from .postgres import PostgresAdapter
from .sqlite import SQLiteAdapter

__all__ = [
    "ColumnDescriptor",
    "ConnectionConfig",
    "DatabaseAdapter",
    "ParsedDSN",
    "AdapterError",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterExecutionError",
    "SQLiteAdapter",
    "PostgresAdapter",
    "MySQLAdapter",
]
