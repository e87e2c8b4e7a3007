"""
MySQL database adapter implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ..dialects.base import split_qualified_name
from ..dialects.mysql import MySQLDialect
from ..security.redaction import redact_params
from ..utils import get_logger, resolve_slow_query_ms, time_call
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    ColumnDescriptor,
    ConnectionConfig,
    DatabaseAdapter,
    validate_pyformat_params,
)


def _load_driver():
    try:
        import pymysql  # type: ignore[import-untyped]

        return pymysql
    except ImportError:
        try:
            import MySQLdb

            return MySQLdb
        except ImportError:
            return None


@dataclass
class MySQLConnectionState:
    connection: Any
    config: ConnectionConfig
    driver: Any


class MySQLAdapter(DatabaseAdapter):
    """
    Adapter wrapping a MySQL DB-API driver (PyMySQL or mysqlclient).
    """

    def __init__(self, slow_query_ms: int | None = None) -> None:
        self.dialect = MySQLDialect()
        self._state: MySQLConnectionState | None = None
        self.logger = get_logger("adapters.mysql")
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)

    def connect(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError(
                "PyMySQL or mysqlclient is required to use MySQLAdapter."
            )
        if not config.dsn:
            raise AdapterConfigurationError(
                "ConnectionConfig must be built from a DSN for MySQL connections."
            )

        options = dict(config.options or {})
        if config.timeout and "connect_timeout" not in options:
            options["connect_timeout"] = int(config.timeout)

        self.logger.info(
            "Connecting to MySQL %s (autocommit=%s)",
            config.descriptive_label(),
            config.autocommit,
        )

        dsn = config.dsn
        connect_kwargs = {
            "host": dsn.host or "localhost",
            "user": dsn.username,
            "password": dsn.password,
            "database": dsn.database,
            **options,
        }
        if dsn.port:
            connect_kwargs["port"] = dsn.port

        try:
            connection = driver.connect(**connect_kwargs)
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to MySQL.") from exc
        if hasattr(connection, "autocommit"):
            connection.autocommit(config.autocommit)

        self._state = MySQLConnectionState(connection, config, driver)
        return connection

    def close(self) -> None:
        if self._state:
            try:
                self._state.connection.close()
            finally:
                self._state = None

    def _ensure_connection(self):
        if not self._state:
            raise AdapterConnectionError("MySQLAdapter is not connected.")
        return self._state.connection

    def execute(self, sql: str, params: Sequence[Any] | None = None):
        connection = self._ensure_connection()
        cursor = connection.cursor()
        params = params or ()
        validate_pyformat_params(sql, params)
        with time_call(
            "mysql.execute",
            self.logger,
            sql=sql,
            params=redact_params(params),
            threshold_ms=self.slow_query_ms,
        ):
            if params:
                cursor.execute(sql, params)
            else:
                cursor.execute(sql)
        return cursor

    def columns(self, table_name: str) -> list[ColumnDescriptor]:
        schema, table = split_qualified_name(table_name)
        placeholder = self.dialect.parameter_placeholder()
        cursor = self.execute(
            "SELECT column_name, column_type, is_nullable, column_default "
            "FROM information_schema.columns "
            f"WHERE table_schema = COALESCE({placeholder}, DATABASE()) "
            f"AND table_name = {placeholder} "
            "ORDER BY ordinal_position",
            (schema, table),
        )
        return [
            ColumnDescriptor(name=name, type=column_type, nullable=is_nullable == "YES", default=default)
            for name, column_type, is_nullable, default in cursor.fetchall()
        ]

    def begin(self) -> None:
        # MySQL commits implicitly around DDL; the transaction only groups DML.
        connection = self._ensure_connection()
        connection.cursor().execute("START TRANSACTION")

    def commit(self) -> None:
        connection = self._ensure_connection()
        connection.commit()

    def rollback(self) -> None:
        connection = self._ensure_connection()
        connection.rollback()
