from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from drivers.config import ConnectionConfig
from drivers.errors import DatabaseConnectionError, NotConnectedError, QueryError
from drivers.sql_builder import (
    SQLDialect,
    Statement,
    build_delete,
    build_insert,
    build_select,
    build_update,
    get_sql_dialect,
)

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class DatabaseDriver(ABC):
    """Owns at most one connection and runs simple CRUD statements on it.

    Subclasses provide `_open` and `_execute`; everything else (precondition
    checks, SQL construction, error translation) lives here so every engine
    behaves the same way.

    Not thread-safe: use one driver per worker.
    """

    engine: str = "unknown"
    # Exception classes of the underlying client that get translated.
    client_errors: Tuple[Type[BaseException], ...] = ()

    def __init__(self) -> None:
        self._conn: Any = None
        self.dialect: SQLDialect = get_sql_dialect(self.engine)

    def __enter__(self) -> "DatabaseDriver":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.disconnect()
        return False

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    @abstractmethod
    def _open(self, config: ConnectionConfig) -> Any:
        """Return a live DB-API connection in autocommit mode."""
        raise NotImplementedError

    @abstractmethod
    def _execute(self, conn: Any, sql: str, params: Optional[Dict[str, Any]]) -> List[Row]:
        """Run one statement and return its rows ([] when there is no result set)."""
        raise NotImplementedError

    def connect(self, config: ConnectionConfig) -> None:
        if self._conn is not None:
            logger.info("Reconnecting %s driver, closing previous connection", self.engine)
            self.disconnect()
        try:
            conn = self._open(config)
        except self.client_errors as exc:
            raise DatabaseConnectionError(f"Connection failed: {exc}") from exc
        self._conn = conn
        logger.info("Connected to %s database %s on %s", self.engine, config.dbname, config.host or "local")

    def disconnect(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            conn.close()
        except self.client_errors as exc:
            logger.warning("Closing %s connection failed: %s", self.engine, exc)
        logger.info("Disconnected from %s database", self.engine)

    def _require_connection(self) -> Any:
        if self._conn is None:
            raise NotConnectedError("Not connected to the database.")
        return self._conn

    def _run(self, conn: Any, statement: Statement, label: str) -> List[Row]:
        logger.debug("%s: %s", label, statement.sql)
        try:
            return self._execute(conn, statement.sql, statement.params)
        except self.client_errors as exc:
            raise QueryError(f"{label} failed: {exc}") from exc

    def query(self, sql: str) -> List[Row]:
        """Execute raw SQL as-is.

        Nothing is bound or escaped here, so `sql` must never contain
        untrusted input. Use `select`/`insert`/`update`/`delete` for values
        coming from outside.
        """
        conn = self._require_connection()
        return self._run(conn, Statement(sql=sql), "Query")

    def select(self, table: str, conditions: Optional[Mapping[str, Any]] = None) -> List[Row]:
        conn = self._require_connection()
        return self._run(conn, build_select(self.dialect, table, conditions), "Select query")

    def insert(self, table: str, fields: Mapping[str, Any]) -> None:
        conn = self._require_connection()
        self._run(conn, build_insert(self.dialect, table, fields), "Insert query")

    def update(
        self,
        table: str,
        fields: Mapping[str, Any],
        conditions: Optional[Mapping[str, Any]],
        allow_all: bool = False,
    ) -> None:
        conn = self._require_connection()
        self._run(conn, build_update(self.dialect, table, fields, conditions, allow_all=allow_all), "Update query")

    def delete(self, table: str, conditions: Optional[Mapping[str, Any]], allow_all: bool = False) -> None:
        conn = self._require_connection()
        self._run(conn, build_delete(self.dialect, table, conditions, allow_all=allow_all), "Delete query")
