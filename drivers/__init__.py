"""Uniform CRUD drivers over MariaDB, PostgreSQL and SQLite connections."""

from drivers.base import DatabaseDriver, Row
from drivers.config import ConnectionConfig
from drivers.errors import (
    DatabaseConnectionError,
    DriverError,
    InvalidIdentifierError,
    NotConnectedError,
    QueryError,
    StatementError,
    UnboundedWriteError,
)
from drivers.factory import get_driver

__all__ = [
    "ConnectionConfig",
    "DatabaseConnectionError",
    "DatabaseDriver",
    "DriverError",
    "InvalidIdentifierError",
    "NotConnectedError",
    "QueryError",
    "Row",
    "StatementError",
    "UnboundedWriteError",
    "get_driver",
]
