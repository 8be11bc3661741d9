from __future__ import annotations

import os
from typing import Optional

from drivers.base import DatabaseDriver
from drivers.errors import DriverError
from drivers.mariadb import MariaDBDriver
from drivers.postgres import PostgresDriver
from drivers.sqlite import SQLiteDriver
from utils.env_loader import load_environments


def get_driver(db_engine: Optional[str] = None) -> DatabaseDriver:
    load_environments()
    engine = (db_engine or os.getenv("DB_ENGINE", "mariadb")).strip().lower()
    if engine in {"mariadb", "mysql"}:
        return MariaDBDriver()
    if engine in {"postgres", "postgresql"}:
        return PostgresDriver()
    if engine == "sqlite":
        return SQLiteDriver()
    raise DriverError(f"Unsupported db_engine: {engine}")
