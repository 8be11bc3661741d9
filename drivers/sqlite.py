from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Dict, List, Optional

from drivers.base import DatabaseDriver, Row
from drivers.config import ConnectionConfig

MEMORY_DB = ":memory:"


class SQLiteDriver(DatabaseDriver):
    """SQLite driver; `config.dbname` is the database file path.

    host, user, password and port are ignored. The file must exist so a typo
    in the path fails instead of silently creating an empty database.
    """

    engine = "sqlite"
    client_errors = (sqlite3.Error,)

    def _open(self, config: ConnectionConfig) -> Any:
        if config.dbname != MEMORY_DB:
            db_path = Path(config.dbname)
            if not db_path.is_file():
                raise sqlite3.OperationalError(f"SQLite database file does not exist: {db_path}")
        # isolation_level=None: autocommit, no implicit transactions
        conn = sqlite3.connect(config.dbname, isolation_level=None)
        conn.row_factory = sqlite3.Row
        return conn

    def _execute(self, conn: Any, sql: str, params: Optional[Dict[str, Any]]) -> List[Row]:
        with closing(conn.cursor()) as cur:
            if params is None:
                cur.execute(sql)
            else:
                cur.execute(sql, params)
            if cur.description is None:
                return []
            return [dict(row) for row in cur.fetchall()]
