from __future__ import annotations

from typing import Any, Dict, List, Optional

import pymysql
import pymysql.cursors

from drivers.base import DatabaseDriver, Row
from drivers.config import ConnectionConfig

DEFAULT_PORT = 3306


class MariaDBDriver(DatabaseDriver):
    engine = "mariadb"
    client_errors = (pymysql.MySQLError,)

    def _open(self, config: ConnectionConfig) -> Any:
        return pymysql.connect(
            host=config.host,
            port=config.port or DEFAULT_PORT,
            user=config.user,
            password=config.password,
            database=config.dbname,
            charset="utf8mb4",
            autocommit=True,
            cursorclass=pymysql.cursors.DictCursor,
        )

    def _execute(self, conn: Any, sql: str, params: Optional[Dict[str, Any]]) -> List[Row]:
        with conn.cursor() as cur:
            cur.execute(sql, params)
            if cur.description is None:
                return []
            return [dict(row) for row in cur.fetchall()]
