from __future__ import annotations

from typing import Any, Dict, List, Optional

import psycopg
from psycopg.rows import dict_row

from drivers.base import DatabaseDriver, Row
from drivers.config import ConnectionConfig


class PostgresDriver(DatabaseDriver):
    engine = "postgres"
    client_errors = (psycopg.Error,)

    def _open(self, config: ConnectionConfig) -> Any:
        params: Dict[str, Any] = {
            "host": config.host,
            "dbname": config.dbname,
            "user": config.user,
            "password": config.password,
        }
        if config.port:
            params["port"] = config.port
        return psycopg.connect(autocommit=True, row_factory=dict_row, **params)

    def _execute(self, conn: Any, sql: str, params: Optional[Dict[str, Any]]) -> List[Row]:
        with conn.cursor() as cur:
            cur.execute(sql, params)
            if cur.description is None:
                return []
            return [dict(row) for row in cur.fetchall()]
