from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from drivers.errors import InvalidIdentifierError, StatementError, UnboundedWriteError

CONDITION_PREFIX = "condition_"

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True)
class SQLDialect:
    engine: str
    paramstyle: str

    def render_placeholder(self, name: str) -> str:
        if self.paramstyle == "named":
            return f":{name}"
        if self.paramstyle == "pyformat":
            return f"%({name})s"
        raise StatementError(f"Unsupported paramstyle: {self.paramstyle}")


@dataclass(frozen=True)
class Statement:
    sql: str
    params: Optional[Dict[str, Any]] = None


def get_sql_dialect(db_engine: str) -> SQLDialect:
    engine = (db_engine or "mariadb").strip().lower()
    if engine in {"mariadb", "mysql"}:
        return SQLDialect(engine="mariadb", paramstyle="pyformat")
    if engine in {"postgres", "postgresql"}:
        return SQLDialect(engine="postgres", paramstyle="pyformat")
    if engine == "sqlite":
        return SQLDialect(engine="sqlite", paramstyle="named")
    raise StatementError(f"Unsupported db_engine: {engine}")


def validate_identifier(name: str) -> str:
    if not isinstance(name, str) or not _IDENTIFIER_RE.fullmatch(name):
        raise InvalidIdentifierError(f"Invalid SQL identifier: {name!r}")
    return name


def validate_table(name: str) -> str:
    """Accept `table` or `schema.table`; each part must be a plain identifier."""
    if not isinstance(name, str):
        raise InvalidIdentifierError(f"Invalid table name: {name!r}")
    parts = name.split(".")
    if len(parts) > 2 or not all(_IDENTIFIER_RE.fullmatch(part) for part in parts):
        raise InvalidIdentifierError(f"Invalid table name: {name!r}")
    return name


def _predicates(dialect: SQLDialect, conditions: Mapping[str, Any], prefix: str = "") -> List[str]:
    return [
        f"{validate_identifier(key)} = {dialect.render_placeholder(prefix + key)}"
        for key in conditions
    ]


def build_select(dialect: SQLDialect, table: str, conditions: Optional[Mapping[str, Any]] = None) -> Statement:
    sql = f"SELECT * FROM {validate_table(table)}"
    if not conditions:
        return Statement(sql=sql)
    sql += " WHERE " + " AND ".join(_predicates(dialect, conditions))
    return Statement(sql=sql, params=dict(conditions))


def build_insert(dialect: SQLDialect, table: str, fields: Mapping[str, Any]) -> Statement:
    validate_table(table)
    if not fields:
        raise StatementError(f"INSERT INTO {table} needs at least one field")
    columns = [validate_identifier(key) for key in fields]
    placeholders = [dialect.render_placeholder(key) for key in columns]
    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({', '.join(placeholders)})"
    return Statement(sql=sql, params=dict(fields))


def build_update(
    dialect: SQLDialect,
    table: str,
    fields: Mapping[str, Any],
    conditions: Optional[Mapping[str, Any]],
    allow_all: bool = False,
) -> Statement:
    validate_table(table)
    if not fields:
        raise StatementError(f"UPDATE {table} needs at least one field")
    conditions = conditions or {}
    if not conditions and not allow_all:
        raise UnboundedWriteError(
            f"UPDATE {table} without conditions would touch every row; pass allow_all=True to do that"
        )

    params: Dict[str, Any] = dict(fields)
    for key, value in conditions.items():
        bound = CONDITION_PREFIX + key
        if bound in params:
            raise StatementError(f"Parameter name clash between field and condition: {bound}")
        params[bound] = value

    set_clause = ", ".join(_predicates(dialect, fields))
    sql = f"UPDATE {table} SET {set_clause}"
    if conditions:
        sql += " WHERE " + " AND ".join(_predicates(dialect, conditions, prefix=CONDITION_PREFIX))
    return Statement(sql=sql, params=params)


def build_delete(
    dialect: SQLDialect,
    table: str,
    conditions: Optional[Mapping[str, Any]],
    allow_all: bool = False,
) -> Statement:
    validate_table(table)
    if not conditions:
        if not allow_all:
            raise UnboundedWriteError(
                f"DELETE FROM {table} without conditions would remove every row; pass allow_all=True to do that"
            )
        return Statement(sql=f"DELETE FROM {table}")
    sql = f"DELETE FROM {table} WHERE " + " AND ".join(_predicates(dialect, conditions))
    return Statement(sql=sql, params=dict(conditions))
