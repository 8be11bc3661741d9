from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from utils.env_loader import load_environments


class ConnectionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = Field(default="", max_length=255)
    dbname: str = Field(..., min_length=1, description="Database name, or the file path for sqlite")
    user: str = Field(default="")
    password: str = Field(default="", repr=False)
    port: Optional[int] = Field(default=None, ge=1, le=65535, description="None keeps the engine default")

    @classmethod
    def from_env(cls, db_engine: Optional[str] = None) -> "ConnectionConfig":
        load_environments()
        engine = (db_engine or os.getenv("DB_ENGINE", "mariadb")).strip().lower()
        port_raw = os.getenv("DB_PORT")
        port: Optional[int] = None
        if port_raw:
            try:
                port = int(port_raw)
            except ValueError as exc:
                raise ValueError(f"DB_PORT must be an integer, got {port_raw!r}") from exc

        if engine == "sqlite":
            db_path = os.getenv("SQLITE_DB_PATH") or os.getenv("DB_NAME")
            if not db_path:
                raise ValueError("SQLITE_DB_PATH is required for sqlite driver")
            return cls(dbname=db_path)

        host = os.getenv("DB_HOST")
        dbname = os.getenv("DB_NAME")
        user = os.getenv("DB_USER")
        if not host:
            raise ValueError("DB_HOST is required")
        if not dbname:
            raise ValueError("DB_NAME is required")
        if not user:
            raise ValueError("DB_USER is required")
        return cls(
            host=host,
            dbname=dbname,
            user=user,
            password=os.getenv("DB_PASSWORD", ""),
            port=port,
        )
