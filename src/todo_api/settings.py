from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - DATABASE_URL: SQLAlchemy URL of the datastore. Default 'sqlite:///./db.sqlite3'
    - HOST: bind address for the HTTP server. Default '0.0.0.0'
    - PORT: listening port. Default 3000
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level name. Default 'INFO'
    - CREATE_TABLES: 'true' to create the todos table at startup (default: false)
    - SQL_ECHO: 'true' to log every SQL statement (default: false)
    """

    database_url: str
    host: str
    port: int
    cors_allow_origins: List[str]
    log_level: str
    create_tables: bool
    sql_echo: bool


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()

    return Settings(
        database_url=_get_env("DATABASE_URL", "sqlite:///./db.sqlite3").strip(),
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_int(_get_env("PORT", "3000"), 3000),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=log_level,
        create_tables=_parse_bool(_get_env("CREATE_TABLES", "false"), False),
        sql_echo=_parse_bool(_get_env("SQL_ECHO", "false"), False),
    )
