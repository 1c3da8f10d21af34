from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'sql' (default) or 'memory'
    - DATABASE_URL: SQLAlchemy URL. Default 'sqlite:///./data/notes.db'
    - DB_POOL_SIZE: size of the process-wide connection pool (default 5)
    - DB_POOL_TIMEOUT: seconds to wait for a pooled connection (default 30)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: logging level name (default INFO)
    """

    persistence_backend: str = "sql"
    database_url: str = "sqlite:///./data/notes.db"
    db_pool_size: int = 5
    db_pool_timeout: float = 30.0
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int, minimum: int = 1) -> int:
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


def _parse_float(value: str, default: float) -> float:
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


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
    backend = _get_env("PERSISTENCE_BACKEND", "sql").strip().lower()
    if backend not in {"memory", "sql"}:
        backend = "sql"

    return Settings(
        persistence_backend=backend,
        database_url=_get_env("DATABASE_URL", "sqlite:///./data/notes.db").strip(),
        db_pool_size=_parse_int(_get_env("DB_POOL_SIZE", "5"), 5),
        db_pool_timeout=_parse_float(_get_env("DB_POOL_TIMEOUT", "30"), 30.0),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
