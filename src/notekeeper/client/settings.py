from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ClientSettings:
    """
    Client settings loaded from environment variables.

    Env vars:
    - NOTES_API_URL: base URL of the notes service (default http://localhost:8000)
    - NOTES_API_TIMEOUT: per-request network timeout in seconds (default 10)
    - NOTIFICATION_SECONDS: how long a notification stays visible (default 3)
    """

    base_url: str = "http://localhost:8000"
    timeout: float = 10.0
    notification_seconds: float = 3.0


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_seconds(value: str, default: float) -> float:
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


# PUBLIC_INTERFACE
def get_client_settings() -> ClientSettings:
    """Return client settings loaded from environment variables."""
    return ClientSettings(
        base_url=_get_env("NOTES_API_URL", "http://localhost:8000").strip().rstrip("/"),
        timeout=_parse_seconds(_get_env("NOTES_API_TIMEOUT", "10"), 10.0),
        notification_seconds=_parse_seconds(_get_env("NOTIFICATION_SECONDS", "3"), 3.0),
    )
