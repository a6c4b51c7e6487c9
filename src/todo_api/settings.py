from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

_LOG_LEVELS = {"critical", "error", "warning", "info", "debug"}
_LOG_FORMATS = {"console", "json"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - HOST: bind address for the HTTP server. Default '127.0.0.1'
    - PORT: bind port. Default 3000
    - LOG_LEVEL: critical, error, warning, info (default) or debug
    - LOG_FORMAT: 'console' (default) or 'json'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    """

    host: str
    port: int
    log_level: str
    log_format: str
    cors_allow_origins: List[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_port(value: str, default: int) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not (0 < port < 65536):
        return default
    return port


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
    log_level = _get_env("LOG_LEVEL", "info").strip().lower()
    if log_level not in _LOG_LEVELS:
        log_level = "info"

    log_format = _get_env("LOG_FORMAT", "console").strip().lower()
    if log_format not in _LOG_FORMATS:
        log_format = "console"

    return Settings(
        host=_get_env("HOST", "127.0.0.1").strip(),
        port=_parse_port(_get_env("PORT", "3000"), 3000),
        log_level=log_level,
        log_format=log_format,
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
    )
