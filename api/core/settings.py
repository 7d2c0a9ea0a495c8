"""
Environment-driven settings.

Every value has a local-development default so the service starts with no
configuration at all. The default database descriptor carries no password;
supply credentials in `DATABASE_URL` or through `PGPASSWORD`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_DATABASE_URL = "postgresql://postgres@localhost:1200/simpleapp"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        logger.warning("DATABASE_URL not set, using default connection descriptor.")
        return DEFAULT_DATABASE_URL
    return url


@dataclass(frozen=True)
class Settings:
    database_url: str
    pool_min_size: int
    pool_max_size: int
    command_timeout: float
    host: str
    port: int
    log_level: str


def load_settings() -> Settings:
    min_size = max(_env_int("DB_POOL_MIN_SIZE", 1), 0)
    max_size = max(_env_int("DB_POOL_MAX_SIZE", 5), 1)
    return Settings(
        database_url=database_url(),
        pool_min_size=min(min_size, max_size),
        pool_max_size=max_size,
        command_timeout=_env_float("DB_COMMAND_TIMEOUT", 30.0),
        host=os.environ.get("APP_HOST", DEFAULT_HOST).strip() or DEFAULT_HOST,
        port=_env_int("APP_PORT", DEFAULT_PORT),
        log_level=(os.environ.get("LOG_LEVEL", "INFO").strip() or "INFO").upper(),
    )
