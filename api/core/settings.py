"""
Environment-backed settings.

Values are read on every call so tests can change them with monkeypatch.
"""

from __future__ import annotations

import os

DEFAULT_POOL_MIN_SIZE = 1
DEFAULT_POOL_MAX_SIZE = 5
DEFAULT_COMMAND_TIMEOUT_S = 10.0


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


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


def app_env() -> str:
    return env_str("APP_ENV", "development").lower()


def db_pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", DEFAULT_POOL_MIN_SIZE), 0)


def db_pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", DEFAULT_POOL_MAX_SIZE), db_pool_min_size(), 1)


def db_command_timeout_s() -> float:
    value = _env_float("DB_COMMAND_TIMEOUT_S", DEFAULT_COMMAND_TIMEOUT_S)
    return value if value > 0 else DEFAULT_COMMAND_TIMEOUT_S


def cors_allowed_origins() -> list[str]:
    raw = env_str("CORS_ALLOWED_ORIGINS")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()
