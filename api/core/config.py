"""
Environment-driven settings.

Every knob is read lazily so tests can change the environment per case.
"""

from __future__ import annotations

import os

DEFAULT_MODERATION_BASE_URL = "https://api.apilayer.com"


def _env_str(name: str, default: str) -> str:
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


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def store_backend() -> str:
    """
    `memory` (default) or `postgres`.
    """
    return _env_str("STORE_BACKEND", "memory").lower()


def questions_seed_file() -> str | None:
    return os.environ.get("QUESTIONS_SEED_FILE", "").strip() or None


def db_pool_min_size() -> int:
    return _env_int("DB_POOL_MIN_SIZE", 1)


def db_pool_max_size() -> int:
    return _env_int("DB_POOL_MAX_SIZE", 5)


def db_command_timeout_s() -> float:
    return _env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def db_acquire_timeout_s() -> float:
    return _env_float("DB_ACQUIRE_TIMEOUT_S", 10.0)


def moderation_enabled() -> bool:
    return _env_bool("MODERATION_ENABLED", True)


def moderation_base_url() -> str:
    return _env_str("MODERATION_BASE_URL", DEFAULT_MODERATION_BASE_URL)


def moderation_api_key() -> str:
    return os.environ.get("MODERATION_API_KEY", "").strip()


def moderation_censor_character() -> str:
    return _env_str("MODERATION_CENSOR_CHARACTER", "*")


def moderation_timeout_s() -> float:
    return _env_float("MODERATION_TIMEOUT_S", 10.0)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
