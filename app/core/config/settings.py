from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def get_env_bool(name: str, default: bool) -> bool:
    raw = get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def get_env_int(name: str, default: int) -> int:
    raw = get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    rate_limit: str
    analyze_rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    analytics_enabled: bool
    analytics_db_path: str
    analytics_retention_days: int
    feedback_retention_days: int


def load_settings() -> Settings:
    return Settings(
        api_key=get_env("API_KEY"),
        rate_limit=get_env("RATE_LIMIT", "60/minute") or "60/minute",
        analyze_rate_limit=get_env("ANALYZE_RATE_LIMIT", "20/minute") or "20/minute",
        rate_limit_enabled=get_env_bool("RATE_LIMIT_ENABLED", True),
        log_level=get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=get_env("SENTRY_DSN"),
        cors_allowed_origins=get_env_list(
            "CORS_ALLOWED_ORIGINS",
            [
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "http://localhost:5173",
            ],
        ),
        cors_allow_origin_regex=get_env("CORS_ALLOW_ORIGIN_REGEX"),
        cors_allow_credentials=get_env_bool("CORS_ALLOW_CREDENTIALS", False),
        analytics_enabled=get_env_bool("ANALYTICS_ENABLED", True),
        analytics_db_path=get_env("ANALYTICS_DB_PATH", "data/analytics.db") or "data/analytics.db",
        analytics_retention_days=get_env_int("ANALYTICS_RETENTION_DAYS", 180),
        feedback_retention_days=get_env_int("FEEDBACK_RETENTION_DAYS", 365),
    )


settings = load_settings()
