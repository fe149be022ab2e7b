"""Application settings loaded from environment variables.

Values from a ``.env`` file in the working directory (if present) fill in
anything the process environment does not set.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping

from dotenv import dotenv_values, find_dotenv

from meal_proxy.services.mealdb import DEFAULT_BASE_URL


def _int_env(env: Mapping[str, str | None], name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def _float_env(env: Mapping[str, str | None], name: str, default: float) -> float:
    """Parse a strictly positive number."""
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if not value > 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass
class Settings:
    """Runtime configuration for the proxy."""

    mealdb_base_url: str = DEFAULT_BASE_URL
    cache_ttl_seconds: float = 300.0  # 5 minutes
    cache_max_entries: int = 50
    result_limit: int = 50
    upstream_timeout_seconds: float = 10.0
    upstream_max_concurrency: int = 10
    upstream_max_retries: int = 0
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build Settings from the environment.

    Raises:
        ValueError: If a numeric variable cannot be parsed or is out of
            range (counts and limits below 1, negative retries, non-positive
            durations).
    """
    env = {**dotenv_values(find_dotenv(usecwd=True)), **os.environ}
    origins = env.get("CORS_ORIGINS") or "*"
    return Settings(
        mealdb_base_url=env.get("MEALDB_BASE_URL") or DEFAULT_BASE_URL,
        cache_ttl_seconds=_float_env(env, "CACHE_TTL_SECONDS", 300.0),
        cache_max_entries=_int_env(env, "CACHE_MAX_ENTRIES", 50, minimum=1),
        result_limit=_int_env(env, "RESULT_LIMIT", 50, minimum=1),
        upstream_timeout_seconds=_float_env(env, "UPSTREAM_TIMEOUT_SECONDS", 10.0),
        upstream_max_concurrency=_int_env(env, "UPSTREAM_MAX_CONCURRENCY", 10, minimum=1),
        upstream_max_retries=_int_env(env, "UPSTREAM_MAX_RETRIES", 0, minimum=0),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )


settings = load_settings()
