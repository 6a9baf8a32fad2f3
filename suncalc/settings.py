"""Environment-driven configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

__all__ = ["Settings", "load_settings"]

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_N_JOBS = 1
DEFAULT_MAX_RANGE_DAYS = 366


@dataclass(frozen=True)
class Settings:
    log_level: str
    cors_origins: List[str]
    n_jobs: int
    max_range_days: int


def _int_from_env(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from *env* (defaults to :data:`os.environ`)."""

    if env is None:
        env = os.environ

    log_level = env.get("SUNCALC_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"SUNCALC_LOG_LEVEL is not a logging level: {log_level!r}")

    origins = [
        origin.strip()
        for origin in env.get("SUNCALC_CORS_ORIGINS", "").split(",")
        if origin.strip()
    ]
    return Settings(
        log_level=log_level,
        cors_origins=origins,
        n_jobs=_int_from_env(env, "SUNCALC_N_JOBS", DEFAULT_N_JOBS, 1),
        max_range_days=_int_from_env(
            env, "SUNCALC_MAX_RANGE_DAYS", DEFAULT_MAX_RANGE_DAYS, 1
        ),
    )
