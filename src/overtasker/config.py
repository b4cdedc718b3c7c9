# src/overtasker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a safe default; nothing is required at import time.
- Session length is not a setting (always 25 minutes).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "OVERTASKER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Scheduling ----
    tick_interval: float
    welcome_delay: float

    # ---- Achievements ----
    achievement_lifetime: float
    achievement_limit: int
    repeat_goal: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "overtasker").strip() or "overtasker"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/overtasker"))

        tick_interval = _env_float(_k("TICK_INTERVAL"), 1.0)
        welcome_delay = _env_float(_k("WELCOME_DELAY"), 1.0)

        achievement_lifetime = _env_float(_k("ACHIEVEMENT_LIFETIME"), 5.0)
        achievement_limit = max(1, _env_int(_k("ACHIEVEMENT_LIMIT"), 5))
        # Legacy widget re-posted the goal toast on every refresh at 100%.
        repeat_goal = _env_bool(_k("REPEAT_GOAL"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tick_interval=tick_interval,
            welcome_delay=welcome_delay,
            achievement_lifetime=achievement_lifetime,
            achievement_limit=achievement_limit,
            repeat_goal=repeat_goal,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
