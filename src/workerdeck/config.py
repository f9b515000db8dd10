# src/workerdeck/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is required at import time; every value has a default.
- Values that fail to parse fall back to their default instead of crashing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "WORKERDECK"

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
        return float(raw)
    except ValueError:
        return default


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

    # ---- Scheduler ----
    autostart: bool
    stop_grace_seconds: float

    # ---- Console ----
    status_poll_interval: float
    log_history_size: int
    echo_log: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "workerdeck").strip() or "workerdeck"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/workerdeck"))

        autostart = _env_bool(_k("AUTOSTART"), True)

        # Negative waits make no sense; clamp like the scheduler would anyway.
        stop_grace_seconds = max(0.0, _env_float(_k("STOP_GRACE_SECONDS"), 5.0))

        status_poll_interval = max(0.02, _env_float(_k("STATUS_POLL_INTERVAL"), 0.1))
        log_history_size = max(1, _env_int(_k("LOG_HISTORY_SIZE"), 500))
        echo_log = _env_bool(_k("ECHO_LOG"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            autostart=autostart,
            stop_grace_seconds=stop_grace_seconds,
            status_poll_interval=status_poll_interval,
            log_history_size=log_history_size,
            echo_log=echo_log,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
