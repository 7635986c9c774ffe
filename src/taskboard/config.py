# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Every path lives under one local data directory by default.
"""

from __future__ import annotations

import logging
import os
import secrets
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKBOARD"

logger = logging.getLogger(__name__)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


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

    # ---- HTTP ----
    host: str
    port: int

    # ---- Sessions ----
    session_cookie: str
    session_secret: str
    cookie_secure: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    metrics_path: Path
    metrics_enabled: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard") or "taskboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        host = _env(_k("HOST"), "0.0.0.0")
        # PORT is what most hosting platforms inject.
        port = _env_int(_k("PORT"), _env_int("PORT", 8080))

        session_cookie = _env(_k("SESSION_COOKIE"), "TASKBOARD_SESSION")
        session_secret = _first_env(_k("SESSION_SECRET"), default=None)
        if session_secret is None:
            # Sessions (and therefore participant ids) won't survive a restart.
            session_secret = secrets.token_urlsafe(32)
            logger.warning("%s is not set; using a random per-process secret.", _k("SESSION_SECRET"))
        cookie_secure = _env_bool(_k("COOKIE_SECURE"), False)

        data_dir = _env_path(_k("DATA_DIR"), Path("data"))
        metrics_path = _env_path(_k("METRICS_PATH"), data_dir / "metrics.csv")
        metrics_enabled = _env_bool(_k("METRICS_ENABLED"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            host=host,
            port=port,
            session_cookie=session_cookie,
            session_secret=session_secret,
            cookie_secure=cookie_secure,
            data_dir=data_dir,
            metrics_path=metrics_path,
            metrics_enabled=metrics_enabled,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, read from the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
