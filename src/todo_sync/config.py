# src/todo_sync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is read from the network or disk at import time except .env.
- Storage key and server URL are plain configuration, passed to the
  collaborators at construction.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO_SYNC"

DEFAULT_SERVER_URL = "http://[::]:8000"
DEFAULT_STORAGE_KEY = "todo_sync.entries"


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

    # ---- Sync ----
    server_url: str
    sync_enabled: bool
    pull_on_start: bool
    push_interval_seconds: float
    request_timeout_seconds: float

    # ---- Local storage (ignored by git) ----
    persist_enabled: bool
    data_dir: Path
    storage_path: Path
    storage_key: str

    # ---- Front-end ----
    console_enabled: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-sync").strip() or "todo-sync"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        server_url = _env(_k("SERVER_URL"), DEFAULT_SERVER_URL).strip() or DEFAULT_SERVER_URL
        sync_enabled = _env_bool(_k("SYNC_ENABLED"), True)
        pull_on_start = _env_bool(_k("PULL_ON_START"), True)
        # Floors keep a typo from turning the push loop into a busy loop.
        push_interval_seconds = max(0.5, _env_float(_k("PUSH_INTERVAL_SECONDS"), 5.0))
        request_timeout_seconds = max(0.5, _env_float(_k("REQUEST_TIMEOUT_SECONDS"), 10.0))

        persist_enabled = _env_bool(_k("PERSIST_ENABLED"), True)
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo_sync"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "storage.json")
        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            server_url=server_url,
            sync_enabled=sync_enabled,
            pull_on_start=pull_on_start,
            push_interval_seconds=push_interval_seconds,
            request_timeout_seconds=request_timeout_seconds,
            persist_enabled=persist_enabled,
            data_dir=data_dir,
            storage_path=storage_path,
            storage_key=storage_key,
            console_enabled=console_enabled,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env (without overriding real env vars) and build Settings once."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS


def reset_settings() -> None:
    """Forget the cached Settings (tests)."""
    global _SETTINGS
    _SETTINGS = None
