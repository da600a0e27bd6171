# src/taskdeck/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time: every value has a default.
- Bad values fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDECK"

# localStorage-like quota (5 MiB) for the persisted task blob.
DEFAULT_STORAGE_QUOTA_BYTES = 5 * 1024 * 1024

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


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, default: str, choices: set[str]) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() not in choices:
        return default
    return raw.strip()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data (ignored by git) ----
    data_dir: Path
    storage_key: str
    storage_quota_bytes: int

    # ---- Task list view ----
    page_size: int
    default_sort_field: str
    default_sort_direction: str

    # ---- Console ----
    color: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskdeck").strip() or "taskdeck"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdeck"))
        storage_key = _env(_k("STORAGE_KEY"), "task-management-tasks").strip() or "task-management-tasks"
        storage_quota_bytes = _env_int(_k("STORAGE_QUOTA_BYTES"), DEFAULT_STORAGE_QUOTA_BYTES)

        page_size = _env_int(_k("PAGE_SIZE"), 10)
        if page_size < 1:
            page_size = 10

        default_sort_field = _env_choice(
            _k("SORT_FIELD"),
            "createdAt",
            {"title", "dueDate", "priority", "status", "createdAt"},
        )
        default_sort_direction = _env_choice(_k("SORT_DIRECTION"), "desc", {"asc", "desc"})

        # NO_COLOR is the common cross-tool convention; our own flag wins when set.
        color = _env_bool(_k("COLOR"), os.getenv("NO_COLOR") is None)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_key=storage_key,
            storage_quota_bytes=storage_quota_bytes,
            page_size=page_size,
            default_sort_field=default_sort_field,
            default_sort_direction=default_sort_direction,
            color=color,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
