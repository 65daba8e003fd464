"""Centralized application configuration."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import logging
import os
import sys


def get_default_data_dir(
    app_name: str,
    *,
    platform: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return an OS-specific user data directory for ``app_name``."""

    platform_id = (platform or sys.platform).lower()
    environ = dict(env or os.environ)
    home_dir = Path(home or Path.home())
    sanitized = app_name.strip() or "app"
    sanitized = sanitized.replace("/", "-").replace("\\", "-")

    if platform_id.startswith("win"):
        base = Path(environ.get("APPDATA") or home_dir / "AppData" / "Roaming")
    elif platform_id == "darwin":
        base = Path(environ.get("APPDATA") or home_dir / "Library" / "Application Support")
    else:
        base = Path(environ.get("XDG_DATA_HOME") or home_dir / ".local" / "share")

    return (base.expanduser() / sanitized)


APP_NAME = "SimpleTodo"


DATA_DIR = get_default_data_dir(APP_NAME)
LOG_DIR = DATA_DIR / "logs"

for _dir in (DATA_DIR, LOG_DIR):
    _dir.mkdir(parents=True, exist_ok=True)


DB_PATH = DATA_DIR / "tasks.db"
LOG_PATH = LOG_DIR / "simpletodo.log"


@dataclass(frozen=True)
class UISettings:
    app_title: str = "To-Do"
    theme_mode: str = "system"
    color_scheme_seed: str = "#2563EB"
    window_min_width: int = 420
    window_min_height: int = 640
    pending_label: str = "Pending Task's"
    completed_label: str = "Completed Task's"
    empty_placeholder: str = "No Task's Found"
    title_hint: str = "Task Title"


UI = UISettings()


@dataclass(frozen=True)
class TaskSettings:
    # "   " counts as an empty title when the edit session ends
    trim_whitespace_titles: bool = True


TASKS = TaskSettings()


@dataclass(frozen=True)
class LoggingSettings:
    level: int = logging.INFO
    path: Path = LOG_PATH
    max_bytes: int = 1_000_000
    backup_count: int = 3


LOGGING = LoggingSettings()


__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "LOG_DIR",
    "DB_PATH",
    "LOG_PATH",
    "UI",
    "TASKS",
    "LOGGING",
    "get_default_data_dir",
]
