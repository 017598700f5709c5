"""
Configuration helpers.

Settings are read from environment variables once (cached) so that the CLI,
the interactive menu and the seeding routine do not touch os.environ directly:

    COURSEMANAGER_DATA_DIR   directory holding courses.json / instructors.json
    COURSEMANAGER_LOG_LEVEL  console log level (DEBUG, INFO, WARNING, ...)
    COURSEMANAGER_LOG_FILE   rolling log file; empty string disables it
    COURSEMANAGER_SEED       "1"/"true" -> load sample data on start
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional


def _default_data_dir() -> Path:
    """
    Default location of the JSON files: ./data relative to the working directory.

    Using a function instead of a constant makes testing easier,
    because tests can change the working directory or the environment.
    """
    return Path.cwd() / "data"


def _default_log_file() -> Path:
    return Path.cwd() / "logs" / "coursemanager.log"


def _bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    data_dir: Path
    log_level: str
    log_file: Optional[Path]
    seed_sample_data: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    data_dir = os.getenv("COURSEMANAGER_DATA_DIR")

    log_file_raw = os.getenv("COURSEMANAGER_LOG_FILE")
    if log_file_raw is None:
        log_file: Optional[Path] = _default_log_file()
    elif log_file_raw.strip():
        log_file = Path(log_file_raw.strip())
    else:
        log_file = None

    return Settings(
        data_dir=Path(data_dir) if data_dir else _default_data_dir(),
        log_level=(os.getenv("COURSEMANAGER_LOG_LEVEL") or "WARNING").strip().upper(),
        log_file=log_file,
        seed_sample_data=_bool(os.getenv("COURSEMANAGER_SEED"), False),
    )
