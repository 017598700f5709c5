"""Logging configuration: rich console output plus a daily rolling log file."""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# handlers installed by configure_logging(), removed again on reconfiguration
_installed: list[logging.Handler] = []


def configure_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """
    Configure the "coursemanager" logger.

    Console messages go through rich at `level`; the file (if any) always
    records INFO and above.
    """
    root = logging.getLogger("coursemanager")

    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    console_level = getattr(logging, level.upper(), logging.WARNING)

    # stderr keeps log lines out of command output
    console = RichHandler(
        level=console_level, console=Console(stderr=True), show_path=False, rich_tracebacks=True
    )
    console.setFormatter(logging.Formatter("%(message)s"))
    _installed.append(console)

    file_level = console_level
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(log_file, when="midnight", backupCount=7, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        _installed.append(file_handler)
        file_level = min(console_level, logging.INFO)

    for handler in _installed:
        root.addHandler(handler)
    root.setLevel(file_level)
    root.propagate = False
