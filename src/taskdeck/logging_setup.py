# src/taskdeck/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGER_PREFIX = "taskdeck."
LOG_FILE_NAME = "taskdeck.log"

# Loggers that talk on every save/load; on the console they only surface problems.
CHATTY_PREFIXES: tuple[str, ...] = ("taskdeck.tasks.task_storage",)

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """Keeps the task prompt readable; the log file still receives everything."""

    def __init__(self, chatty_prefixes: tuple[str, ...] = CHATTY_PREFIXES) -> None:
        super().__init__()
        self._chatty = chatty_prefixes

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith(APP_LOGGER_PREFIX):
            # warnings.warn() output and any third-party logger
            return record.levelno >= logging.ERROR
        if name.startswith(self._chatty):
            return record.levelno >= logging.WARNING
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskdeck",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install a filtered stderr handler and a full file handler on the root logger.

    Replaces any handlers already installed, so calling it twice does not
    duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
