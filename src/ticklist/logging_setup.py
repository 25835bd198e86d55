# src/ticklist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "ticklist.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"

# Debounced flushes and timer firings happen on every keystroke-sized change.
_QUIET_OWN_LOGGERS = frozenset({"ticklist.core.timers", "ticklist.tasks.persistence"})


class _ConsoleNoiseFilter(logging.Filter):
    """Own logs pass (the quiet ones from WARNING); other libraries only from ERROR."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith("ticklist."):
            return record.levelno >= logging.ERROR
        if record.name in _QUIET_OWN_LOGGERS:
            return record.levelno >= logging.WARNING
        return True


def _console_handler(level: int, fmt: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.addFilter(_ConsoleNoiseFilter())
    return handler


def _file_handler(path: Path, level: int, fmt: logging.Formatter) -> logging.Handler:
    handler = logging.FileHandler(str(path), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/ticklist",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """Replace root handlers with a filtered stderr handler plus a full log file; returns the file path."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    root.addHandler(_console_handler(console_level, fmt))
    root.addHandler(_file_handler(log_file, file_level, fmt))

    logging.captureWarnings(True)
    # The console confirm prompt blocks the loop; asyncio debug mode reports that as a slow callback.
    logging.getLogger("asyncio").setLevel(logging.ERROR)
    return log_file
