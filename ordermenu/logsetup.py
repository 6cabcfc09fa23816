"""Logging setup: a console handler and a rotating log file."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

_TZ = timezone(timedelta(hours=8))
_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s:%(lineno)d: %(message)s"

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 1,
}

_installed: list[logging.Handler] = []


@dataclass
class LogConfig:
    """Log file settings: file name prefix, file level, rotation policy."""

    file_name: str = "order"
    level: str = "info"
    rolling: str = "daily"


class _OffsetFormatter(logging.Formatter):
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.fromtimestamp(record.created, _TZ)
        return stamp.strftime("%Y-%m-%d %H:%M:%S.") + f"{stamp.microsecond // 1000:03d}"


class _StdoutHandler(logging.StreamHandler):
    """Writes to whatever sys.stdout is at the time of each record."""

    def __init__(self) -> None:
        super().__init__(sys.stdout)

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stdout
        super().emit(record)


def _level(name: str) -> int:
    return _LEVELS.get(name.strip().lower(), logging.INFO)


def _file_handler(path: Path, rolling: str) -> logging.Handler:
    if rolling == "never":
        return logging.FileHandler(path, encoding="utf-8")
    when = "H" if rolling == "hourly" else "midnight"
    return TimedRotatingFileHandler(path, when=when, encoding="utf-8")


def _log_uncaught(exc_type, exc_value, tb) -> None:
    logging.getLogger(__name__).error(
        "Unhandled exception: %s", exc_value, exc_info=(exc_type, exc_value, tb)
    )


def init_logger(log_config: LogConfig, base_dir: str | Path | None = None) -> logging.Handler:
    """Install console and file logging under base_dir/data/log; return the file handler."""
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    log_dir = base / "data" / "log"
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    formatter = _OffsetFormatter(_FORMAT)

    file_handler = _file_handler(log_dir / f"{log_config.file_name}.log", log_config.rolling)
    file_handler.setLevel(_level(log_config.level))
    file_handler.setFormatter(formatter)

    console = _StdoutHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(formatter)

    root.addHandler(console)
    root.addHandler(file_handler)
    root.setLevel(logging.INFO)
    _installed.extend([console, file_handler])

    sys.excepthook = _log_uncaught
    return file_handler