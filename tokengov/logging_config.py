"""
Structured Logging Configuration

Provides:
- JSON lines for the rotating log file
- Human-readable lines for the console

Governance modules log through logging.getLogger(__name__) and attach
structured fields (proposal ids, weights, quorum) with
extra={"extra_data": {...}}. Both formatters render those fields.
"""

import json
import logging
import logging.handlers
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from tokengov.config.schema import LoggingConfig

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


def _created_at(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _extra_data(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "extra_data", None) or {}


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": _created_at(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        extra = _extra_data(record)
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(entry, default=str)


class StructuredFormatter(logging.Formatter):
    """[time] [LEVEL] [logger] message [key=value, ...]"""

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.colorize = use_color and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        if self.colorize and level in LEVEL_COLORS:
            level = f"{LEVEL_COLORS[level]}{level}{_RESET}"

        line = (
            f"[{_created_at(record):%Y-%m-%d %H:%M:%S}] "
            f"[{level}] [{record.name}] {record.getMessage()}"
        )

        extra = _extra_data(record)
        if extra:
            line += " [" + ", ".join(f"{k}={v}" for k, v in extra.items()) + "]"

        if record.exc_info:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return line


def _file_handler(
    log_file: Union[str, Path],
    json_format: bool,
    max_bytes: int,
    backup_count: int,
) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setFormatter(JSONFormatter() if json_format else StructuredFormatter(use_color=False))
    return handler


def setup_logging(
    level: Union[str, int] = logging.INFO,
    json_format: bool = True,
    log_file: Optional[Union[str, Path]] = None,
    console_output: bool = True,
    max_bytes: int = 100 * 1024 * 1024,  # 100MB
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configure the root logger, replacing any handlers it already has.

    Args:
        level: Logging level name or number
        json_format: Write JSON lines to the log file instead of console-style lines
        log_file: Path of the rotating log file; no file handler when None
        console_output: Also log to stdout
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files to keep

    Returns:
        Configured root logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handlers = []
    if log_file is not None:
        handlers.append(_file_handler(log_file, json_format, max_bytes, backup_count))
    if console_output:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(StructuredFormatter(use_color=True))
        handlers.append(console)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        root_logger.addHandler(handler)

    return root_logger


def setup_logging_from_config(config: LoggingConfig) -> logging.Logger:
    """Configure logging from a LoggingConfig model."""
    return setup_logging(
        level=config.level,
        json_format=config.json_format,
        log_file=config.file_path,
        max_bytes=config.max_file_size_mb * 1024 * 1024,
        backup_count=config.backup_count,
    )
