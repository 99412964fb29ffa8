"""
bootstrap/logging_setup.py - Logging configuration
"""

from __future__ import annotations
from typing import Optional
import json
import logging
import sys

from .config import LoggingConfig

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
HANDLER_MARK = "_initsort_handler"


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record):
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    fmt: str = DEFAULT_FORMAT,
) -> None:
    """
    Configure root logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
        fmt: Format string for plain-text logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JSONFormatter() if json_format else logging.Formatter(fmt)

    # Console handler (stderr, so command output on stdout stays clean)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Replace handlers from an earlier call instead of stacking them
    for handler in [h for h in root_logger.handlers if getattr(h, HANDLER_MARK, False)]:
        root_logger.removeHandler(handler)
        handler.close()

    setattr(console_handler, HANDLER_MARK, True)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        setattr(file_handler, HANDLER_MARK, True)
        root_logger.addHandler(file_handler)


def setup_logging_from_config(config: LoggingConfig, level_override: Optional[str] = None) -> None:
    """Configure logging from a LoggingConfig."""
    setup_logging(
        level=level_override or config.level,
        log_file=config.log_file,
        json_format=config.json_logs,
        fmt=config.format,
    )
