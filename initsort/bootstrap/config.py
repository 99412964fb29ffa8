"""
bootstrap/config.py - Configuration

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import os
import json
import logging

from initsort.core.enums import StartOrder
from initsort.errors.taxonomy import ConfigurationError

logger = logging.getLogger("bootstrap.config")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class ResolutionConfig:
    """How orders and priorities are computed."""

    base_priority: int = 1000
    priority_step: int = 10
    normalize_non_negative: bool = True
    start_order: StartOrder = StartOrder.DECLARATION

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: non-integer priorities, non-positive step or
                unknown start order
        """
        try:
            self.start_order = StartOrder.parse(self.start_order)
        except ValueError as e:
            raise ConfigurationError(f"Unknown start order: {self.start_order!r}") from e
        try:
            self.base_priority = int(self.base_priority)
            self.priority_step = int(self.priority_step)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"base_priority and priority_step must be integers: {e}"
            ) from e
        if self.priority_step <= 0:
            raise ConfigurationError(
                f"priority_step must be positive, got {self.priority_step}"
            )

    @classmethod
    def from_env(cls) -> "ResolutionConfig":
        try:
            return cls(
                base_priority=int(os.getenv("INITSORT_BASE_PRIORITY", "1000")),
                priority_step=int(os.getenv("INITSORT_PRIORITY_STEP", "10")),
                normalize_non_negative=_env_bool("INITSORT_NORMALIZE", "true"),
                start_order=os.getenv("INITSORT_START_ORDER", "declaration"),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid resolution settings in environment: {e}") from e


@dataclass
class ExecutionConfig:
    """Execution pass settings."""

    unit_timeout_seconds: Optional[float] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: timeout that is not a positive number
        """
        timeout = self.unit_timeout_seconds
        if timeout is None:
            return
        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"unit_timeout_seconds must be a number, got {timeout!r}") from e
        if timeout <= 0:
            raise ConfigurationError(f"unit_timeout_seconds must be positive, got {timeout}")
        self.unit_timeout_seconds = timeout

    @classmethod
    def from_env(cls) -> "ExecutionConfig":
        timeout = os.getenv("INITSORT_UNIT_TIMEOUT")
        try:
            return cls(unit_timeout_seconds=float(timeout) if timeout else None)
        except ValueError as e:
            raise ConfigurationError(f"Invalid INITSORT_UNIT_TIMEOUT: {timeout!r}") from e


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if not isinstance(self.level, str) or self.level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {self.level!r} (expected one of {', '.join(LOG_LEVELS)})"
            )
        self.level = self.level.upper()

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("INITSORT_LOG_LEVEL", "INFO"),
            format=os.getenv("INITSORT_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("INITSORT_LOG_FILE"),
            json_logs=_env_bool("INITSORT_JSON_LOGS", "false"),
        )


@dataclass
class InitSortConfig:
    """Root configuration."""

    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "InitSortConfig":
        """Create configuration from environment variables."""
        return cls(
            resolution=ResolutionConfig.from_env(),
            execution=ExecutionConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "InitSortConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in config file {filepath}: {e}") from e

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "InitSortConfig":
        """Create config from dictionary, on top of the environment."""
        config = cls.from_env()

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config must be a JSON object, got {type(data).__name__}")

        for section in ("resolution", "execution", "logging"):
            if section in data:
                values = data[section]
                if not isinstance(values, dict):
                    raise ConfigurationError(f"Config section {section!r} must be an object")
                target = getattr(config, section)
                for key, value in values.items():
                    if hasattr(target, key):
                        setattr(target, key, value)
                    else:
                        logger.warning(f"Ignoring unknown config key: {section}.{key}")

        config.resolution.validate()
        config.execution.validate()
        config.logging.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "resolution": {
                "base_priority": self.resolution.base_priority,
                "priority_step": self.resolution.priority_step,
                "normalize_non_negative": self.resolution.normalize_non_negative,
                "start_order": self.resolution.start_order.value,
            },
            "execution": {
                "unit_timeout_seconds": self.execution.unit_timeout_seconds,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


def load_config(filepath: Optional[str] = None) -> InitSortConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        A new InitSortConfig; nothing is cached between calls.
    """
    if filepath:
        config = InitSortConfig.from_file(filepath)
    else:
        default_paths = [
            "./initsort.json",
            "./config/initsort.json",
            os.path.expanduser("~/.initsort/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                return InitSortConfig.from_file(path)

        config = InitSortConfig.from_env()

    logger.debug(f"Configuration loaded: {config.to_dict()}")
    return config
