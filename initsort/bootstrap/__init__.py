"""
bootstrap/ - Bootstrap Layer

Provides configuration loading, logging setup and the command-line entry point.
"""

from .config import (
    InitSortConfig,
    ResolutionConfig,
    ExecutionConfig,
    LoggingConfig,
    load_config,
)

from .logging_setup import (
    JSONFormatter,
    setup_logging,
    setup_logging_from_config,
)

from .entrypoints import (
    build_parser,
    cli_main,
)


__all__ = [
    # Config
    "InitSortConfig",
    "ResolutionConfig",
    "ExecutionConfig",
    "LoggingConfig",
    "load_config",
    # Logging
    "JSONFormatter",
    "setup_logging",
    "setup_logging_from_config",
    # Entry points
    "build_parser",
    "cli_main",
]
