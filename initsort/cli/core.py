"""
cli/core.py - Core CLI infrastructure
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
import dataclasses
from enum import Enum
from abc import ABC, abstractmethod
import argparse
import json
import logging

from initsort.bootstrap.config import InitSortConfig
from initsort.kernel.pipeline import InitializationPipeline

logger = logging.getLogger("cli")


class OutputFormat(Enum):
    """Output format options."""
    TEXT = "text"
    JSON = "json"
    TABLE = "table"


@dataclass
class CLIContext:
    """Context for CLI operations."""

    config: InitSortConfig = field(default_factory=InitSortConfig)

    # Output settings
    output_format: OutputFormat = OutputFormat.TEXT
    verbose: bool = False

    def pipeline(
        self,
        resolution_overrides: Optional[Dict[str, Any]] = None,
        unit_timeout: Optional[float] = None,
    ) -> InitializationPipeline:
        """
        Pipeline for this context's config.

        Args:
            resolution_overrides: ResolutionConfig fields to replace
            unit_timeout: Per-unit timeout replacing the configured one

        Raises:
            ConfigurationError: an override fails validation
        """
        resolution = self.config.resolution
        if resolution_overrides:
            resolution = dataclasses.replace(resolution, **resolution_overrides)

        execution = self.config.execution
        if unit_timeout is not None:
            execution = dataclasses.replace(execution, unit_timeout_seconds=unit_timeout)

        return InitializationPipeline(resolution=resolution, execution=execution)


@dataclass
class CommandResult:
    """Result of a CLI command execution."""

    success: bool = True
    message: str = ""
    data: Any = None
    error: Optional[str] = None

    # Pre-rendered output, used instead of data when set: rendered for
    # text, table for table format (falling back to rendered)
    rendered: Optional[str] = None
    table: Optional[str] = None
    exit_code: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "error": self.error,
        }


class CLICommand(ABC):
    """Base class for CLI commands."""

    name: str = "command"
    description: str = "Base command"
    aliases: List[str] = []

    @abstractmethod
    def execute(self, ctx: CLIContext, args: argparse.Namespace) -> CommandResult:
        """Execute the command."""
        pass

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        """Configure argument parser for this command."""
        pass


class CommandRegistry:
    """Registry for CLI commands."""

    def __init__(self):
        self._commands: Dict[str, CLICommand] = {}
        self._aliases: Dict[str, str] = {}

    def register(self, command: CLICommand) -> None:
        """Register a command."""
        self._commands[command.name] = command
        for alias in command.aliases:
            self._aliases[alias] = command.name

    def get(self, name: str) -> Optional[CLICommand]:
        """Get command by name or alias."""
        if name in self._commands:
            return self._commands[name]
        if name in self._aliases:
            return self._commands[self._aliases[name]]
        return None

    def list_commands(self) -> List[str]:
        return list(self._commands.keys())

    def get_all(self) -> Dict[str, CLICommand]:
        return dict(self._commands)


def format_output(result: CommandResult, format: OutputFormat) -> str:
    """Format command result for display."""
    if format == OutputFormat.JSON:
        return json.dumps(result.to_dict(), indent=2, default=str)

    if not result.success:
        return f"Error: {result.error}"

    body = result.rendered
    if format == OutputFormat.TABLE and result.table is not None:
        body = result.table

    if body is not None:
        if result.message:
            return f"{result.message}\n{body}"
        return body

    output = result.message
    if result.data:
        if isinstance(result.data, dict):
            for k, v in result.data.items():
                output += f"\n  {k}: {v}"
        elif isinstance(result.data, list):
            for item in result.data:
                output += f"\n  {item}"
        else:
            output += f"\n{result.data}"
    return output
