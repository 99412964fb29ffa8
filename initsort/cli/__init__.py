"""
cli/ - Command Line Interface

Provides command-line access to initsort:
- analyze: resolved order and priority table
- run: execute unit actions in order
- updates: declared vs computed priorities
- graph: dependency graph statistics
"""

from .core import (
    CLIContext,
    OutputFormat,
    CommandResult,
    CommandRegistry,
    CLICommand,
    format_output,
)

from .commands import (
    AnalyzeCommand,
    RunCommand,
    UpdatesCommand,
    GraphCommand,
    create_command_registry,
)


__all__ = [
    # Core
    "CLIContext",
    "OutputFormat",
    "CommandResult",
    "CommandRegistry",
    "CLICommand",
    "format_output",
    # Commands
    "AnalyzeCommand",
    "RunCommand",
    "UpdatesCommand",
    "GraphCommand",
    "create_command_registry",
]
