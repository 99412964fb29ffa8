"""
bootstrap/entrypoints.py - Application entry points

Provides the `initsort` command:

    initsort [-c CONFIG] [-v] [--log-level L] [--log-file F] [--format F]
             {analyze,run,updates,graph} UNITS.json [options]
"""

from __future__ import annotations
from typing import List, Optional
import argparse
import logging
import sys

from .config import load_config
from .logging_setup import setup_logging_from_config

logger = logging.getLogger("bootstrap.entrypoints")


def build_parser(registry) -> argparse.ArgumentParser:
    """Top-level parser with one subparser per registered command."""
    parser = argparse.ArgumentParser(
        description="Initialization unit dependency resolver",
        prog="initsort",
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging and a diagnostic listing after command output",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (overrides configuration)",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path",
        default=None,
    )
    parser.add_argument(
        "--format",
        choices=["text", "json", "table"],
        default="text",
        help="Output format",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Shorthand for --format json",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    for name, command in registry.get_all().items():
        sub = subparsers.add_parser(
            name,
            aliases=list(command.aliases),
            help=command.description,
            description=command.description,
        )
        command.configure_parser(sub)

    return parser


def cli_main(args: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code: 0 on success, 1 when a unit failed or the input could
        not be loaded, 2 on usage errors
    """
    from initsort.cli.commands import create_command_registry
    from initsort.cli.core import CLIContext, OutputFormat, format_output
    from initsort.errors.taxonomy import ConfigurationError

    registry = create_command_registry()
    parser = build_parser(registry)
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 2

    try:
        config = load_config(parsed.config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.log_file:
        config.logging.log_file = parsed.log_file
    log_level = "DEBUG" if parsed.verbose else parsed.log_level
    setup_logging_from_config(config.logging, level_override=log_level)

    output_format = OutputFormat.JSON if parsed.json else OutputFormat(parsed.format)
    ctx = CLIContext(config=config, output_format=output_format, verbose=parsed.verbose)

    command = registry.get(parsed.command)
    try:
        result = command.execute(ctx, parsed)
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130

    output = format_output(result, ctx.output_format)
    if result.success:
        print(output)
    else:
        print(output, file=sys.stderr)
    return result.exit_code


def main():
    """Main entry point for the package."""
    sys.exit(cli_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
