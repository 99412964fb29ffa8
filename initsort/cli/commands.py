"""
cli/commands.py - CLI command implementations

Every command reads a unit file (JSON, see providers/json_file.py) and
reports through CommandResult; rendering is left to format_output().
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import argparse

from .core import CLICommand, CLIContext, CommandRegistry, CommandResult
from initsort.dependencies.export import graph_statistics, initialization_layers, strongly_connected_groups
from initsort.errors.taxonomy import ConfigurationError, Diagnostic, InitSortError, ProviderError
from initsort.providers.json_file import JsonFileProvider
from initsort.reporting import (
    format_rows,
    pending_priority_updates,
    render_order,
    render_run_report,
    render_table,
)


RUN_COLUMNS = ["order", "id", "outcome", "ms"]


def _add_resolution_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Path to unit file (JSON)")
    parser.add_argument(
        "--start-order",
        choices=["declaration", "lexicographic"],
        default=None,
        help="Order in which entry points and siblings are visited",
    )
    parser.add_argument("--base", type=int, default=None, help="Base priority")
    parser.add_argument("--step", type=int, default=None, help="Priority step")


def _resolution_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """ResolutionConfig fields given on the command line."""
    overrides = {}
    if getattr(args, "start_order", None):
        overrides["start_order"] = args.start_order
    if getattr(args, "base", None) is not None:
        overrides["base_priority"] = args.base
    if getattr(args, "step", None) is not None:
        overrides["priority_step"] = args.step
    return overrides


def _diagnostic_lines(ctx: CLIContext, diagnostics: List[Diagnostic]) -> List[str]:
    """Diagnostic listing appended to output in verbose mode."""
    if not ctx.verbose or not diagnostics:
        return []
    lines = [f"{len(diagnostics)} diagnostic(s):"]
    for d in diagnostics:
        lines.append(f"  {d.severity.value.upper()} {d.code.name}: {d.message}")
    return lines


def _join(body: str, extra: List[str]) -> str:
    return "\n".join([body] + extra) if extra else body


def _failure(error: Exception) -> CommandResult:
    return CommandResult(success=False, error=str(error), exit_code=1)


class AnalyzeCommand(CLICommand):
    """Resolve a unit file and print the ordered priority table."""

    name = "analyze"
    description = "Resolve initialization order and priorities"
    aliases = ["order"]

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        _add_resolution_options(parser)

    def execute(self, ctx: CLIContext, args: argparse.Namespace) -> CommandResult:
        try:
            pipeline = ctx.pipeline(_resolution_overrides(args))
            provider = JsonFileProvider(args.path, resolve_actions=False)
            analysis = pipeline.analyze(provider)
        except (ProviderError, ConfigurationError) as e:
            return _failure(e)

        warnings = analysis.warnings
        message = f"{len(analysis)} units resolved"
        if analysis.has_cycles:
            message += f", {len(analysis.cycles)} cycle(s) broken"
        if warnings:
            message += f", {len(warnings)} warning(s)"

        detail = _diagnostic_lines(ctx, analysis.diagnostics)
        return CommandResult(
            success=True,
            message=message,
            data=analysis.to_dict(),
            rendered=_join(render_order(analysis), detail),
            table=_join(render_table(analysis), detail),
        )


class RunCommand(CLICommand):
    """Resolve a unit file and invoke every unit's action in order."""

    name = "run"
    description = "Execute unit actions in resolved order"
    aliases = ["execute"]

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        _add_resolution_options(parser)
        parser.add_argument(
            "--timeout",
            type=float,
            default=None,
            help="Per-unit timeout in seconds",
        )

    def execute(self, ctx: CLIContext, args: argparse.Namespace) -> CommandResult:
        try:
            pipeline = ctx.pipeline(_resolution_overrides(args), unit_timeout=args.timeout)
            report = pipeline.execute(JsonFileProvider(args.path))
        except InitSortError as e:
            return _failure(e)

        rows = [
            {
                "order": record.order,
                "id": record.unit_id,
                "outcome": record.outcome.value,
                "ms": record.duration_ms,
            }
            for record in report.outcomes.values()
        ]
        summary = render_run_report(report)
        detail = _diagnostic_lines(ctx, report.diagnostics)
        return CommandResult(
            success=True,
            message="",
            data=report.to_dict(),
            rendered=_join(summary, detail),
            table=_join(summary + "\n" + format_rows(rows, RUN_COLUMNS), detail),
            exit_code=1 if report.has_failures else 0,
        )


class UpdatesCommand(CLICommand):
    """List units whose declared priority differs from the computed one."""

    name = "updates"
    description = "Show pending priority updates"
    aliases = ["diff"]

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        _add_resolution_options(parser)

    def execute(self, ctx: CLIContext, args: argparse.Namespace) -> CommandResult:
        try:
            pipeline = ctx.pipeline(_resolution_overrides(args))
            analysis = pipeline.analyze(JsonFileProvider(args.path, resolve_actions=False))
        except (ProviderError, ConfigurationError) as e:
            return _failure(e)

        updates = pending_priority_updates(analysis)
        if not updates:
            return CommandResult(success=True, message="All priorities up to date", data=[])

        lines = [
            f"{u.unit_id}: {u.current} -> {u.suggested} ({u.delta:+d})"
            for u in updates
        ]
        rows = [
            {"id": u.unit_id, "current": u.current, "suggested": u.suggested, "delta": f"{u.delta:+d}"}
            for u in updates
        ]
        return CommandResult(
            success=True,
            message=f"{len(updates)} unit(s) need a priority update",
            data=[u.to_dict() for u in updates],
            rendered="\n".join(lines),
            table=format_rows(rows, ["id", "current", "suggested", "delta"]),
        )


class GraphCommand(CLICommand):
    """Summarize the dependency graph of a unit file."""

    name = "graph"
    description = "Show dependency graph statistics"
    aliases = ["stats"]

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        _add_resolution_options(parser)

    def execute(self, ctx: CLIContext, args: argparse.Namespace) -> CommandResult:
        try:
            pipeline = ctx.pipeline(_resolution_overrides(args))
            graph = pipeline.build_graph(JsonFileProvider(args.path, resolve_actions=False))
        except (ProviderError, ConfigurationError) as e:
            return _failure(e)

        data = graph_statistics(graph)
        data["cycle_groups"] = strongly_connected_groups(graph)
        data["layers"] = initialization_layers(graph)

        rows = [{"metric": key, "value": value} for key, value in data.items()]
        return CommandResult(
            success=True,
            message=f"Dependency graph of {args.path}",
            data=data,
            table=format_rows(rows, ["metric", "value"]),
        )


def create_command_registry(registry: Optional[CommandRegistry] = None) -> CommandRegistry:
    """Registry holding every built-in command."""
    registry = registry or CommandRegistry()
    for command in (AnalyzeCommand(), RunCommand(), UpdatesCommand(), GraphCommand()):
        registry.register(command)
    return registry


__all__ = [
    "AnalyzeCommand",
    "RunCommand",
    "UpdatesCommand",
    "GraphCommand",
    "create_command_registry",
]
