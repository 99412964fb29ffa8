"""
reporting/render.py - Text and JSON renderings of analysis and run results
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json

from initsort.core.results import AnalysisResult
from initsort.dependencies.export import graph_statistics, strongly_connected_groups
from initsort.dependencies.graph import DependencyGraph
from initsort.execution.engine import RunReport

from .updates import pending_priority_updates


TABLE_COLUMNS = ["order", "priority", "id", "depth", "depends on", "flags"]


def _flags(unit) -> str:
    flags = []
    if unit.cycle_affected:
        flags.append("cycle")
    if unit.unresolved_dependencies:
        flags.append("unresolved:" + ",".join(sorted(unit.unresolved_dependencies)))
    if unit.needs_update:
        flags.append(f"hint:{unit.priority_hint}")
    return " ".join(flags)


def analysis_rows(analysis: AnalysisResult) -> List[Dict[str, Any]]:
    """Flat rows for tabular display."""
    return [
        {
            "order": u.order,
            "priority": u.priority,
            "id": u.unit_id,
            "depth": u.depth,
            "depends on": ", ".join(sorted(u.dependencies)),
            "flags": _flags(u),
        }
        for u in analysis.units
    ]


def format_rows(rows: List[Dict[str, Any]], columns: List[str]) -> str:
    """Fixed-width table with an upper-case header and a dashed rule."""
    widths = {
        col: max([len(col)] + [len(str(row[col])) for row in rows])
        for col in columns
    }

    lines = [
        "  ".join(col.upper().ljust(widths[col]) for col in columns).rstrip(),
        "  ".join("-" * widths[col] for col in columns),
    ]
    for row in rows:
        lines.append("  ".join(str(row[col]).ljust(widths[col]) for col in columns).rstrip())
    return "\n".join(lines)


def render_table(analysis: AnalysisResult) -> str:
    """Fixed-width table of the resolved order."""
    lines = [format_rows(analysis_rows(analysis), TABLE_COLUMNS)]
    for cycle in analysis.cycles:
        lines.append(f"cycle at {cycle.detected_at}: {' -> '.join(cycle.path)}")

    return "\n".join(lines)


def render_order(analysis: AnalysisResult) -> str:
    """One line per unit: position, id, priority and any flags."""
    lines = []
    for unit in analysis.units:
        line = f"{unit.order:>4}. {unit.unit_id} (priority {unit.priority})"
        flags = _flags(unit)
        if flags:
            line += f" [{flags}]"
        lines.append(line)
    for cycle in analysis.cycles:
        lines.append(f"cycle at {cycle.detected_at}: {' -> '.join(cycle.path)}")
    return "\n".join(lines)


def render_json(analysis: AnalysisResult, graph: Optional[DependencyGraph] = None) -> str:
    """JSON document of the analysis, with graph statistics when available."""
    data = analysis.to_dict()
    data["priority_updates"] = [u.to_dict() for u in pending_priority_updates(analysis)]
    if graph is not None:
        data["statistics"] = graph_statistics(graph)
        data["cycle_groups"] = strongly_connected_groups(graph)
    return json.dumps(data, indent=2, default=str)


def render_run_report(report: RunReport) -> str:
    """Human-readable summary of an execution pass."""
    lines = [
        f"Execution {report.execution_id}: {report.attempted} attempted, "
        f"{report.succeeded} succeeded, {report.failed_count} failed, "
        f"{len(report.skipped)} skipped",
    ]
    for failure in report.failed:
        kind = "timed out" if failure.timed_out else failure.error_type
        lines.append(f"  FAILED {failure.unit_id} ({kind}): {failure.detail}")
    if report.skipped:
        lines.append(f"  no action: {', '.join(report.skipped)}")
    return "\n".join(lines)
