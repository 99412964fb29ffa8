"""
errors/aggregator.py - Aggregate and report diagnostics
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List
import uuid

from .taxonomy import Diagnostic, DiagnosticCode, DiagnosticCategory, DiagnosticSeverity


@dataclass
class DiagnosticReport:
    """Aggregated diagnostic report."""

    report_id: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)

    # Counts
    total: int = 0
    by_severity: Dict[str, int] = field(default_factory=dict)
    by_code: Dict[str, int] = field(default_factory=dict)

    summary: str = ""

    diagnostics: List[Diagnostic] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_id": self.report_id,
            "total": self.total,
            "by_severity": self.by_severity,
            "by_code": self.by_code,
            "summary": self.summary,
        }


class DiagnosticAggregator:
    """
    Collects diagnostics from every pipeline stage.
    """

    def __init__(self):
        self._diagnostics: List[Diagnostic] = []
        self._by_unit: Dict[str, List[Diagnostic]] = {}

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic."""
        self._diagnostics.append(diagnostic)

        if diagnostic.unit_id is not None:
            self._by_unit.setdefault(diagnostic.unit_id, []).append(diagnostic)

    def add_all(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Add multiple diagnostics."""
        for diagnostic in diagnostics:
            self.add(diagnostic)

    def get_by_severity(self, severity: DiagnosticSeverity) -> List[Diagnostic]:
        return [d for d in self._diagnostics if d.severity == severity]

    def get_by_code(self, code: DiagnosticCode) -> List[Diagnostic]:
        return [d for d in self._diagnostics if d.code == code]

    def get_by_category(self, category: DiagnosticCategory) -> List[Diagnostic]:
        return [d for d in self._diagnostics if d.category == category]

    def get_by_unit(self, unit_id: str) -> List[Diagnostic]:
        return list(self._by_unit.get(unit_id, []))

    def has_errors(self) -> bool:
        return any(d.severity == DiagnosticSeverity.ERROR for d in self._diagnostics)

    def has_warnings(self) -> bool:
        return any(d.severity == DiagnosticSeverity.WARNING for d in self._diagnostics)

    def all(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def generate_report(self) -> DiagnosticReport:
        """Generate aggregated report."""
        report = DiagnosticReport(
            report_id=str(uuid.uuid4())[:8],
            total=len(self._diagnostics),
        )

        for severity in DiagnosticSeverity:
            count = sum(1 for d in self._diagnostics if d.severity == severity)
            if count > 0:
                report.by_severity[severity.value] = count

        for code in DiagnosticCode:
            count = sum(1 for d in self._diagnostics if d.code == code)
            if count > 0:
                report.by_code[code.name] = count

        if report.by_severity.get("error", 0) > 0:
            report.summary = f"{report.by_severity['error']} error(s) found"
        elif report.by_severity.get("warning", 0) > 0:
            report.summary = f"{report.by_severity['warning']} warning(s) found"
        else:
            report.summary = "No significant issues"

        report.diagnostics = self._diagnostics.copy()

        return report

    def clear(self) -> None:
        self._diagnostics.clear()
        self._by_unit.clear()

    def __len__(self) -> int:
        return len(self._diagnostics)
