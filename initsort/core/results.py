"""
initsort Resolution Results

Output records of a resolution pass: one ResolvedUnit per valid input unit,
the cycles found, and the diagnostics collected along the way.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from initsort.errors.taxonomy import Diagnostic, DiagnosticSeverity


@dataclass
class CycleRecord:
    """A cycle found by the resolver."""
    detected_at: str      # Node that was re-entered while in progress
    path: List[str]       # detected_at -> ... -> detected_at

    @property
    def members(self) -> Set[str]:
        return set(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detected_at": self.detected_at,
            "path": list(self.path),
        }


@dataclass
class ResolvedUnit:
    """A unit with its place in the resolved order."""
    unit_id: str
    order: int                 # 1-based, 1 runs first
    priority: int              # Higher runs earlier
    depth: int = 0             # Longest dependency chain below this unit

    dependencies: Set[str] = field(default_factory=set)
    dependents: Set[str] = field(default_factory=set)
    unresolved_dependencies: Set[str] = field(default_factory=set)

    cycle_affected: bool = False
    priority_hint: Optional[int] = None

    @property
    def needs_update(self) -> bool:
        """Self-reported priority differs from the computed one."""
        return self.priority_hint is not None and self.priority_hint != self.priority

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.unit_id,
            "order": self.order,
            "priority": self.priority,
            "depth": self.depth,
            "dependencies": sorted(self.dependencies),
            "dependents": sorted(self.dependents),
            "cycle_affected": self.cycle_affected,
            "unresolved_dependencies": sorted(self.unresolved_dependencies),
            "priority_hint": self.priority_hint,
            "needs_update": self.needs_update,
        }


@dataclass
class AnalysisResult:
    """Ordered, prioritized unit table plus diagnostics."""
    units: List[ResolvedUnit] = field(default_factory=list)
    cycles: List[CycleRecord] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def order(self) -> List[str]:
        return [u.unit_id for u in self.units]

    @property
    def priorities(self) -> Dict[str, int]:
        return {u.unit_id: u.priority for u in self.units}

    @property
    def cycle_affected(self) -> List[str]:
        return [u.unit_id for u in self.units if u.cycle_affected]

    @property
    def has_cycles(self) -> bool:
        return len(self.cycles) > 0

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == DiagnosticSeverity.WARNING]

    def get(self, unit_id: str) -> Optional[ResolvedUnit]:
        for unit in self.units:
            if unit.unit_id == unit_id:
                return unit
        return None

    def __len__(self) -> int:
        return len(self.units)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "units": [u.to_dict() for u in self.units],
            "cycles": [c.to_dict() for c in self.cycles],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
