"""
reporting/updates.py - Current vs computed priorities

Lists units whose self-reported priority hint disagrees with the priority
the resolver computed. Writing the new values back is left to whoever owns
the units' source.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List

from initsort.core.results import AnalysisResult


@dataclass(frozen=True)
class PriorityUpdate:
    """A suggested priority change for one unit."""
    unit_id: str
    current: int
    suggested: int

    @property
    def delta(self) -> int:
        return self.suggested - self.current

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.unit_id,
            "current": self.current,
            "suggested": self.suggested,
            "delta": self.delta,
        }


def pending_priority_updates(analysis: AnalysisResult) -> List[PriorityUpdate]:
    """Units needing a priority update, in resolved order."""
    return [
        PriorityUpdate(unit_id=u.unit_id, current=u.priority_hint, suggested=u.priority)
        for u in analysis.units
        if u.needs_update
    ]
