"""
initsort Core Enumerations
"""

from enum import Enum


class StartOrder(str, Enum):
    """
    Deterministic order in which the resolver picks entry points and
    walks a node's dependencies.
    """
    DECLARATION = "declaration"      # Order units were added to the store
    LEXICOGRAPHIC = "lexicographic"  # Ascending unit id

    @classmethod
    def parse(cls, value: "str | StartOrder") -> "StartOrder":
        """Accept enum members, values, or the hyphenated spellings."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-order", "").replace("-id", "")
        return cls(normalized)


class VisitState(str, Enum):
    """Three-color marking used by the resolver."""
    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class UnitOutcome(str, Enum):
    """What happened to a unit during an execution pass."""
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    SKIPPED = "skipped"          # No run action registered
    DUPLICATE = "duplicate"      # Already executed in this pass
