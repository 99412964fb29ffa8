"""
initsort Core

Descriptor, enum and result types shared by every pipeline stage.
"""

from .enums import StartOrder, VisitState, UnitOutcome
from .descriptors import RunAction, UnitDescriptor, UnitStore
from .results import CycleRecord, ResolvedUnit, AnalysisResult

__all__ = [
    # Enums
    "StartOrder",
    "VisitState",
    "UnitOutcome",
    # Descriptors
    "RunAction",
    "UnitDescriptor",
    "UnitStore",
    # Results
    "CycleRecord",
    "ResolvedUnit",
    "AnalysisResult",
]
