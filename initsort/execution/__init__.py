"""
initsort Execution

Provides:
- ExecutionEngine: ordered, fault-isolated execution of run actions
- RunReport: attempted / succeeded / failed counts and audit table
"""

from .engine import (
    ExecutionEngine,
    ExecutionFailure,
    UnitExecution,
    RunReport,
    ProgressCallback,
)

__all__ = [
    "ExecutionEngine",
    "ExecutionFailure",
    "UnitExecution",
    "RunReport",
    "ProgressCallback",
]
