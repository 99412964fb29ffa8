"""
initsort Execution Engine

Runs each resolved unit's action exactly once, in resolved order (highest
priority first). A failing action is caught, recorded and the pass moves on;
nothing a unit does can stop the units after it from running, including a
call to sys.exit(). KeyboardInterrupt still propagates. Failed units are not
retried.

Optional per-unit timeout: when unit_timeout_seconds is set, each action
runs on a single worker thread and the engine stops waiting after the
timeout. The worker cannot be killed, so a stuck action keeps its thread
until it returns; the pass itself continues.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Set
import logging
import time
import uuid

from initsort.core.descriptors import RunAction
from initsort.core.enums import UnitOutcome
from initsort.core.results import AnalysisResult
from initsort.errors.taxonomy import Diagnostic, create_execution_diagnostic

logger = logging.getLogger(__name__)


ProgressCallback = Callable[[str, UnitOutcome], None]


# =============================================================================
# RUN REPORT
# =============================================================================

@dataclass
class ExecutionFailure:
    """A unit whose action raised or timed out."""
    unit_id: str
    detail: str
    error_type: str = "Exception"
    timed_out: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.unit_id,
            "detail": self.detail,
            "error_type": self.error_type,
            "timed_out": self.timed_out,
        }


@dataclass
class UnitExecution:
    """Per-unit record of one execution pass."""
    unit_id: str
    outcome: UnitOutcome
    order: int = 0
    priority: int = 0
    duration_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.unit_id,
            "outcome": self.outcome.value,
            "order": self.order,
            "priority": self.priority,
            "duration_ms": self.duration_ms,
        }


@dataclass
class RunReport:
    """Result of one execution pass."""
    execution_id: str
    started_at: datetime
    completed_at: Optional[datetime] = None

    attempted: int = 0
    succeeded: int = 0
    failed: List[ExecutionFailure] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    # Ids in invocation order
    executed: List[str] = field(default_factory=list)
    outcomes: Dict[str, UnitExecution] = field(default_factory=dict)

    # Table the pass ran against, kept for audit
    table: Optional[AnalysisResult] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def has_failures(self) -> bool:
        return len(self.failed) > 0

    @property
    def failed_ids(self) -> List[str]:
        return [f.unit_id for f in self.failed]

    def get_summary(self) -> Dict[str, Any]:
        return {
            "execution_id": self.execution_id,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "failed": self.failed_count,
            "skipped": len(self.skipped),
            "has_failures": self.has_failures,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "execution_id": self.execution_id,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "failed": [f.to_dict() for f in self.failed],
            "skipped": list(self.skipped),
            "executed": list(self.executed),
            "outcomes": {k: v.to_dict() for k, v in self.outcomes.items()},
            "table": self.table.to_dict() if self.table else None,
        }


def _failure_from(unit_id: str, error: BaseException) -> ExecutionFailure:
    return ExecutionFailure(
        unit_id=unit_id,
        detail=str(error) or type(error).__name__,
        error_type=type(error).__name__,
    )


# =============================================================================
# EXECUTION ENGINE
# =============================================================================

class ExecutionEngine:
    """
    Sequential, fault-isolated executor for a resolved unit table.
    """

    def __init__(self, unit_timeout_seconds: Optional[float] = None):
        self._timeout = unit_timeout_seconds
        self._progress_callbacks: List[ProgressCallback] = []

    @property
    def unit_timeout_seconds(self) -> Optional[float]:
        return self._timeout

    def run(
        self,
        analysis: AnalysisResult,
        actions: Mapping[str, Optional[RunAction]],
    ) -> RunReport:
        """
        Execute every unit of analysis in order.

        Args:
            analysis: Resolved, prioritized table
            actions: Run action per unit id; missing or None means skip
        """
        report = RunReport(
            execution_id=str(uuid.uuid4())[:8],
            started_at=datetime.utcnow(),
            table=analysis,
        )
        executed: Set[str] = set()

        logger.info(f"Executing {len(analysis.units)} units")

        for unit in analysis.units:
            if unit.unit_id in executed:
                logger.debug(f"Skipping {unit.unit_id} - already executed in this pass")
                self._notify_progress(unit.unit_id, UnitOutcome.DUPLICATE)
                continue
            executed.add(unit.unit_id)

            record = UnitExecution(
                unit_id=unit.unit_id,
                outcome=UnitOutcome.SKIPPED,
                order=unit.order,
                priority=unit.priority,
            )
            report.outcomes[unit.unit_id] = record

            action = actions.get(unit.unit_id)
            if action is None:
                report.skipped.append(unit.unit_id)
                logger.debug(f"Skipping {unit.unit_id} - no run action")
                self._notify_progress(unit.unit_id, record.outcome)
                continue

            report.attempted += 1
            report.executed.append(unit.unit_id)
            start_time = time.time()

            failure = self._invoke(unit.unit_id, action)

            record.duration_ms = int((time.time() - start_time) * 1000)
            if failure is None:
                record.outcome = UnitOutcome.SUCCEEDED
                report.succeeded += 1
                logger.debug(f"Initialized {unit.unit_id} in {record.duration_ms}ms")
            else:
                record.outcome = UnitOutcome.TIMED_OUT if failure.timed_out else UnitOutcome.FAILED
                report.failed.append(failure)
                report.diagnostics.append(
                    create_execution_diagnostic(unit.unit_id, failure.detail, failure.timed_out)
                )
                logger.error(f"Initialization of {unit.unit_id} failed: {failure.detail}")

            self._notify_progress(unit.unit_id, record.outcome)

        report.completed_at = datetime.utcnow()

        logger.info(
            f"Execution {report.execution_id} complete: {report.attempted} attempted, "
            f"{report.succeeded} succeeded, {report.failed_count} failed, "
            f"{len(report.skipped)} skipped"
        )
        return report

    def _invoke(self, unit_id: str, action: RunAction) -> Optional[ExecutionFailure]:
        """Run one action, returning a failure record instead of raising."""
        if self._timeout is None:
            try:
                action()
            except (Exception, SystemExit) as e:
                return _failure_from(unit_id, e)
            return None

        return self._invoke_with_timeout(unit_id, action, self._timeout)

    def _invoke_with_timeout(
        self,
        unit_id: str,
        action: RunAction,
        timeout_seconds: float,
    ) -> Optional[ExecutionFailure]:
        """Run one action on a worker thread, giving up after the timeout."""
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"initsort-{unit_id}")
        try:
            future = executor.submit(action)
            try:
                future.result(timeout=timeout_seconds)
            except FuturesTimeoutError:
                if not future.done():
                    return ExecutionFailure(
                        unit_id=unit_id,
                        detail=f"Timeout after {timeout_seconds}s",
                        error_type="TimeoutError",
                        timed_out=True,
                    )
                return _failure_from(unit_id, future.exception())
            except (Exception, SystemExit) as e:
                return _failure_from(unit_id, e)
            return None
        finally:
            executor.shutdown(wait=False)

    def _notify_progress(self, unit_id: str, outcome: UnitOutcome) -> None:
        """Notify progress callbacks."""
        for callback in self._progress_callbacks:
            try:
                callback(unit_id, outcome)
            except Exception as e:
                logger.error(f"Progress callback error: {e}")

    def on_progress(self, callback: ProgressCallback) -> None:
        """Register a progress callback."""
        self._progress_callbacks.append(callback)
