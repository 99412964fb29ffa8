"""
kernel/pipeline.py - Resolution and execution pipeline

descriptors -> UnitStore -> DependencyGraph -> Resolver -> PriorityAssigner
-> AnalysisResult -> ExecutionEngine

The pipeline keeps no state between calls: every analyze()/execute() builds
its own store, graph and result, so one pipeline can serve concurrent
callers working on different unit sets.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple, Union
import logging

from initsort.bootstrap.config import ExecutionConfig, InitSortConfig, ResolutionConfig
from initsort.core.descriptors import RunAction, UnitDescriptor, UnitStore
from initsort.core.results import AnalysisResult, ResolvedUnit
from initsort.dependencies.graph import DependencyGraph
from initsort.dependencies.priority import PriorityAssigner
from initsort.dependencies.resolver import Resolver
from initsort.errors.aggregator import DiagnosticAggregator, DiagnosticReport
from initsort.errors.taxonomy import Diagnostic
from initsort.execution.engine import ExecutionEngine, RunReport
from initsort.providers.base import DescriptorProvider

logger = logging.getLogger(__name__)


UnitSource = Union[DescriptorProvider, Iterable[UnitDescriptor]]


class InitializationPipeline:
    """
    Resolves unit sets into an ordered, prioritized table and runs them.
    """

    def __init__(
        self,
        resolution: Optional[ResolutionConfig] = None,
        execution: Optional[ExecutionConfig] = None,
    ):
        self._resolution = resolution or ResolutionConfig()
        self._execution = execution or ExecutionConfig()
        self._assigner = PriorityAssigner(
            base=self._resolution.base_priority,
            step=self._resolution.priority_step,
            normalize_non_negative=self._resolution.normalize_non_negative,
        )

    @classmethod
    def from_config(cls, config: InitSortConfig) -> "InitializationPipeline":
        return cls(resolution=config.resolution, execution=config.execution)

    @property
    def resolution_config(self) -> ResolutionConfig:
        return self._resolution

    @property
    def execution_config(self) -> ExecutionConfig:
        return self._execution

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def analyze(self, source: UnitSource) -> AnalysisResult:
        """Resolve a unit set into an ordered, prioritized table."""
        _, analysis = self._analyze(source)
        return analysis

    def build_graph(self, source: UnitSource) -> DependencyGraph:
        """Build just the dependency graph (for export/reporting)."""
        store, _ = self._collect(source)
        return DependencyGraph.build(store, self._resolution.start_order)

    def _collect(self, source: UnitSource) -> Tuple[UnitStore, List[Diagnostic]]:
        """Snapshot descriptors from the source into a validated store."""
        diagnostics: List[Diagnostic] = []
        if isinstance(source, DescriptorProvider):
            descriptors = source.descriptors()
            diagnostics.extend(source.diagnostics())
        else:
            descriptors = list(source)

        store = UnitStore.from_descriptors(descriptors)
        diagnostics.extend(store.diagnostics)
        return store, diagnostics

    def _analyze(self, source: UnitSource) -> Tuple[UnitStore, AnalysisResult]:
        store, diagnostics = self._collect(source)

        graph = DependencyGraph.build(store, self._resolution.start_order)
        diagnostics.extend(graph.diagnostics)

        resolution = Resolver(graph).resolve()
        diagnostics.extend(resolution.diagnostics)

        priorities = self._assigner.assign(resolution.order)
        depths = PriorityAssigner.depths(graph, resolution.order)

        units = []
        for position, unit_id in enumerate(resolution.order, start=1):
            node = graph.get_node(unit_id)
            units.append(ResolvedUnit(
                unit_id=unit_id,
                order=position,
                priority=priorities[unit_id],
                depth=depths[unit_id],
                dependencies=set(node.depends_on),
                dependents=set(node.depended_by),
                unresolved_dependencies=set(node.unresolved),
                cycle_affected=unit_id in resolution.cycle_affected,
                priority_hint=node.descriptor.priority_hint,
            ))

        analysis = AnalysisResult(
            units=units,
            cycles=list(resolution.cycles),
            diagnostics=diagnostics,
        )

        logger.info(
            f"Analysis complete: {len(units)} units, {len(analysis.cycles)} cycle(s), "
            f"{len(diagnostics)} diagnostic(s)"
        )
        return store, analysis

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def execute(
        self,
        source: UnitSource,
        engine: Optional[ExecutionEngine] = None,
    ) -> RunReport:
        """Analyze a unit set, then run every unit's action in order."""
        store, analysis = self._analyze(source)
        actions: Dict[str, Optional[RunAction]] = {
            descriptor.unit_id: descriptor.run_action for descriptor in store
        }

        engine = engine or ExecutionEngine(
            unit_timeout_seconds=self._execution.unit_timeout_seconds,
        )
        report = engine.run(analysis, actions)
        report.diagnostics = list(analysis.diagnostics) + report.diagnostics
        return report

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    @staticmethod
    def diagnostics_report(result: Union[AnalysisResult, RunReport]) -> DiagnosticReport:
        """Aggregate the diagnostics of an analysis or a run."""
        aggregator = DiagnosticAggregator()
        aggregator.add_all(result.diagnostics)
        return aggregator.generate_report()
