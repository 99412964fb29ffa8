"""
initsort Resolver

Topological sort with cycle detection over a DependencyGraph.

The walk is depth-first from each unit into its dependencies, using three
marks per node (unvisited / in progress / done). A node is appended to the
order once all of its dependencies are done, so dependencies always come
first. Re-entering a node that is still in progress means a cycle: the cycle
is recorded and the walk simply does not descend along that edge. Nothing is
raised and no node is dropped.

A single walk only sees the back-edges it happens to take, so once it finds
any cycle every member of a strongly connected group (more than one unit,
or a unit depending on itself) is flagged cycle-affected. A unit that reaches
the cycle through a side path is flagged the same as one found on the walk.

Tie-break: entry points and each node's dependencies are visited in the
graph's start order (declaration or lexicographic). Units with no ordering
constraint between them appear in the order the walk completes them, so
repeated calls on unchanged input give identical output.

The walk keeps its own stack instead of recursing, so long dependency
chains are not limited by the interpreter recursion limit.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Set, Tuple
import logging

from initsort.core.descriptors import UnitDescriptor
from initsort.core.enums import StartOrder, VisitState
from initsort.core.results import CycleRecord
from initsort.errors.taxonomy import Diagnostic, create_cycle_diagnostic

from .graph import DependencyGraph
from .export import strongly_connected_groups

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """Outcome of a resolver walk, accumulated as the walk proceeds."""
    order: List[str] = field(default_factory=list)
    cycle_affected: Set[str] = field(default_factory=set)
    cycles: List[CycleRecord] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def has_cycles(self) -> bool:
        return len(self.cycles) > 0

    def position(self, unit_id: str) -> int:
        """1-based position of a unit in the order."""
        return self.order.index(unit_id) + 1


class Resolver:
    """Produces a linear order of every unit in a graph."""

    def __init__(self, graph: DependencyGraph):
        self._graph = graph

    def resolve(self) -> Resolution:
        """Order all units, dependencies first."""
        marks: Dict[str, VisitState] = {
            unit_id: VisitState.UNVISITED for unit_id in self._graph.unit_ids()
        }
        outcome = Resolution()

        for entry_id in self._graph.entry_order():
            if marks[entry_id] == VisitState.UNVISITED:
                self._visit(entry_id, marks, outcome)

        if outcome.has_cycles:
            for group in strongly_connected_groups(self._graph):
                outcome.cycle_affected.update(group)
            logger.warning(
                f"Resolved {len(outcome.order)} units with {len(outcome.cycles)} cycle(s); "
                f"cycle-affected: {sorted(outcome.cycle_affected)}"
            )
        else:
            logger.info(f"Resolved {len(outcome.order)} units")

        return outcome

    def _visit(
        self,
        root_id: str,
        marks: Dict[str, VisitState],
        outcome: Resolution,
    ) -> None:
        """Depth-first walk from one entry point."""
        path: List[str] = []
        on_path: Dict[str, int] = {}
        stack: List[Tuple[str, Iterator[str]]] = []

        def enter(unit_id: str) -> None:
            marks[unit_id] = VisitState.IN_PROGRESS
            on_path[unit_id] = len(path)
            path.append(unit_id)
            stack.append((unit_id, iter(self._graph.dependencies_of(unit_id))))

        enter(root_id)

        while stack:
            unit_id, pending = stack[-1]
            descended = False

            for dep_id in pending:
                mark = marks[dep_id]

                if mark == VisitState.DONE:
                    continue

                if mark == VisitState.IN_PROGRESS:
                    self._record_cycle(dep_id, path[on_path[dep_id]:], outcome)
                    continue

                enter(dep_id)
                descended = True
                break

            if descended:
                continue

            stack.pop()
            path.pop()
            del on_path[unit_id]
            marks[unit_id] = VisitState.DONE
            outcome.order.append(unit_id)

    def _record_cycle(
        self,
        detected_at: str,
        segment: List[str],
        outcome: Resolution,
    ) -> None:
        """Record a cycle closing on detected_at and flag its members."""
        cycle_path = list(segment) + [detected_at]
        outcome.cycles.append(CycleRecord(detected_at=detected_at, path=cycle_path))
        outcome.cycle_affected.update(segment)
        outcome.diagnostics.append(create_cycle_diagnostic(detected_at, cycle_path))
        logger.warning(f"Cyclic dependency detected: {' -> '.join(cycle_path)}")


def resolve_order(
    units: Iterable[UnitDescriptor],
    start_order: StartOrder = StartOrder.DECLARATION,
) -> List[str]:
    """Convenience: order unit ids without building a full analysis."""
    return Resolver(DependencyGraph.build(units, start_order)).resolve().order
