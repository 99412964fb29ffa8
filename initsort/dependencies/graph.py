"""
initsort Dependency Graph

Builds forward (depends_on) and reverse (depended_by) adjacency for one
validated unit batch. Dependency ids with no matching unit are recorded as
unresolved and left out of the graph.

depended_by is always derived from depends_on during build(); nothing else
mutates it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set
import logging

from initsort.core.descriptors import UnitDescriptor, UnitStore
from initsort.core.enums import StartOrder
from initsort.errors.taxonomy import Diagnostic, create_unresolved_diagnostic

logger = logging.getLogger(__name__)


# =============================================================================
# GRAPH NODE
# =============================================================================

@dataclass
class GraphNode:
    """A node in the unit dependency graph."""
    descriptor: UnitDescriptor
    declaration_index: int = 0

    # Edges
    depends_on: Set[str] = field(default_factory=set)    # Units that run first
    depended_by: Set[str] = field(default_factory=set)   # Reverse edges

    # Declared ids with no matching unit
    unresolved: Set[str] = field(default_factory=set)

    @property
    def unit_id(self) -> str:
        return self.descriptor.unit_id


# =============================================================================
# DEPENDENCY GRAPH
# =============================================================================

class DependencyGraph:
    """
    Directed graph of unit dependencies.

    An edge a -> b means a depends on b, so b must be initialized first.
    """

    def __init__(self, start_order: StartOrder = StartOrder.DECLARATION):
        self._nodes: Dict[str, GraphNode] = {}
        self._start_order = StartOrder.parse(start_order)
        self._diagnostics: List[Diagnostic] = []
        self._is_built: bool = False

    @classmethod
    def build(
        cls,
        units: "UnitStore | Iterable[UnitDescriptor]",
        start_order: StartOrder = StartOrder.DECLARATION,
    ) -> "DependencyGraph":
        """Build a graph from a store (or any iterable of descriptors)."""
        if not isinstance(units, UnitStore):
            units = UnitStore.from_descriptors(units)

        graph = cls(start_order)
        for index, descriptor in enumerate(units):
            graph._nodes[descriptor.unit_id] = GraphNode(
                descriptor=descriptor,
                declaration_index=index,
            )

        graph._build_forward_edges()
        graph._build_reverse_edges()
        graph._is_built = True

        logger.info(
            f"Dependency graph built: {len(graph._nodes)} units, "
            f"{graph.edge_count} edges, {graph.unresolved_count} unresolved references"
        )
        return graph

    def _build_forward_edges(self) -> None:
        """Copy declared dependencies, splitting off the unresolved ones."""
        for node_id, node in self._nodes.items():
            for dep_id in self._sorted(node.descriptor.dependencies):
                if dep_id in self._nodes:
                    node.depends_on.add(dep_id)
                else:
                    node.unresolved.add(dep_id)
                    self._diagnostics.append(create_unresolved_diagnostic(node_id, dep_id))
                    logger.warning(f"{node_id} depends on missing {dep_id}")

    def _build_reverse_edges(self) -> None:
        """Build depended_by edges."""
        for node_id, node in self._nodes.items():
            for dep_id in node.depends_on:
                self._nodes[dep_id].depended_by.add(node_id)

    def _sorted(self, unit_ids: Iterable[str]) -> List[str]:
        """Order ids by the configured start order; unknown ids sort last by name."""
        if self._start_order == StartOrder.LEXICOGRAPHIC:
            return sorted(unit_ids)

        def key(unit_id: str):
            node = self._nodes.get(unit_id)
            if node is None:
                return (1, 0, unit_id)
            return (0, node.declaration_index, unit_id)

        return sorted(unit_ids, key=key)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def start_order(self) -> StartOrder:
        return self._start_order

    def entry_order(self) -> List[str]:
        """All unit ids in deterministic traversal start order."""
        return self._sorted(self._nodes.keys())

    def dependencies_of(self, unit_id: str) -> List[str]:
        """Resolved dependencies of a unit, in deterministic order."""
        node = self._nodes.get(unit_id)
        return self._sorted(node.depends_on) if node else []

    def dependents_of(self, unit_id: str) -> List[str]:
        """Units that directly depend on this one, in deterministic order."""
        node = self._nodes.get(unit_id)
        return self._sorted(node.depended_by) if node else []

    def get_node(self, unit_id: str) -> Optional[GraphNode]:
        return self._nodes.get(unit_id)

    def has_unit(self, unit_id: str) -> bool:
        return unit_id in self._nodes

    def unit_ids(self) -> List[str]:
        return list(self._nodes.keys())

    def get_transitive_dependencies(self, unit_id: str) -> Set[str]:
        """Get all units this one transitively depends on."""
        result = set()
        to_process = [unit_id]

        while to_process:
            current = to_process.pop()
            node = self._nodes.get(current)
            if node:
                for dep_id in node.depends_on:
                    if dep_id not in result:
                        result.add(dep_id)
                        to_process.append(dep_id)

        return result

    def get_transitive_dependents(self, unit_id: str) -> Set[str]:
        """Get all units that transitively depend on this one."""
        result = set()
        to_process = [unit_id]

        while to_process:
            current = to_process.pop()
            node = self._nodes.get(current)
            if node:
                for dep_id in node.depended_by:
                    if dep_id not in result:
                        result.add(dep_id)
                        to_process.append(dep_id)

        return result

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    @property
    def edge_count(self) -> int:
        return sum(len(n.depends_on) for n in self._nodes.values())

    @property
    def unresolved_count(self) -> int:
        return sum(len(n.unresolved) for n in self._nodes.values())

    @property
    def is_built(self) -> bool:
        return self._is_built

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, unit_id: object) -> bool:
        return unit_id in self._nodes

    def to_dict(self) -> Dict[str, Any]:
        """Serialize graph for display."""
        return {
            "start_order": self._start_order.value,
            "nodes": {
                unit_id: {
                    "depends_on": self.dependencies_of(unit_id),
                    "depended_by": self.dependents_of(unit_id),
                    "unresolved": sorted(node.unresolved),
                    "declaration_index": node.declaration_index,
                }
                for unit_id, node in self._nodes.items()
            },
        }
