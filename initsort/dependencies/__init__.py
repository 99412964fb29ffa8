"""
initsort Dependency Resolution

Provides:
- DependencyGraph: forward and reverse unit adjacency
- Resolver: topological order with cycle detection
- PriorityAssigner: descending priority scale and dependency depth
- Graph export helpers built on networkx
"""

from .graph import (
    DependencyGraph,
    GraphNode,
)
from .resolver import (
    Resolver,
    Resolution,
    resolve_order,
)
from .priority import (
    PriorityAssigner,
)
from .export import (
    to_networkx,
    strongly_connected_groups,
    graph_statistics,
    initialization_layers,
)

__all__ = [
    # Graph
    "DependencyGraph",
    "GraphNode",
    # Resolver
    "Resolver",
    "Resolution",
    "resolve_order",
    # Priority
    "PriorityAssigner",
    # Export
    "to_networkx",
    "strongly_connected_groups",
    "graph_statistics",
    "initialization_layers",
]
