"""
initsort Graph Export

NetworkX views of a DependencyGraph for display and reporting layers.
Edges point from dependency to dependent (b -> a when a depends on b),
i.e. in initialization order.
"""

from typing import Any, Dict, List, Set

import networkx as nx

from .graph import DependencyGraph

__all__ = [
    'to_networkx',
    'strongly_connected_groups',
    'graph_statistics',
    'initialization_layers',
]


def to_networkx(graph: DependencyGraph) -> 'nx.DiGraph':
    """
    Build a DiGraph with one node per unit.

    Node attributes: declaration_index, unresolved (sorted list),
    priority_hint.
    """
    G = nx.DiGraph()
    for unit_id in graph.entry_order():
        node = graph.get_node(unit_id)
        G.add_node(
            unit_id,
            declaration_index=node.declaration_index,
            unresolved=sorted(node.unresolved),
            priority_hint=node.descriptor.priority_hint,
        )
    for unit_id in graph.entry_order():
        for dep_id in graph.dependencies_of(unit_id):
            G.add_edge(dep_id, unit_id)
    return G


def strongly_connected_groups(graph: DependencyGraph) -> List[List[str]]:
    """
    Groups of units that sit on a common cycle.

    Only groups with more than one unit, or a unit depending on itself,
    are returned. Each group is sorted, groups are sorted by first member.
    """
    G = to_networkx(graph)
    groups = []
    for component in nx.strongly_connected_components(G):
        members = sorted(component)
        if len(members) > 1 or G.has_edge(members[0], members[0]):
            groups.append(members)
    return sorted(groups)


def initialization_layers(graph: DependencyGraph) -> List[List[str]]:
    """
    Units grouped by generation: layer 0 has no dependencies, layer n
    depends only on earlier layers. Cyclic graphs have no layering, so
    an empty list is returned for them.
    """
    G = to_networkx(graph)
    if not nx.is_directed_acyclic_graph(G):
        return []
    return [sorted(layer) for layer in nx.topological_generations(G)]


def graph_statistics(graph: DependencyGraph) -> Dict[str, Any]:
    """Summary numbers for a report header."""
    G = to_networkx(graph)
    is_dag = nx.is_directed_acyclic_graph(G)
    roots: Set[str] = {n for n in G.nodes if G.in_degree(n) == 0}
    leaves: Set[str] = {n for n in G.nodes if G.out_degree(n) == 0}
    return {
        'unit_count': G.number_of_nodes(),
        'edge_count': G.number_of_edges(),
        'unresolved_count': graph.unresolved_count,
        'is_acyclic': is_dag,
        'longest_chain': nx.dag_longest_path_length(G) if is_dag and G.number_of_nodes() else 0,
        'root_count': len(roots),
        'leaf_count': len(leaves),
        'component_count': (
            nx.number_weakly_connected_components(G) if G.number_of_nodes() else 0
        ),
    }
