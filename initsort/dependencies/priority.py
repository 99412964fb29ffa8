"""
initsort Priority Assignment

Maps a resolved order onto a descending numeric scale so that priorities
can be used directly as sort keys (higher runs earlier):

    priority = base - step * (order - 1)

Also computes a per-unit dependency depth for display.
"""

from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Set, Tuple
import logging

from initsort.errors.taxonomy import ConfigurationError

from .graph import DependencyGraph
from .resolver import Resolver

logger = logging.getLogger(__name__)


class PriorityAssigner:
    """Turns an order into priorities. Pure: no hidden state between calls."""

    DEFAULT_BASE = 1000
    DEFAULT_STEP = 10

    def __init__(
        self,
        base: int = DEFAULT_BASE,
        step: int = DEFAULT_STEP,
        normalize_non_negative: bool = True,
    ):
        if step <= 0:
            raise ConfigurationError(f"Priority step must be positive, got {step}")
        self._base = base
        self._step = step
        self._normalize = normalize_non_negative

    @property
    def base(self) -> int:
        return self._base

    @property
    def step(self) -> int:
        return self._step

    def priority_for(self, order: int) -> int:
        """Priority for a 1-based order position, before normalization."""
        return self._base - self._step * (order - 1)

    def assign(self, order: List[str]) -> Dict[str, int]:
        """Assign a priority to every unit id in order."""
        priorities = {
            unit_id: self.priority_for(position)
            for position, unit_id in enumerate(order, start=1)
        }
        if self._normalize:
            priorities = self.normalize(priorities)
        return priorities

    @staticmethod
    def normalize(priorities: Dict[str, int]) -> Dict[str, int]:
        """
        Shift all priorities up so the minimum is zero, if it is negative.

        A uniform offset keeps every relative ordering intact.
        """
        if not priorities:
            return {}
        minimum = min(priorities.values())
        if minimum >= 0:
            return dict(priorities)
        offset = -minimum
        logger.debug(f"Normalizing priorities by +{offset}")
        return {unit_id: value + offset for unit_id, value in priorities.items()}

    @staticmethod
    def dependency_depth(graph: DependencyGraph, unit_id: str) -> int:
        """
        Length of the longest dependency chain below a unit.

        A unit with no dependencies has depth 0. An edge back onto the
        current walk path (a cycle) contributes 0. Each unit is expanded
        once, with an explicit stack.
        """
        memo: Dict[str, int] = {}
        on_path: Set[str] = {unit_id}
        stack: List[Tuple[str, Iterator[str]]] = [
            (unit_id, iter(graph.dependencies_of(unit_id)))
        ]

        while stack:
            current, pending = stack[-1]
            descended = False
            for dep_id in pending:
                if dep_id in memo or dep_id in on_path:
                    continue
                on_path.add(dep_id)
                stack.append((dep_id, iter(graph.dependencies_of(dep_id))))
                descended = True
                break
            if descended:
                continue

            stack.pop()
            on_path.discard(current)
            memo[current] = max(
                (memo[d] + 1 for d in graph.dependencies_of(current) if d in memo),
                default=0,
            )

        return memo[unit_id]

    @staticmethod
    def depths(graph: DependencyGraph, order: Optional[List[str]] = None) -> Dict[str, int]:
        """
        Dependency depth for every unit, in one pass over a resolver order.

        The order lists dependencies first, so every dependency already has
        a depth except cycle back-edges, which contribute 0.
        """
        if order is None:
            order = Resolver(graph).resolve().order

        result: Dict[str, int] = {}
        for unit_id in order:
            result[unit_id] = max(
                (result[d] + 1 for d in graph.dependencies_of(unit_id) if d in result),
                default=0,
            )
        return result
