"""
Unit tests for dependencies/resolver.py

Tests ordering, precedence, determinism and non-fatal cycle handling.
"""

import random

import pytest

from initsort.core.descriptors import UnitDescriptor
from initsort.core.enums import StartOrder
from initsort.dependencies.graph import DependencyGraph
from initsort.dependencies.resolver import Resolver, resolve_order
from initsort.errors.taxonomy import DiagnosticCode


def resolve(units, start_order=StartOrder.DECLARATION):
    return Resolver(DependencyGraph.build(units, start_order)).resolve()


class TestOrdering:
    """Test basic ordering."""

    def test_chain(self, chain_units):
        assert resolve(chain_units).order == ["A", "B", "C"]

    def test_chain_declared_backwards(self, units_from):
        """Test dependencies come first regardless of declaration order."""
        units = units_from({"C": ["B"], "B": ["A"], "A": []})
        assert resolve(units).order == ["A", "B", "C"]

    def test_diamond(self, diamond_units):
        assert resolve(diamond_units).order == ["A", "B", "C", "D"]

    def test_independent_units_keep_declaration_order(self, units_from):
        units = units_from({"x": [], "b": [], "m": []})
        assert resolve(units).order == ["x", "b", "m"]

    def test_independent_units_lexicographic(self, units_from):
        units = units_from({"x": [], "b": [], "m": []})
        assert resolve(units, StartOrder.LEXICOGRAPHIC).order == ["b", "m", "x"]

    def test_empty(self):
        result = resolve([])
        assert result.order == []
        assert not result.has_cycles

    def test_position(self, chain_units):
        result = resolve(chain_units)
        assert result.position("A") == 1
        assert result.position("C") == 3

    def test_resolve_order_helper(self, chain_units):
        assert resolve_order(chain_units) == ["A", "B", "C"]


class TestPrecedence:
    """Every dependency precedes its dependent when no cycle is involved."""

    def _random_dag(self, seed, size=40):
        rng = random.Random(seed)
        ids = [f"u{i:02d}" for i in range(size)]
        units = []
        for index, unit_id in enumerate(ids):
            deps = rng.sample(ids[:index], k=min(index, rng.randint(0, 3)))
            units.append(UnitDescriptor(unit_id=unit_id, dependencies=deps))
        rng.shuffle(units)
        return units

    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_precedence_on_random_dag(self, seed):
        units = self._random_dag(seed)
        order = resolve(units).order
        position = {unit_id: i for i, unit_id in enumerate(order)}

        assert len(order) == len(units)
        for unit in units:
            for dep in unit.dependencies:
                assert position[dep] < position[unit.unit_id]

    @pytest.mark.parametrize("seed", [3, 11])
    def test_determinism(self, seed):
        units = self._random_dag(seed)
        first = resolve(units).order
        for _ in range(3):
            assert resolve(units).order == first


class TestCycles:
    """Test non-fatal cycle handling."""

    def test_two_node_cycle(self, cycle_units):
        result = resolve(cycle_units)

        assert sorted(result.order) == ["A", "B"]
        assert result.cycle_affected == {"A", "B"}
        assert len(result.cycles) == 1
        assert result.cycles[0].detected_at == "A"
        assert result.cycles[0].path == ["A", "B", "A"]

    def test_cycle_diagnostic(self, cycle_units):
        result = resolve(cycle_units)
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.code == DiagnosticCode.CYCLE_DETECTED
        assert diagnostic.detail == "A -> B -> A"

    def test_self_dependency(self, units_from):
        result = resolve(units_from({"A": ["A"], "B": []}))
        assert result.order == ["A", "B"]
        assert result.cycle_affected == {"A"}
        assert result.cycles[0].path == ["A", "A"]

    def test_three_node_cycle_flags_every_member(self, units_from):
        units = units_from({"A": ["B"], "B": ["C"], "C": ["A"], "D": ["A"]})
        result = resolve(units)

        assert len(result.order) == 4
        assert result.cycle_affected == {"A", "B", "C"}
        assert "D" not in result.cycle_affected
        assert result.order[-1] == "D"

    def test_side_path_into_cycle_is_flagged(self, units_from):
        """D sits on A -> D -> C -> A, but the walk reaches C through B first."""
        units = units_from({"A": ["B", "D"], "B": ["C"], "C": ["A"], "D": ["C"]})
        result = resolve(units)

        assert len(result.order) == 4
        assert len(result.cycles) == 1
        assert result.cycle_affected == {"A", "B", "C", "D"}

    def test_acyclic_graph_flags_nothing(self, diamond_units):
        result = resolve(diamond_units)
        assert result.cycle_affected == set()
        assert not result.has_cycles

    def test_units_outside_cycle_still_ordered(self, units_from):
        units = units_from({"base": [], "A": ["B", "base"], "B": ["A"], "top": ["A"]})
        order = resolve(units).order
        assert order.index("base") < order.index("A")
        assert order.index("A") < order.index("top")

    def test_every_unit_exactly_once(self, units_from):
        units = units_from({
            "A": ["B"], "B": ["C"], "C": ["A", "D"], "D": ["E"], "E": ["D"], "F": [],
        })
        order = resolve(units).order
        assert sorted(order) == ["A", "B", "C", "D", "E", "F"]
        assert len(set(order)) == len(order)


class TestLongChains:
    """Test the walk is not bounded by the recursion limit."""

    def test_long_chain(self):
        size = 5000
        units = [UnitDescriptor(unit_id="n0")] + [
            UnitDescriptor(unit_id=f"n{i}", dependencies=[f"n{i - 1}"]) for i in range(1, size)
        ]
        units.reverse()
        order = resolve(units).order
        assert order == [f"n{i}" for i in range(size)]
