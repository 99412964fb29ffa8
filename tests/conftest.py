"""
initsort Test Configuration and Fixtures

Shared unit sets used across the unit and integration suites.
"""

import pytest
from typing import Callable, Dict, List

from initsort.core.descriptors import UnitDescriptor
from initsort.registry.registry import reset_default_registry


def make_units(deps_by_id: Dict[str, List[str]], actions: Dict[str, Callable] = None) -> List[UnitDescriptor]:
    """
    Build descriptors from {unit_id: [dependency ids]} in dict order.

    Usage:
        make_units({"A": [], "B": ["A"]})
    """
    actions = actions or {}
    return [
        UnitDescriptor(unit_id=unit_id, dependencies=deps, run_action=actions.get(unit_id))
        for unit_id, deps in deps_by_id.items()
    ]


@pytest.fixture
def units_from():
    """make_units as a fixture."""
    return make_units


@pytest.fixture
def chain_units():
    """A <- B <- C, declared in dependency order."""
    return make_units({"A": [], "B": ["A"], "C": ["B"]})


@pytest.fixture
def diamond_units():
    """A <- B <- C, plus D depending on both A and C."""
    return make_units({"A": [], "B": ["A"], "C": ["B"], "D": ["A", "C"]})


@pytest.fixture
def cycle_units():
    """A and B depend on each other."""
    return make_units({"A": ["B"], "B": ["A"]})


@pytest.fixture
def unresolved_units():
    """A depends on a unit that is never declared."""
    return make_units({"A": ["Ghost"], "B": ["A"]})


@pytest.fixture
def call_log():
    """List that recording actions append their unit id to."""
    return []


@pytest.fixture
def recorder(call_log):
    """Factory for actions that record their invocation."""
    def factory(unit_id: str) -> Callable[[], None]:
        def action():
            call_log.append(unit_id)
        return action
    return factory


@pytest.fixture(autouse=True)
def fresh_default_registry():
    """Each test starts with an empty process-wide registry."""
    reset_default_registry()
    yield
    reset_default_registry()
