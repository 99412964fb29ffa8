"""
initsort Registry

Thread-safe registry that discovery code populates and resolution passes
snapshot.
"""

from .registry import (
    UnitRegistry,
    get_default_registry,
    reset_default_registry,
)

__all__ = [
    "UnitRegistry",
    "get_default_registry",
    "reset_default_registry",
]
