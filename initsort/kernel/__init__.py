"""
initsort Kernel

InitializationPipeline wires the resolution stages and the execution engine.
"""

from .pipeline import (
    InitializationPipeline,
    UnitSource,
)

__all__ = [
    "InitializationPipeline",
    "UnitSource",
]
