"""
providers/base.py - Descriptor provider interface

A provider is whatever discovers units: a registry filled by decorators,
a static list, a configuration file. The core only ever asks it for the
current descriptors.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, List

from initsort.core.descriptors import UnitDescriptor
from initsort.errors.taxonomy import Diagnostic


class DescriptorProvider(ABC):
    """Source of unit descriptors."""

    @abstractmethod
    def descriptors(self) -> List[UnitDescriptor]:
        """Return the descriptors for one resolution pass."""
        pass

    def diagnostics(self) -> List[Diagnostic]:
        """Problems found while discovering units (entries that were skipped)."""
        return []


class StaticProvider(DescriptorProvider):
    """Provider over a fixed list of descriptors."""

    def __init__(self, descriptors: Iterable[UnitDescriptor]):
        self._descriptors = list(descriptors)

    def descriptors(self) -> List[UnitDescriptor]:
        return list(self._descriptors)
