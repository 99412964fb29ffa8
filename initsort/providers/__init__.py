"""
initsort Providers

Descriptor providers: the interface the core consumes units through, plus
static-list and JSON-file implementations.
"""

from .base import (
    DescriptorProvider,
    StaticProvider,
)
from .json_file import (
    JsonFileProvider,
    resolve_action,
)

__all__ = [
    "DescriptorProvider",
    "StaticProvider",
    "JsonFileProvider",
    "resolve_action",
]
