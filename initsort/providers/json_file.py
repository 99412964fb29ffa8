"""
providers/json_file.py - Units declared in a JSON file

File layout:

    {
      "units": [
        {"id": "config"},
        {"id": "audio", "depends_on": ["config"], "priority": 500,
         "action": "mygame.boot:init_audio"}
      ]
    }

"action" is an import reference ``module:attribute``; nested attributes
are separated by dots (``pkg.mod:Class.method``).
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional
import importlib
import json
import logging

from initsort.core.descriptors import RunAction, UnitDescriptor
from initsort.errors.taxonomy import (
    Diagnostic,
    DiagnosticCode,
    ProviderError,
    ValidationError,
    create_validation_diagnostic,
)

from .base import DescriptorProvider

logger = logging.getLogger(__name__)


def resolve_action(reference: str) -> RunAction:
    """
    Import a ``module:attribute`` reference and return the callable.

    Raises:
        ProviderError: malformed reference, import failure, missing
            attribute, or a target that is not callable
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ProviderError(f"Action reference must look like 'module:attribute', got {reference!r}")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ProviderError(f"Cannot import {module_name} for action {reference}: {e}") from e

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ProviderError(f"Action {reference} not found: {e}") from e

    if not callable(target):
        raise ProviderError(f"Action {reference} is not callable")
    return target


class JsonFileProvider(DescriptorProvider):
    """
    Reads unit descriptors from a JSON file.

    Entries that cannot form a descriptor (missing or empty id) are skipped
    and reported through diagnostics(); an unreadable file or an
    unresolvable action raises ProviderError.
    """

    def __init__(self, path: "str | Path", resolve_actions: bool = True):
        self._path = Path(path)
        self._resolve_actions = resolve_actions
        self._diagnostics: List[Diagnostic] = []

    @property
    def path(self) -> Path:
        return self._path

    def descriptors(self) -> List[UnitDescriptor]:
        self._diagnostics = []
        data = self._load()

        entries = data.get("units", []) if isinstance(data, dict) else data
        if not isinstance(entries, list):
            raise ProviderError(f"{self._path}: 'units' must be a list")

        result = []
        for index, entry in enumerate(entries):
            descriptor = self._parse_entry(index, entry)
            if descriptor is not None:
                result.append(descriptor)

        logger.info(f"Loaded {len(result)} units from {self._path}")
        return result

    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def _load(self) -> Any:
        try:
            with open(self._path) as f:
                return json.load(f)
        except OSError as e:
            raise ProviderError(f"Cannot read unit file {self._path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ProviderError(f"Invalid JSON in {self._path}: {e}") from e

    def _parse_entry(self, index: int, entry: Any) -> Optional[UnitDescriptor]:
        if not isinstance(entry, dict):
            self._reject(f"Entry {index} in {self._path} is not an object", None)
            return None

        action = None
        reference = entry.get("action")
        if reference and self._resolve_actions:
            action = resolve_action(reference)

        depends_on = entry.get("depends_on", entry.get("dependencies", []))
        priority = entry.get("priority")
        if priority is not None and not isinstance(priority, int):
            self._reject(
                f"Entry {index} in {self._path}: priority must be an integer, got {priority!r}",
                entry.get("id"),
                DiagnosticCode.CONFIG_INVALID,
            )
            return None

        try:
            return UnitDescriptor(
                unit_id=entry.get("id", ""),
                dependencies=depends_on,
                run_action=action,
                priority_hint=int(priority) if priority is not None else None,
                source=str(self._path),
            )
        except ValidationError as e:
            self._reject(f"Entry {index} in {self._path}: {e}", e.unit_id, e.code)
            return None

    def _reject(
        self,
        message: str,
        unit_id: Optional[str],
        code: DiagnosticCode = DiagnosticCode.VALIDATION_EMPTY_ID,
    ) -> None:
        self._diagnostics.append(create_validation_diagnostic(message, unit_id, code))
        logger.warning(message)

    def describe(self) -> Dict[str, Any]:
        return {
            "path": str(self._path),
            "resolve_actions": self._resolve_actions,
        }
