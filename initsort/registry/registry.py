"""
Unit Registry - Long-lived, explicitly constructed store of discovered units.

Discovery code (decorators, plugin loaders, static config) registers units
here; each resolution pass reads a consistent snapshot. All access goes
through one lock, so registration from several threads is safe.

There is no implicit global: get_default_registry() wraps a single instance
created on first use, and reset_default_registry() replaces it.
"""

from __future__ import annotations
from typing import Callable, Dict, Iterable, List, Optional
import logging
import threading

from initsort.core.descriptors import RunAction, UnitDescriptor
from initsort.errors.taxonomy import DiagnosticCode, ValidationError
from initsort.providers.base import DescriptorProvider

logger = logging.getLogger(__name__)


class UnitRegistry(DescriptorProvider):
    """
    Registry of initialization units.

    Registering the same action under the same id twice is a no-op;
    registering a different action under an existing id is an error.
    """

    def __init__(self, name: str = "registry"):
        self._name = name
        self._units: Dict[str, UnitDescriptor] = {}
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    def register(
        self,
        unit_id: str,
        action: Optional[RunAction] = None,
        depends_on: Iterable[str] = (),
        priority_hint: Optional[int] = None,
    ) -> UnitDescriptor:
        """
        Register a unit.

        Raises:
            ValidationError: empty id, or a distinct action already
                registered under unit_id
        """
        descriptor = UnitDescriptor(
            unit_id=unit_id,
            dependencies=depends_on,
            run_action=action,
            priority_hint=priority_hint,
            source=self._name,
        )

        with self._lock:
            existing = self._units.get(unit_id)
            if existing is not None:
                if existing.same_registration(descriptor):
                    logger.debug(f"Ignoring repeated registration of {unit_id}")
                    return existing
                if existing.has_action and descriptor.has_action:
                    raise ValidationError(
                        f"A different run action is already registered under {unit_id}",
                        unit_id=unit_id,
                        code=DiagnosticCode.VALIDATION_DUPLICATE_ACTION,
                    )
                raise ValidationError(
                    f"Unit {unit_id} is already registered",
                    unit_id=unit_id,
                    code=DiagnosticCode.VALIDATION_DUPLICATE_ID,
                )
            self._units[unit_id] = descriptor

        logger.debug(f"Registered unit {unit_id} (depends on {sorted(descriptor.dependencies)})")
        return descriptor

    def unit(
        self,
        unit_id: str,
        depends_on: Iterable[str] = (),
        priority: Optional[int] = None,
    ) -> Callable[[RunAction], RunAction]:
        """
        Decorator form of register().

        Usage:
            @registry.unit("audio", depends_on=["config"])
            def init_audio():
                ...
        """
        def decorator(func: RunAction) -> RunAction:
            self.register(unit_id, func, depends_on=depends_on, priority_hint=priority)
            return func
        return decorator

    def unregister(self, unit_id: str) -> bool:
        """Remove a unit; returns False if it was not registered."""
        with self._lock:
            return self._units.pop(unit_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._units.clear()

    def snapshot(self) -> List[UnitDescriptor]:
        """Descriptors in registration order, as of now."""
        with self._lock:
            return list(self._units.values())

    def descriptors(self) -> List[UnitDescriptor]:
        return self.snapshot()

    def get(self, unit_id: str) -> Optional[UnitDescriptor]:
        with self._lock:
            return self._units.get(unit_id)

    def __contains__(self, unit_id: object) -> bool:
        with self._lock:
            return unit_id in self._units

    def __len__(self) -> int:
        with self._lock:
            return len(self._units)


_default_registry: Optional[UnitRegistry] = None
_default_lock = threading.Lock()


def get_default_registry() -> UnitRegistry:
    """Get or create the process-wide convenience registry."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = UnitRegistry(name="default")
        return _default_registry


def reset_default_registry(registry: Optional[UnitRegistry] = None) -> UnitRegistry:
    """Replace the convenience registry (a fresh one unless given)."""
    global _default_registry
    with _default_lock:
        _default_registry = registry if registry is not None else UnitRegistry(name="default")
        return _default_registry
