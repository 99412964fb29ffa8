"""
initsort Unit Descriptors

UnitDescriptor is the only input the core accepts. UnitStore holds a
validated, ordered batch of descriptors for one resolution pass.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional
import logging

from initsort.errors.taxonomy import (
    Diagnostic,
    DiagnosticCode,
    ValidationError,
    create_validation_diagnostic,
)

logger = logging.getLogger(__name__)


RunAction = Callable[[], Any]


@dataclass(frozen=True)
class UnitDescriptor:
    """
    A named initialization unit.

    dependencies may name units that are not part of the batch; those are
    reported as unresolved, never rejected.
    """
    unit_id: str
    dependencies: FrozenSet[str] = field(default_factory=frozenset)
    run_action: Optional[RunAction] = None
    priority_hint: Optional[int] = None
    source: str = ""

    def __post_init__(self):
        if not isinstance(self.unit_id, str) or not self.unit_id.strip():
            raise ValidationError(
                f"Unit id must be a non-empty string, got {self.unit_id!r}",
                unit_id=self.unit_id if isinstance(self.unit_id, str) else None,
                code=DiagnosticCode.VALIDATION_EMPTY_ID,
            )
        if self.run_action is not None and not callable(self.run_action):
            raise ValidationError(
                f"Run action for {self.unit_id} is not callable",
                unit_id=self.unit_id,
                code=DiagnosticCode.VALIDATION_INVALID_ACTION,
            )
        object.__setattr__(self, "dependencies", self._normalize_dependencies(self.dependencies))

    def _normalize_dependencies(self, deps: Any) -> FrozenSet[str]:
        """A single id or an iterable of non-empty ids."""
        if isinstance(deps, str):
            deps = (deps,)
        try:
            deps = frozenset(deps)
        except TypeError:
            raise ValidationError(
                f"Dependencies of {self.unit_id} must be a list of unit ids, got {deps!r}",
                unit_id=self.unit_id,
                code=DiagnosticCode.VALIDATION_INVALID_DEPENDENCIES,
            ) from None
        invalid = [d for d in deps if not isinstance(d, str) or not d.strip()]
        if invalid:
            raise ValidationError(
                f"Dependencies of {self.unit_id} must be non-empty strings, got {invalid!r}",
                unit_id=self.unit_id,
                code=DiagnosticCode.VALIDATION_INVALID_DEPENDENCIES,
            )
        return deps

    @property
    def has_action(self) -> bool:
        return self.run_action is not None

    def same_registration(self, other: "UnitDescriptor") -> bool:
        """True when other repeats this registration exactly."""
        return (
            self.unit_id == other.unit_id
            and self.dependencies == other.dependencies
            and self.run_action == other.run_action
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.unit_id,
            "dependencies": sorted(self.dependencies),
            "has_action": self.has_action,
            "priority_hint": self.priority_hint,
            "source": self.source,
        }


class UnitStore:
    """
    Ordered, validated batch of descriptors.

    Rejected descriptors are dropped and recorded in ``diagnostics``; the
    rest of the batch is unaffected.
    """

    def __init__(self):
        self._units: Dict[str, UnitDescriptor] = {}
        self._diagnostics: List[Diagnostic] = []

    @classmethod
    def from_descriptors(cls, descriptors: Iterable[UnitDescriptor]) -> "UnitStore":
        store = cls()
        store.add_all(descriptors)
        return store

    def add(self, descriptor: UnitDescriptor) -> bool:
        """
        Add a descriptor.

        Returns True if the descriptor is part of the store afterwards
        (newly added or coalesced with an identical registration).
        """
        existing = self._units.get(descriptor.unit_id)
        if existing is None:
            self._units[descriptor.unit_id] = descriptor
            return True

        if existing.same_registration(descriptor):
            logger.debug(f"Coalesced duplicate registration of {descriptor.unit_id}")
            return True

        if existing.has_action and descriptor.has_action:
            diagnostic = create_validation_diagnostic(
                f"Distinct run action registered twice under {descriptor.unit_id}",
                descriptor.unit_id,
                DiagnosticCode.VALIDATION_DUPLICATE_ACTION,
            )
        else:
            diagnostic = create_validation_diagnostic(
                f"Duplicate unit id {descriptor.unit_id}",
                descriptor.unit_id,
                DiagnosticCode.VALIDATION_DUPLICATE_ID,
            )
        diagnostic.detail = f"kept registration from {existing.source or 'first declaration'}"
        self._diagnostics.append(diagnostic)
        logger.warning(f"Rejected descriptor: {diagnostic.message}")
        return False

    def add_all(self, descriptors: Iterable[UnitDescriptor]) -> int:
        """Add several descriptors, returning how many were accepted."""
        return sum(1 for d in descriptors if self.add(d))

    def add_unit(
        self,
        unit_id: str,
        dependencies: Iterable[str] = (),
        run_action: Optional[RunAction] = None,
        priority_hint: Optional[int] = None,
        source: str = "",
    ) -> bool:
        """Build and add a descriptor, recording construction failures."""
        try:
            descriptor = UnitDescriptor(
                unit_id=unit_id,
                dependencies=dependencies,
                run_action=run_action,
                priority_hint=priority_hint,
                source=source,
            )
        except ValidationError as e:
            self.record_rejection(e)
            return False
        return self.add(descriptor)

    def record_rejection(self, error: ValidationError) -> None:
        """Record a descriptor that failed construction."""
        self._diagnostics.append(
            create_validation_diagnostic(str(error), error.unit_id, error.code)
        )
        logger.warning(f"Rejected descriptor: {error}")

    def get(self, unit_id: str) -> Optional[UnitDescriptor]:
        return self._units.get(unit_id)

    def ids(self) -> List[str]:
        return list(self._units.keys())

    def descriptors(self) -> List[UnitDescriptor]:
        return list(self._units.values())

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def __contains__(self, unit_id: object) -> bool:
        return unit_id in self._units

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[UnitDescriptor]:
        return iter(self._units.values())
