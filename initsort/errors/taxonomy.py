"""
errors/taxonomy.py - Diagnostic classification

Structured diagnostics for every non-fatal problem found while building,
resolving or executing a unit set, plus the few exceptions that callers
outside the core may see.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import uuid


class DiagnosticSeverity(Enum):
    """Diagnostic severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnosticCategory(Enum):
    """Which stage produced the diagnostic."""
    VALIDATION = "validation"
    DEPENDENCY = "dependency"
    CYCLE = "cycle"
    EXECUTION = "execution"
    CONFIGURATION = "configuration"


class DiagnosticCode(Enum):
    """Specific diagnostic codes."""

    # Validation (1xxx)
    VALIDATION_EMPTY_ID = 1001
    VALIDATION_DUPLICATE_ID = 1002
    VALIDATION_DUPLICATE_ACTION = 1003
    VALIDATION_INVALID_ACTION = 1004
    VALIDATION_INVALID_DEPENDENCIES = 1005

    # Graph (2xxx)
    UNRESOLVED_DEPENDENCY = 2001
    CYCLE_DETECTED = 2002

    # Execution (3xxx)
    EXECUTION_FAILURE = 3001
    EXECUTION_TIMEOUT = 3002

    # System (4xxx)
    CONFIG_INVALID = 4001


# =============================================================================
# EXCEPTIONS
# =============================================================================

class InitSortError(Exception):
    """Base exception for initsort."""
    pass


class ValidationError(InitSortError):
    """Raised when a unit descriptor is malformed."""

    def __init__(self, message: str, unit_id: Optional[str] = None,
                 code: DiagnosticCode = DiagnosticCode.VALIDATION_DUPLICATE_ID):
        self.unit_id = unit_id
        self.code = code
        super().__init__(message)


class ConfigurationError(InitSortError):
    """Raised for invalid configuration values."""
    pass


class ProviderError(InitSortError):
    """Raised when a descriptor provider cannot produce descriptors."""
    pass


# =============================================================================
# DIAGNOSTIC
# =============================================================================

@dataclass
class Diagnostic:
    """Structured diagnostic record."""

    diagnostic_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    code: DiagnosticCode = DiagnosticCode.VALIDATION_DUPLICATE_ID
    category: DiagnosticCategory = DiagnosticCategory.VALIDATION
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR

    message: str = ""
    detail: str = ""

    # Unit the diagnostic is about
    unit_id: Optional[str] = None
    related_ids: List[str] = field(default_factory=list)

    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_error(self) -> bool:
        return self.severity == DiagnosticSeverity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "diagnostic_id": self.diagnostic_id,
            "code": self.code.value,
            "code_name": self.code.name,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "detail": self.detail,
            "unit_id": self.unit_id,
            "related_ids": list(self.related_ids),
        }


def create_validation_diagnostic(
    message: str,
    unit_id: Optional[str],
    code: DiagnosticCode = DiagnosticCode.VALIDATION_DUPLICATE_ID,
) -> Diagnostic:
    """Factory for rejected-descriptor diagnostics."""
    return Diagnostic(
        code=code,
        category=DiagnosticCategory.VALIDATION,
        severity=DiagnosticSeverity.ERROR,
        message=message,
        unit_id=unit_id,
    )


def create_unresolved_diagnostic(unit_id: str, missing_id: str) -> Diagnostic:
    """Factory for dependency ids with no matching descriptor."""
    return Diagnostic(
        code=DiagnosticCode.UNRESOLVED_DEPENDENCY,
        category=DiagnosticCategory.DEPENDENCY,
        severity=DiagnosticSeverity.WARNING,
        message=f"{unit_id} depends on missing {missing_id}",
        unit_id=unit_id,
        related_ids=[missing_id],
    )


def create_cycle_diagnostic(detected_at: str, path: List[str]) -> Diagnostic:
    """Factory for cycle diagnostics. ``path`` closes on ``detected_at``."""
    return Diagnostic(
        code=DiagnosticCode.CYCLE_DETECTED,
        category=DiagnosticCategory.CYCLE,
        severity=DiagnosticSeverity.WARNING,
        message=f"Cyclic dependency detected at {detected_at}",
        detail=" -> ".join(path),
        unit_id=detected_at,
        related_ids=list(path),
    )


def create_execution_diagnostic(
    unit_id: str,
    detail: str,
    timed_out: bool = False,
) -> Diagnostic:
    """Factory for run-action failures."""
    code = DiagnosticCode.EXECUTION_TIMEOUT if timed_out else DiagnosticCode.EXECUTION_FAILURE
    return Diagnostic(
        code=code,
        category=DiagnosticCategory.EXECUTION,
        severity=DiagnosticSeverity.ERROR,
        message=f"Initialization of {unit_id} failed",
        detail=detail,
        unit_id=unit_id,
    )
