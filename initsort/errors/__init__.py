"""
errors/ - Diagnostic taxonomy and aggregation

Every problem the core finds is reported as a Diagnostic rather than raised;
only malformed input at the edges raises an InitSortError subclass.
"""

from .taxonomy import (
    DiagnosticSeverity,
    DiagnosticCategory,
    DiagnosticCode,
    Diagnostic,
    InitSortError,
    ValidationError,
    ConfigurationError,
    ProviderError,
    create_validation_diagnostic,
    create_unresolved_diagnostic,
    create_cycle_diagnostic,
    create_execution_diagnostic,
)

from .aggregator import (
    DiagnosticReport,
    DiagnosticAggregator,
)

__all__ = [
    # Taxonomy
    "DiagnosticSeverity",
    "DiagnosticCategory",
    "DiagnosticCode",
    "Diagnostic",
    "InitSortError",
    "ValidationError",
    "ConfigurationError",
    "ProviderError",
    "create_validation_diagnostic",
    "create_unresolved_diagnostic",
    "create_cycle_diagnostic",
    "create_execution_diagnostic",
    # Aggregator
    "DiagnosticReport",
    "DiagnosticAggregator",
]
