"""
initsort - Initialization unit dependency resolver

Orders a set of initialization units so that every unit runs after the units
it depends on, assigns each a descending execution priority, and runs their
actions in that order with per-unit failure isolation.

Cycles and references to unknown units are reported as warnings, never as
fatal errors: every declared unit always gets exactly one slot in the order.
"""

__version__ = "1.0.0"

from .errors import (
    InitSortError,
    ValidationError,
    ConfigurationError,
    ProviderError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticSeverity,
)
from .core import (
    StartOrder,
    UnitDescriptor,
    UnitStore,
    ResolvedUnit,
    CycleRecord,
    AnalysisResult,
)
from .dependencies import (
    DependencyGraph,
    Resolver,
    PriorityAssigner,
)
from .execution import (
    ExecutionEngine,
    ExecutionFailure,
    RunReport,
)
from .registry import (
    UnitRegistry,
    get_default_registry,
)
from .bootstrap import (
    InitSortConfig,
    ResolutionConfig,
    ExecutionConfig,
    load_config,
)
from .kernel import InitializationPipeline


__all__ = [
    "__version__",
    # Errors
    "InitSortError",
    "ValidationError",
    "ConfigurationError",
    "ProviderError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSeverity",
    # Core
    "StartOrder",
    "UnitDescriptor",
    "UnitStore",
    "ResolvedUnit",
    "CycleRecord",
    "AnalysisResult",
    # Resolution
    "DependencyGraph",
    "Resolver",
    "PriorityAssigner",
    # Execution
    "ExecutionEngine",
    "ExecutionFailure",
    "RunReport",
    # Registry
    "UnitRegistry",
    "get_default_registry",
    # Config
    "InitSortConfig",
    "ResolutionConfig",
    "ExecutionConfig",
    "load_config",
    # Pipeline
    "InitializationPipeline",
]
