"""
Unit tests for errors/taxonomy.py and errors/aggregator.py
"""

import pytest

from initsort.errors.aggregator import DiagnosticAggregator
from initsort.errors.taxonomy import (
    Diagnostic,
    DiagnosticCategory,
    DiagnosticCode,
    DiagnosticSeverity,
    InitSortError,
    ValidationError,
    create_cycle_diagnostic,
    create_execution_diagnostic,
    create_unresolved_diagnostic,
    create_validation_diagnostic,
)


class TestTaxonomy:
    """Test codes and factories."""

    def test_code_ranges(self):
        assert DiagnosticCode.VALIDATION_EMPTY_ID.value // 1000 == 1
        assert DiagnosticCode.CYCLE_DETECTED.value // 1000 == 2
        assert DiagnosticCode.EXECUTION_FAILURE.value // 1000 == 3
        assert DiagnosticCode.CONFIG_INVALID.value // 1000 == 4

    def test_validation_error_carries_context(self):
        error = ValidationError("bad", unit_id="x", code=DiagnosticCode.VALIDATION_EMPTY_ID)
        assert isinstance(error, InitSortError)
        assert error.unit_id == "x"
        assert str(error) == "bad"

    def test_unresolved_is_warning(self):
        d = create_unresolved_diagnostic("A", "Ghost")
        assert d.severity == DiagnosticSeverity.WARNING
        assert d.category == DiagnosticCategory.DEPENDENCY
        assert d.message == "A depends on missing Ghost"
        assert not d.is_error

    def test_cycle_is_warning(self):
        d = create_cycle_diagnostic("A", ["A", "B", "A"])
        assert d.severity == DiagnosticSeverity.WARNING
        assert d.detail == "A -> B -> A"
        assert d.related_ids == ["A", "B", "A"]

    def test_execution_timeout_code(self):
        assert create_execution_diagnostic("A", "slow", timed_out=True).code == DiagnosticCode.EXECUTION_TIMEOUT
        assert create_execution_diagnostic("A", "boom").code == DiagnosticCode.EXECUTION_FAILURE
        assert create_execution_diagnostic("A", "boom").is_error

    def test_to_dict(self):
        data = create_validation_diagnostic("dup", "x").to_dict()
        assert data["code"] == 1002
        assert data["code_name"] == "VALIDATION_DUPLICATE_ID"
        assert data["severity"] == "error"
        assert data["unit_id"] == "x"


class TestDiagnosticAggregator:
    """Test aggregation and reporting."""

    @pytest.fixture
    def aggregator(self):
        aggregator = DiagnosticAggregator()
        aggregator.add_all([
            create_unresolved_diagnostic("A", "Ghost"),
            create_cycle_diagnostic("B", ["B", "C", "B"]),
            create_execution_diagnostic("C", "boom"),
        ])
        return aggregator

    def test_queries(self, aggregator):
        assert len(aggregator) == 3
        assert len(aggregator.get_by_severity(DiagnosticSeverity.WARNING)) == 2
        assert len(aggregator.get_by_code(DiagnosticCode.CYCLE_DETECTED)) == 1
        assert len(aggregator.get_by_category(DiagnosticCategory.EXECUTION)) == 1
        assert aggregator.get_by_unit("A")[0].code == DiagnosticCode.UNRESOLVED_DEPENDENCY
        assert aggregator.get_by_unit("nobody") == []
        assert aggregator.has_errors()
        assert aggregator.has_warnings()

    def test_report(self, aggregator):
        report = aggregator.generate_report()
        assert report.total == 3
        assert report.by_severity == {"warning": 2, "error": 1}
        assert report.by_code["CYCLE_DETECTED"] == 1
        assert report.summary == "1 error(s) found"
        assert len(report.diagnostics) == 3

    def test_warnings_only_summary(self):
        aggregator = DiagnosticAggregator()
        aggregator.add(create_unresolved_diagnostic("A", "Ghost"))
        assert aggregator.generate_report().summary == "1 warning(s) found"

    def test_clean_summary(self):
        assert DiagnosticAggregator().generate_report().summary == "No significant issues"

    def test_clear(self, aggregator):
        aggregator.clear()
        assert len(aggregator) == 0
        assert aggregator.get_by_unit("A") == []

    def test_diagnostic_ids_unique(self):
        assert Diagnostic().diagnostic_id != Diagnostic().diagnostic_id
