"""Tests for record and configuration models."""

import pytest
from pydantic import ValidationError

from compliance_results.config import ResultsConfig
from compliance_results.models.outcome import OutcomeCategory
from compliance_results.models.record import ReportRow, TestCaseRecord
from compliance_results.testing.factories import ReportRowFactory


def test_record_defaults() -> None:
    """A record with only a name is neither failed nor skipped."""
    record = TestCaseRecord(name="conformance")

    assert not record.failed
    assert not record.skipped
    assert record.time is None


def test_record_is_immutable() -> None:
    """Parsed records cannot be modified."""
    record = TestCaseRecord(name="conformance")

    with pytest.raises(ValidationError):
        record.failed = True  # type: ignore[misc]


def test_report_row_factory() -> None:
    """Builds passed rows by default."""
    row = ReportRowFactory.build(name="x")

    assert row == ReportRow(category=OutcomeCategory.PASSED, name="x")


@pytest.mark.parametrize("field", ["chunk_size", "pipe_capacity"])
def test_config_rejects_non_positive_sizes(field: str) -> None:
    """Chunk size and pipe capacity must be positive."""
    with pytest.raises(ValidationError):
        ResultsConfig(**{field: 0})


def test_config_defaults() -> None:
    """Defaults select every plugin's results and exclude skipped cases."""
    config = ResultsConfig()

    assert config.member_suffix == ".tar.gz"
    assert config.plugin == "all"
    assert config.exclude_skipped
