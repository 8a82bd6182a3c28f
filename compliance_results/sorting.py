"""Ordering of test cases by outcome."""

from collections.abc import Iterable, Sequence

from compliance_results.models.record import ReportRow, TestCaseRecord
from compliance_results.outcome import Classifier, classify, outcome_priority


def sort_by_outcome(
    records: Iterable[TestCaseRecord], classifier: Classifier = classify
) -> Sequence[TestCaseRecord]:
    """Sort records by outcome priority (FAILED, PASSED, SKIPPED, UNKNOWN).

    The sort is stable: records in the same category keep their input order.
    """
    return sorted(records, key=lambda record: outcome_priority(classifier(record)))


def build_report_rows(
    records: Iterable[TestCaseRecord], classifier: Classifier = classify
) -> Sequence[ReportRow]:
    """Sort records by outcome and project them to report rows."""
    return [
        ReportRow(category=classifier(record), name=record.name)
        for record in sort_by_outcome(records, classifier)
    ]
