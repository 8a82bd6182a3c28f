"""Classification of test cases into outcome categories."""

from collections.abc import Callable, Mapping
from typing import TypeAlias

from compliance_results.models.outcome import OutcomeCategory
from compliance_results.models.record import TestCaseRecord

Classifier: TypeAlias = Callable[[TestCaseRecord], OutcomeCategory]

OUTCOME_PRIORITY: Mapping[OutcomeCategory, int] = {
    OutcomeCategory.FAILED: 0,
    OutcomeCategory.PASSED: 1,
    OutcomeCategory.SKIPPED: 2,
    OutcomeCategory.UNKNOWN: 3,
}


def is_skipped(record: TestCaseRecord) -> bool:
    """Check if the test case was skipped."""
    return record.skipped


def is_failed(record: TestCaseRecord) -> bool:
    """Check if the test case reported a failure or an error."""
    return record.failed


def is_passed(record: TestCaseRecord) -> bool:
    """Check if the test case ran to completion without failing."""
    return not record.skipped and not record.failed and bool(record.name.strip())


def classify(record: TestCaseRecord) -> OutcomeCategory:
    """Return the outcome category of a test case.

    Checks are evaluated in order and the first match wins, so a test case
    marked both skipped and failed is SKIPPED. Records that are neither
    skipped, failed nor valid passes (e.g. a blank name) are UNKNOWN.
    """
    if is_skipped(record):
        return OutcomeCategory.SKIPPED
    if is_failed(record):
        return OutcomeCategory.FAILED
    if is_passed(record):
        return OutcomeCategory.PASSED
    return OutcomeCategory.UNKNOWN


def outcome_priority(category: OutcomeCategory) -> int:
    """Rank of a category in the report, lowest first."""
    return OUTCOME_PRIORITY[category]
