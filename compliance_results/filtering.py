"""Removal of test cases that should not appear in the report."""

from collections.abc import Callable, Iterable, Sequence
from typing import TypeAlias

from compliance_results.models.record import TestCaseRecord

RecordPredicate: TypeAlias = Callable[[TestCaseRecord], bool]


def filter_records(
    records: Iterable[TestCaseRecord], exclude: RecordPredicate
) -> Sequence[TestCaseRecord]:
    """Keep the records for which ``exclude`` is false, preserving order."""
    return [record for record in records if not exclude(record)]
