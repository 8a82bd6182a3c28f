"""Outcome categories of a test case."""

from enum import StrEnum


class OutcomeCategory(StrEnum):
    """Four-way classification used for filtering and ordering."""

    FAILED = "FAILED"
    PASSED = "PASSED"
    SKIPPED = "SKIPPED"
    UNKNOWN = "UNKNOWN"
