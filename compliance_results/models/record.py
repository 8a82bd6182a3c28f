"""Models for parsed test cases and report rows."""

from dataclasses import dataclass

from pydantic import Field

from compliance_results.models.base import Model
from compliance_results.models.outcome import OutcomeCategory


class TestCaseRecord(Model):
    """A single test case read from a JUnit report."""

    __test__ = False

    name: str = Field(..., description="Test case name, used as display identity")
    classname: str = Field(default="", description="JUnit classname attribute")
    time: float | None = Field(default=None, description="Duration in seconds")
    failed: bool = Field(default=False, description="A failure or error was reported")
    failure_message: str | None = None
    skipped: bool = Field(default=False, description="The test case was skipped")
    skip_message: str | None = None
    source: str | None = Field(
        default=None, description="Path of the report inside the results archive"
    )


@dataclass(frozen=True, kw_only=True)
class ReportRow:
    """Classified projection of a test case, one line of the report."""

    category: OutcomeCategory
    name: str
