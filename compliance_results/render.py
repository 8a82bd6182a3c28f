"""Rendering of the ordered report."""

import logging
from collections.abc import Sequence
from typing import Any, TextIO

from compliance_results.models.outcome import OutcomeCategory
from compliance_results.models.record import ReportRow

STATUS_SYMBOLS = {
    OutcomeCategory.FAILED: "❌",
    OutcomeCategory.PASSED: "✅",
    OutcomeCategory.SKIPPED: "⏭️",
    OutcomeCategory.UNKNOWN: "❔",
}

HEADER = ("STATUS", "TEST")


def render_table(rows: Sequence[ReportRow], out: TextIO) -> None:
    """Write the report as a left-aligned STATUS / TEST table."""
    width = max([len(HEADER[0]), *(len(row.category) for row in rows)])
    out.write(f"{HEADER[0]:<{width}}  {HEADER[1]}\n")
    for row in rows:
        out.write(f"{row.category:<{width}}  {row.name}\n")


def format_output(rows: Sequence[ReportRow]) -> dict[str, Any]:
    """Format report rows for JSON output."""
    return {
        "total": len(rows),
        "failed": sum(1 for r in rows if r.category == OutcomeCategory.FAILED),
        "passed": sum(1 for r in rows if r.category == OutcomeCategory.PASSED),
        "skipped": sum(1 for r in rows if r.category == OutcomeCategory.SKIPPED),
        "unknown": sum(1 for r in rows if r.category == OutcomeCategory.UNKNOWN),
        "results": [{"status": str(r.category), "test": r.name} for r in rows],
    }


def log_report_summary(log: logging.Logger, rows: Sequence[ReportRow]) -> None:
    """Log a summary line per test case, failures first."""
    log.info("=" * 80)
    log.info("Compliance Results Summary:")
    log.info("=" * 80)

    for row in rows:
        log.info("%s %s: %s", STATUS_SYMBOLS[row.category], row.category, row.name)

    summary = format_output(rows)
    log.info(
        "%d test(s): %d failed, %d passed, %d skipped, %d unknown",
        summary["total"],
        summary["failed"],
        summary["passed"],
        summary["skipped"],
        summary["unknown"],
    )
