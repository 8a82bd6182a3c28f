"""Pipeline turning a results archive into an ordered report."""

import logging
from collections.abc import Sequence
from typing import IO

from compliance_results.config import ResultsConfig
from compliance_results.decompress import open_decompressed
from compliance_results.errors import (
    CorruptStreamError,
    MalformedArchiveError,
    MalformedReportError,
    MemberCopyError,
    NoMatchingMemberError,
    ResultsPipelineError,
    RetrievalError,
)
from compliance_results.extractor import ArchiveExtractor, ExtractedMember
from compliance_results.filtering import RecordPredicate, filter_records
from compliance_results.models.record import ReportRow, TestCaseRecord
from compliance_results.outcome import Classifier, classify, is_skipped
from compliance_results.parser import parse_results
from compliance_results.sorting import build_report_rows

log = logging.getLogger(__name__)


def collect_report(
    stream: IO[bytes],
    config: ResultsConfig | None = None,
    *,
    exclude: RecordPredicate | None = None,
    classifier: Classifier = classify,
) -> Sequence[ReportRow]:
    """Extract, parse, filter and order the test cases of a results archive.

    Args:
        stream: Outer archive containing the nested results tarball
        config: Pipeline settings (defaults to ``ResultsConfig()``)
        exclude: Predicate dropping records before reporting; defaults to
            dropping skipped records when ``config.exclude_skipped`` is set
        classifier: Maps a record to its outcome category

    Returns:
        Report rows ordered by outcome, stable within a category

    Raises:
        ResultsPipelineError: If any stage fails, chained to the root cause

    """
    config = config or ResultsConfig()
    records = read_records(stream, config)

    if exclude is None and config.exclude_skipped:
        exclude = is_skipped
    if exclude is not None:
        kept = filter_records(records, exclude)
        log.info(
            "Excluded %d of %d test case(s)", len(records) - len(kept), len(records)
        )
        records = kept

    return build_report_rows(records, classifier)


def read_records(
    stream: IO[bytes], config: ResultsConfig
) -> Sequence[TestCaseRecord]:
    """Run extraction, decompression and parsing, wrapping stage errors."""
    extractor = ArchiveExtractor(
        suffix=config.member_suffix,
        chunk_size=config.chunk_size,
        pipe_capacity=config.pipe_capacity,
    )
    try:
        member = extractor.open(stream)
    except (
        MalformedArchiveError,
        NoMatchingMemberError,
        MemberCopyError,
        RetrievalError,
    ) as exc:
        raise ResultsPipelineError(
            f"could not extract the compliance results from archive: {exc}"
        ) from exc

    try:
        return _parse_member(member, config)
    finally:
        member.stream.close()
        member.copier.join(config.copy_join_timeout)
        if member.copier.is_alive():
            log.warning("Copy thread for %s did not finish", member.name)


def _parse_member(
    member: ExtractedMember, config: ResultsConfig
) -> Sequence[TestCaseRecord]:
    try:
        with open_decompressed(member.stream) as decompressed:
            records = parse_results(decompressed, plugin=config.plugin)
            drain(decompressed, config.chunk_size)
    except MemberCopyError as exc:
        raise ResultsPipelineError(
            f"could not read the compliance results archive member: {exc}"
        ) from exc
    except CorruptStreamError as exc:
        raise ResultsPipelineError(
            f"could not decompress the compliance results: {exc}"
        ) from exc
    except (MalformedArchiveError, MalformedReportError) as exc:
        raise ResultsPipelineError(
            "could not get the results of the compliance tests from the archive: "
            f"{exc}"
        ) from exc

    log.info("Parsed %d test case(s) from %s", len(records), member.name)
    return records


def drain(stream: IO[bytes], chunk_size: int = 64 * 1024) -> int:
    """Read a stream to its end, returning the number of bytes discarded.

    Reading to the end runs the gzip trailer checks and surfaces copy errors
    raised after the last report was parsed.
    """
    total = 0
    while chunk := stream.read(chunk_size):
        total += len(chunk)
    return total
