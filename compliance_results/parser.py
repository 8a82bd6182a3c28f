"""Parsing of JUnit reports from a results tarball."""

import logging
import tarfile
import xml.etree.ElementTree as ET
from collections.abc import Iterator, Sequence
from pathlib import PurePosixPath
from typing import IO

from compliance_results.errors import MalformedArchiveError, MalformedReportError
from compliance_results.extractor import open_tar_stream
from compliance_results.models.record import TestCaseRecord

log = logging.getLogger(__name__)

ALL_PLUGINS = "all"


def parse_results(
    stream: IO[bytes], plugin: str = ALL_PLUGINS
) -> Sequence[TestCaseRecord]:
    """Read test cases from the JUnit reports of a results tarball.

    Args:
        stream: Uncompressed tar stream of a results tarball
        plugin: Plugin whose reports are read, or "all" for every plugin

    Returns:
        Test cases in archive order, then document order

    Raises:
        MalformedArchiveError: If the stream is not a readable tar archive
        MalformedReportError: If a JUnit report is not valid XML

    """
    records: list[TestCaseRecord] = []
    try:
        with open_tar_stream(stream, "r|") as archive:
            for member in archive:
                if not member.isfile() or not is_junit_report(member.name, plugin):
                    continue
                content = archive.extractfile(member)
                if content is None:  # pragma: no cover
                    continue
                with content:
                    parsed = list(parse_junit(content, source=member.name))
                log.info("Read %d test case(s) from %s", len(parsed), member.name)
                records.extend(parsed)
    except tarfile.TarError as exc:
        raise MalformedArchiveError(f"could not read results tarball: {exc}") from exc

    return records


def is_junit_report(path: str, plugin: str = ALL_PLUGINS) -> bool:
    """Check if an archive path is a plugin JUnit report.

    Reports live under ``plugins/<plugin>/results/``, possibly nested deeper
    (e.g. ``plugins/e2e/results/global/junit_01.xml``).
    """
    parts = PurePosixPath(path.removeprefix("./")).parts
    if len(parts) < 4 or parts[0] != "plugins" or parts[2] != "results":
        return False
    if not parts[-1].endswith(".xml"):
        return False
    return plugin == ALL_PLUGINS or parts[1] == plugin


def parse_junit(
    content: IO[bytes], source: str | None = None
) -> Iterator[TestCaseRecord]:
    """Yield a record for every ``testcase`` element of a JUnit document."""
    try:
        root = ET.parse(content).getroot()
    except ET.ParseError as exc:
        raise MalformedReportError(
            f"could not parse JUnit report {source}: {exc}"
        ) from exc

    for element in root.iter("testcase"):
        failure = element.find("failure")
        if failure is None:
            failure = element.find("error")
        skipped = element.find("skipped")

        yield TestCaseRecord(
            name=element.get("name", ""),
            classname=element.get("classname", ""),
            time=_parse_time(element.get("time")),
            failed=failure is not None,
            failure_message=_message(failure),
            skipped=skipped is not None,
            skip_message=_message(skipped),
            source=source,
        )


def _message(element: ET.Element | None) -> str | None:
    if element is None:
        return None
    return element.get("message") or (element.text or "").strip() or None


def _parse_time(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        log.debug("Ignoring invalid test case time %r", value)
        return None
