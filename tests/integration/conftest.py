"""Fixtures for integration tests."""

import pytest

from compliance_results.testing.archives import (
    JUnitCase,
    ResultsArchiveFn,
    build_junit_xml,
    build_outer_archive,
    build_results_tarball,
)


@pytest.fixture
def results_archive() -> ResultsArchiveFn:
    """Return a function building complete outer results archives."""

    def _build(*cases: JUnitCase) -> bytes:
        results = build_results_tarball(
            {
                "plugins/e2e/results/global/junit_01.xml": build_junit_xml(cases),
                "plugins/e2e/results/global/e2e.log": b"log output\n" * 100,
            }
        )
        return build_outer_archive(
            results,
            before=[("meta/config.json", b'{"UUID": "1234"}')],
            after=[("resources/ns/pods.json", b"[]")],
        )

    return _build
