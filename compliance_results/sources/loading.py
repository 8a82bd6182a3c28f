"""Lookup of results sources registered as entry points."""

from importlib.metadata import entry_points
from typing import Any

from compliance_results.errors import ComplianceResultsError
from compliance_results.sources.manifest import SourceManifest

ENTRY_POINT_GROUP = "compliance_results.sources"


class SourceNotFoundError(ComplianceResultsError):
    """Raised when no installed source is registered under a key."""


def load_source_manifest(key: str) -> SourceManifest[Any]:
    """Import the manifest of the source selected on the command line.

    Args:
        key: Entry point name under ``compliance_results.sources``,
             such as "file" or "http"

    Raises:
        SourceNotFoundError: If no installed source uses that name

    """
    sources = entry_points(group=ENTRY_POINT_GROUP)
    try:
        entry = sources[key]
    except KeyError:
        installed = ", ".join(sorted(sources.names)) or "none"
        raise SourceNotFoundError(
            f"unknown results source {key!r}, installed sources: {installed}"
        ) from None

    manifest: SourceManifest[Any] = entry.load()
    return manifest
