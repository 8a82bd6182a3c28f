"""HTTP results source."""

from compliance_results.sources.http.config import HttpSourceConfig
from compliance_results.sources.http.manifest import http_source_manifest
from compliance_results.sources.http.source import HttpSource

__all__ = ["HttpSource", "HttpSourceConfig", "http_source_manifest"]
