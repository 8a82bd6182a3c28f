"""HTTP source manifest."""

from compliance_results.sources.http.config import HttpSourceConfig
from compliance_results.sources.http.source import HttpSource
from compliance_results.sources.manifest import SourceManifest

http_source_manifest = SourceManifest(
    config_cls=HttpSourceConfig,
    source_factory=HttpSource.from_config,
)
