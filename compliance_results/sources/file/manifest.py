"""File source manifest."""

from compliance_results.sources.file.config import FileSourceConfig
from compliance_results.sources.file.source import FileSource
from compliance_results.sources.manifest import SourceManifest

file_source_manifest = SourceManifest(
    config_cls=FileSourceConfig,
    source_factory=FileSource.from_config,
)
