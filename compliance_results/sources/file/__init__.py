"""Local file results source."""

from compliance_results.sources.file.config import FileSourceConfig
from compliance_results.sources.file.manifest import file_source_manifest
from compliance_results.sources.file.source import FileSource

__all__ = ["FileSource", "FileSourceConfig", "file_source_manifest"]
