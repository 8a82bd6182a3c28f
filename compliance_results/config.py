"""Configuration for the compliance results pipeline."""

from pydantic import Field

from compliance_results.models.base import Model


class ResultsConfig(Model):
    """Settings shared by the extraction, parsing and reporting stages."""

    member_suffix: str = Field(
        default=".tar.gz", description="Suffix of the nested results archive"
    )
    plugin: str = Field(
        default="all", description="Plugin whose reports are read ('all' for every)"
    )
    exclude_skipped: bool = Field(
        default=True, description="Drop skipped test cases before reporting"
    )
    chunk_size: int = Field(default=64 * 1024, gt=0, description="Copy chunk size")
    pipe_capacity: int = Field(
        default=4, gt=0, description="Chunks buffered between copier and reader"
    )
    copy_join_timeout: float = Field(
        default=5.0, ge=0, description="Seconds to wait for the copy thread"
    )
