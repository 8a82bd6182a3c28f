"""Configuration for the file source."""

from pathlib import Path

from pydantic import BaseModel


class FileSourceConfig(BaseModel):
    """Configuration for the file source."""

    # "-" reads the archive from standard input
    path: Path
