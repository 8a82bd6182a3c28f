"""Results source reading a local archive file."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from compliance_results.errors import RetrievalError
from compliance_results.sources.base import ResultsSource
from compliance_results.sources.file.config import FileSourceConfig

log = logging.getLogger(__name__)

STDIN_PATH = Path("-")


@dataclass(frozen=True, kw_only=True)
class FileSource(ResultsSource):
    """Reads the results archive from a file or standard input."""

    config: FileSourceConfig

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: FileSourceConfig
    ) -> AsyncGenerator["FileSource", None]:
        """Create the source; files are opened lazily by ``open``."""
        yield cls(config=config)

    @asynccontextmanager
    async def open(self) -> AsyncGenerator[IO[bytes], None]:
        """Open the configured file, or standard input for "-"."""
        if self.config.path == STDIN_PATH:
            log.info("Reading results archive from standard input")
            yield sys.stdin.buffer
            return

        log.info("Reading results archive from %s", self.config.path)
        try:
            stream = self.config.path.open("rb")
        except OSError as exc:
            raise RetrievalError(
                f"could not open results archive {self.config.path}: {exc}"
            ) from exc

        with stream:
            yield stream
