"""Abstract base class for results archive sources."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import IO


@dataclass(frozen=True, kw_only=True)
class ResultsSource(ABC):
    """Abstract base for places a results archive can be read from.

    A source only hands out a readable byte stream; scanning, decompression
    and parsing are left to the pipeline, which reads the stream from a
    worker thread.
    """

    @abstractmethod
    def open(self) -> AbstractAsyncContextManager[IO[bytes]]:
        """Open the archive for reading.

        Returns:
            Async context manager yielding a binary stream positioned at the
            start of the outer archive. The stream is closed on exit.

        Raises:
            RetrievalError: If the archive cannot be opened

        """
