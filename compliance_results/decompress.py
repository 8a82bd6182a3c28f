"""Gzip decompression stage."""

import gzip
import io
import zlib
from typing import IO, TYPE_CHECKING

from compliance_results.errors import CorruptStreamError

if TYPE_CHECKING:
    from collections.abc import Buffer


class _CountingReader(io.RawIOBase):
    """Passes reads through to a stream, counting the bytes returned."""

    def __init__(self, stream: IO[bytes]) -> None:
        super().__init__()
        self._stream = stream
        self.consumed = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: "Buffer") -> int:
        view = memoryview(buffer).cast("B")
        data = self._stream.read(len(view))
        view[: len(data)] = data
        self.consumed += len(data)
        return len(data)


class DecompressedStream(io.RawIOBase):
    """Lazily decompresses a gzip stream, reporting corruption as it is read.

    Errors raised by the wrapped stream itself are not translated, so a
    failure upstream is not mistaken for a corrupt payload.
    """

    def __init__(self, stream: IO[bytes]) -> None:
        super().__init__()
        self._source = _CountingReader(stream)
        self._gzip = gzip.GzipFile(fileobj=self._source, mode="rb")

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: "Buffer") -> int:
        view = memoryview(buffer).cast("B")
        try:
            data = self._gzip.read(len(view))
        except (gzip.BadGzipFile, EOFError, zlib.error) as exc:
            raise CorruptStreamError(f"corrupt gzip stream: {exc}") from exc
        # An empty input has no gzip header at all
        if not data and len(view) and self._source.consumed == 0:
            raise CorruptStreamError("empty gzip stream")
        view[: len(data)] = data
        return len(data)

    def close(self) -> None:
        if not self.closed:
            self._gzip.close()
        super().close()


def open_decompressed(stream: IO[bytes]) -> DecompressedStream:
    """Wrap a gzip-compressed stream in a decompressing reader."""
    return DecompressedStream(stream)
