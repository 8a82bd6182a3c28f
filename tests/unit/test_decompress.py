"""Tests for the gzip decompression stage."""

import gzip
import io

import pytest

from compliance_results.decompress import open_decompressed
from compliance_results.errors import CorruptStreamError, MemberCopyError
from compliance_results.pipe import create_pipe


def test_decompresses_lazily_with_any_read_size() -> None:
    """Reads of any size return the decompressed bytes in order."""
    payload = b"0123456789" * 1000
    stream = open_decompressed(io.BytesIO(gzip.compress(payload)))

    parts = [stream.read(1), stream.read(7), stream.read(5000), stream.read()]

    assert b"".join(parts) == payload
    assert stream.read(10) == b""


def test_invalid_header_raises_corrupt_stream() -> None:
    """A stream that is not gzip fails on the first read."""
    stream = open_decompressed(io.BytesIO(b"plain text, not gzip"))

    with pytest.raises(CorruptStreamError, match="corrupt gzip stream"):
        stream.read(10)


def test_truncated_stream_raises_corrupt_stream() -> None:
    """A stream cut before the end-of-stream marker is an error, not EOF."""
    compressed = gzip.compress(b"x" * 100_000)
    stream = open_decompressed(io.BytesIO(compressed[: len(compressed) // 2]))

    with pytest.raises(CorruptStreamError):
        stream.read()


def test_bad_checksum_raises_corrupt_stream() -> None:
    """A trailer with a wrong CRC is reported when the end is reached."""
    compressed = bytearray(gzip.compress(b"checked payload"))
    compressed[-8] ^= 0xFF

    stream = open_decompressed(io.BytesIO(bytes(compressed)))

    with pytest.raises(CorruptStreamError):
        stream.read()


def test_upstream_errors_are_not_translated() -> None:
    """Errors of the wrapped stream propagate unchanged."""
    reader, writer = create_pipe()
    writer.close(OSError("copy failed"))

    stream = open_decompressed(reader)

    with pytest.raises(MemberCopyError, match="copy failed"):
        stream.read(10)


def test_empty_input_raises_corrupt_stream() -> None:
    """An input without any gzip header is corrupt, not an empty payload."""
    stream = open_decompressed(io.BytesIO(b""))

    with pytest.raises(CorruptStreamError, match="empty gzip stream"):
        stream.read()


def test_empty_payload_is_not_corrupt() -> None:
    """A well-formed gzip stream of no bytes reads as empty."""
    stream = open_decompressed(io.BytesIO(gzip.compress(b"")))

    assert stream.read() == b""
