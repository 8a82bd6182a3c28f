"""Tests for the in-memory pipe."""

import threading

import pytest

from compliance_results.errors import MemberCopyError
from compliance_results.pipe import create_pipe


def test_reads_written_chunks_in_order() -> None:
    """Bytes come out exactly as written, across chunk boundaries."""
    reader, writer = create_pipe(capacity=4)
    writer.write(b"hello ")
    writer.write(b"world")
    writer.close()

    assert reader.read() == b"hello world"


def test_partial_reads_keep_remainder() -> None:
    """A read smaller than a chunk leaves the rest for the next read."""
    reader, writer = create_pipe()
    writer.write(b"abcdef")
    writer.close()

    assert reader.read(2) == b"ab"
    assert reader.read(3) == b"cde"
    assert reader.read(10) == b"f"
    assert reader.read(10) == b""


def test_clean_close_is_end_of_stream() -> None:
    """Reading a cleanly closed, drained pipe returns no data."""
    reader, writer = create_pipe()
    writer.close()

    assert reader.read(10) == b""


def test_error_close_raises_after_buffered_data() -> None:
    """Data written before the error is delivered, then reads raise."""
    reader, writer = create_pipe()
    writer.write(b"partial")
    writer.close(OSError("disk on fire"))

    assert reader.read(7) == b"partial"
    with pytest.raises(MemberCopyError, match="disk on fire") as exc_info:
        reader.read(1)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_error_is_raised_on_every_read() -> None:
    """An errored pipe never turns into a clean end-of-stream."""
    reader, writer = create_pipe()
    writer.close(RuntimeError("boom"))

    for _ in range(3):
        with pytest.raises(MemberCopyError):
            reader.read(1)


def test_second_close_keeps_first_outcome() -> None:
    """Closing twice does not replace an error with a clean close."""
    reader, writer = create_pipe()
    writer.close(RuntimeError("boom"))
    writer.close()

    assert writer.closed
    with pytest.raises(MemberCopyError):
        reader.read(1)


def test_write_after_close_is_rejected() -> None:
    """Writing to a closed writer raises ValueError."""
    _, writer = create_pipe()
    writer.close()

    with pytest.raises(ValueError, match="closed pipe"):
        writer.write(b"late")


def test_read_after_reader_close_is_rejected() -> None:
    """Reading from a closed reader raises ValueError."""
    reader, _ = create_pipe()
    reader.close()

    with pytest.raises(ValueError, match="closed pipe"):
        reader.read(1)


def test_rejects_zero_capacity() -> None:
    """A pipe must be able to hold at least one chunk."""
    with pytest.raises(ValueError, match="at least 1"):
        create_pipe(capacity=0)


def test_writer_blocks_while_pipe_is_full() -> None:
    """Writes beyond capacity wait until the reader consumes a chunk."""
    reader, writer = create_pipe(capacity=1)
    writer.write(b"first")
    second_written = threading.Event()

    def write_second() -> None:
        writer.write(b"second")
        second_written.set()

    thread = threading.Thread(target=write_second)
    thread.start()

    assert not second_written.wait(0.1)
    assert reader.read(5) == b"first"
    assert second_written.wait(5)
    thread.join(5)
    assert reader.read(6) == b"second"


def test_reader_blocks_until_data_arrives() -> None:
    """A read waits for the producer instead of returning early."""
    reader, writer = create_pipe()
    result: list[bytes] = []

    thread = threading.Thread(target=lambda: result.append(reader.read(4)))
    thread.start()
    thread.join(0.1)
    assert thread.is_alive()

    writer.write(b"data")
    thread.join(5)

    assert result == [b"data"]


def test_closing_reader_unblocks_writer() -> None:
    """A writer blocked on a full pipe fails once the reader goes away."""
    reader, writer = create_pipe(capacity=1)
    writer.write(b"fill")
    errors: list[BaseException] = []

    def write_blocked() -> None:
        try:
            writer.write(b"blocked")
        except BrokenPipeError as exc:
            errors.append(exc)

    thread = threading.Thread(target=write_blocked)
    thread.start()
    thread.join(0.1)
    assert thread.is_alive()

    reader.close()
    thread.join(5)

    assert not thread.is_alive()
    assert len(errors) == 1
