"""Bounded in-memory pipe between a producer thread and a reader.

The writer blocks while the pipe holds ``capacity`` chunks and the reader
blocks until data arrives, so the producer can never run far ahead of the
consumer. Closing the writer with an error makes every further read raise
instead of returning end-of-stream.
"""

import io
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from compliance_results.errors import MemberCopyError

if TYPE_CHECKING:
    from collections.abc import Buffer


@dataclass(kw_only=True)
class _PipeState:
    """State shared by both ends of a pipe."""

    capacity: int
    chunks: deque[bytes] = field(default_factory=deque)
    condition: threading.Condition = field(default_factory=threading.Condition)
    writer_closed: bool = False
    reader_closed: bool = False
    error: BaseException | None = None


class PipeReader(io.RawIOBase):
    """Reading end of a pipe, usable wherever a binary file object is."""

    def __init__(self, state: _PipeState) -> None:
        super().__init__()
        self._state = state

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: "Buffer") -> int:
        if self.closed:
            raise ValueError("read from closed pipe")
        view = memoryview(buffer).cast("B")
        if not len(view):
            return 0

        state = self._state
        with state.condition:
            state.condition.wait_for(lambda: state.chunks or state.writer_closed)
            if not state.chunks:
                if state.error is not None:
                    raise MemberCopyError(
                        f"copy into pipe failed: {state.error}"
                    ) from state.error
                return 0

            chunk = state.chunks.popleft()
            size = min(len(chunk), len(view))
            view[:size] = chunk[:size]
            if size < len(chunk):
                state.chunks.appendleft(chunk[size:])
            state.condition.notify_all()
            return size

    def close(self) -> None:
        """Close the reader, waking a writer blocked on a full pipe."""
        state = self._state
        with state.condition:
            state.reader_closed = True
            state.chunks.clear()
            state.condition.notify_all()
        super().close()


class PipeWriter:
    """Writing end of a pipe."""

    def __init__(self, state: _PipeState) -> None:
        self._state = state

    @property
    def closed(self) -> bool:
        return self._state.writer_closed

    def write(self, data: bytes) -> int:
        """Queue a chunk, blocking while the pipe is full.

        Raises:
            BrokenPipeError: If the reader was closed
            ValueError: If the writer was already closed

        """
        state = self._state
        with state.condition:
            if state.writer_closed:
                raise ValueError("write to closed pipe")
            state.condition.wait_for(
                lambda: state.reader_closed or len(state.chunks) < state.capacity
            )
            if state.reader_closed:
                raise BrokenPipeError("pipe reader is closed")
            if data:
                state.chunks.append(bytes(data))
                state.condition.notify_all()
            return len(data)

    def close(self, error: BaseException | None = None) -> None:
        """Close the writer; with ``error``, reads fail once data is drained.

        Closing an already closed writer does nothing.
        """
        state = self._state
        with state.condition:
            if state.writer_closed:
                return
            state.writer_closed = True
            state.error = error
            state.condition.notify_all()


def create_pipe(capacity: int = 4) -> tuple[PipeReader, PipeWriter]:
    """Create a pipe holding at most ``capacity`` chunks in flight."""
    if capacity < 1:
        raise ValueError("pipe capacity must be at least 1")
    state = _PipeState(capacity=capacity)
    return PipeReader(state), PipeWriter(state)
