"""Streaming extraction of a nested archive member."""

import logging
import tarfile
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO, BinaryIO, Self

from compliance_results.errors import (
    MalformedArchiveError,
    NoMatchingMemberError,
    RetrievalError,
)
from compliance_results.pipe import PipeReader, PipeWriter, create_pipe

log = logging.getLogger(__name__)


class StrictTarInfo(tarfile.TarInfo):
    """Tar header that rejects a damaged header anywhere in the archive.

    ``tarfile`` ends iteration silently on an invalid or truncated header
    after the first member, which would hide members behind the damage.
    Only an end-of-archive block or the end of the data ends iteration.
    """

    @classmethod
    def fromtarfile(cls, archive: tarfile.TarFile) -> Self:
        try:
            return super().fromtarfile(archive)
        except (tarfile.InvalidHeaderError, tarfile.TruncatedHeaderError) as exc:
            raise tarfile.ReadError(
                f"damaged header at offset {archive.offset}: {exc}"
            ) from exc


def open_tar_stream(stream: IO[bytes], mode: str) -> tarfile.TarFile:
    """Open a tar archive for sequential reading with strict headers."""
    return tarfile.open(fileobj=stream, mode=mode, tarinfo=StrictTarInfo)


@dataclass(frozen=True, kw_only=True)
class ExtractedMember:
    """A matched archive member whose content is being copied into a pipe."""

    name: str
    stream: PipeReader
    copier: threading.Thread


@dataclass(frozen=True, kw_only=True)
class ArchiveExtractor:
    """Exposes the first tar member ending with ``suffix`` as a live stream."""

    suffix: str = ".tar.gz"
    chunk_size: int = 64 * 1024
    pipe_capacity: int = 4

    def open(self, stream: IO[bytes]) -> ExtractedMember:
        """Scan ``stream`` for the member and start copying its content.

        Scanning happens in the calling thread and stops at the first match;
        later entries are never read. The content is copied by a background
        thread, so the returned stream is readable before the outer stream
        has been fully consumed.

        Raises:
            MalformedArchiveError: If the stream is not a readable tar archive
            NoMatchingMemberError: If no member name ends with the suffix
            RetrievalError: If reading the stream fails before a match

        """
        try:
            archive = open_tar_stream(stream, "r|*")
        except tarfile.TarError as exc:
            raise MalformedArchiveError(f"could not read archive: {exc}") from exc
        except OSError as exc:
            raise RetrievalError(f"could not read archive stream: {exc}") from exc

        try:
            member = self._find_member(archive)
            content = archive.extractfile(member)
        except Exception:
            archive.close()
            raise
        if content is None:  # pragma: no cover
            archive.close()
            raise MalformedArchiveError(f"member {member.name} has no content")

        log.info("Found results archive member %s (%d bytes)", member.name, member.size)

        reader, writer = create_pipe(self.pipe_capacity)
        copier = threading.Thread(
            target=copy_member,
            args=(archive, content, writer, self.chunk_size),
            name=f"member-copy:{member.name}",
            daemon=True,
        )
        copier.start()
        return ExtractedMember(name=member.name, stream=reader, copier=copier)

    def _find_member(self, archive: tarfile.TarFile) -> tarfile.TarInfo:
        """Return the first regular file whose name ends with the suffix."""
        try:
            for member in archive:
                if member.isfile() and member.name.endswith(self.suffix):
                    return member
                log.debug("Skipping archive member %s", member.name)
        except tarfile.TarError as exc:
            raise MalformedArchiveError(f"could not read archive: {exc}") from exc
        except OSError as exc:
            raise RetrievalError(f"could not read archive stream: {exc}") from exc

        raise NoMatchingMemberError("no compliance results archive found")


def iter_member_chunks(content: BinaryIO, chunk_size: int) -> Iterator[bytes]:
    """Yield the content of an archive member in chunks."""
    while chunk := content.read(chunk_size):
        yield chunk


def copy_member(
    archive: tarfile.TarFile,
    content: BinaryIO,
    writer: PipeWriter,
    chunk_size: int,
) -> None:
    """Copy member content into the pipe, closing it with any copy error."""
    try:
        for chunk in iter_member_chunks(content, chunk_size):
            writer.write(chunk)
    except BrokenPipeError:
        log.debug("Reader closed before the member was fully copied")
        writer.close()
    except Exception as exc:
        log.warning("Copying archive member failed: %s", exc)
        writer.close(exc)
    else:
        writer.close()
    finally:
        content.close()
        archive.close()
