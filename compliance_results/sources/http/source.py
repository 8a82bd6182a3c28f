"""Results source downloading the archive over HTTP."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import IO

import aiohttp

from compliance_results.errors import RetrievalError
from compliance_results.pipe import PipeWriter, create_pipe
from compliance_results.sources.base import ResultsSource
from compliance_results.sources.http.config import HttpSourceConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class HttpSource(ResultsSource):
    """Streams the results archive from an HTTP endpoint."""

    config: HttpSourceConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: HttpSourceConfig
    ) -> AsyncGenerator["HttpSource", None]:
        """Create source with managed session lifecycle."""
        headers = {}
        if config.token is not None:
            headers["Authorization"] = f"Bearer {config.token.get_secret_value()}"
        async with aiohttp.ClientSession(
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=config.timeout),
        ) as session:
            yield cls(config=config, session=session)

    @asynccontextmanager
    async def open(self) -> AsyncGenerator[IO[bytes], None]:
        """Yield a stream fed with the response body as it is downloaded.

        The body is pumped into a pipe by a background task, so the archive
        can be scanned from a worker thread while it is still downloading.
        A failed download makes reads on the stream raise.
        """
        log.info("Retrieving results archive from %s", self.config.url)
        try:
            response = await self.session.get(self.config.url)
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise RetrievalError(
                f"could not retrieve the compliance results: {exc}"
            ) from exc

        async with response:
            if response.status != 200:
                text = await response.text()
                raise RetrievalError(
                    "could not retrieve the compliance results: "
                    f"{response.status} {text}"
                )

            reader, writer = create_pipe(self.config.pipe_capacity)
            pump = asyncio.create_task(self._pump(response, writer))
            try:
                yield reader
            finally:
                reader.close()
                pump.cancel()
                await asyncio.gather(pump, return_exceptions=True)

    async def _pump(
        self, response: aiohttp.ClientResponse, writer: PipeWriter
    ) -> None:
        """Copy the response body into the pipe, closing it with any error."""
        received = 0
        try:
            async for chunk in response.content.iter_chunked(self.config.chunk_size):
                await asyncio.to_thread(writer.write, chunk)
                received += len(chunk)
        except BrokenPipeError:
            log.debug("Reader closed after %d byte(s) were downloaded", received)
        except Exception as exc:
            log.warning("Downloading results archive failed: %s", exc)
            writer.close(exc)
        else:
            log.info("Downloaded %d byte(s) of results archive", received)
        finally:
            writer.close()
