"""
Handles the download of a single file over a plain TCP connection.

The client sends one request line, then copies every byte the server sends
into the local file until the server closes the connection.
"""

import asyncio
import logging
from enum import Enum
from typing import Protocol

import aiofiles

from tcp_client.exceptions import (
    DeadlineError,
    FileCreateError,
    FileWriteError,
    ReadError,
    ReadTimeoutError,
    RequestError,
)
from tcp_client.models.config import DEFAULT_BUFFER_SIZE, DEFAULT_TIMEOUT, ClientConfig
from tcp_client.models.stats import TransferStats
from tcp_client.utils.formatting import describe_error

log = logging.getLogger(__name__)


class ByteConnection(Protocol):
    """The subset of `Connection` the downloader relies on."""

    async def send(self, data: bytes) -> None: ...

    def arm_read_deadline(self, timeout: float) -> None: ...

    async def read(self, max_bytes: int) -> bytes: ...


class DownloadState(Enum):
    CONNECTED = "connected"
    REQUEST_SENT = "request_sent"
    FILE_CREATED = "file_created"
    RECEIVING = "receiving"
    DONE = "done"
    FAILED = "failed"


def build_request_line(filename: str) -> bytes:
    """Formats the 'GET <filename>' request line sent to the server."""
    return f"GET {filename}\n".encode("ascii")


class Downloader:
    """
    Copies the server's response for one filename into a local file.

    The read deadline is re-armed before every read, so a slow transfer never
    fails as long as each chunk arrives within `read_timeout` of the previous one.
    """

    def __init__(self, read_timeout: float = DEFAULT_TIMEOUT):
        self.read_timeout = read_timeout
        self.state = DownloadState.CONNECTED

    async def download(
        self,
        connection: ByteConnection,
        filename: str,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> TransferStats:
        """
        Requests `filename` from the server and writes the response to a local file
        of the same name, truncating any existing file.

        End-of-stream is the normal end of a transfer.

        Raises:
            RequestError: The request line could not be sent.
            FileCreateError: The local file could not be created.
            DeadlineError: The read deadline could not be armed.
            ReadError: A read failed or timed out (`ReadTimeoutError`).
            FileWriteError: Received bytes could not be written.
        """
        self.state = DownloadState.CONNECTED
        try:
            stats = await self._download(connection, filename, buffer_size)
        except BaseException:
            self.state = DownloadState.FAILED
            raise
        self.state = DownloadState.DONE
        log.debug(
            f"Received {stats.bytes_received} bytes in {stats.chunks_received} "
            f"chunks for '{filename}'"
        )
        return stats

    async def _download(
        self, connection: ByteConnection, filename: str, buffer_size: int
    ) -> TransferStats:
        try:
            await connection.send(build_request_line(filename))
        except (OSError, UnicodeEncodeError) as e:
            raise RequestError(f"error sending request: {describe_error(e)}") from e
        self.state = DownloadState.REQUEST_SENT

        try:
            output = await aiofiles.open(filename, "wb")
        except OSError as e:
            raise FileCreateError(f"error creating file: {describe_error(e)}") from e
        self.state = DownloadState.FILE_CREATED

        stats = TransferStats(filename=filename)
        self.state = DownloadState.RECEIVING
        try:
            await self._receive(connection, output, buffer_size, stats)
            await output.flush()
        except OSError as e:
            await self._close_after_failure(output, filename)
            raise FileWriteError(
                f"error writing data to file: {describe_error(e)}"
            ) from e
        except BaseException:
            await self._close_after_failure(output, filename)
            raise

        try:
            await output.close()
        except OSError as e:
            raise FileWriteError(
                f"error writing data to file: {describe_error(e)}"
            ) from e

        stats.finish()
        return stats

    async def _close_after_failure(self, output, filename: str) -> None:
        """Closes the output file without masking the error already raised."""
        try:
            await output.close()
        except OSError as e:
            log.debug(f"Closing '{filename}' after a failed download: {e}")

    async def _receive(
        self,
        connection: ByteConnection,
        output,
        buffer_size: int,
        stats: TransferStats,
    ) -> None:
        while True:
            try:
                connection.arm_read_deadline(self.read_timeout)
            except OSError as e:
                raise DeadlineError(
                    f"error setting read deadline: {describe_error(e)}"
                ) from e

            # asyncio.TimeoutError is an OSError subclass on newer interpreters,
            # so it has to be caught first.
            try:
                chunk = await connection.read(buffer_size)
            except asyncio.TimeoutError as e:
                raise ReadTimeoutError(
                    "error reading data from connection: i/o timeout "
                    f"(no data for {self.read_timeout:g}s)"
                ) from e
            except OSError as e:
                raise ReadError(
                    f"error reading data from connection: {describe_error(e)}"
                ) from e

            if not chunk:
                return

            try:
                await output.write(chunk)
            except OSError as e:
                raise FileWriteError(
                    f"error writing data to file: {describe_error(e)}"
                ) from e
            stats.record_chunk(len(chunk))


async def download_file(
    connection: ByteConnection, filename: str, config: ClientConfig
) -> TransferStats:
    """Downloads `filename` using the buffer size and read timeout from `config`."""
    downloader = Downloader(read_timeout=config.read_timeout)
    return await downloader.download(connection, filename, config.buffer_size)
