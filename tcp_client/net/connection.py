"""
Wraps an asyncio stream pair as a connection with a re-armable read deadline.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from tcp_client.exceptions import ConnectError
from tcp_client.models.config import ClientConfig
from tcp_client.utils.formatting import describe_error

log = logging.getLogger(__name__)


class Connection:
    """
    A bidirectional byte stream to the server.

    Reads are bounded by a deadline that the caller re-arms before each read.
    Without an armed deadline, reads block until data or end-of-stream.
    """

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        self._reader = reader
        self._writer = writer
        self._deadline: float | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def peername(self) -> str:
        peer = self._writer.get_extra_info("peername")
        if not peer:
            return "unknown"
        return f"{peer[0]}:{peer[1]}"

    def _ensure_open(self) -> None:
        if self._closed:
            raise ConnectionError("use of closed network connection")

    async def send(self, data: bytes) -> None:
        """Writes all of `data` and waits until it is flushed to the socket."""
        self._ensure_open()
        self._writer.write(data)
        await self._writer.drain()

    def arm_read_deadline(self, timeout: float) -> None:
        """Sets the read deadline to now + `timeout` seconds."""
        self._ensure_open()
        self._deadline = asyncio.get_running_loop().time() + timeout

    async def read(self, max_bytes: int) -> bytes:
        """
        Reads up to `max_bytes` bytes.

        Returns b"" once the peer has closed its side of the connection.

        Raises:
            asyncio.TimeoutError: If the read deadline passes before data arrives.
            OSError: For any other transport failure.
        """
        self._ensure_open()
        if self._deadline is None:
            return await self._reader.read(max_bytes)

        remaining = self._deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            raise asyncio.TimeoutError()
        return await asyncio.wait_for(self._reader.read(max_bytes), timeout=remaining)

    async def close(self) -> None:
        """Closes the connection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except OSError as e:
            log.debug(f"Connection to {self.peername} closed with error: {e}")


@asynccontextmanager
async def open_connection(config: ClientConfig) -> AsyncIterator[Connection]:
    """
    Connects to the configured server and closes the connection on exit.

    The connect attempt is bounded by `config.connect_timeout`.

    Raises:
        ConnectError: If the server cannot be reached in time.
    """
    try:
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(config.host, config.port),
            timeout=config.connect_timeout,
        )
    except asyncio.TimeoutError as e:
        raise ConnectError(
            f"error connecting to server: dial tcp {config.address}: i/o timeout"
        ) from e
    except OSError as e:
        raise ConnectError(
            f"error connecting to server: dial tcp {config.address}: "
            f"{describe_error(e)}"
        ) from e

    connection = Connection(reader, writer)
    log.debug(f"Connected to {connection.peername}")
    try:
        yield connection
    finally:
        await connection.close()
        log.debug(f"Connection to {config.address} closed")
