import asyncio

import pytest

from tcp_client.exceptions import ConnectError
from tcp_client.models.config import ClientConfig
from tcp_client.net.connection import open_connection
from tests.servers import send_payload, stall


async def test_connect_refused_raises_connect_error(closed_port):
    config = ClientConfig(port=closed_port)
    with pytest.raises(ConnectError, match="error connecting to server"):
        async with open_connection(config):
            pass


async def test_connect_timeout_raises_connect_error(monkeypatch):
    async def never_connects(host, port):
        await asyncio.sleep(10)

    monkeypatch.setattr(asyncio, "open_connection", never_connects)
    config = ClientConfig(connect_timeout=0.1)

    with pytest.raises(ConnectError, match="i/o timeout"):
        async with open_connection(config):
            pass


async def test_connection_closed_on_exit(tcp_server):
    server = tcp_server(send_payload(b"hello"))
    async with open_connection(server.config()) as connection:
        assert not connection.closed
        assert connection.peername == f"127.0.0.1:{server.port}"
    assert connection.closed
    await connection.close()


async def test_connection_closed_when_body_raises(tcp_server):
    server = tcp_server(send_payload(b""))
    with pytest.raises(RuntimeError):
        async with open_connection(server.config()) as connection:
            raise RuntimeError("boom")
    assert connection.closed


async def test_use_after_close_is_an_os_error(tcp_server):
    server = tcp_server(send_payload(b""))
    async with open_connection(server.config()) as connection:
        pass

    with pytest.raises(OSError):
        connection.arm_read_deadline(1.0)
    with pytest.raises(OSError):
        await connection.read(10)
    with pytest.raises(OSError):
        await connection.send(b"GET x\n")


async def test_read_returns_empty_bytes_at_end_of_stream(tcp_server):
    server = tcp_server(send_payload(b"abc"))
    async with open_connection(server.config()) as connection:
        await connection.send(b"GET x\n")
        received = b""
        while chunk := await connection.read(2):
            received += chunk
    assert received == b"abc"


async def test_expired_deadline_times_out(tcp_server):
    server = tcp_server(stall())
    async with open_connection(server.config()) as connection:
        await connection.send(b"GET x\n")
        connection.arm_read_deadline(0.1)
        with pytest.raises(asyncio.TimeoutError):
            await connection.read(10)
