import os
import socket
import threading

import pytest

from tests.servers import FileServer


@pytest.fixture
def tcp_server():
    servers = []

    def start(behavior) -> FileServer:
        server = FileServer(behavior)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return server

    yield start

    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    """Runs every test inside its own empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def closed_port() -> int:
    """A loopback port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def umask_022():
    old = os.umask(0o022)
    yield
    os.umask(old)
