import socket

import pytest
import redwire
from redwire.client import Redis

from .fake_server import FakeRedisServer


@pytest.fixture
def tcp_address():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()


@pytest.fixture()
def server():
    fake = FakeRedisServer().start()
    try:
        yield fake
    finally:
        fake.stop()


def _get_client(cls, server, **kwargs):
    """
    Helper for fixtures or tests that need a Redis client connected to the
    in-process server
    """
    host, port = server.address
    kwargs.setdefault("socket_timeout", 5)
    return cls(host=host, port=port, **kwargs)


@pytest.fixture()
def r(server):
    with _get_client(Redis, server) as client:
        yield client


@pytest.fixture()
def decoded_r(server):
    with _get_client(Redis, server, decode_responses=True) as client:
        yield client


@pytest.fixture()
def r2(server):
    "A second client for tests that need multiple"
    with _get_client(Redis, server) as client:
        yield client


@pytest.fixture()
def pool(server):
    host, port = server.address
    with redwire.ClientPool(host=host, port=port, socket_timeout=5) as p:
        yield p
