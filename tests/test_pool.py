import os
import threading
import time
from unittest import mock

import pytest
import redwire
from redwire.exceptions import (
    ConnectFailedError,
    ConnectionBrokenError,
    PoolExhaustedError,
)


class DummyConnection:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.pid = os.getpid()
        self._sock = None
        self.broken = False

    def connect(self):
        self._sock = mock.Mock()

    def can_read(self, timeout=0):
        return False

    def mark_broken(self, error=None):
        self.broken = True
        self.disconnect()

    def disconnect(self):
        self._sock = None


class DummyClient:
    def __init__(self, pool=None, **kwargs):
        self.pool = pool
        self.kwargs = kwargs
        self.connection = DummyConnection(**kwargs)
        self.reset_calls = 0

    @property
    def broken(self):
        return self.connection.broken

    def reset_state(self):
        self.reset_calls += 1

    def ping(self):
        return "PONG"


class TestClientPool:
    def get_pool(self, client_class=DummyClient, **kwargs):
        return redwire.ClientPool(client_class=client_class, **kwargs)

    def test_client_creation(self):
        pool = self.get_pool(foo="bar", biz="baz")
        client = pool.get_resource()
        assert isinstance(client, DummyClient)
        assert client.kwargs == {"foo": "bar", "biz": "baz"}
        assert client.pool is pool

    def test_multiple_clients(self):
        pool = self.get_pool()
        c1 = pool.get_resource()
        c2 = pool.get_resource()
        assert c1 is not c2
        assert pool.active_count == 2

    def test_max_connections(self):
        pool = self.get_pool(max_connections=2)
        pool.get_resource()
        pool.get_resource()
        with pytest.raises(PoolExhaustedError):
            pool.get_resource()

    def test_reuse_previously_released_client(self):
        pool = self.get_pool()
        c1 = pool.get_resource()
        pool.return_resource(c1)
        assert pool.idle_count == 1
        assert pool.get_resource() is c1
        assert c1.reset_calls == 1

    def test_release_not_owned_client(self):
        pool1 = self.get_pool()
        pool2 = self.get_pool()
        c1 = pool1.get_resource()
        c2 = pool2.get_resource()
        pool2.release(c2)
        assert pool2.idle_count == 1
        pool2.release(c1)
        assert pool2.idle_count == 1

    def test_broken_client_is_destroyed(self):
        pool = self.get_pool(max_connections=1)
        client = pool.get_resource()
        pool.return_broken_resource(client)
        assert pool.idle_count == 0
        assert client.connection._sock is None
        # the slot was freed
        assert pool.get_resource() is not client

    def test_client_marked_broken_is_not_reused(self):
        pool = self.get_pool()
        client = pool.get_resource()
        client.connection.mark_broken()
        pool.return_resource(client)
        assert pool.idle_count == 0
        assert client.reset_calls == 0

    def test_destroy(self):
        pool = self.get_pool(max_connections=1)
        client = pool.get_resource()
        pool.destroy(client)
        assert pool.active_count == 0
        pool.get_resource()

    def test_max_idle(self):
        pool = self.get_pool(max_idle=1)
        c1 = pool.get_resource()
        c2 = pool.get_resource()
        pool.return_resource(c1)
        pool.return_resource(c2)
        assert pool.idle_count == 1
        assert c2.connection._sock is None

    def test_invalid_limits(self):
        with pytest.raises(ValueError):
            self.get_pool(max_connections=-1)
        with pytest.raises(ValueError):
            self.get_pool(max_idle=-1)

    def test_failed_reset_destroys_client(self, caplog):
        pool = self.get_pool()
        client = pool.get_resource()
        client.reset_state = mock.Mock(side_effect=ConnectionBrokenError("gone"))
        with caplog.at_level("WARNING", logger="redwire.pool"):
            pool.return_resource(client)
        assert pool.idle_count == 0
        assert "Failed to reset" in caplog.text

    def test_idle_client_with_unread_data_is_discarded(self):
        pool = self.get_pool()
        c1 = pool.get_resource()
        pool.return_resource(c1)
        c1.connection.can_read = lambda timeout=0: True
        c2 = pool.get_resource()
        assert c2 is not c1
        assert c1.connection.broken

    def test_new_client_failing_to_connect_raises(self):
        pool = self.get_pool(max_connections=1)
        with mock.patch.object(
            DummyConnection, "connect", side_effect=ConnectFailedError("refused")
        ):
            with pytest.raises(ConnectFailedError):
                pool.get_resource()
        assert pool.active_count == 0
        pool.get_resource()

    def test_test_on_borrow(self):
        pool = self.get_pool(test_on_borrow=True)
        client = pool.get_resource()
        pool.return_resource(client)
        with mock.patch.object(DummyClient, "ping", return_value="NOPE"):
            with pytest.raises(ConnectionBrokenError, match="PING"):
                pool.get_resource()
        assert pool.idle_count == 0
        assert pool.active_count == 0

    def test_repr_contains_client_info(self):
        pool = redwire.ClientPool(host="localhost", port=6379, db=1)
        expected = (
            "<redwire.pool.ClientPool("
            "<redwire.client.Redis(host=localhost,port=6379,db=1)>)>"
        )
        assert repr(pool) == expected

    def test_pool_disconnect(self):
        pool = self.get_pool()
        c1 = pool.get_resource()
        c2 = pool.get_resource()
        pool.return_resource(c2)
        pool.disconnect(inuse_connections=False)
        assert c1.connection._sock is not None
        assert c2.connection._sock is None
        pool.disconnect()
        assert c1.connection._sock is None

    def test_reset_after_fork(self):
        pool = self.get_pool()
        client = pool.get_resource()
        pool.pid = -1
        pool._checkpid()
        assert pool.active_count == 0
        assert pool.pid == os.getpid()
        pool.release(client)
        assert pool.idle_count == 0


class TestClientPoolWithServer:
    def test_borrow_and_close(self, pool):
        client = pool.get_resource()
        client.set("a", "1")
        client.close()
        assert pool.idle_count == 1
        assert pool.borrow() is client
        assert client.get("a") == b"1"

    def test_returned_client_goes_back_to_its_database(self, pool):
        client = pool.get_resource()
        client.set("k", "db0")
        client.select(3)
        client.set("k", "db3")
        pool.return_resource(client)
        again = pool.get_resource()
        assert again is client
        assert again.get_db() == 0
        assert again.get("k") == b"db0"

    def test_pool_database_is_restored(self, server):
        host, port = server.address
        with redwire.ClientPool(host=host, port=port, db=2) as pool:
            client = pool.get_resource()
            client.select(0)
            client.close()
            assert pool.get_resource().get_db() == 2
        assert server.commands[-1] == [b"SELECT", b"2"]

    def test_returned_client_leaves_multi(self, pool, server):
        client = pool.get_resource()
        tx = client.multi()
        tx.set("a", "1")
        client.close()
        assert server.command_names()[-1] == "DISCARD"
        client = pool.get_resource()
        assert client.get("a") is None

    def test_broken_client_goes_back_broken(self, pool, server):
        client = pool.get_resource()
        client.ping()
        server.kill_clients()
        with pytest.raises(ConnectionBrokenError):
            client.ping()
        client.close()
        assert pool.idle_count == 0
        assert pool.active_count == 0
        assert pool.get_resource().ping() == "PONG"

    def test_test_on_borrow_pings(self, server):
        host, port = server.address
        with redwire.ClientPool(host=host, port=port, test_on_borrow=True) as pool:
            pool.get_resource()
        assert server.command_names() == ["PING"]

    def test_from_url(self, server):
        host, port = server.address
        pool = redwire.ClientPool.from_url(
            f"redis://{host}:{port}/2?max_connections=3&max_idle=1&timeout=4"
        )
        assert pool.max_connections == 3
        assert pool.max_idle == 1
        assert pool.connection_kwargs == {"host": host, "port": port, "db": 2}
        client = pool.get_resource()
        assert client.ping() == "PONG"
        pool.close()


class TestBlockingClientPool:
    def get_pool(self, **kwargs):
        return redwire.BlockingClientPool(client_class=DummyClient, **kwargs)

    def test_client_creation(self):
        pool = self.get_pool(foo="bar")
        client = pool.get_resource()
        assert isinstance(client, DummyClient)
        assert client.kwargs == {"foo": "bar"}

    def test_pool_blocks_until_timeout(self):
        "When out of clients, block for timeout seconds, then raise"
        pool = self.get_pool(max_connections=1, timeout=0.1)
        pool.get_resource()

        start = time.monotonic()
        with pytest.raises(PoolExhaustedError, match="No connection available"):
            pool.get_resource()
        # we should have waited at least 0.1 seconds
        assert time.monotonic() - start >= 0.1

    def test_pool_blocks_until_client_available(self):
        """
        When out of clients, block until another client is released to the
        pool
        """
        pool = self.get_pool(max_connections=1, timeout=2)
        c1 = pool.get_resource()

        def target():
            time.sleep(0.1)
            pool.release(c1)

        start = time.monotonic()
        threading.Thread(target=target).start()
        assert pool.get_resource() is c1
        assert time.monotonic() - start >= 0.1

    def test_broken_client_frees_its_slot(self):
        pool = self.get_pool(max_connections=1, timeout=0.1)
        c1 = pool.get_resource()
        pool.return_broken_resource(c1)
        c2 = pool.get_resource()
        assert c2 is not c1

    def test_failed_creation_frees_its_slot(self):
        pool = self.get_pool(max_connections=1, timeout=0.1)
        with mock.patch.object(
            DummyConnection, "connect", side_effect=ConnectFailedError("refused")
        ):
            with pytest.raises(ConnectFailedError):
                pool.get_resource()
        pool.get_resource()

    def test_max_idle(self):
        pool = self.get_pool(max_connections=4, max_idle=1)
        c1 = pool.get_resource()
        c2 = pool.get_resource()
        pool.release(c1)
        pool.release(c2)
        assert pool.idle_count == 1
        assert c2.connection._sock is None

    def test_from_url_keeps_timeout(self):
        pool = redwire.BlockingClientPool.from_url("redis://localhost?timeout=3")
        assert pool.timeout == 3.0
        assert "timeout" not in pool.connection_kwargs
