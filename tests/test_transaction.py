import pytest
from redwire.client import TransactionState
from redwire.exceptions import (
    ClientStateError,
    ExecAbortError,
    InMultiStateError,
    ProtocolError,
    ResponseError,
)
from redwire.reply import ArrayReply, StatusReply


class TestTransaction:
    def test_multi_exec(self, r):
        tx = r.multi()
        assert tx.state is TransactionState.MULTI
        tx.set("a", "1").incr("a").get("a")
        assert tx.exec() == [True, 2, b"2"]
        assert tx.state is TransactionState.COMMITTED
        assert r.get("a") == b"2"

    def test_commands_are_queued(self, r, server):
        tx = r.multi()
        tx.set("a", "1")
        assert len(tx) == 1
        assert r.transaction() is tx
        tx.discard()
        assert tx.state is TransactionState.DISCARDED
        assert r.get("a") is None
        assert server.command_names() == ["MULTI", "SET", "DISCARD", "GET"]

    def test_empty_exec(self, r):
        tx = r.multi()
        assert tx.exec() == []

    def test_nested_multi(self, r):
        tx = r.multi()
        with pytest.raises(ClientStateError, match="nested"):
            tx.multi()
        with pytest.raises(InMultiStateError):
            r.multi()
        tx.discard()

    def test_exec_without_multi(self, r):
        with pytest.raises(ClientStateError):
            r.transaction().exec()

    def test_discard_without_multi(self, r):
        with pytest.raises(ClientStateError):
            r.transaction().discard()

    def test_finished_transaction_is_replaced(self, r):
        tx = r.multi()
        tx.exec()
        assert tx.finished
        tx2 = r.multi()
        assert tx2 is not tx
        tx2.discard()
        with pytest.raises(ClientStateError, match="discarded"):
            tx2.multi()

    def test_exec_errors_are_returned_in_place(self, r):
        r.rpush("list", "x")
        tx = r.multi()
        tx.set("a", "1").get("list").get("a")
        result = tx.exec()
        assert result[0] is True
        assert isinstance(result[1], ResponseError)
        assert str(result[1]).startswith(
            "Command # 2 (GET list) of transaction caused error: WRONGTYPE"
        )
        assert result[2] == b"1"

    def test_exec_raise_on_error(self, r):
        r.rpush("list", "x")
        tx = r.multi()
        tx.get("list").set("a", "1")
        with pytest.raises(ResponseError, match="WRONGTYPE"):
            tx.exec(raise_on_error=True)
        assert tx.state is TransactionState.COMMITTED
        assert r.get("a") == b"1"

    def test_queue_error_then_execabort(self, r):
        tx = r.multi()
        with pytest.raises(ResponseError, match="of transaction caused error"):
            tx.execute_command("NOSUCHCOMMAND")
        tx.set("a", "1")
        with pytest.raises(ExecAbortError):
            tx.exec()
        assert tx.state is TransactionState.DISCARDED
        assert not r.broken
        assert r.get("a") is None

    def test_queue_needs_multi(self, r):
        tx = r.transaction()
        with pytest.raises(ClientStateError):
            tx.set("a", "1")

    def test_context_manager_discards(self, r, server):
        with r.multi() as tx:
            tx.set("a", "1")
        assert tx.state is TransactionState.DISCARDED
        assert server.command_names()[-1] == "DISCARD"
        assert r.get("a") is None

    def test_repr(self, r):
        assert repr(r.transaction()) == "<Transaction state=inactive>"


class TestWatch:
    def test_watch_then_exec(self, r, r2):
        r.set("a", "1")
        assert r.watch("a")
        tx = r.multi()
        assert tx.state is TransactionState.MULTI
        tx.set("a", "2")
        assert tx.exec() == [True]
        assert r2.get("a") == b"2"

    def test_watched_key_changed(self, r, r2):
        r.set("a", "1")
        r.watch("a")
        r2.set("a", "changed")
        tx = r.multi()
        tx.set("a", "2")
        assert tx.exec() is None
        assert tx.state is TransactionState.DISCARDED
        assert r.get("a") == b"changed"

    def test_watch_state(self, r):
        tx = r.transaction()
        tx.watch("a", "b")
        assert tx.state is TransactionState.WATCHING
        tx.unwatch()
        assert tx.state is TransactionState.INACTIVE

    def test_watch_after_multi(self, r):
        tx = r.multi()
        with pytest.raises(ClientStateError, match="WATCH after a MULTI"):
            tx.watch("a")
        with pytest.raises(ClientStateError):
            tx.unwatch()
        tx.discard()

    def test_context_manager_unwatches(self, r, server):
        with r.transaction() as tx:
            tx.watch("a")
        assert tx.state is TransactionState.INACTIVE
        assert server.command_names()[-1] == "UNWATCH"


class TestExecReplies:
    def test_wrong_number_of_replies_breaks_connection(self, r):
        tx = r.multi()
        tx.set("a", "1")
        # pretend one more command was queued than the server knows about
        tx.response_stack.append(tx.response_stack[0])
        with pytest.raises(ProtocolError, match="Wrong number of response items"):
            tx.exec()
        assert r.broken

    def test_non_array_exec_reply_breaks_connection(self, r, monkeypatch):
        tx = r.multi()
        replies = iter([StatusReply("OK")])
        monkeypatch.setattr(r.connection, "read_response", lambda: next(replies))
        with pytest.raises(ProtocolError, match="Expected an array reply"):
            tx.exec()
        assert r.broken

    def test_nil_exec_reply(self, r, monkeypatch):
        tx = r.multi()
        monkeypatch.setattr(r.connection, "read_response", lambda: ArrayReply(None))
        assert tx.exec() is None
        assert tx.state is TransactionState.DISCARDED
