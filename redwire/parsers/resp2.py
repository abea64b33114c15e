from ..exceptions import ConnectionBrokenError, ConnectionError, ProtocolError
from ..reply import ArrayReply, BulkReply, ErrorReply, IntegerReply, StatusReply
from .base import BaseParser
from .socket import SERVER_CLOSED_CONNECTION_ERROR, SocketBuffer


class RESP2Parser(BaseParser):
    "Plain Python parsing class producing tagged replies"

    def __init__(self, socket_read_size):
        self.socket_read_size = socket_read_size
        self._sock = None
        self._buffer = None

    def on_connect(self, connection):
        "Called when the socket connects"
        self._sock = connection._sock
        self._buffer = SocketBuffer(
            self._sock, self.socket_read_size, connection.socket_timeout
        )

    def on_disconnect(self):
        "Called when the socket disconnects"
        # a reader blocked in another thread keeps its own reference to the
        # buffer and fails once the socket is shut down
        self._sock = None
        self._buffer = None

    def settimeout(self, timeout):
        if self._buffer is not None:
            self._buffer.settimeout(timeout)

    def can_read(self, timeout):
        return self._buffer is not None and self._buffer.can_read(timeout)

    def read_response(self):
        buffer = self._buffer
        if buffer is None:
            raise ConnectionBrokenError(SERVER_CLOSED_CONNECTION_ERROR)
        return self._read_reply(buffer)

    def _read_reply(self, buffer):
        raw = buffer.readline()
        if not raw:
            raise ProtocolError("Protocol Error: empty reply line")

        byte, response = raw[:1], raw[1:]

        if byte not in (b"-", b"+", b":", b"$", b"*"):
            raise ProtocolError(f"Protocol Error: {raw!r}")

        # server returned an error
        if byte == b"-":
            response = response.decode("utf-8", errors="replace")
            error = self.parse_error(response)
            # a ConnectionError (max clients reached) comes right before the
            # server drops us, so raise it immediately
            if isinstance(error, ConnectionError):
                raise error
            # otherwise the caller decides whether this error is raised, it
            # might belong to a pipeline or transaction slot
            return ErrorReply(response, error)
        # single value
        elif byte == b"+":
            return StatusReply(response.decode("utf-8", errors="replace"))
        # int value
        elif byte == b":":
            return IntegerReply(self._parse_int(response, raw))
        # bulk response
        elif byte == b"$":
            length = self._parse_length(response, raw)
            if length == -1:
                return BulkReply(None)
            return BulkReply(buffer.read(length))
        # multi-bulk response
        length = self._parse_length(response, raw)
        if length == -1:
            return ArrayReply(None)
        return ArrayReply([self._read_reply(buffer) for i in range(length)])

    @staticmethod
    def _parse_int(value, raw):
        try:
            return int(value)
        except ValueError:
            raise ProtocolError(f"Protocol Error: invalid integer in {raw!r}")

    def _parse_length(self, value, raw):
        length = self._parse_int(value, raw)
        if length < -1:
            raise ProtocolError(f"Protocol Error: invalid length in {raw!r}")
        return length
