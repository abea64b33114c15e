import errno
import io
import socket

from ..exceptions import ConnectionBrokenError, ProtocolError, SocketTimeoutError

NONBLOCKING_EXCEPTION_ERROR_NUMBERS = {BlockingIOError: errno.EWOULDBLOCK}
NONBLOCKING_EXCEPTIONS = tuple(NONBLOCKING_EXCEPTION_ERROR_NUMBERS.keys())

SERVER_CLOSED_CONNECTION_ERROR = "Connection closed by server."
SENTINEL = object()


class SocketBuffer:
    def __init__(self, socket, socket_read_size, socket_timeout):
        self._sock = socket
        self.socket_read_size = socket_read_size
        self.socket_timeout = socket_timeout
        self._buffer = io.BytesIO()
        # number of bytes written to the buffer from the socket
        self.bytes_written = 0
        # number of bytes read from the buffer
        self.bytes_read = 0

    @property
    def length(self):
        return self.bytes_written - self.bytes_read

    def _read_from_socket(self, length=None, timeout=SENTINEL, raise_on_timeout=True):
        sock = self._sock
        buf = self._buffer
        if sock is None or buf is None:
            raise ConnectionBrokenError(SERVER_CLOSED_CONNECTION_ERROR)
        socket_read_size = self.socket_read_size
        buf.seek(self.bytes_written)
        marker = 0
        custom_timeout = timeout is not SENTINEL

        try:
            if custom_timeout:
                sock.settimeout(timeout)
            while True:
                data = sock.recv(socket_read_size)
                # an empty string indicates the server shutdown the socket
                if isinstance(data, bytes) and len(data) == 0:
                    raise ConnectionBrokenError(SERVER_CLOSED_CONNECTION_ERROR)
                buf.write(data)
                data_length = len(data)
                self.bytes_written += data_length
                marker += data_length

                if length is not None and length > marker:
                    continue
                return True
        except socket.timeout:
            if raise_on_timeout:
                raise SocketTimeoutError("Timeout reading from socket")
            return False
        except NONBLOCKING_EXCEPTIONS as ex:
            # in nonblocking mode a blocking error only means there is no
            # data to be read yet
            allowed = NONBLOCKING_EXCEPTION_ERROR_NUMBERS.get(ex.__class__, -1)
            if not raise_on_timeout and ex.errno == allowed:
                return False
            raise ConnectionBrokenError(
                f"Error while reading from socket: {ex.args}"
            )
        except OSError as ex:
            raise ConnectionBrokenError(f"Error while reading from socket: {ex.args}")
        finally:
            if custom_timeout:
                try:
                    sock.settimeout(self.socket_timeout)
                except OSError:
                    # the socket was closed underneath us
                    pass

    def settimeout(self, timeout):
        self.socket_timeout = timeout

    def can_read(self, timeout):
        return bool(self.length) or self._read_from_socket(
            timeout=timeout, raise_on_timeout=False
        )

    def read(self, length):
        length = length + 2  # make sure to read the \r\n terminator
        # make sure we've read enough data from the socket
        if length > self.length:
            self._read_from_socket(length - self.length)

        self._buffer.seek(self.bytes_read)
        data = self._buffer.read(length)
        self.bytes_read += len(data)

        # purge the buffer when we've consumed it all so it doesn't
        # grow forever
        if self.bytes_read == self.bytes_written:
            self.purge()

        if data[-2:] != b"\r\n":
            raise ProtocolError(f"Protocol Error: bulk payload not terminated: {data!r}")
        return data[:-2]

    def readline(self):
        buf = self._buffer
        if buf is None:
            raise ConnectionBrokenError(SERVER_CLOSED_CONNECTION_ERROR)
        buf.seek(self.bytes_read)
        data = buf.readline()
        while not data.endswith(b"\r\n"):
            if data.endswith(b"\n"):
                raise ProtocolError(f"Protocol Error: bare line feed in {data!r}")
            # there's more data in the socket that we need
            self._read_from_socket()
            buf.seek(self.bytes_read)
            data = buf.readline()

        self.bytes_read += len(data)

        if self.bytes_read == self.bytes_written:
            self.purge()

        return data[:-2]

    def purge(self):
        self._buffer.seek(0)
        self._buffer.truncate()
        self.bytes_written = 0
        self.bytes_read = 0
