import logging
import os
import socket
import threading
from contextlib import contextmanager
from typing import Optional
from urllib.parse import parse_qs, unquote, urlparse

from .encoder import Encoder
from .exceptions import (
    AuthenticationWrongNumberOfArgsError,
    ConnectFailedError,
    ConnectionBrokenError,
    ConnectionError,
    ConnectTimeoutError,
    RedisError,
    SocketTimeoutError,
)
from .parsers import Command, PythonRespSerializer, RESP2Parser
from .parsers.helpers import ok_reply
from .reply import Reply
from .utils import format_error_message

logger = logging.getLogger(__name__)

SENTINEL = object()


class Connection:
    """
    Manages a single TCP connection to a Redis server.

    Any I/O or protocol failure marks the connection as broken. A broken
    connection never recovers: every later operation fails fast with
    ``ConnectionBrokenError`` and the owner is expected to discard it.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        username: Optional[str] = None,
        password: Optional[str] = None,
        socket_timeout: Optional[float] = None,
        socket_connect_timeout: Optional[float] = None,
        socket_keepalive: bool = False,
        socket_keepalive_options=None,
        socket_type: int = 0,
        client_name: Optional[str] = None,
        encoding: str = "utf-8",
        encoding_errors: str = "strict",
        decode_responses: bool = False,
        socket_read_size: int = 65536,
        parser_class=RESP2Parser,
    ):
        """
        Initialize a new Connection.

        ``socket_connect_timeout`` bounds dialing and defaults to
        ``socket_timeout``, which bounds every read and write afterwards.
        ``None`` means no deadline.
        """
        self.pid = os.getpid()
        self.host = host
        self.port = int(port)
        self.db = db
        self.username = username
        self.password = password
        self.client_name = client_name
        self.socket_timeout = socket_timeout
        if socket_connect_timeout is None:
            socket_connect_timeout = socket_timeout
        self.socket_connect_timeout = socket_connect_timeout
        self.socket_keepalive = socket_keepalive
        self.socket_keepalive_options = socket_keepalive_options or {}
        self.socket_type = socket_type
        self.encoder = Encoder(encoding, encoding_errors, decode_responses)
        self._sock = None
        self._sock_lock = threading.Lock()
        self._parser = parser_class(socket_read_size=socket_read_size)
        self._command_packer = PythonRespSerializer(6000)
        self._broken = False
        self._saved_timeout = SENTINEL
        self._infinite_depth = 0

    def __repr__(self):
        repr_args = ",".join([f"{k}={v}" for k, v in self.repr_pieces()])
        return f"<{self.__class__.__module__}.{self.__class__.__name__}({repr_args})>"

    def repr_pieces(self):
        pieces = [("host", self.host), ("port", self.port), ("db", self.db)]
        if self.client_name:
            pieces.append(("client_name", self.client_name))
        return pieces

    def __del__(self):
        try:
            self.disconnect()
        except Exception:
            pass

    @property
    def broken(self) -> bool:
        return self._broken

    @property
    def is_connected(self) -> bool:
        return self._sock is not None

    def _check_broken(self):
        if self._broken:
            raise ConnectionBrokenError(
                f"Connection to {self._host_error()} is broken and cannot be reused"
            )

    def mark_broken(self, error=None):
        if not self._broken:
            logger.warning(
                "Connection to %s marked broken: %r", self._host_error(), error
            )
        self._broken = True
        self.disconnect()

    def connect(self):
        "Connects to the Redis server if not already connected"
        self._check_broken()
        if self._sock:
            return
        try:
            sock = self._connect()
        except socket.timeout:
            raise ConnectTimeoutError(f"Timeout connecting to {self._host_error()}")
        except OSError as e:
            raise ConnectFailedError(self._error_message(e))

        self._sock = sock
        logger.debug("Connected to %s", self._host_error())
        try:
            self.on_connect()
        except RedisError:
            # clean up after any error in on_connect
            self.disconnect()
            raise

    def _connect(self):
        "Create a TCP socket connection"
        # we want to mimic what socket.create_connection does to support
        # ipv4/ipv6, but we want to set options prior to calling
        # socket.connect()
        err = None

        for res in socket.getaddrinfo(
            self.host, self.port, self.socket_type, socket.SOCK_STREAM
        ):
            family, socktype, proto, canonname, socket_address = res
            sock = None
            try:
                sock = socket.socket(family, socktype, proto)
                # TCP_NODELAY
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

                # TCP_KEEPALIVE
                if self.socket_keepalive:
                    sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
                    for k, v in self.socket_keepalive_options.items():
                        sock.setsockopt(socket.IPPROTO_TCP, k, v)

                # set the socket_connect_timeout before we connect
                sock.settimeout(self.socket_connect_timeout)

                sock.connect(socket_address)

                # set the socket_timeout now that we're connected
                sock.settimeout(self.socket_timeout)
                return sock

            except OSError as _:
                err = _
                if sock is not None:
                    sock.close()

        if err is not None:
            raise err
        raise OSError("socket.getaddrinfo returned an empty list")

    def _host_error(self):
        return f"{self.host}:{self.port}"

    def _error_message(self, exception):
        return format_error_message(self._host_error(), exception)

    def on_connect(self):
        "Initialize the connection, authenticate and select a database"
        self._parser.on_connect(self)

        if self.username or self.password:
            if self.username:
                auth_args = (self.username, self.password)
            else:
                auth_args = (self.password,)
            self.send_command("AUTH", *auth_args)
            try:
                ok_reply(self.read_response(), self.encoder)
            except AuthenticationWrongNumberOfArgsError:
                # a username and password were specified but the server
                # expects a single password argument, retry with just that
                self.send_command("AUTH", self.password)
                ok_reply(self.read_response(), self.encoder)

        if self.client_name:
            self.send_command("CLIENT", "SETNAME", self.client_name)
            ok_reply(self.read_response(), self.encoder)

        if self.db:
            self.send_command("SELECT", self.db)
            ok_reply(self.read_response(), self.encoder)

    def disconnect(self, *args):
        "Disconnects from the Redis server"
        with self._sock_lock:
            self._parser.on_disconnect()
            conn_sock = self._sock
            self._sock = None
        if conn_sock is None:
            return
        logger.debug("Disconnecting from %s", self._host_error())

        if os.getpid() == self.pid:
            try:
                # wakes up a reader blocked on this socket in another thread
                conn_sock.shutdown(socket.SHUT_RDWR)
            except (OSError, TypeError):
                pass

        try:
            conn_sock.close()
        except OSError:
            pass

    close = disconnect

    def _apply_timeout(self, timeout):
        sock = self._sock
        if sock is None:
            return
        sock.settimeout(timeout)
        self._parser.settimeout(timeout)

    def set_timeout_infinite(self):
        """
        Remove the read deadline until the matching ``rollback_timeout``.
        Connects first when needed. Calls nest; only the outermost pair
        saves and restores the timeout.
        """
        self._check_broken()
        if not self._sock:
            self.connect()
        if self._infinite_depth == 0:
            try:
                self._apply_timeout(None)
            except OSError as e:
                self.mark_broken(e)
                raise ConnectionBrokenError(
                    f"Error while changing the timeout of {self._host_error()}: "
                    f"{e.args}"
                )
            self._saved_timeout = self.socket_timeout
        self._infinite_depth += 1

    def rollback_timeout(self):
        "Restore the timeout saved by ``set_timeout_infinite``. Never raises."
        if self._infinite_depth == 0:
            return
        self._infinite_depth -= 1
        if self._infinite_depth:
            return
        saved, self._saved_timeout = self._saved_timeout, SENTINEL
        try:
            self._apply_timeout(saved)
        except OSError as e:
            self.mark_broken(e)

    @contextmanager
    def blocking(self):
        "Run the enclosed reads without a deadline"
        self.set_timeout_infinite()
        try:
            yield self
        finally:
            self.rollback_timeout()

    def pack_command(self, *args) -> Command:
        """Encode a series of arguments into a command"""
        return Command.build(self.encoder.encode, *args)

    def send_packed_command(self, command):
        """Send an already packed command to the Redis server"""
        self._check_broken()
        if not self._sock:
            self.connect()
        sock = self._sock
        if sock is None:
            raise ConnectionBrokenError(f"Connection to {self._host_error()} closed")
        try:
            if isinstance(command, bytes):
                command = [command]
            for item in command:
                sock.sendall(item)
        except socket.timeout as e:
            self.mark_broken(e)
            raise SocketTimeoutError("Timeout writing to socket")
        except OSError as e:
            self.mark_broken(e)
            if len(e.args) == 1:
                errno, errmsg = "UNKNOWN", e.args[0]
            else:
                errno = e.args[0]
                errmsg = e.args[1]
            raise ConnectionBrokenError(
                f"Error {errno} while writing to socket. {errmsg}."
            )
        except BaseException as e:
            # a partially sent command leaves the stream in an unknown state
            self.mark_broken(e)
            raise

    def send_command(self, *args) -> Command:
        """Pack and send a command to the Redis server"""
        command = args[0] if isinstance(args[0], Command) else self.pack_command(*args)
        self.send_packed_command(self._command_packer.pack(command))
        return command

    def can_read(self, timeout=0):
        """Poll the socket to see if there's data that can be read."""
        self._check_broken()
        if not self._sock:
            return False
        try:
            return self._parser.can_read(timeout)
        except (ConnectionError, OSError) as e:
            self.mark_broken(e)
            if isinstance(e, ConnectionError):
                raise
            raise ConnectionBrokenError(
                f"Error while reading from {self._host_error()}: {e.args}"
            )

    def read_response(self) -> Reply:
        """
        Read one reply from a previously sent command. Error replies are
        returned, not raised: the caller decides what they mean.
        """
        self._check_broken()
        host_error = self._host_error()
        try:
            return self._parser.read_response()
        except ConnectionError as e:
            self.mark_broken(e)
            raise
        except socket.timeout as e:
            self.mark_broken(e)
            raise SocketTimeoutError(f"Timeout reading from {host_error}")
        except OSError as e:
            self.mark_broken(e)
            raise ConnectionBrokenError(
                f"Error while reading from {host_error} : {e.args}"
            )
        except BaseException as e:
            # the position in the reply stream is lost
            self.mark_broken(e)
            raise


FALSE_STRINGS = ("0", "F", "FALSE", "N", "NO")


def to_bool(value):
    if value is None or value == "":
        return None
    if isinstance(value, str) and value.upper() in FALSE_STRINGS:
        return False
    return bool(value)


URL_QUERY_ARGUMENT_PARSERS = {
    "db": int,
    "socket_timeout": float,
    "socket_connect_timeout": float,
    "socket_keepalive": to_bool,
    "decode_responses": to_bool,
    "max_connections": int,
    "max_idle": int,
    "test_on_borrow": to_bool,
    "timeout": float,
}


def parse_url(url):
    "Turn a ``redis://`` URL into connection keyword arguments"
    if not url.startswith("redis://"):
        raise ValueError("Redis URL must specify the redis:// scheme")

    url = urlparse(url)
    kwargs = {}

    for name, value in parse_qs(url.query).items():
        if value and len(value) > 0:
            value = unquote(value[0])
            parser = URL_QUERY_ARGUMENT_PARSERS.get(name)
            if parser:
                try:
                    kwargs[name] = parser(value)
                except (TypeError, ValueError):
                    raise ValueError(f"Invalid value for '{name}' in connection URL.")
            else:
                kwargs[name] = value

    if url.username:
        kwargs["username"] = unquote(url.username)
    if url.password:
        kwargs["password"] = unquote(url.password)
    if url.hostname:
        kwargs["host"] = unquote(url.hostname)
    if url.port:
        kwargs["port"] = int(url.port)

    # If there's a path argument, use it as the db argument if a
    # querystring value wasn't specified
    if url.path and "db" not in kwargs:
        try:
            kwargs["db"] = int(unquote(url.path).replace("/", ""))
        except (AttributeError, ValueError):
            pass

    return kwargs
