from redwire.client import Pipeline, PubSub, Redis, Transaction, TransactionState
from redwire.connection import Connection
from redwire.exceptions import (
    AuthenticationError,
    AuthenticationWrongNumberOfArgsError,
    BusyLoadingError,
    ChildDeadlockedError,
    ClientStateError,
    ConnectFailedError,
    ConnectionBrokenError,
    ConnectionError,
    ConnectTimeoutError,
    DataError,
    ExecAbortError,
    InMultiStateError,
    NoPermissionError,
    NoScriptError,
    PipelineInProgressError,
    PoolExhaustedError,
    ProtocolError,
    PubSubError,
    ReadOnlyError,
    RedisError,
    ResponseError,
    SocketTimeoutError,
    TimeoutError,
    TypeMismatchError,
)
from redwire.pool import BlockingClientPool, ClientPool
from redwire.reply import ArrayReply, BulkReply, ErrorReply, IntegerReply, StatusReply
from redwire.utils import from_url


def int_or_str(value):
    try:
        return int(value)
    except ValueError:
        return value


__version__ = "1.0.0"


VERSION = tuple(map(int_or_str, __version__.split(".")))

__all__ = [
    "ArrayReply",
    "AuthenticationError",
    "AuthenticationWrongNumberOfArgsError",
    "BlockingClientPool",
    "BulkReply",
    "BusyLoadingError",
    "ChildDeadlockedError",
    "ClientPool",
    "ClientStateError",
    "ConnectFailedError",
    "Connection",
    "ConnectionBrokenError",
    "ConnectionError",
    "ConnectTimeoutError",
    "DataError",
    "ErrorReply",
    "ExecAbortError",
    "from_url",
    "InMultiStateError",
    "IntegerReply",
    "NoPermissionError",
    "NoScriptError",
    "Pipeline",
    "PipelineInProgressError",
    "PoolExhaustedError",
    "ProtocolError",
    "PubSub",
    "PubSubError",
    "ReadOnlyError",
    "Redis",
    "RedisError",
    "ResponseError",
    "SocketTimeoutError",
    "StatusReply",
    "TimeoutError",
    "Transaction",
    "TransactionState",
    "TypeMismatchError",
]
