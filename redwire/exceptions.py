"Core exceptions raised by the redwire client"


class RedisError(Exception):
    pass


class ConnectionError(RedisError):
    pass


class TimeoutError(RedisError):
    pass


class ConnectFailedError(ConnectionError):
    "The TCP connection could not be established"
    pass


class ConnectTimeoutError(ConnectFailedError, TimeoutError):
    pass


class ConnectionBrokenError(ConnectionError):
    "An I/O failure happened on an established connection"
    pass


class SocketTimeoutError(ConnectionBrokenError, TimeoutError):
    pass


class ProtocolError(ConnectionBrokenError):
    "The byte stream from the server is not valid RESP"
    pass


class PoolExhaustedError(ConnectionError):
    pass


class ResponseError(RedisError):
    pass


class AuthenticationError(ResponseError):
    pass


class AuthenticationWrongNumberOfArgsError(ResponseError):
    """
    An error to indicate that the wrong number of args
    were sent to the AUTH command
    """

    pass


class BusyLoadingError(ResponseError):
    pass


class ExecAbortError(ResponseError):
    pass


class NoScriptError(ResponseError):
    pass


class ReadOnlyError(ResponseError):
    pass


class NoPermissionError(ResponseError):
    pass


class TypeMismatchError(RedisError):
    "The reply is well formed but of a different kind than the command expects"
    pass


class ClientStateError(RedisError):
    pass


class InMultiStateError(ClientStateError):
    pass


class PipelineInProgressError(ClientStateError):
    pass


class DataError(RedisError):
    pass


class PubSubError(RedisError):
    pass


class ChildDeadlockedError(Exception):
    "Error indicating that a child process is deadlocked after a fork()"
    pass
