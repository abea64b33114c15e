"""
Tagged reply values.

Every reply read from the server is exactly one of the five RESP2 kinds
below. Nil bulk strings and nil arrays are kept apart from empty ones:
``BulkReply(None)`` is not ``BulkReply(b"")`` and ``ArrayReply(None)`` is not
``ArrayReply([])``.
"""
from typing import Any, List, Optional

from redwire.exceptions import ResponseError


class Reply:
    "Base class of the reply variants. ``value`` holds the decoded payload."

    __slots__ = ("value",)

    #: the RESP2 type byte of this variant
    prefix = b""

    def __init__(self, value):
        self.value = value

    @property
    def is_nil(self) -> bool:
        return False

    def to_python(self) -> Any:
        "Return the natural Python value of this reply"
        return self.value

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        if isinstance(self.value, list):
            return hash((type(self), tuple(self.value)))
        return hash((type(self), self.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class StatusReply(Reply):
    "``+OK`` style single line reply"

    __slots__ = ()
    prefix = b"+"

    def __init__(self, value: str):
        super().__init__(value)


class ErrorReply(Reply):
    """
    ``-ERR ...`` style reply.

    ``value`` is the full message including the error code, and
    ``exception`` is the mapped ``ResponseError`` instance ready to be raised.
    """

    __slots__ = ("exception",)
    prefix = b"-"

    def __init__(self, value: str, exception=None):
        super().__init__(value)
        if exception is None:
            exception = ResponseError(value)
        self.exception = exception

    @property
    def code(self) -> str:
        return self.value.split(" ", 1)[0]

    def to_python(self):
        return self.exception


class IntegerReply(Reply):
    __slots__ = ()
    prefix = b":"

    def __init__(self, value: int):
        super().__init__(value)


class BulkReply(Reply):
    "Binary safe string, ``None`` for the nil bulk string"

    __slots__ = ()
    prefix = b"$"

    def __init__(self, value: Optional[bytes]):
        super().__init__(value)

    @property
    def is_nil(self) -> bool:
        return self.value is None


class ArrayReply(Reply):
    "Ordered sequence of replies, ``None`` for the nil array"

    __slots__ = ()
    prefix = b"*"

    def __init__(self, value: Optional[List[Reply]]):
        super().__init__(value)

    @property
    def is_nil(self) -> bool:
        return self.value is None

    def to_python(self):
        if self.value is None:
            return None
        return [item.to_python() for item in self.value]

    def __len__(self):
        return 0 if self.value is None else len(self.value)

    def __iter__(self):
        return iter(self.value or ())

    def __getitem__(self, index):
        if self.value is None:
            raise IndexError("nil array reply")
        return self.value[index]


NIL_BULK = BulkReply(None)
NIL_ARRAY = ArrayReply(None)
