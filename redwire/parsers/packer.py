from typing import Callable, List, Tuple

from ..reply import Reply

SYM_STAR = b"*"
SYM_DOLLAR = b"$"
SYM_CRLF = b"\r\n"
SYM_EMPTY = b""


class Command:
    """
    A command name and its arguments, already encoded to bytes.

    Building a command encodes every argument up front so that an argument
    which cannot be encoded fails before anything is written to the socket.
    """

    __slots__ = ("name", "args")

    def __init__(self, name: bytes, args: Tuple[bytes, ...] = ()):
        self.name = name
        self.args = tuple(args)

    @classmethod
    def build(cls, encode: Callable, *args) -> "Command":
        # the client might have included 1 or more literal arguments in
        # the command name, e.g., 'CONFIG GET'. The Redis server expects these
        # arguments to be sent separately, so split the first argument
        # manually.
        if isinstance(args[0], str):
            args = tuple(args[0].encode().split()) + args[1:]
        elif b" " in args[0]:
            args = tuple(args[0].split()) + args[1:]
        encoded = [encode(arg) for arg in args]
        return cls(encoded[0], encoded[1:])

    @property
    def parts(self) -> Tuple[bytes, ...]:
        return (self.name,) + self.args

    def __eq__(self, other):
        if not isinstance(other, Command):
            return NotImplemented
        return self.parts == other.parts

    def __repr__(self):
        return f"Command({' '.join(map(repr, self.parts))})"

    def __str__(self):
        return " ".join(
            bytes(part).decode("utf-8", errors="replace") for part in self.parts
        )


class PythonRespSerializer:
    def __init__(self, buffer_cutoff):
        self._buffer_cutoff = buffer_cutoff

    def pack(self, command: Command) -> List[bytes]:
        """Pack a command into the Redis protocol"""
        output = []
        parts = command.parts
        buff = SYM_EMPTY.join((SYM_STAR, str(len(parts)).encode(), SYM_CRLF))

        buffer_cutoff = self._buffer_cutoff
        for arg in parts:
            # to avoid large string mallocs, chunk the command into the
            # output list if we're sending large values or memoryviews
            arg_length = len(arg)
            if (
                len(buff) > buffer_cutoff
                or arg_length > buffer_cutoff
                or isinstance(arg, memoryview)
            ):
                buff = SYM_EMPTY.join(
                    (buff, SYM_DOLLAR, str(arg_length).encode(), SYM_CRLF)
                )
                output.append(buff)
                output.append(arg)
                buff = SYM_CRLF
            else:
                buff = SYM_EMPTY.join(
                    (
                        buff,
                        SYM_DOLLAR,
                        str(arg_length).encode(),
                        SYM_CRLF,
                        arg,
                        SYM_CRLF,
                    )
                )
        output.append(buff)
        return output


def pack_reply(reply: Reply) -> bytes:
    "Frame a reply back into RESP2 bytes"
    if reply.prefix in (b"+", b"-"):
        return SYM_EMPTY.join((reply.prefix, reply.value.encode(), SYM_CRLF))
    if reply.prefix == b":":
        return SYM_EMPTY.join((reply.prefix, str(reply.value).encode(), SYM_CRLF))
    if reply.value is None:
        return reply.prefix + b"-1" + SYM_CRLF
    if reply.prefix == b"$":
        value = bytes(reply.value)
        return SYM_EMPTY.join(
            (SYM_DOLLAR, str(len(value)).encode(), SYM_CRLF, value, SYM_CRLF)
        )
    return SYM_EMPTY.join(
        [SYM_STAR, str(len(reply.value)).encode(), SYM_CRLF]
        + [pack_reply(item) for item in reply.value]
    )
