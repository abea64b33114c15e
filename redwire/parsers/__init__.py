from .base import BaseParser
from .packer import Command, PythonRespSerializer, pack_reply
from .resp2 import RESP2Parser
from .socket import SocketBuffer

__all__ = [
    "BaseParser",
    "Command",
    "PythonRespSerializer",
    "RESP2Parser",
    "SocketBuffer",
    "pack_reply",
]
