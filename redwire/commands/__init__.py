from .core import CoreCommands
from .helpers import list_or_args

__all__ = ["CoreCommands", "list_or_args"]
