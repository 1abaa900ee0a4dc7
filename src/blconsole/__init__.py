"""bl-console — typed access to the Borderlands game console.

Runs console commands through the command injector's named pipe and
parses the replies into objects and property values.
"""

from blconsole.core import (
    ArrayValue,
    GameConsole,
    GameObject,
    PropertyMode,
    ReplyStatus,
    Scalar,
)
from blconsole.session import open_console
from blconsole.version import __version__

__all__: list[str] = [
    "ArrayValue",
    "GameConsole",
    "GameObject",
    "PropertyMode",
    "ReplyStatus",
    "Scalar",
    "__version__",
    "open_console",
]
