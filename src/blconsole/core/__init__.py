"""Core / service layer — pure parsing logic and the query service.

Rules
-----
* No ``print()`` calls.
* No pipe or pywin32 I/O.
* No imports from ``infra``.
* Reply text is classified and parsed deterministically.
"""

from blconsole.core.console import GameConsole
from blconsole.core.game_object import GameObject
from blconsole.core.models import (
    ArrayValue,
    CommandReply,
    ObjectListing,
    PropertyDump,
    PropertyListing,
    PropertyMode,
    PropertyValue,
    ReplyStatus,
    Scalar,
)
from blconsole.core.protocols import CommandChannel

__all__: list[str] = [
    "ArrayValue",
    "CommandChannel",
    "CommandReply",
    "GameConsole",
    "GameObject",
    "ObjectListing",
    "PropertyDump",
    "PropertyListing",
    "PropertyMode",
    "PropertyValue",
    "ReplyStatus",
    "Scalar",
]
