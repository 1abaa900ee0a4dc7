"""Custom exception hierarchy for bl-console.

All exceptions that cross layer boundaries must inherit from
:class:`BLConsoleError`.  Raw third-party exceptions (e.g. from pywin32)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
BLConsoleError
├── CommandFormatError
├── UnboundObjectError
├── ConfigurationError
├── ChannelError
│   ├── ChannelUnavailableError
│   └── ChannelIOError
└── EnvironmentError
"""

from __future__ import annotations


class BLConsoleError(Exception):
    """Base exception for all bl-console errors.

    Every error condition surfaced to callers maps to a subclass of this
    exception so that applications can catch a single type and render
    :attr:`hint` alongside the message.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Programmer errors -----------------------------------------------------

class CommandFormatError(BLConsoleError):
    """Raised when a command template cannot be filled from its arguments."""


class UnboundObjectError(BLConsoleError):
    """Raised when a property is read from an object with no console."""


class ConfigurationError(BLConsoleError):
    """Raised when a transport configuration value is invalid."""


# --- Channel ---------------------------------------------------------------

class ChannelError(BLConsoleError):
    """Base class for named-pipe channel failures."""


class ChannelUnavailableError(ChannelError):
    """Raised when the pipe cannot be connected to (nothing listening)."""


class ChannelIOError(ChannelError):
    """Raised when a write or read fails on an established connection."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(BLConsoleError):
    """Raised when a required runtime dependency is not available."""


def append_injector_hint(hint: str) -> str:
    """Append command-injector startup guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Make sure the game is running with the command injector loaded."
    if marker in hint:
        return hint
    return "\n".join((hint, marker))
