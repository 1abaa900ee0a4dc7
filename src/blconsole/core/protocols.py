"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations.
"""

from __future__ import annotations

from typing import Protocol

from blconsole.core.models import CommandReply


class CommandChannel(Protocol):
    """Contract for anything that can deliver one console command.

    Any object that implements :meth:`send` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def send(self, command: str) -> CommandReply:
        """Run *command* in the game console and return its reply.

        Implementations must report an unreachable game or exhausted
        retries through :attr:`CommandReply.status` rather than raising,
        and must map all backend-specific exceptions to
        :class:`~blconsole.exceptions.BLConsoleError` subclasses.

        Returns
        -------
        CommandReply
            The non-blank reply lines, or an empty reply whose status
            says why no lines were received.
        """
        ...  # pragma: no cover
