"""Retrying named-pipe implementation of :class:`~blconsole.core.protocols.CommandChannel`.

Each command is one full round trip on a fresh connection: connect,
write the command line, read the whole reply, close.  A round trip that
breaks mid-transaction is retried on a new connection, up to
:attr:`TransportConfig.attempts` times.  A pipe that cannot be connected
to at all is not retried: the game is not running.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from blconsole.config import TransportConfig
from blconsole.core.models import CommandReply
from blconsole.exceptions import ChannelIOError, ChannelUnavailableError
from blconsole.infra.named_pipe import open_pipe

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """One open client connection, as returned by a connector."""

    def write_line(self, command: str) -> None: ...  # pragma: no cover

    def read_lines(self) -> list[str]: ...  # pragma: no cover

    def close(self) -> None: ...  # pragma: no cover


Connector = Callable[[TransportConfig], Connection]
"""Opens a connection or raises :class:`ChannelUnavailableError`."""


class PipeTransport:
    """Concrete :class:`CommandChannel` backed by the command injector pipe.

    Usage::

        transport = PipeTransport()
        reply = transport.send("getall WillowPlayerPawn Name")
        if reply.delivered:
            ...

    This class satisfies the :class:`~blconsole.core.protocols.CommandChannel`
    protocol structurally — no explicit inheritance required.

    Parameters
    ----------
    config:
        Pipe name, connect timeout and retry count.  Defaults to
        :class:`TransportConfig` defaults.
    connector:
        Callable opening one connection; defaults to
        :func:`~blconsole.infra.named_pipe.open_pipe`.
    """

    def __init__(
        self,
        config: TransportConfig | None = None,
        *,
        connector: Connector | None = None,
    ) -> None:
        self._config: TransportConfig = config if config is not None else TransportConfig()
        self._connector: Connector = connector if connector is not None else open_pipe

    @property
    def config(self) -> TransportConfig:
        return self._config

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def send(self, command: str) -> CommandReply:
        """Run *command* and return its non-blank reply lines.

        Returns
        -------
        CommandReply
            ``DELIVERED`` with the reply lines on success,
            ``UNREACHABLE`` after a single failed connect, or
            ``EXHAUSTED`` when every attempt broke mid-transaction.
        """
        attempts = self._config.attempts
        for attempt in range(1, attempts + 1):
            try:
                connection = self._connector(self._config)
            except ChannelUnavailableError as exc:
                logger.debug("Pipe unavailable: %s", exc)
                return CommandReply.unreachable()

            try:
                connection.write_line(command)
                # Blank lines are indistinguishable from no output.
                lines = [line for line in connection.read_lines() if line]
            except ChannelIOError as exc:
                logger.debug(
                    "Attempt %d/%d of %r failed: %s", attempt, attempts, command, exc,
                )
                continue
            finally:
                connection.close()
            return CommandReply.of(lines)

        logger.warning("Giving up on %r after %d attempts", command, attempts)
        return CommandReply.exhausted()
