"""Core console service — formats commands and parses their replies.

This is the central service class of the library.  It depends on a
:class:`~blconsole.core.protocols.CommandChannel` injected at
construction time (dependency inversion), keeping the core free of any
pipe or pywin32 imports.

Guarantees
----------
* Pure orchestration — no I/O of its own.
* Only :class:`~blconsole.exceptions.BLConsoleError` subclasses escape.
* An unreachable game never raises: queries return empty results whose
  ``status`` records what happened.  The one exception is a missing
  pywin32, which raises :class:`~blconsole.exceptions.EnvironmentError`
  from the pipe transport.
* A command template that cannot be filled raises
  :class:`~blconsole.exceptions.CommandFormatError` before anything is
  sent.
"""

from __future__ import annotations

import logging
from typing import Any

from blconsole.core.game_object import GameObject
from blconsole.core.models import (
    CommandReply,
    ObjectListing,
    PropertyDump,
    PropertyListing,
    PropertyMode,
)
from blconsole.core.parsers import (
    parse_object_dump,
    parse_object_listing,
    parse_property_listing,
)
from blconsole.core.protocols import CommandChannel
from blconsole.exceptions import BLConsoleError, ChannelIOError, CommandFormatError

logger = logging.getLogger(__name__)

GETALL_NAMES: str = "getall {0} Name"
GETALL_PROPERTY: str = "getall {0} {1}"
OBJ_DUMP: str = "obj dump {0}"


class GameConsole:
    """Query service for the game console.

    Parameters
    ----------
    channel:
        Any object satisfying the :class:`CommandChannel` protocol.
    """

    def __init__(self, channel: CommandChannel) -> None:
        self._channel: CommandChannel = channel

    # ------------------------------------------------------------------
    # Raw commands
    # ------------------------------------------------------------------

    def run_command(self, template: str, *args: Any, **kwargs: Any) -> CommandReply:
        """Fill *template* with ``str.format`` and run it in the console.

        Raises
        ------
        CommandFormatError
            If the placeholders in *template* cannot be satisfied.
        """
        command = self.format_command(template, *args, **kwargs)
        return self._send(command)

    @staticmethod
    def format_command(template: str, *args: Any, **kwargs: Any) -> str:
        """Return the command line for *template*, or raise :class:`CommandFormatError`."""
        try:
            return template.format(*args, **kwargs)
        except (IndexError, KeyError, ValueError, AttributeError, TypeError) as exc:
            raise CommandFormatError(
                f"Cannot format command {template!r}: {exc}",
                hint="Check the placeholders against the arguments given.",
            ) from exc

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self, class_name: str) -> ObjectListing:
        """List every object of *class_name* (subclasses included).

        An unreachable game yields an empty listing, never an error.

        Raises
        ------
        EnvironmentError
            If the channel is the pipe transport and pywin32 is not
            installed.  This is the only failure that is not encoded in
            the returned listing.
        """
        reply = self.run_command(GETALL_NAMES, class_name)
        objects = parse_object_listing(reply.lines, console=self)
        return ObjectListing(objects=tuple(objects), status=reply.status)

    def get_all_property(self, class_name: str, property_name: str) -> PropertyListing:
        """Map every object of *class_name* to its value of *property_name*."""
        reply = self.run_command(GETALL_PROPERTY, class_name, property_name)
        values = parse_property_listing(reply.lines, property_name, console=self)
        return PropertyListing(entries=values, status=reply.status)

    def dump(self, object_name: str) -> PropertyDump:
        """Return every property of the object named *object_name*."""
        reply = self.run_command(OBJ_DUMP, object_name)
        return PropertyDump(entries=parse_object_dump(reply.lines), status=reply.status)

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def object(
        self,
        name: str,
        class_name: str,
        *,
        mode: PropertyMode = PropertyMode.DUMP,
    ) -> GameObject:
        """Return a :class:`GameObject` bound to this console."""
        return GameObject(name, class_name, mode=mode, console=self)

    def parse_object(
        self,
        declaration: str | None,
        *,
        mode: PropertyMode = PropertyMode.DUMP,
    ) -> GameObject | None:
        """Decode a ``Class'Name'`` declaration into a bound object."""
        return GameObject.from_declaration(declaration, mode=mode, console=self)

    def get_player_controller(self) -> GameObject | None:
        """Return the local player's controller, or ``None`` if not found."""
        return GameObject.player_controller(self)

    # ------------------------------------------------------------------
    # Channel delegation (safe boundary)
    # ------------------------------------------------------------------

    def _send(self, command: str) -> CommandReply:
        """Call the channel and ensure only our exceptions escape."""
        logger.debug("Sending command: %s", command)
        try:
            reply = self._channel.send(command)
        except BLConsoleError:
            # Already one of ours, propagate unchanged.
            raise
        except Exception as exc:
            raise ChannelIOError(
                f"Unexpected channel error: {exc}",
            ) from exc
        if not reply.delivered:
            logger.debug("No reply to %r (%s)", command, reply.status.value)
        return reply
