"""Entity model — one object living inside the game process.

A :class:`GameObject` is identified solely by its ``(name, class_name)``
pair.  It can resolve its own properties through the
:class:`~blconsole.core.console.GameConsole` it is bound to, using one of
the two :class:`~blconsole.core.models.PropertyMode` strategies.

Guarantees
----------
* Identity never changes after construction; equality and hashing use
  only the identity pair, so objects can key mappings.
* The resolution mode is fixed at construction.  Use :meth:`with_mode`
  to get a differently configured copy.
* In ``DUMP`` mode the dump is fetched at most once per instance and is
  never refreshed, even when the fetch found the game unreachable.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from blconsole.core.grammar import format_declaration, parse_declaration
from blconsole.core.models import PropertyDump, PropertyMode, PropertyValue, Scalar
from blconsole.exceptions import UnboundObjectError

if TYPE_CHECKING:
    from blconsole.core.console import GameConsole

logger = logging.getLogger(__name__)

PLAYER_CLASS: str = "LocalPlayer"
PLAYER_ACTOR_PROPERTY: str = "Actor"
PLAYER_CONTROLLER_CLASS: str = "WillowPlayerController"


class GameObject:
    """An object in the game, addressed by name and class.

    Parameters
    ----------
    name:
        Full object name, suitable for ``obj dump`` and ``set`` commands.
    class_name:
        The object's concrete class.
    mode:
        Property resolution strategy; defaults to :attr:`PropertyMode.DUMP`.
    console:
        Console used to resolve properties.  Unbound objects can still be
        compared, hashed and printed.
    """

    __slots__ = ("_name", "_class_name", "_mode", "_console", "_dump", "_dump_lock")

    def __init__(
        self,
        name: str,
        class_name: str,
        *,
        mode: PropertyMode = PropertyMode.DUMP,
        console: GameConsole | None = None,
    ) -> None:
        self._name: str = name
        self._class_name: str = class_name
        self._mode: PropertyMode = mode
        self._console: GameConsole | None = console
        self._dump: PropertyDump | None = None
        self._dump_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_declaration(
        cls,
        value: str | None,
        *,
        mode: PropertyMode = PropertyMode.DUMP,
        console: GameConsole | None = None,
    ) -> GameObject | None:
        """Decode a ``Class'Name'`` declaration, or return ``None``."""
        parsed = parse_declaration(value)
        if parsed is None:
            return None
        class_name, name = parsed
        return cls(name, class_name, mode=mode, console=console)

    def with_mode(self, mode: PropertyMode) -> GameObject:
        """Return an uncached copy of this object using *mode*."""
        return GameObject(self._name, self._class_name, mode=mode, console=self._console)

    def bind(self, console: GameConsole) -> GameObject:
        """Return an uncached copy of this object bound to *console*."""
        return GameObject(self._name, self._class_name, mode=self._mode, console=console)

    @classmethod
    def player_controller(cls, console: GameConsole) -> GameObject | None:
        """Locate the local player's ``WillowPlayerController``.

        Each ``LocalPlayer`` reports its controller through its ``Actor``
        property.  The first value that decodes to a controller wins.
        Controllers have very large dumps, so the result resolves its
        properties in ``BULK_QUERY`` mode.
        """
        actors = console.get_all_property(PLAYER_CLASS, PLAYER_ACTOR_PROPERTY)
        for actor in actors.values():
            if not isinstance(actor, Scalar):
                continue
            controller = cls.from_declaration(
                actor.value, mode=PropertyMode.BULK_QUERY, console=console,
            )
            if controller is None or controller.class_name != PLAYER_CONTROLLER_CLASS:
                continue
            return controller
        return None

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def class_name(self) -> str:
        return self._class_name

    @property
    def mode(self) -> PropertyMode:
        return self._mode

    @property
    def console(self) -> GameConsole | None:
        return self._console

    @property
    def declaration(self) -> str:
        """The ``Class'Name'`` form of this object."""
        return format_declaration(self._class_name, self._name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameObject):
            return NotImplemented
        return self._class_name == other._class_name and self._name == other._name

    def __hash__(self) -> int:
        return hash(self.declaration)

    def __str__(self) -> str:
        return self.declaration

    def __repr__(self) -> str:
        return (
            f"GameObject(name={self._name!r}, class_name={self._class_name!r}, "
            f"mode={self._mode.name})"
        )

    # ------------------------------------------------------------------
    # Property access
    # ------------------------------------------------------------------

    def get(
        self, property_name: str, default: PropertyValue | None = None,
    ) -> PropertyValue | None:
        """Return the value of *property_name*, or *default* when absent.

        Absent covers both "the game has no such property" and "the game
        could not be reached"; inspect :meth:`properties` or query the
        console directly to tell these apart.
        """
        if self._mode is PropertyMode.BULK_QUERY:
            listing = self._require_console().get_all_property(
                self._class_name, property_name,
            )
            return listing.get(self, default)
        return self.properties().get(property_name, default)

    def __getitem__(self, property_name: str) -> PropertyValue:
        value = self.get(property_name)
        if value is None:
            raise KeyError(property_name)
        return value

    def __contains__(self, property_name: object) -> bool:
        if not isinstance(property_name, str):
            return False
        return self.get(property_name) is not None

    def properties(self) -> PropertyDump:
        """Return the full, cached ``obj dump`` of this object.

        The dump is fetched on first call, whatever the mode, and reused
        for the lifetime of this instance.
        """
        dump = self._dump
        if dump is not None:
            return dump
        console = self._require_console()
        with self._dump_lock:
            if self._dump is None:
                logger.debug("Fetching dump for %s", self.declaration)
                self._dump = console.dump(self._name)
            return self._dump

    def _require_console(self) -> GameConsole:
        if self._console is None:
            raise UnboundObjectError(
                f"{self.declaration} is not bound to a console.",
                hint="Create it through GameConsole or call bind() first.",
            )
        return self._console
