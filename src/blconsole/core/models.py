"""Domain models for bl-console.

Value objects are **frozen** dataclasses with no behaviour beyond data
access.  The result containers (:class:`ObjectListing`,
:class:`PropertyListing`, :class:`PropertyDump`) additionally carry the
:class:`ReplyStatus` of the round trip that produced them, so callers can
tell an unreachable game apart from a genuinely empty answer.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, overload

if TYPE_CHECKING:
    from blconsole.core.game_object import GameObject


# ---------------------------------------------------------------------------
# Property values
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Scalar:
    """A single-valued property, exactly as printed by the game."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ArrayValue:
    """An array-valued property.

    Elements keep the order in which the game printed them, which is not
    necessarily sorted by index.
    """

    items: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)

    def __getitem__(self, index: int) -> str:
        return self.items[index]

    def __str__(self) -> str:
        return "(" + ",".join(self.items) + ")"


PropertyValue = Scalar | ArrayValue
"""Tagged union of the two property shapes."""


# ---------------------------------------------------------------------------
# Resolution strategy
# ---------------------------------------------------------------------------

class PropertyMode(enum.Enum):
    """How a :class:`~blconsole.core.game_object.GameObject` resolves properties."""

    DUMP = "dump"
    """Fetch ``obj dump`` once and serve every property from that cache.

    Faster when several properties of a modest-size object are needed.
    """

    BULK_QUERY = "bulk_query"
    """Run ``getall <class> <property>`` on every access, uncached.

    Faster when the object's dump is very large and few properties are
    needed, or when few objects of its class exist.
    """


# ---------------------------------------------------------------------------
# Command replies
# ---------------------------------------------------------------------------

class ReplyStatus(enum.Enum):
    """Outcome of one command round trip."""

    DELIVERED = "delivered"
    """The game answered; the reply may still contain zero lines."""

    UNREACHABLE = "unreachable"
    """Nothing was listening on the pipe within the connect timeout."""

    EXHAUSTED = "exhausted"
    """Every attempt failed with an I/O error mid-transaction."""


@dataclass(frozen=True, slots=True)
class CommandReply:
    """Non-blank reply lines of a command, plus how the round trip went."""

    status: ReplyStatus
    lines: tuple[str, ...] = ()

    @property
    def delivered(self) -> bool:
        return self.status is ReplyStatus.DELIVERED

    def __bool__(self) -> bool:
        return self.delivered

    @classmethod
    def of(cls, lines: Sequence[str]) -> CommandReply:
        return cls(status=ReplyStatus.DELIVERED, lines=tuple(lines))

    @classmethod
    def unreachable(cls) -> CommandReply:
        return cls(status=ReplyStatus.UNREACHABLE)

    @classmethod
    def exhausted(cls) -> CommandReply:
        return cls(status=ReplyStatus.EXHAUSTED)


# ---------------------------------------------------------------------------
# Query results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True, eq=False)
class ObjectListing(Sequence["GameObject"]):
    """Ordered, immutable list of objects returned by ``getall <class> Name``.

    Compares equal to any sequence with the same objects in the same order.
    """

    objects: tuple[GameObject, ...] = ()
    status: ReplyStatus = ReplyStatus.DELIVERED

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, bytes)) or not isinstance(other, Sequence):
            return NotImplemented
        return self.objects == tuple(other)

    __hash__ = None  # type: ignore[assignment]

    @overload
    def __getitem__(self, index: int) -> GameObject: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[GameObject, ...]: ...

    def __getitem__(self, index: int | slice) -> GameObject | tuple[GameObject, ...]:
        return self.objects[index]

    def __len__(self) -> int:
        return len(self.objects)


@dataclass(frozen=True, slots=True, eq=False)
class PropertyListing(Mapping["GameObject", PropertyValue]):
    """Values of one property keyed by object, from ``getall <class> <property>``.

    Compares equal to any mapping with the same items.
    """

    entries: Mapping[GameObject, PropertyValue] = field(default_factory=dict)
    status: ReplyStatus = ReplyStatus.DELIVERED

    def __getitem__(self, key: GameObject) -> PropertyValue:
        return self.entries[key]

    def __iter__(self) -> Iterator[GameObject]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True, eq=False)
class PropertyDump(Mapping[str, PropertyValue]):
    """Every property of one object keyed by name, from ``obj dump``.

    Compares equal to any mapping with the same items.
    """

    entries: Mapping[str, PropertyValue] = field(default_factory=dict)
    status: ReplyStatus = ReplyStatus.DELIVERED

    def __getitem__(self, key: str) -> PropertyValue:
        return self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
