"""Reply parsers — fold classified reply lines into structured results.

Each parser is a **pure** function over an iterable of reply lines.
Lines that no classifier recognises are skipped (and logged at DEBUG);
nothing in the game's output can make a parser raise.

* :func:`parse_object_listing` — ``getall <class> Name``
* :func:`parse_property_listing` — ``getall <class> <property>``
* :func:`parse_object_dump` — ``obj dump <name>``
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from blconsole.core.game_object import GameObject
from blconsole.core.grammar import (
    match_array_member,
    match_dump_line,
    match_listing_line,
    match_property_line,
)
from blconsole.core.models import ArrayValue, PropertyValue, Scalar

if TYPE_CHECKING:
    from blconsole.core.console import GameConsole

logger = logging.getLogger(__name__)


def parse_object_listing(
    lines: Iterable[str],
    *,
    console: GameConsole | None = None,
) -> list[GameObject]:
    """Return one object per object-listing line, in reply order."""
    objects: list[GameObject] = []
    for line in lines:
        match = match_listing_line(line)
        if match is None:
            logger.debug("Skipping unrecognised listing line: %r", line)
            continue
        objects.append(GameObject(match.name, match.subclass, console=console))
    return objects


def parse_property_listing(
    lines: Iterable[str],
    property_name: str,
    *,
    console: GameConsole | None = None,
) -> dict[GameObject, PropertyValue]:
    """Map each listed object to its value of *property_name*.

    The game never terminates an array value explicitly: its members
    simply follow the head line until the next declaration or the end of
    the reply.  At most one array is open at any time.  Objects with no
    recognised line are absent from the result.
    """
    results: dict[GameObject, PropertyValue] = {}
    owner: GameObject | None = None
    members: list[str] | None = None

    for line in lines:
        if members is not None:
            member = match_array_member(line)
            if member is not None:
                members.append(member)
                continue

        match = match_property_line(line, property_name)
        if match is None:
            logger.debug("Skipping unrecognised property line: %r", line)
            continue

        if members is not None and owner is not None:
            results[owner] = ArrayValue(tuple(members))
            members = None

        owner = GameObject(match.name, match.subclass, console=console)
        if match.value is None:
            members = []
        else:
            results[owner] = Scalar(match.value)

    if members is not None and owner is not None:
        results[owner] = ArrayValue(tuple(members))
    return results


def parse_object_dump(lines: Iterable[str]) -> dict[str, PropertyValue]:
    """Map each dumped property name to its value.

    Indexed lines (``Name(0)=`` or ``Name[0]=``) accumulate into an array
    in the order they appear; the index itself is not kept.  A scalar
    line for a name replaces whatever was recorded for it before.
    """
    collected: dict[str, PropertyValue | list[str]] = {}
    for line in lines:
        match = match_dump_line(line)
        if match is None:
            logger.debug("Skipping unrecognised dump line: %r", line)
            continue
        if match.index is None:
            collected[match.property] = Scalar(match.value)
            continue
        members = collected.get(match.property)
        if not isinstance(members, list):
            members = []
            collected[match.property] = members
        members.append(match.value)

    return {
        name: ArrayValue(tuple(value)) if isinstance(value, list) else value
        for name, value in collected.items()
    }
