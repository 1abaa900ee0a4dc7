"""Pure line classifiers for the game's console reply format.

Every function in this module is a **pure** text → fields transformation:
it either recognises a line and returns the extracted fields, or returns
``None``.  Nothing here raises on unexpected input: the game prints
diagnostic and unknown lines freely, and the parsers skip whatever does
not classify.

Recognised shapes
-----------------
* Object listing (``getall <class> Name``)::

      12) WillowPlayerPawn Loader.TheWorld:PersistentLevel.WillowPlayerPawn_0.Name = ...

* Property listing (``getall <class> <property>``), scalar or array head::

      3) SubClass Pkg.Object_3.Health = 50
      4) SubClass Pkg.Object_4.Tags =

* Array continuation, following an array head::

      <TAB>0: first

* Object dump (``obj dump <name>``)::

        Health=50
        Tags(0)=first
        Slots[1]=second

* Object declaration, used as a property value::

      WillowPlayerController'Loader.TheWorld:PersistentLevel.WillowPlayerController_0'
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

LISTING_PATTERN: re.Pattern[str] = re.compile(r"^\d+\) (\S+) ([^']+)\.Name = ")
ARRAY_MEMBER_PATTERN: re.Pattern[str] = re.compile(r"^\t\d+: (.*)$")
DUMP_PATTERN: re.Pattern[str] = re.compile(r"^  ([^=\[\]()]+)(\(\d+\)|\[\d+\])?=(.*)$")
DECLARATION_PATTERN: re.Pattern[str] = re.compile(r"^([^']+)'([^']+)'$")


# ---------------------------------------------------------------------------
# Match results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ListingMatch:
    """Fields of an object-listing line."""

    subclass: str
    name: str


@dataclass(frozen=True, slots=True)
class PropertyLineMatch:
    """Fields of a property-listing line.

    ``value`` is ``None`` when the line opens an array whose members
    follow on continuation lines.
    """

    subclass: str
    name: str
    value: str | None

    @property
    def opens_array(self) -> bool:
        return self.value is None


@dataclass(frozen=True, slots=True)
class DumpLineMatch:
    """Fields of an object-dump line.  ``index`` is ``None`` for scalars."""

    property: str
    index: int | None
    value: str


# ---------------------------------------------------------------------------
# Classifiers
# ---------------------------------------------------------------------------

def match_listing_line(line: str) -> ListingMatch | None:
    match = LISTING_PATTERN.match(line)
    if match is None:
        return None
    return ListingMatch(subclass=match.group(1), name=match.group(2))


@functools.lru_cache(maxsize=64)
def property_pattern(property_name: str) -> re.Pattern[str]:
    """Return the compiled property-listing pattern for *property_name*.

    Compiled once per property name and shared for the process lifetime.
    """
    return re.compile(
        rf"^\d+\) (\S+) (.+)\.{re.escape(property_name)} =( ?)(.*)$"
    )


def match_property_line(line: str, property_name: str) -> PropertyLineMatch | None:
    """Classify a ``getall`` line for *property_name*.

    The game ends an array head at ``=`` (sometimes with one trailing
    space) and prints ``= <value>`` for scalars, so an empty value part
    is the array signal.
    """
    match = property_pattern(property_name).match(line)
    if match is None:
        return None
    separator, rest = match.group(3), match.group(4)
    value = rest if separator and rest else None
    return PropertyLineMatch(subclass=match.group(1), name=match.group(2), value=value)


def match_array_member(line: str) -> str | None:
    """Return the value of an array continuation line, else ``None``."""
    match = ARRAY_MEMBER_PATTERN.match(line)
    return match.group(1) if match is not None else None


def match_dump_line(line: str) -> DumpLineMatch | None:
    match = DUMP_PATTERN.match(line)
    if match is None:
        return None
    raw_index = match.group(2)
    index = int(raw_index[1:-1]) if raw_index else None
    return DumpLineMatch(property=match.group(1), index=index, value=match.group(3))


# ---------------------------------------------------------------------------
# Declaration strings
# ---------------------------------------------------------------------------

def parse_declaration(value: str | None) -> tuple[str, str] | None:
    """Split ``Class'Name'`` into ``(class_name, name)``.

    Returns ``None`` for ``None`` or for any other shape.
    """
    if value is None:
        return None
    match = DECLARATION_PATTERN.match(value)
    if match is None:
        return None
    return match.group(1), match.group(2)


def format_declaration(class_name: str, name: str) -> str:
    return f"{class_name}'{name}'"
