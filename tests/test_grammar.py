"""Tests for the line classifiers (core/grammar.py).

Every classifier is pure: these tests feed single lines and check the
extracted fields, or ``None`` for lines that must be skipped.
"""

from __future__ import annotations

import pytest

from blconsole.core.grammar import (
    DumpLineMatch,
    ListingMatch,
    PropertyLineMatch,
    format_declaration,
    match_array_member,
    match_dump_line,
    match_listing_line,
    match_property_line,
    parse_declaration,
    property_pattern,
)


# ---------------------------------------------------------------------------
# Object listing
# ---------------------------------------------------------------------------

class TestListingLine:
    def test_simple(self) -> None:
        assert match_listing_line("1) SubA Foo_1.Name = ") == ListingMatch("SubA", "Foo_1")

    def test_qualified_name_keeps_dots(self) -> None:
        line = "0) WillowPlayerPawn Loader.TheWorld:PersistentLevel.WillowPlayerPawn_0.Name = WillowPlayerPawn_0"
        match = match_listing_line(line)
        assert match is not None
        assert match.subclass == "WillowPlayerPawn"
        assert match.name == "Loader.TheWorld:PersistentLevel.WillowPlayerPawn_0"

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "No objects found using command 'getall Foo Name'",
            "SubA Foo.Name = ",
            "1) SubA Foo.Other = 3",
            "x) SubA Foo.Name = ",
        ],
    )
    def test_non_matching(self, line: str) -> None:
        assert match_listing_line(line) is None


# ---------------------------------------------------------------------------
# Property listing
# ---------------------------------------------------------------------------

class TestPropertyLine:
    def test_scalar(self) -> None:
        assert match_property_line("1) SubA Foo.HP = 50", "HP") == PropertyLineMatch(
            "SubA", "Foo", "50",
        )

    def test_scalar_with_spaces_and_equals(self) -> None:
        match = match_property_line("1) SubA Foo.Desc = a = b", "Desc")
        assert match is not None
        assert match.value == "a = b"

    @pytest.mark.parametrize("line", ["2) SubB Bar.HP = ", "2) SubB Bar.HP ="])
    def test_array_head(self, line: str) -> None:
        match = match_property_line(line, "HP")
        assert match is not None
        assert match.name == "Bar"
        assert match.opens_array

    def test_other_property_does_not_match(self) -> None:
        assert match_property_line("1) SubA Foo.MP = 5", "HP") is None

    def test_property_name_is_escaped(self) -> None:
        assert match_property_line("1) SubA Foo.AxB = 5", "A.B") is None
        assert match_property_line("1) SubA Foo.A.B = 5", "A.B") is not None

    def test_pattern_is_compiled_once(self) -> None:
        assert property_pattern("Health") is property_pattern("Health")


# ---------------------------------------------------------------------------
# Array continuation
# ---------------------------------------------------------------------------

class TestArrayMember:
    def test_member(self) -> None:
        assert match_array_member("\t0: a") == "a"

    def test_empty_member_value(self) -> None:
        assert match_array_member("\t3: ") == ""

    @pytest.mark.parametrize("line", ["0: a", "  0: a", "\tx: a", "1) SubA Foo.HP = 1"])
    def test_non_matching(self, line: str) -> None:
        assert match_array_member(line) is None


# ---------------------------------------------------------------------------
# Object dump
# ---------------------------------------------------------------------------

class TestDumpLine:
    def test_scalar(self) -> None:
        assert match_dump_line("  HP=50") == DumpLineMatch("HP", None, "50")

    def test_parenthesised_index(self) -> None:
        assert match_dump_line("  Tags(1)=y") == DumpLineMatch("Tags", 1, "y")

    def test_bracketed_index(self) -> None:
        assert match_dump_line("  Slots[2]=z") == DumpLineMatch("Slots", 2, "z")

    def test_empty_value(self) -> None:
        assert match_dump_line("  Owner=") == DumpLineMatch("Owner", None, "")

    @pytest.mark.parametrize(
        "line",
        ["", " ", "  ", "HP=50", " HP=50", "*** Property dump for object 'Foo' ***", "  =5"],
    )
    def test_non_matching(self, line: str) -> None:
        assert match_dump_line(line) is None


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

class TestDeclaration:
    def test_parse(self) -> None:
        assert parse_declaration("WillowPlayerController'Loader.PC_0'") == (
            "WillowPlayerController",
            "Loader.PC_0",
        )

    def test_format_then_parse_round_trips(self) -> None:
        text = format_declaration("Class", "Pkg.Name")
        assert text == "Class'Pkg.Name'"
        assert parse_declaration(text) == ("Class", "Pkg.Name")

    @pytest.mark.parametrize(
        "value",
        [None, "", "None", "Class'Name", "'Name'", "Class''", "Class'Na'me'", "Class'Name' "],
    )
    def test_not_a_declaration(self, value: str | None) -> None:
        assert parse_declaration(value) is None
