"""Tests for domain models (core/models.py).

Value models are frozen dataclasses — these tests verify immutability,
equality semantics, and the collection behaviour of query results.
"""

from __future__ import annotations

import dataclasses

import pytest

from blconsole.core.game_object import GameObject
from blconsole.core.models import (
    ArrayValue,
    CommandReply,
    ObjectListing,
    PropertyDump,
    PropertyListing,
    ReplyStatus,
    Scalar,
)


# ---------------------------------------------------------------------------
# Property values
# ---------------------------------------------------------------------------

class TestScalar:
    def test_str_is_raw_value(self) -> None:
        assert str(Scalar("50")) == "50"

    def test_equality(self) -> None:
        assert Scalar("a") == Scalar("a")
        assert Scalar("a") != Scalar("b")

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Scalar("a").value = "b"  # type: ignore[misc]


class TestArrayValue:
    def test_sequence_behaviour(self) -> None:
        value = ArrayValue(("x", "y"))
        assert len(value) == 2
        assert list(value) == ["x", "y"]
        assert value[1] == "y"

    def test_empty_default(self) -> None:
        assert len(ArrayValue()) == 0

    def test_scalar_and_array_never_equal(self) -> None:
        assert Scalar("x") != ArrayValue(("x",))

    def test_str(self) -> None:
        assert str(ArrayValue(("a", "b"))) == "(a,b)"


# ---------------------------------------------------------------------------
# CommandReply
# ---------------------------------------------------------------------------

class TestCommandReply:
    def test_of_is_delivered(self) -> None:
        reply = CommandReply.of(["a", "b"])
        assert reply.status is ReplyStatus.DELIVERED
        assert reply.lines == ("a", "b")
        assert reply.delivered

    def test_empty_delivered_reply_is_truthy(self) -> None:
        reply = CommandReply.of([])
        assert reply.lines == ()
        assert bool(reply) is True

    @pytest.mark.parametrize(
        ("reply", "status"),
        [
            (CommandReply.unreachable(), ReplyStatus.UNREACHABLE),
            (CommandReply.exhausted(), ReplyStatus.EXHAUSTED),
        ],
    )
    def test_no_reply_is_distinct_from_empty(
        self, reply: CommandReply, status: ReplyStatus,
    ) -> None:
        assert reply.status is status
        assert reply.lines == ()
        assert not reply.delivered
        assert reply != CommandReply.of([])


# ---------------------------------------------------------------------------
# Query results
# ---------------------------------------------------------------------------

class TestObjectListing:
    def test_sequence_behaviour(self) -> None:
        first, second = GameObject("A", "C"), GameObject("B", "C")
        listing = ObjectListing(objects=(first, second))
        assert len(listing) == 2
        assert listing[0] is first
        assert list(listing) == [first, second]
        assert second in listing

    def test_compares_equal_to_plain_sequences(self) -> None:
        first, second = GameObject("A", "C"), GameObject("B", "C")
        listing = ObjectListing(objects=(first, second))
        assert listing == [first, second]
        assert listing == (first, second)
        assert listing == ObjectListing(objects=(first, second))
        assert listing != [second, first]
        assert listing != "AB"

    def test_unreachable_equals_empty_list(self) -> None:
        assert ObjectListing(status=ReplyStatus.UNREACHABLE) == []

    def test_empty_is_falsy(self) -> None:
        assert not ObjectListing()

    def test_status_defaults_to_delivered(self) -> None:
        assert ObjectListing().status is ReplyStatus.DELIVERED


class TestPropertyListing:
    def test_mapping_behaviour(self) -> None:
        obj = GameObject("A", "C")
        listing = PropertyListing(entries={obj: Scalar("1")})
        assert listing[obj] == Scalar("1")
        assert listing.get(GameObject("Z", "C")) is None
        assert len(listing) == 1
        assert listing == {obj: Scalar("1")}

    def test_status_is_kept(self) -> None:
        listing = PropertyListing(status=ReplyStatus.UNREACHABLE)
        assert listing.status is ReplyStatus.UNREACHABLE
        assert listing == {}


class TestPropertyDump:
    def test_mapping_behaviour(self) -> None:
        dump = PropertyDump(entries={"HP": Scalar("50")})
        assert dump["HP"] == Scalar("50")
        assert "HP" in dump
        assert dict(dump) == {"HP": Scalar("50")}

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            PropertyDump()["HP"]
