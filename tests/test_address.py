"""Tests for scanning, resource splitting and the Address value type."""
from __future__ import annotations

import dataclasses
import itertools
import pickle

import pytest

from xma.errors import (
    AddressError,
    DuplicateDelimiter,
    EmptyInput,
    InsufficientComponents,
    MisplacedDelimiter,
)
from xma.model import Address, Require, compare, parse_address
from xma.resource import is_hex, split_resource
from xma.scan import scan


# ── Scanner ────────────────────────────────────────────────────────────────────

def test_scan_identifier_only():
    assert scan("alice") == ["alice"]


def test_scan_logon():
    assert scan("alice@example.org") == ["alice", "example.org"]


def test_scan_full():
    assert scan("alice@example.org/laptop") == ["alice", "example.org", "laptop"]


def test_scan_resource_keeps_later_delimiters():
    assert scan("a@b/c/d@e") == ["a", "b", "c/d@e"]


def test_scan_empty_host_without_slash():
    assert scan("alice@") == ["alice", ""]


def test_scan_empty_returns_none():
    assert scan("") is None
    assert scan(None) is None


def test_scan_slash_before_at():
    with pytest.raises(MisplacedDelimiter):
        scan("a/b")


def test_scan_slash_next_to_at():
    with pytest.raises(MisplacedDelimiter):
        scan("a@/b")


def test_scan_leading_at():
    with pytest.raises(MisplacedDelimiter):
        scan("@host/res")
    with pytest.raises(MisplacedDelimiter):
        scan("@host")


def test_scan_duplicate_at():
    with pytest.raises(DuplicateDelimiter):
        scan("a@@b")
    with pytest.raises(DuplicateDelimiter):
        scan("a@b@c/d")


# ── Resource splitter ──────────────────────────────────────────────────────────

def test_split_at_last_dot():
    assert split_resource("laptop.AB12") == ("laptop", "AB12")
    assert split_resource("a.b.c") == ("a.b", "c")


def test_split_leading_dot_ignored():
    assert split_resource(".hidden") == (".hidden", "")


def test_split_all_hex_is_none():
    assert split_resource("deadbeef") is None
    assert split_resource("0123") is None


def test_split_empty_is_none():
    assert split_resource("") is None
    assert split_resource(None) is None


def test_split_after_last_non_hex():
    assert split_resource("myphoneX9") == ("myphoneX", "9")
    assert split_resource("Gajim") == ("Gajim", "")


def test_split_android_override():
    assert split_resource("android3f9a") == ("android", "3f9a")
    assert split_resource("android") == ("android", "")


def test_split_iphone_override():
    assert split_resource("iPhone12ab") == ("iPhone", "12ab")


def test_split_without_override_keeps_hex_tail_out():
    # "phone" is not the iPhone literal, so its trailing "e" is a session
    assert split_resource("phone") == ("phon", "e")


def test_is_hex():
    assert all(is_hex(c) for c in "0123456789abcdefABCDEF")
    assert not any(is_hex(c) for c in "gGxX.-/@")


# ── Construction ───────────────────────────────────────────────────────────────

def test_parse_identifier():
    a = Address.parse("alice")
    assert a.identifier == "alice"
    assert a.host is None and a.resource is None
    assert a.logon is None and a.full is None
    assert a.resource_kind is None and a.resource_session is None


def test_parse_logon():
    a = Address.parse("alice@example.org")
    assert a.identifier == "alice"
    assert a.host == "example.org"
    assert a.logon == "alice@example.org"
    assert a.full is None


def test_parse_full():
    a = Address.parse("alice@example.org/laptop.AB12")
    assert a.full == "alice@example.org/laptop.AB12"
    assert a.resource == "laptop.AB12"
    assert a.resource_kind == "laptop"
    assert a.resource_session == "AB12"


def test_parse_resource_fallback():
    a = Address.parse("alice@example.org/deadbeef")
    assert a.resource_kind == "deadbeef"
    assert a.resource_session == "deadbeef"


def test_parse_empty():
    with pytest.raises(EmptyInput):
        Address.parse("")
    with pytest.raises(EmptyInput):
        Address.parse(None)


def test_parse_require_full():
    assert Address.parse("a@b/c", Require.FULL).resource == "c"
    with pytest.raises(InsufficientComponents):
        Address.parse("a@b", Require.FULL)


def test_parse_require_logon():
    assert Address.parse("a@b", Require.LOGON).host == "b"
    with pytest.raises(InsufficientComponents):
        parse_address("a", "logon")


def test_errors_carry_input():
    with pytest.raises(AddressError) as info:
        Address.parse("a/b")
    assert info.value.text == "a/b"
    assert isinstance(info.value, ValueError)


def test_address_is_frozen():
    a = Address.parse("alice@example.org")
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.host = "other.org"  # type: ignore[misc]


def test_address_pickles():
    a = Address.parse("alice@example.org/laptop.1")
    b = pickle.loads(pickle.dumps(a))
    assert b.full == a.full
    assert b.resource_kind == "laptop"


# ── Projection ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("text", ["alice", "alice@example.org", "alice@example.org/x/y@z"])
def test_projection_round_trip(text):
    a = Address.parse(text)
    assert str(a) == text
    assert str(Address.parse(str(a))) == str(a)
    assert len(a) == len(text)


def test_hash_follows_projection():
    a = Address.parse("alice@example.org/laptop.1")
    b = Address.parse("alice@example.org/laptop.1")
    assert hash(a) == hash(b) == hash("alice@example.org/laptop.1")
    assert len({a, b}) == 1


# ── Equality ───────────────────────────────────────────────────────────────────

def test_equal_same_kind_different_session():
    assert Address.parse("a@h/dev.01") == Address.parse("a@h/dev.02")


def test_not_equal_different_kind():
    assert Address.parse("a@h/laptop") != Address.parse("a@h/phone")


def test_not_equal_different_logon():
    assert Address.parse("a@h/dev.01") != Address.parse("a@x/dev.01")


def test_equal_at_shared_level():
    assert Address.parse("a") == Address.parse("a@h/r")
    assert Address.parse("a@h") == Address.parse("a@h/r")
    assert Address.parse("a@h") != Address.parse("a@x")


def test_equal_to_string():
    assert Address.parse("a") == "a"
    assert Address.parse("a@h/r") == "a@h"
    assert Address.parse("a@h/r") != "a@h/r"
    assert "a@h" == Address.parse("a@h/r")


def test_equal_to_other_type():
    assert Address.parse("a") != 1


# ── Ordering ───────────────────────────────────────────────────────────────────

def test_compare_identity_is_zero():
    a = Address.parse("a@h/r")
    assert compare(a, a) == 0


def test_sorted_by_full():
    items = [Address.parse(t) for t in ("b@h/x", "a@h/y", "a@h/x")]
    assert [str(a) for a in sorted(items)] == ["a@h/x", "a@h/y", "b@h/x"]


def test_compare_at_shared_level():
    assert compare(Address.parse("a@z"), Address.parse("b")) < 0
    assert compare(Address.parse("a@h"), Address.parse("a@h/r")) == 0
    assert Address.parse("a@h") <= Address.parse("a@h/r")


def test_ordering_disagrees_with_equality_on_sessions():
    a = Address.parse("a@h/dev.01")
    b = Address.parse("a@h/dev.02")
    assert a == b
    assert compare(a, b) < 0
    assert a < b and b > a


def test_total_order_within_level():
    items = [
        Address.parse(t)
        for t in ("a@h/r1", "a@h/r2", "b@h/r1", "a@i/r1", "A@h/z", "a@h/dev.1", "a@h/dev.2")
    ]
    for a, b in itertools.product(items, repeat=2):
        assert compare(a, b) == -compare(b, a)
        if compare(a, b) == 0:
            assert a.full == b.full
    for a, b, c in itertools.product(items, repeat=3):
        if compare(a, b) <= 0 and compare(b, c) <= 0:
            assert compare(a, c) <= 0


def test_require_levels():
    assert [r.levels for r in Require] == [1, 2, 3]
    assert Require("full") is Require.FULL


# ── Direct construction ────────────────────────────────────────────────────────

def test_direct_construction_derives_fields():
    a = Address("alice", host="example.org")
    assert a.logon == "alice@example.org"
    assert a.full is None
    assert a == Address.parse("alice@example.org")
    assert str(a) == "alice@example.org"


def test_direct_construction_with_resource():
    a = Address("alice", "example.org", "laptop.AB12")
    assert a.full == "alice@example.org/laptop.AB12"
    assert (a.resource_kind, a.resource_session) == ("laptop", "AB12")


def test_direct_construction_resource_needs_host():
    with pytest.raises(MisplacedDelimiter):
        Address("alice", resource="r")


def test_direct_construction_empty_identifier():
    with pytest.raises(EmptyInput):
        Address("")


def test_derived_fields_are_not_arguments():
    with pytest.raises(TypeError):
        Address("alice", logon="bob@example.org")  # type: ignore[call-arg]


def test_parse_empty_host():
    a = Address.parse("alice@")
    assert a.host == ""
    assert a.logon == "alice@"
    assert str(a) == "alice@"


def test_not_equal_follows_equality():
    assert not (Address.parse("a@h/dev.01") != Address.parse("a@h/dev.02"))
    assert Address.parse("a@h") != "a@x"
