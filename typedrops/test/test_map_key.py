"""Tests for map key presence handling and atomization."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from typedrops import Aggregate, Err, Keyed, MapKey, MissingKeyError, Ok, Symbol, compile_schema, validate
from typedrops.types.map_key import atomize, stringify, validate_key
from typedrops.utils.key_paths import get_in, present, put_in


@pytest.fixture
def name_key(string_type):
    return MapKey((Symbol("name"),), "required", string_type)


def test_present_and_get_in():
    data = {"a": {"b": None}, "c": [1]}
    assert present(data, ("a", "b"))
    assert get_in(data, ("a", "b"), default="missing") is None
    assert not present(data, ("a", "x"))
    assert not present(data, ("c", 0))
    assert not present(data, ("a", "b", "c"))
    assert get_in(data, ("z",), default="missing") == "missing"


def test_present_accepts_any_mapping():
    assert present(MappingProxyType({"a": 1}), ("a",))


def test_put_in_copies():
    original = {"a": {"b": 1}}
    updated = put_in(original, ("a", "c"), 2)
    assert updated == {"a": {"b": 1, "c": 2}}
    assert original == {"a": {"b": 1}}


def test_put_in_creates_levels():
    assert put_in({}, ("a", "b"), 1) == {"a": {"b": 1}}
    with pytest.raises(ValueError):
        put_in({}, (), 1)


def test_stringify(string_type):
    key = MapKey((Symbol("address"), Symbol("city"), 0), "optional", string_type)
    assert stringify(key) == ("address", "city", 0)


def test_atomize_keeps_integer_keys():
    node = compile_schema(("map", {("required", 0): ("primitive", "string")}), {"atomize": True})
    assert node.keys[0].path == (0,)
    assert validate(node, {0: "x"}) == Ok(Aggregate("map", (Ok(Keyed((0,), "x")),)))
    assert validate(node, {"0": "x"}) == Err(Aggregate("map", (Err(MissingKeyError((0,))),)))


def test_atomize_copies_declared_keys_only(name_key, string_type):
    city = MapKey((Symbol("address"), Symbol("city")), "optional", string_type)
    data = {"name": "x", "address": {"city": "Oslo", "zip": "0150"}, "other": 1}
    assert atomize(data, [name_key, city]) == {
        Symbol("name"): "x",
        Symbol("address"): {Symbol("city"): "Oslo"},
    }


def test_atomize_omits_absent_keys(name_key):
    assert atomize({}, [name_key]) == {}


def test_atomize_passes_through_non_mappings(name_key):
    assert atomize(["name"], [name_key]) == ["name"]


def test_validate_key_required(name_key):
    assert validate_key(name_key, {Symbol("name"): "x"}) == Ok(Keyed((Symbol("name"),), "x"))
    assert validate_key(name_key, {}) == Err(MissingKeyError((Symbol("name"),)))


def test_validate_key_optional_absent_contributes_nothing(integer_type):
    key = MapKey(("age",), "optional", integer_type)
    assert validate_key(key, {}) == []
    assert validate_key(key, {"age": "x"}).is_err()


def test_validate_key_with_nested_type():
    node = compile_schema(("map", {("required", "tags"): ("list", ("primitive", "string"))}))
    outcome = validate_key(node.keys[0], {"tags": ["a"]})
    assert outcome.is_ok()
    assert outcome.value.path == ("tags",)
