"""Tests for validating data against compiled type nodes."""

from __future__ import annotations

import copy

import pytest

from typedrops import (
    Aggregate,
    Alternative,
    CompileOptions,
    Err,
    Keyed,
    MissingKeyError,
    Ok,
    PredicateError,
    Symbol,
    compile_schema,
    output,
    validate,
)
from typedrops.exceptions import SpecCompileError
from typedrops.predicates.registry import PredicateRegistry


def _not_integer(value):
    return PredicateError(input=value, predicate="type?", args=("integer", value))


def test_primitive_ok_and_err(integer_type):
    assert validate(integer_type, 5) == Ok(5)
    assert validate(integer_type, "5") == Err(_not_integer("5"))


def test_list_keeps_every_result_in_order(integer_type):
    node = compile_schema(("list", integer_type))
    result = validate(node, [1, "x", 3])
    assert result == Err(Aggregate("list", (Ok(1), Err(_not_integer("x")), Ok(3))))


def test_list_success():
    node = compile_schema(("list", ("primitive", "integer")))
    assert validate(node, [1, 2]) == Ok(Aggregate("list", (Ok(1), Ok(2))))


def test_list_own_constraint_failure_does_not_descend():
    node = compile_schema(("list", ("primitive", "integer")))
    assert validate(node, "nope") == Err(PredicateError("nope", "type?", ("list", "nope")))


def test_list_extra_constraints_apply_to_whole_list():
    node = compile_schema(("list", ("primitive", "integer"), [("max_size?", 2)]))
    result = validate(node, [1, 2, 3])
    assert result.error.predicate == "max_size?"


def test_empty_containers_are_valid():
    assert validate(compile_schema(("list", ("primitive", "integer"))), []) == Ok(Aggregate("list", ()))
    assert validate(compile_schema(("map", {})), {}) == Ok(Aggregate("map", ()))


class TestMap:
    @pytest.fixture
    def node(self):
        return compile_schema(
            (
                "map",
                {
                    ("required", "a"): ("primitive", "integer"),
                    ("optional", "b"): ("primitive", "integer"),
                },
            )
        )

    def test_required_present(self, node):
        assert validate(node, {"a": 1}) == Ok(Aggregate("map", (Ok(Keyed(("a",), 1)),)))

    def test_missing_required_only_is_reported(self, node):
        assert validate(node, {}) == Err(Aggregate("map", (Err(MissingKeyError(("a",))),)))

    def test_optional_present_is_validated(self, node):
        result = validate(node, {"a": 1, "b": "two"})
        assert result == Err(
            Aggregate("map", (Ok(Keyed(("a",), 1)), Err(Keyed(("b",), _not_integer("two")))))
        )

    def test_undeclared_keys_are_ignored(self, node):
        assert validate(node, {"a": 1, "z": object()}).is_ok()

    def test_not_a_map(self, node):
        assert validate(node, [1]) == Err(PredicateError([1], "type?", ("map", [1])))

    def test_required_missing_does_not_run_key_type(self):
        calls = []
        registry = PredicateRegistry().extend({"spy?": lambda v: calls.append(v) or True})
        node = compile_schema(("map", {("required", "a"): ("primitive", "any", ["spy?"])}), registry=registry)
        validate(node, {})
        assert calls == []


def test_nested_paths():
    node = compile_schema(("map", {("required", ("address", "city")): ("primitive", "string")}))
    assert validate(node, {"address": {"city": "Oslo"}}).is_ok()
    assert validate(node, {"address": "Oslo"}) == Err(
        Aggregate("map", (Err(MissingKeyError(("address", "city"))),))
    )
    assert validate(node, {}).is_err()


def test_nested_map_results():
    node = compile_schema(
        ("map", {("required", "user"): ("map", {("required", "name"): ("primitive", "string")})})
    )
    result = validate(node, {"user": {"name": 1}})
    inner = Aggregate("map", (Err(Keyed(("name",), PredicateError(1, "type?", ("string", 1)))),))
    assert result == Err(Aggregate("map", (Err(Keyed(("user",), inner)),)))


class TestAtomize:
    SPEC = ("map", {("required", "name"): ("primitive", "string"), ("optional", "age"): ("primitive", "integer")})

    def test_string_keys_match_symbol_keyed_variant(self):
        atomizing = compile_schema(self.SPEC, {"atomize": True})
        plain = compile_schema(
            ("map", {("required", Symbol("name")): ("primitive", "string"), ("optional", Symbol("age")): ("primitive", "integer")})
        )
        assert validate(atomizing, {"name": "x"}) == validate(plain, {Symbol("name"): "x"})

    def test_input_is_not_mutated(self):
        node = compile_schema(self.SPEC, {"atomize": True})
        data = {"name": "x", "age": 3, "extra": True}
        snapshot = copy.deepcopy(data)
        result = validate(node, data)
        assert data == snapshot
        assert output(result) == {Symbol("name"): "x", Symbol("age"): 3}

    def test_nested_atomize(self):
        node = compile_schema(
            ("map", {("required", "user"): ("map", {("required", "name"): ("primitive", "string")})}),
            {"atomize": True},
        )
        result = validate(node, {"user": {"name": "x"}})
        assert output(result) == {Symbol("user"): {Symbol("name"): "x"}}

    def test_non_map_input_fails_map_check(self):
        node = compile_schema(self.SPEC, {"atomize": True})
        assert validate(node, "text") == Err(PredicateError("text", "type?", ("map", "text")))


class TestUnion:
    @pytest.fixture
    def node(self, string_type, integer_type):
        return compile_schema(("union", [string_type, integer_type]))

    def test_left_short_circuits(self, node):
        assert validate(node, "hi") == Ok("hi")

    def test_right_branch(self, node):
        assert validate(node, 5) == Ok(5)

    def test_neither_branch(self, node):
        result = validate(node, True)
        assert result == Err(
            Alternative(
                Err(PredicateError(True, "type?", ("string", True))),
                Err(PredicateError(True, "type?", ("integer", True))),
                CompileOptions(),
            )
        )

    def test_right_not_evaluated_on_left_success(self):
        calls = []
        registry = PredicateRegistry().extend({"spy?": lambda v: calls.append(v) or True})
        node = compile_schema(
            ("union", [("primitive", "string"), ("primitive", "integer", ["spy?"])]), registry=registry
        )
        validate(node, "hi")
        assert calls == []

    def test_refinement_failure_takes_precedence(self, positive_integer, string_type):
        node = compile_schema(("union", [positive_integer, string_type]))
        assert validate(node, -5) == Err(PredicateError(-5, "gt?", (0, -5)))
        assert validate(node, "s") == Ok("s")

    def test_composite_union_always_tries_right(self, positive_integer):
        node = compile_schema(("union", [("list", positive_integer), ("primitive", "string")]))
        result = validate(node, [-1])
        assert isinstance(result.error, Alternative)
        assert validate(node, "s") == Ok("s")

    def test_three_way_union(self):
        node = compile_schema(("union", [("primitive", "string"), ("primitive", "integer"), ("primitive", "nil")]))
        assert validate(node, None) == Ok(None)
        assert isinstance(validate(node, 1.5).error, Alternative)

    def test_union_of_maps(self):
        node = compile_schema(
            (
                "union",
                [
                    ("map", {("required", "id"): ("primitive", "integer")}),
                    ("map", {("required", "name"): ("primitive", "string")}),
                ],
            )
        )
        assert output(validate(node, {"name": "x"})) == {"name": "x"}


def test_validation_is_deterministic(positive_integer):
    node = compile_schema(("list", positive_integer))
    assert validate(node, [1, -1, "x"]) == validate(node, [1, -1, "x"])


def test_output_of_list_of_maps():
    node = compile_schema(("list", ("map", {("required", "a"): ("primitive", "integer")})))
    assert output(validate(node, [{"a": 1, "b": 2}])) == [{"a": 1}]


def test_output_rejects_failures(integer_type):
    with pytest.raises(ValueError):
        output(validate(integer_type, "x"))


def test_validate_rejects_non_nodes():
    with pytest.raises(SpecCompileError):
        validate(("primitive", "integer"), 1)
