# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Compile declarative specs into type node trees.

A spec is a tagged tuple::

    ("primitive", "integer")
    ("primitive", "integer", ["filled?", ("gt?", 0)])
    ("list", member_spec[, predicates])
    ("map", {("required", "name"): spec, ("optional", ("address", "city")): spec}[, predicates])
    ("union", [spec, spec, ...][, predicates])

Predicates are written as ``"name?"``, ``("name?", arg)`` or
``("and", [predicate, ...])``. A list ``arg`` is passed to the predicate as
one value (``("included_in?", ["a", "b"])``). Predicates taking several
arguments are given as ``Predicate`` instances. An already compiled node may
appear anywhere a spec is expected.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple, Union

from ..exceptions import SpecCompileError
from ..predicates.library import is_supported_kind, normalize_kind
from ..predicates.registry import PredicateRegistry, default_registry
from .nodes import (
    KIND_CHECK,
    PRESENCES,
    And,
    CompileOptions,
    Constraint,
    ListType,
    MapKey,
    MapType,
    Predicate,
    Primitive,
    Symbol,
    TypeNode,
    UnionType,
    is_type_node,
)

logger = logging.getLogger(__name__)

SPEC_TAGS = ("primitive", "list", "map", "union")


def compile_schema(
    spec: Any,
    options: Union[CompileOptions, Mapping, None] = None,
    *,
    registry: Optional[PredicateRegistry] = None,
    constraints: Sequence[Any] = (),
) -> TypeNode:
    """Compile *spec* into an immutable type node tree.

    Args:
        spec: Tagged spec tuple (or an already compiled node).
        options: ``CompileOptions`` or a mapping with the same fields.
        registry: Predicate table used to resolve predicate names.
        constraints: Extra predicates layered onto the root node.

    Raises:
        SpecCompileError: Malformed spec or unknown option.
        UnknownPredicateError: A predicate name is not in *registry*.
    """
    compiler = Compiler(registry or default_registry, _coerce_options(options))
    node = compiler.visit(spec)
    if constraints:
        node = compiler.constrain(node, constraints)
    return node


def refine(node: TypeNode, *predicates: Any, registry: Optional[PredicateRegistry] = None) -> TypeNode:
    """Return *node* with *predicates* appended to its constraints.

    ``refine(integer, ("gt?", 0))`` gives a reusable positive integer type.
    """
    return Compiler(registry or default_registry, CompileOptions()).constrain(node, predicates)


def _coerce_options(options: Union[CompileOptions, Mapping, None]) -> CompileOptions:
    if options is None:
        return CompileOptions()
    if isinstance(options, CompileOptions):
        return options
    if not isinstance(options, Mapping):
        raise SpecCompileError(f"Compile options must be a mapping, got {type(options).__name__}")

    known = {f.name for f in dataclasses.fields(CompileOptions)}
    unknown = set(options) - known
    if unknown:
        raise SpecCompileError(f"Unknown compile options: {sorted(unknown)}. Valid options: {sorted(known)}")
    return CompileOptions(**options)


class Compiler:
    """Walks a spec and builds the matching node tree."""

    def __init__(self, registry: PredicateRegistry, options: CompileOptions):
        self.registry = registry
        self.options = options

    def visit(self, spec: Any) -> TypeNode:
        if is_type_node(spec):
            return spec

        if not isinstance(spec, tuple) or not spec:
            raise SpecCompileError(f"Invalid spec: expected a tagged tuple, got {spec!r}")

        tag = spec[0]
        if tag not in SPEC_TAGS:
            raise SpecCompileError(f"Unknown spec tag: {tag!r}. Valid tags: {list(SPEC_TAGS)}")
        if len(spec) not in (2, 3):
            raise SpecCompileError(f"Spec '{tag}' takes one argument and optional predicates, got {spec!r}")

        body = spec[1]
        predicates = spec[2] if len(spec) == 3 else ()

        if tag == "primitive":
            return self.visit_primitive(body, predicates)
        if tag == "list":
            return self.visit_list(body, predicates)
        if tag == "map":
            return self.visit_map(body, predicates)
        return self.visit_union(body, predicates)

    def visit_primitive(self, kind: Any, predicates: Any) -> Primitive:
        name = normalize_kind(kind)
        if not is_supported_kind(name):
            raise SpecCompileError(f"Unsupported primitive kind: {kind!r}")
        return Primitive(kind=name, constraints=self.infer_constraints(name) + self.compile_predicates(predicates))

    def visit_list(self, member_spec: Any, predicates: Any) -> ListType:
        return ListType(
            member_type=self.visit(member_spec),
            constraints=self.infer_constraints("list") + self.compile_predicates(predicates),
        )

    def visit_map(self, keys_spec: Any, predicates: Any) -> MapType:
        if not isinstance(keys_spec, Mapping):
            raise SpecCompileError(f"Map spec must be a mapping of key declarations, got {keys_spec!r}")

        keys: List[MapKey] = []
        seen = set()
        for declaration, value_spec in keys_spec.items():
            presence, path = self._key_declaration(declaration)
            if path in seen:
                raise SpecCompileError(f"Duplicate map key path: {list(path)}")
            seen.add(path)
            keys.append(MapKey(path=path, presence=presence, type=self.visit(value_spec)))

        logger.debug(f"Compiled map with keys {[k.path for k in keys]} (atomize={self.options.atomize})")
        return MapType(
            keys=tuple(keys),
            atomize=self.options.atomize,
            constraints=self.infer_constraints("map") + self.compile_predicates(predicates),
        )

    def visit_union(self, alternatives: Any, predicates: Any) -> UnionType:
        if not isinstance(alternatives, (list, tuple)) or len(alternatives) < 2:
            raise SpecCompileError(f"Union spec needs at least two alternatives, got {alternatives!r}")

        nodes = [self.visit(alt) for alt in alternatives]
        union = UnionType(left=nodes[0], right=nodes[1], opts=self.options)
        for node in nodes[2:]:
            union = UnionType(left=union, right=node, opts=self.options)

        extra = self.compile_predicates(predicates)
        return self._append(union, extra) if extra else union

    def infer_constraints(self, kind: str) -> Tuple[Constraint, ...]:
        if kind == "any":
            return ()
        return (Predicate(KIND_CHECK, (kind,), self.registry.resolve(KIND_CHECK)),)

    def compile_predicates(self, predicates: Any) -> Tuple[Constraint, ...]:
        if not predicates:
            return ()
        if isinstance(predicates, (str, Predicate, And)) or (
            isinstance(predicates, tuple) and predicates and predicates[0] == "and"
        ):
            predicates = [predicates]
        return tuple(self.compile_predicate(p) for p in predicates)

    def compile_predicate(self, spec: Any) -> Constraint:
        if isinstance(spec, Predicate):
            return Predicate(spec.name, spec.args, self.registry.resolve(spec.name))
        if isinstance(spec, And):
            return And(tuple(self.compile_predicate(p) for p in spec.predicates))
        if isinstance(spec, str):
            return Predicate(spec, (), self.registry.resolve(spec))
        if isinstance(spec, (tuple, list)) and len(spec) == 2:
            name, args = spec
            if name == "and":
                return And(tuple(self.compile_predicate(p) for p in args))
            if not isinstance(name, str):
                raise SpecCompileError(f"Predicate name must be a string, got {name!r}")
            # a literal list stays one argument, e.g. the options of included_in?
            args = (tuple(args),) if isinstance(args, (list, tuple)) else (args,)
            return Predicate(name, args, self.registry.resolve(name))
        raise SpecCompileError(f"Invalid predicate spec: {spec!r}")

    def constrain(self, node: TypeNode, predicates: Sequence[Any]) -> TypeNode:
        return self._append(node, self.compile_predicates(list(predicates)))

    def _append(self, node: TypeNode, extra: Tuple[Constraint, ...]) -> TypeNode:
        # unions carry no constraints of their own; both branches get them
        if isinstance(node, UnionType):
            return dataclasses.replace(node, left=self._append(node.left, extra), right=self._append(node.right, extra))
        return dataclasses.replace(node, constraints=node.constraints + extra)

    def _key_declaration(self, declaration: Any) -> Tuple[str, Tuple[Any, ...]]:
        if not isinstance(declaration, tuple) or len(declaration) != 2:
            raise SpecCompileError(f"Map key must be declared as (presence, key), got {declaration!r}")

        presence, key = declaration
        if presence not in PRESENCES:
            raise SpecCompileError(f"Invalid key presence: {presence!r}. Expected one of {list(PRESENCES)}")

        path = tuple(key) if isinstance(key, (list, tuple)) else (key,)
        if not path:
            raise SpecCompileError("Map key path cannot be empty")
        if self.options.atomize:
            path = tuple(Symbol(seg) if isinstance(seg, str) else seg for seg in path)
        return presence, path
