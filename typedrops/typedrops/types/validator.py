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

"""Validate input data against a compiled type node."""

from __future__ import annotations

from typing import Any, List

from ..exceptions import SpecCompileError
from ..predicates.helpers import apply_predicates, is_ok
from ..results import Aggregate, Alternative, Err, Ok, PredicateError
from . import map_key
from .nodes import KIND_CHECK, ListType, MapType, Primitive, TypeNode, UnionType


def validate(node: TypeNode, data: Any):
    """Validate *data* against *node*.

    Returns ``Ok`` or ``Err``; failures are never raised. A value that is not
    a type node raises ``SpecCompileError``.
    """
    if isinstance(node, Primitive):
        return apply_predicates(data, node.constraints)

    if isinstance(node, ListType):
        return _validate_list(node, data)

    if isinstance(node, MapType):
        return _validate_map(node, data)

    if isinstance(node, UnionType):
        return _validate_union(node, data)

    raise SpecCompileError(f"Cannot validate against {type(node).__name__}: not a compiled type node")


def _validate_list(node: ListType, data: Any):
    checked = apply_predicates(data, node.constraints)
    if isinstance(checked, Err):
        return checked

    results = tuple(validate(node.member_type, member) for member in checked.value)
    return _aggregate("list", results)


def _validate_map(node: MapType, data: Any):
    if node.atomize:
        data = map_key.atomize(data, node.keys)

    checked = apply_predicates(data, node.constraints)
    if isinstance(checked, Err):
        return checked

    results: List[Any] = []
    for key in node.keys:
        outcome = map_key.validate_key(key, checked.value)
        if isinstance(outcome, list):
            results.extend(outcome)
        else:
            results.append(outcome)
    return _aggregate("map", tuple(results))


def _aggregate(kind: str, results: tuple):
    if is_ok(results):
        return Ok(Aggregate(kind, results))
    return Err(Aggregate(kind, results))


def _validate_union(node: UnionType, data: Any):
    left = validate(node.left, data)
    if isinstance(left, Ok):
        return left

    # Between two primitives, a left failure past the kind check means the
    # input has the left kind and broke a refinement: report that alone.
    if isinstance(node.left, Primitive) and isinstance(node.right, Primitive):
        if isinstance(left.error, PredicateError) and left.error.predicate != KIND_CHECK:
            return left

    right = validate(node.right, data)
    if isinstance(right, Ok):
        return right

    return Err(Alternative(left, right, node.opts))
