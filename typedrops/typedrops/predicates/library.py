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

"""Built-in predicate functions.

Each predicate takes ``(value)``, ``(arg, value)`` or ``(args, value)`` and
returns a bool. Predicates never raise for input of the wrong shape; they
return False instead.
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional


STRING_TYPES = {"string", "str"}
BOOL_TYPES = {"boolean", "bool"}
INTEGER_TYPES = {"integer", "int"}
FLOAT_TYPES = {"float", "double"}
NUMBER_TYPES = {"number"}
LIST_TYPES = {"list", "array"}
MAP_TYPES = {"map", "dict", "object"}
NIL_TYPES = {"nil", "none", "null"}
TEMPORAL_TYPES = {"date", "datetime", "time"}
ANY_TYPES = {"any"}

SUPPORTED_KINDS = (
    STRING_TYPES | BOOL_TYPES | INTEGER_TYPES | FLOAT_TYPES | NUMBER_TYPES
    | LIST_TYPES | MAP_TYPES | NIL_TYPES | TEMPORAL_TYPES | ANY_TYPES
)


def normalize_kind(kind: Any) -> Optional[str]:
    if kind is None:
        return None
    return str(kind).strip().lower()


def is_supported_kind(kind: Optional[str]) -> bool:
    return bool(kind) and kind in SUPPORTED_KINDS


def is_type(kind: str, value: Any) -> bool:
    kind = normalize_kind(kind)
    if kind in ANY_TYPES:
        return True
    if kind in STRING_TYPES:
        return isinstance(value, str)
    if kind in BOOL_TYPES:
        return isinstance(value, bool)
    # bool is an int subclass but never a number here
    if kind in INTEGER_TYPES:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind in FLOAT_TYPES:
        return isinstance(value, float)
    if kind in NUMBER_TYPES:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind in LIST_TYPES:
        return isinstance(value, (list, tuple))
    if kind in MAP_TYPES:
        return isinstance(value, Mapping)
    if kind in NIL_TYPES:
        return value is None
    if kind == "datetime":
        return isinstance(value, datetime.datetime)
    if kind == "date":
        return isinstance(value, datetime.date) and not isinstance(value, datetime.datetime)
    if kind == "time":
        return isinstance(value, datetime.time)
    return False


def _sized(value: Any) -> bool:
    return hasattr(value, "__len__")


def _compare(op: Callable[[Any, Any], bool], bound: Any, value: Any) -> bool:
    try:
        return bool(op(value, bound))
    except TypeError:
        return False


def is_filled(value: Any) -> bool:
    if value is None:
        return False
    if _sized(value):
        return len(value) > 0
    return True


def is_empty(value: Any) -> bool:
    return _sized(value) and len(value) == 0


def is_eql(expected: Any, value: Any) -> bool:
    return value == expected


def is_not_eql(expected: Any, value: Any) -> bool:
    return value != expected


def is_gt(bound: Any, value: Any) -> bool:
    return _compare(lambda v, b: v > b, bound, value)


def is_gteq(bound: Any, value: Any) -> bool:
    return _compare(lambda v, b: v >= b, bound, value)


def is_lt(bound: Any, value: Any) -> bool:
    return _compare(lambda v, b: v < b, bound, value)


def is_lteq(bound: Any, value: Any) -> bool:
    return _compare(lambda v, b: v <= b, bound, value)


def is_size(size: Any, value: Any) -> bool:
    if not _sized(value):
        return False
    if isinstance(size, (list, tuple)) and len(size) == 2:
        return size[0] <= len(value) <= size[1]
    return len(value) == size


def is_min_size(size: int, value: Any) -> bool:
    return _sized(value) and len(value) >= size


def is_max_size(size: int, value: Any) -> bool:
    return _sized(value) and len(value) <= size


def includes(member: Any, value: Any) -> bool:
    try:
        return member in value
    except TypeError:
        return False


def excludes(member: Any, value: Any) -> bool:
    try:
        return member not in value
    except TypeError:
        return False


def is_included_in(options: Any, value: Any) -> bool:
    return includes(value, options)


def is_excluded_from(options: Any, value: Any) -> bool:
    return excludes(value, options)


def matches_format(pattern: Any, value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return re.search(pattern, value) is not None


def is_odd(value: Any) -> bool:
    return is_type("integer", value) and value % 2 == 1


def is_even(value: Any) -> bool:
    return is_type("integer", value) and value % 2 == 0


def is_true(value: Any) -> bool:
    return value is True


def is_false(value: Any) -> bool:
    return value is False


def is_nil(value: Any) -> bool:
    return value is None


def _kind_check(kind: str) -> Callable[[Any], bool]:
    def _check(value: Any) -> bool:
        return is_type(kind, value)

    _check.__name__ = f"is_{kind}"
    return _check


PREDICATES: Dict[str, Callable[..., bool]] = {
    "type?": is_type,
    "filled?": is_filled,
    "empty?": is_empty,
    "eql?": is_eql,
    "not_eql?": is_not_eql,
    "gt?": is_gt,
    "gteq?": is_gteq,
    "lt?": is_lt,
    "lteq?": is_lteq,
    "size?": is_size,
    "min_size?": is_min_size,
    "max_size?": is_max_size,
    "includes?": includes,
    "excludes?": excludes,
    "included_in?": is_included_in,
    "excluded_from?": is_excluded_from,
    "format?": matches_format,
    "odd?": is_odd,
    "even?": is_even,
    "true?": is_true,
    "false?": is_false,
    "nil?": is_nil,
    "none?": is_nil,
    "string?": _kind_check("string"),
    "integer?": _kind_check("integer"),
    "float?": _kind_check("float"),
    "number?": _kind_check("number"),
    "boolean?": _kind_check("boolean"),
    "list?": _kind_check("list"),
    "map?": _kind_check("map"),
}
