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

"""Validation result values.

Every validation returns either :class:`Ok` or :class:`Err`. The payload of a
failure mirrors the shape of the node that failed:

* ``PredicateError``  - a constraint failed at a leaf (or a container's own check)
* ``MissingKeyError`` - a required map key was absent
* ``Aggregate``       - per-element/per-key results of a list or map, in order
* ``Keyed``           - a per-key payload inside a map aggregate
* ``Alternative``     - both branches of a union failed
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .utils.key_paths import put_in


KeyPath = Tuple[Any, ...]


@dataclass(frozen=True)
class Ok:
    """Success result containing a value."""

    value: Any

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err:
    """Error result containing an error value."""

    error: Any

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


@dataclass(frozen=True)
class PredicateError:
    """A failed constraint: the offending input, the predicate and the arguments it was called with."""

    input: Any
    predicate: str
    args: Tuple[Any, ...]


@dataclass(frozen=True)
class MissingKeyError:
    path: KeyPath


@dataclass(frozen=True)
class Keyed:
    path: KeyPath
    value: Any


@dataclass(frozen=True)
class Aggregate:
    """Ordered per-member results of a ``list`` or ``map`` node."""

    kind: str
    results: Tuple[Any, ...]


@dataclass(frozen=True)
class Alternative:
    """Neither side of a union matched."""

    left: Err
    right: Err
    opts: Any = None


def output(result: Any) -> Any:
    """Project a successful result into a plain normalized value.

    Lists become lists of member outputs. Maps are rebuilt from the validated
    keys only, each value placed at its declared path.

    Raises:
        ValueError: If *result* is not a success.
    """
    if isinstance(result, Err):
        raise ValueError(f"Cannot project a failed result: {result!r}")
    if isinstance(result, Ok):
        return _project(result.value)
    return _project(result)


def _project(value: Any) -> Any:
    if isinstance(value, Ok):
        return _project(value.value)
    if not isinstance(value, Aggregate):
        return value

    if value.kind == "list":
        return [_project(r) for r in value.results]

    projected: Dict[Any, Any] = {}
    for r in value.results:
        keyed = r.value
        projected = put_in(projected, keyed.path, _project(keyed.value))
    return projected
