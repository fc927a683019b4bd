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

"""Predicate lookup by name."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from ..exceptions import UnknownPredicateError
from .library import PREDICATES

logger = logging.getLogger(__name__)

PredicateFn = Callable[..., bool]


def apply_args(args: Sequence[Any], value: Any) -> Tuple[Any, ...]:
    """Return the positional arguments a predicate is called with.

    ``()`` -> ``(value,)``; ``(a,)`` -> ``(a, value)``; anything longer is
    passed as one list followed by the value.
    """
    if len(args) == 0:
        return (value,)
    if len(args) == 1:
        return (args[0], value)
    return (list(args), value)


class PredicateRegistry:
    """Explicit name -> function table consulted by the compiler and the validator."""

    def __init__(self, functions: Optional[Mapping[str, PredicateFn]] = None):
        self._functions: Dict[str, PredicateFn] = dict(PREDICATES if functions is None else functions)

    def __contains__(self, name: str) -> bool:
        return name in self._functions

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._functions))

    def resolve(self, name: str) -> PredicateFn:
        """Return the function registered under *name*.

        Raises:
            UnknownPredicateError: If nothing is registered under *name*.
        """
        try:
            return self._functions[name]
        except KeyError:
            raise UnknownPredicateError(name, self.names()) from None

    def evaluate(self, name: str, args: Sequence[Any], value: Any) -> bool:
        fn = self.resolve(name)
        return bool(fn(*apply_args(args, value)))

    def extend(self, functions: Mapping[str, PredicateFn]) -> "PredicateRegistry":
        """Return a new registry with *functions* added (or overriding existing names)."""
        merged = dict(self._functions)
        merged.update(functions)
        logger.debug(f"Extending predicate registry with: {sorted(functions)}")
        return PredicateRegistry(merged)


default_registry = PredicateRegistry()
