"""Constraint evaluation over an ordered predicate sequence."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional, Sequence

from ..results import Err, Ok, PredicateError
from ..types.nodes import And, Constraint, Predicate
from .registry import PredicateRegistry, apply_args, default_registry


def flatten_constraints(constraints: Iterable[Constraint]) -> Iterator[Predicate]:
    """Yield predicates in order, expanding ``And`` groups in place."""
    for constraint in constraints:
        if isinstance(constraint, And):
            yield from flatten_constraints(constraint.predicates)
        else:
            yield constraint


def apply_predicates(
    value: Any,
    constraints: Sequence[Constraint],
    registry: Optional[PredicateRegistry] = None,
):
    """Apply *constraints* left to right, stopping at the first failure.

    Returns ``Ok(value)`` or ``Err(PredicateError)`` for the first failing
    predicate. Unknown predicate names raise (they are not validation errors).
    """
    for predicate in flatten_constraints(constraints):
        fn = predicate.fn
        if fn is None:
            fn = (registry or default_registry).resolve(predicate.name)

        args = apply_args(predicate.args, value)
        if not fn(*args):
            return Err(PredicateError(input=value, predicate=predicate.name, args=args))

    return Ok(value)


def is_ok(result: Any) -> bool:
    """True for ``Ok`` results, or for a (nested) list made only of them."""
    if isinstance(result, (list, tuple)):
        return all(is_ok(r) for r in result)
    return isinstance(result, Ok)
