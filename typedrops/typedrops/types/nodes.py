"""Compiled type nodes.

A schema compiles into a tree of the frozen dataclasses below. Trees are
immutable and compare by value, so compiling the same spec twice yields
equal trees. Validation reads them and never changes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Union

# Name of the implicit kind check every primitive carries.
KIND_CHECK = "type?"

REQUIRED = "required"
OPTIONAL = "optional"
PRESENCES = (REQUIRED, OPTIONAL)


@dataclass(frozen=True)
class Symbol:
    """A key in the native (non-string) namespace that atomizing maps normalize into."""

    name: str

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True)
class CompileOptions:
    atomize: bool = False


@dataclass(frozen=True)
class Predicate:
    """A reference to a named predicate plus its arguments.

    ``fn`` is the function the compiler resolved the name to; it takes no
    part in equality.
    """

    name: str
    args: Tuple[Any, ...] = ()
    fn: Optional[Callable[..., bool]] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class And:
    predicates: Tuple[Predicate, ...]


Constraint = Union[Predicate, And]


@dataclass(frozen=True)
class Primitive:
    kind: str
    constraints: Tuple[Constraint, ...] = ()


@dataclass(frozen=True)
class ListType:
    member_type: "TypeNode"
    constraints: Tuple[Constraint, ...] = ()


@dataclass(frozen=True)
class MapKey:
    path: Tuple[Any, ...]
    presence: str
    type: "TypeNode"

    @property
    def required(self) -> bool:
        return self.presence == REQUIRED


@dataclass(frozen=True)
class MapType:
    keys: Tuple[MapKey, ...] = ()
    atomize: bool = False
    constraints: Tuple[Constraint, ...] = ()


@dataclass(frozen=True)
class UnionType:
    left: "TypeNode"
    right: "TypeNode"
    opts: CompileOptions = CompileOptions()


TypeNode = Union[Primitive, ListType, MapType, UnionType]
TYPE_NODES = (Primitive, ListType, MapType, UnionType)


def is_type_node(value: Any) -> bool:
    return isinstance(value, TYPE_NODES)
