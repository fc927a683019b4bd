"""Nested key-path helpers over mappings.

A path is a tuple of keys, one per nesting level. None of these helpers
mutate their input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence

_MISSING = object()


def present(data: Any, path: Sequence[Any]) -> bool:
    """Return True if every segment of *path* resolves in *data*.

    A non-mapping at any intermediate level counts as absence.
    """
    return _lookup(data, path) is not _MISSING


def get_in(data: Any, path: Sequence[Any], default: Any = None) -> Any:
    value = _lookup(data, path)
    return default if value is _MISSING else value


def put_in(data: Mapping, path: Sequence[Any], value: Any) -> dict:
    """Return a copy of *data* with *value* stored at *path*.

    Missing intermediate levels are created as dicts; existing ones are copied.
    """
    if not path:
        raise ValueError("Cannot put a value at an empty path")

    head, rest = path[0], path[1:]
    updated = dict(data)
    if rest:
        child = updated.get(head)
        if not isinstance(child, Mapping):
            child = {}
        updated[head] = put_in(child, rest, value)
    else:
        updated[head] = value
    return updated


def _lookup(data: Any, path: Sequence[Any]) -> Any:
    current = data
    for segment in path:
        if not isinstance(current, Mapping):
            return _MISSING
        try:
            current = current[segment]
        except (KeyError, TypeError):
            return _MISSING
    return current
