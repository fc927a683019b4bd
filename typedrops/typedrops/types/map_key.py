"""Per-key presence handling and key-namespace normalization for map nodes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Sequence, Tuple, Union

from ..results import Err, Keyed, MissingKeyError, Ok
from ..utils.key_paths import get_in, present, put_in
from . import validator
from .nodes import MapKey, Symbol


def stringify_segment(segment: Any) -> Any:
    if isinstance(segment, Symbol):
        return segment.name
    return segment


def stringify(key: MapKey) -> Tuple[Any, ...]:
    """The string-keyed form of *key*'s path. Non-symbol segments are kept."""
    return tuple(stringify_segment(seg) for seg in key.path)


def atomize(data: Any, keys: Sequence[MapKey]) -> Any:
    """Copy declared keys from their string-keyed paths into their native paths.

    Only declared keys found in *data* are copied; *data* itself is left
    untouched. Non-mapping input is returned as is so the map's own kind
    check can report it.
    """
    if not isinstance(data, Mapping):
        return data

    normalized: Dict[Any, Any] = {}
    for key in keys:
        string_path = stringify(key)
        if present(data, string_path):
            normalized = put_in(normalized, key.path, get_in(data, string_path))
    return normalized


def validate_key(key: MapKey, container: Any) -> Union[Ok, Err, List[Any]]:
    """Validate one declared key against *container*.

    A missing required key gives a ``MissingKeyError`` without running the
    key's type; a missing optional key gives an empty list.
    """
    if not present(container, key.path):
        if key.required:
            return Err(MissingKeyError(key.path))
        return []

    result = validator.validate(key.type, get_in(container, key.path))
    if isinstance(result, Ok):
        return Ok(Keyed(key.path, result.value))
    return Err(Keyed(key.path, result.error))
