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

"""Human-readable issues from validation errors.

Error values keep the predicate name and its arguments, so messages are
rendered afterwards from per-predicate Jinja2 templates without re-running
anything. Paths are JSON pointers (``/items/2/name``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from jinja2 import Environment, StrictUndefined, Template

from .results import Aggregate, Alternative, Err, Keyed, MissingKeyError, Ok, PredicateError
from .types.map_key import stringify_segment

JsonPointer = str

DEFAULT_TEMPLATES: Dict[str, str] = {
    "type?": (
        "{% if arg is string and arg %}must be {{ 'an' if arg[0] in 'aeiou' else 'a' }} {{ arg }}"
        "{% else %}must be of type {{ arg }}{% endif %}"
    ),
    "filled?": "must be filled",
    "empty?": "must be empty",
    "eql?": "must be equal to {{ arg }}",
    "not_eql?": "must not be equal to {{ arg }}",
    "gt?": "must be greater than {{ arg }}",
    "gteq?": "must be greater than or equal to {{ arg }}",
    "lt?": "must be less than {{ arg }}",
    "lteq?": "must be less than or equal to {{ arg }}",
    "size?": (
        "{% if arg is sequence and arg is not string %}size must be within {{ arg[0] }} - {{ arg[1] }}"
        "{% else %}size must be {{ arg }}{% endif %}"
    ),
    "min_size?": "size cannot be less than {{ arg }}",
    "max_size?": "size cannot be greater than {{ arg }}",
    "includes?": "must include {{ arg }}",
    "excludes?": "must not include {{ arg }}",
    "included_in?": "must be one of: {{ arg | join(', ') if arg is sequence and arg is not string else arg }}",
    "excluded_from?": "must not be one of: {{ arg | join(', ') if arg is sequence and arg is not string else arg }}",
    "format?": "has invalid format",
    "odd?": "must be odd",
    "even?": "must be even",
    "true?": "must be true",
    "false?": "must be false",
    "nil?": "must be nil",
    "none?": "must be nil",
    "string?": "must be a string",
    "integer?": "must be an integer",
    "float?": "must be a float",
    "number?": "must be a number",
    "boolean?": "must be boolean",
    "list?": "must be a list",
    "map?": "must be a map",
}

FALLBACK_TEMPLATE = "failed {{ predicate }} check"
MISSING_KEY_MESSAGE = "is missing"


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _join_path(base: Optional[JsonPointer], tokens: Iterable[Any]) -> JsonPointer:
    path = base or ""
    for token in tokens:
        path = f"{path}/{_jp_escape(str(stringify_segment(token)))}"
    return path


class MessageRenderer:
    """Renders predicate failures with Jinja2 templates."""

    def __init__(self, templates: Optional[Mapping[str, str]] = None):
        self.env = Environment(autoescape=False, undefined=StrictUndefined, keep_trailing_newline=False)
        self.templates = dict(DEFAULT_TEMPLATES)
        if templates:
            self.templates.update(templates)
        self._compiled: Dict[str, Template] = {}

    def _template(self, predicate: str) -> Template:
        if predicate not in self._compiled:
            source = self.templates.get(predicate, FALLBACK_TEMPLATE)
            self._compiled[predicate] = self.env.from_string(source)
        return self._compiled[predicate]

    def render(self, error: PredicateError) -> str:
        # the input itself is always the last argument
        args = list(error.args[:-1])
        return self._template(error.predicate).render(
            input=error.input,
            predicate=error.predicate,
            args=args,
            arg=args[0] if args else None,
        )

    def issues(self, result: Any, path: JsonPointer = "") -> List[SchemaIssue]:
        """Flatten *result* into issues, in the order the errors occur."""
        if isinstance(result, Ok):
            return []
        error = result.error if isinstance(result, Err) else result

        if isinstance(error, PredicateError):
            return [SchemaIssue(message=self.render(error), yaml_path=path)]

        if isinstance(error, MissingKeyError):
            return [SchemaIssue(message=MISSING_KEY_MESSAGE, yaml_path=_join_path(path, error.path))]

        if isinstance(error, Keyed):
            return self.issues(Err(error.value), _join_path(path, error.path))

        if isinstance(error, Aggregate):
            found: List[SchemaIssue] = []
            for idx, member in enumerate(error.results):
                if isinstance(member, Ok):
                    continue
                member_path = _join_path(path, [idx]) if error.kind == "list" else path
                found.extend(self.issues(member, member_path))
            return found

        if isinstance(error, Alternative):
            return [self._alternative_issue(error, path)]

        return [SchemaIssue(message=f"invalid value: {error!r}", yaml_path=path)]

    def _alternative_issue(self, error: Alternative, path: JsonPointer) -> SchemaIssue:
        parts = []
        for branch in (error.left, error.right):
            branch_issues = self.issues(branch, path)
            parts.append("; ".join(
                i.message if i.yaml_path == path else f"{i.yaml_path} {i.message}"
                for i in branch_issues
            ))
        return SchemaIssue(message=" or ".join(parts), yaml_path=path)


_default_renderer = MessageRenderer()


def issues(result: Any, renderer: Optional[MessageRenderer] = None) -> List[SchemaIssue]:
    return (renderer or _default_renderer).issues(result)


def format_issues(found: Iterable[SchemaIssue]) -> str:
    return "\n".join(
        f"  - {i.message}" + (f" (yaml_path={i.yaml_path})" if i.yaml_path else "")
        for i in found
    )
