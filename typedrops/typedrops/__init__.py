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

"""Runtime schema validation.

Compile a spec once, then validate any number of inputs against it::

    from typedrops import compile_schema, validate

    user = compile_schema(("map", {("required", "name"): ("primitive", "string")}))
    validate(user, {"name": "Jane"})
"""

from .exceptions import (
    ConfigurationError,
    FormatVersionError,
    SchemaLoadError,
    SpecCompileError,
    TypeDropsError,
    UnknownPredicateError,
)
from .predicates.registry import PredicateRegistry, default_registry
from .results import Aggregate, Alternative, Err, Keyed, MissingKeyError, Ok, PredicateError, output
from .types.compiler import compile_schema, refine
from .types.nodes import (
    And,
    CompileOptions,
    ListType,
    MapKey,
    MapType,
    Predicate,
    Primitive,
    Symbol,
    UnionType,
)
from .types.validator import validate

__version__ = "0.1.0"

__all__ = [
    "Aggregate",
    "Alternative",
    "And",
    "CompileOptions",
    "ConfigurationError",
    "Err",
    "FormatVersionError",
    "Keyed",
    "ListType",
    "MapKey",
    "MapType",
    "MissingKeyError",
    "Ok",
    "Predicate",
    "PredicateError",
    "PredicateRegistry",
    "Primitive",
    "SchemaLoadError",
    "SpecCompileError",
    "Symbol",
    "TypeDropsError",
    "UnionType",
    "UnknownPredicateError",
    "compile_schema",
    "default_registry",
    "output",
    "refine",
    "validate",
]
