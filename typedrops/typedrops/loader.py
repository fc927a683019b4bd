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

"""Load schemas from YAML documents.

A schema document looks like::

    typedrops_schema_format: 0.1.0
    name: user
    atomize: true
    schema:
      map:
        - key: name
          type: {primitive: string, predicates: [filled]}
        - key: [address, city]
          presence: optional
          type: string
        - key: tags
          type: {list: string, predicates: [{max_size: 5}]}

Predicate names may leave off the trailing ``?`` (``filled`` for ``filled?``),
which keeps them plain scalars inside YAML flow collections.

The document structure is checked against a bundled JSON Schema, then
converted to a spec tuple and compiled. Compiled schemas are cached per
file and atomize setting.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import jsonschema
import yaml

from .config import typedrops_config
from .exceptions import FormatVersionError, SchemaLoadError
from .format_version import check_format_version
from .messages import SchemaIssue, format_issues
from .predicates.registry import PredicateRegistry
from .types.compiler import compile_schema
from .types.nodes import CompileOptions, TypeNode

logger = logging.getLogger(__name__)

DOCUMENT_SCHEMA_PATH = Path(__file__).parent / "schema" / "document_v0.1.json"

# Schema cache to avoid recompiling files
_SCHEMA_CACHE: Dict[Tuple[Path, bool], "LoadedSchema"] = {}
_DOCUMENT_SCHEMA: Optional[dict] = None


@dataclass(frozen=True)
class LoadedSchema:
    name: str
    node: TypeNode
    source: Optional[Path] = None


def document_schema() -> dict:
    """Return the JSON Schema for schema documents (loaded once)."""
    global _DOCUMENT_SCHEMA
    if _DOCUMENT_SCHEMA is None:
        with open(DOCUMENT_SCHEMA_PATH, "r", encoding="utf-8") as f:
            _DOCUMENT_SCHEMA = json.load(f)
    return _DOCUMENT_SCHEMA


def check_document(document: Any) -> List[SchemaIssue]:
    """Return structural issues of a schema document (empty when well-formed)."""
    if not isinstance(document, dict):
        return [SchemaIssue(message="Root must be a mapping/object", yaml_path="")]

    validator = jsonschema.Draft7Validator(document_schema())
    found = []
    for error in sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path]):
        path = "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""
        found.append(SchemaIssue(message=error.message, yaml_path=path))
    return found


def spec_from_document(node: Any) -> Tuple:
    """Convert the ``schema`` part of a document into a spec tuple."""
    if isinstance(node, str):
        return ("primitive", node)

    predicates = [_predicate_from_document(p) for p in node.get("predicates", [])]

    if "primitive" in node:
        return ("primitive", node["primitive"], predicates)
    if "list" in node:
        return ("list", spec_from_document(node["list"]), predicates)
    if "map" in node:
        keys = {}
        for entry in node["map"]:
            key = entry["key"]
            path = tuple(key) if isinstance(key, list) else key
            keys[(entry.get("presence", "required"), path)] = spec_from_document(entry["type"])
        return ("map", keys, predicates)
    if "union" in node:
        return ("union", [spec_from_document(alt) for alt in node["union"]], predicates)

    raise SchemaLoadError(f"Unrecognized schema node: {node!r}")


def _predicate_name(name: str) -> str:
    return name if name.endswith("?") else f"{name}?"


def _predicate_from_document(predicate: Any) -> Any:
    if isinstance(predicate, str):
        return _predicate_name(predicate)
    (name, args), = predicate.items()
    if name == "and":
        return ("and", [_predicate_from_document(p) for p in args])
    return (_predicate_name(name), args)


def load_schema_string(
    content: str,
    *,
    registry: Optional[PredicateRegistry] = None,
    atomize: Optional[bool] = None,
    source: Optional[Path] = None,
) -> LoadedSchema:
    """Parse, check and compile a schema document from YAML text.

    Raises:
        SchemaLoadError: Unparseable YAML or a malformed document.
        FormatVersionError: Incompatible ``typedrops_schema_format``.
        ConfigurationError: The schema compiles to an invalid tree (e.g. unknown predicate).
    """
    where = source or "<string>"
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise SchemaLoadError(f"Failed to parse YAML schema {where}: {exc}") from exc

    found = check_document(document)
    if found:
        raise SchemaLoadError(f"Schema document validation failed for {where}:\n{format_issues(found)}")

    version = check_format_version(document.get("typedrops_schema_format"))
    if not version.compatible:
        raise FormatVersionError(f"{where}: {version.message}")
    if version.minor_newer or version.file_version is None:
        logger.warning(f"{where}: {version.message}")

    if atomize is None:
        atomize = document.get("atomize", typedrops_config.atomize)

    node = compile_schema(
        spec_from_document(document["schema"]),
        CompileOptions(atomize=atomize),
        registry=registry,
    )
    logger.debug(f"Compiled schema '{document['name']}' from {where}")
    return LoadedSchema(name=document["name"], node=node, source=source)


def load_schema_file(
    file_path: Union[str, Path],
    *,
    registry: Optional[PredicateRegistry] = None,
    atomize: Optional[bool] = None,
) -> LoadedSchema:
    """Load and compile a schema document file, using the cache when enabled.

    Schemas compiled with a custom *registry* are not cached.
    """
    path = Path(file_path).resolve()
    cache_key = (path, atomize)
    use_cache = typedrops_config.cache_enabled and registry is None

    if use_cache and cache_key in _SCHEMA_CACHE:
        logger.debug(f"Loading schema from cache: {path}")
        return _SCHEMA_CACHE[cache_key]

    if not path.is_file():
        raise SchemaLoadError(f"Schema file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaLoadError(f"Failed to read schema file {path}: {exc}") from exc

    loaded = load_schema_string(content, registry=registry, atomize=atomize, source=path)
    if use_cache:
        _SCHEMA_CACHE[cache_key] = loaded
    return loaded


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
