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

"""Custom exceptions for typedrops.

Only configuration problems are raised. Bad input data is never an exception:
validation failures are returned as ``Err`` values.
"""


class TypeDropsError(Exception):
    """Base exception for typedrops related errors."""
    pass


class ConfigurationError(TypeDropsError):
    """Exception raised when a schema itself is wrong (a programming mistake)."""
    pass


class UnknownPredicateError(ConfigurationError):
    """Exception raised when a predicate name is not found in the registry."""

    def __init__(self, name: str, available=()):
        self.name = name
        message = f"Unknown predicate: '{name}'"
        if available:
            message += f". Known predicates: {', '.join(sorted(available))}"
        super().__init__(message)


class SpecCompileError(ConfigurationError):
    """Exception raised for malformed specs (unknown tags, duplicate keys, bad options)."""
    pass


class SchemaLoadError(TypeDropsError):
    """Exception raised when a schema document cannot be read or is malformed."""
    pass


class FormatVersionError(SchemaLoadError):
    """Exception raised when a schema document's format version is incompatible."""
    pass
