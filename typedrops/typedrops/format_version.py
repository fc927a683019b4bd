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

"""Format version utilities for schema documents.

The ``typedrops_schema_format`` field in a YAML schema document declares
which document version it conforms to (e.g. ``0.1.0``).

Compatibility rule (semver-like):
  * **Major** must match exactly - a mismatch is an error that stops loading.
  * **Minor** of the document newer than the library → warning.
  * **Patch** is ignored for compatibility purposes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .exceptions import FormatVersionError

SCHEMA_FORMAT_VERSION = "0.1.0"

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True)
class SemanticVersion:
    """A parsed semantic version (major, minor, patch)."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_format_version(raw: str) -> SemanticVersion:
    """Parse a version string like ``0.1.0`` (with or without 'v' prefix).

    Raises:
        FormatVersionError: If the string cannot be parsed.
    """
    if not isinstance(raw, str):
        raise FormatVersionError(
            f"Format version must be a string, got {type(raw).__name__}: {raw!r}"
        )

    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise FormatVersionError(
            f"Invalid format version string: '{raw}'. "
            "Expected 'MAJOR.MINOR.PATCH' (e.g. '0.1.0')."
        )
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)))


@dataclass(frozen=True)
class VersionCheckResult:
    """Result of a format-version compatibility check."""

    compatible: bool
    message: str
    file_version: Optional[SemanticVersion] = None
    minor_newer: bool = False


def check_format_version(raw_version: Optional[str]) -> VersionCheckResult:
    """Check whether *raw_version* can be loaded by this library.

    * Missing version → compatible, message suggests adding one.
    * Major mismatch → incompatible.
    * Document minor > library minor → compatible with ``minor_newer=True``.
    """
    supported = parse_format_version(SCHEMA_FORMAT_VERSION)

    if raw_version is None:
        return VersionCheckResult(
            compatible=True,
            message=(
                f"Missing 'typedrops_schema_format' field. "
                f"Consider adding 'typedrops_schema_format: {supported}'."
            ),
        )

    try:
        file_ver = parse_format_version(raw_version)
    except FormatVersionError as exc:
        return VersionCheckResult(compatible=False, message=str(exc))

    if file_ver.major != supported.major:
        return VersionCheckResult(
            compatible=False,
            message=(
                f"Incompatible format version: document declares {file_ver} "
                f"but this library supports major version {supported.major} "
                f"(supported: {supported})."
            ),
            file_version=file_ver,
        )

    if file_ver.minor > supported.minor:
        return VersionCheckResult(
            compatible=True,
            minor_newer=True,
            message=(
                f"Format version {file_ver} has a newer minor version than "
                f"the supported {supported}. Some features may not be supported."
            ),
            file_version=file_ver,
        )

    return VersionCheckResult(
        compatible=True,
        message=f"Format version {file_ver} is compatible (supported: {supported}).",
        file_version=file_ver,
    )
