# Copyright 2025 TIER IV, inc.
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

"""Minimum tool version handling for project spec files.

A spec may declare ``options.minimumVersion`` (e.g. ``0.2.0``) to state the
oldest release of this tool that understands it.

Compatibility rule:
  * Missing declaration - compatible.
  * Declared version newer than the running tool - incompatible, loading stops.
  * Unparsable declaration - incompatible.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .. import TOOL_VERSION
from ..exceptions import FormatVersionError


# ---- version string → tuple ------------------------------------------------

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)(?:\.(\d+))?$")


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """A parsed semantic version (major, minor, patch)."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(raw: str) -> SemanticVersion:
    """Parse a version string like ``0.2.0`` or ``0.2`` (with or without 'v' prefix).

    Numbers are rejected; YAML has already lost trailing zeros from them.

    Raises:
        FormatVersionError: If the string cannot be parsed.
    """
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        # YAML reads an unquoted ``0.10`` as the float 0.1
        raise FormatVersionError(
            f"Version must be a quoted string, got number {raw!r}. "
            "Quote it (e.g. minimumVersion: \"0.10.0\") so YAML keeps it as text."
        )
    if not isinstance(raw, str):
        raise FormatVersionError(
            f"Version must be a string, got {type(raw).__name__}: {raw!r}"
        )

    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise FormatVersionError(
            f"Invalid version string: '{raw}'. "
            "Expected 'MAJOR.MINOR.PATCH' (e.g. '0.2.0')."
        )
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))


def get_tool_version() -> SemanticVersion:
    return parse_version(TOOL_VERSION)


@dataclass(frozen=True)
class VersionCheckResult:
    """Result of a minimum-version check."""

    compatible: bool
    message: str
    required_version: Optional[SemanticVersion] = None
    tool_version: Optional[SemanticVersion] = None


def check_minimum_version(raw_version, tool_version: Optional[str] = None) -> VersionCheckResult:
    """Check whether the running tool satisfies a spec's ``minimumVersion``."""
    tool = parse_version(tool_version) if tool_version is not None else get_tool_version()

    if raw_version is None:
        return VersionCheckResult(
            compatible=True,
            message="No minimum version declared.",
            tool_version=tool,
        )

    try:
        required = parse_version(raw_version)
    except FormatVersionError as exc:
        return VersionCheckResult(compatible=False, message=str(exc), tool_version=tool)

    if tool < required:
        return VersionCheckResult(
            compatible=False,
            message=(
                f"Spec requires project_spec_designer {required} or newer "
                f"but this is version {tool}."
            ),
            required_version=required,
            tool_version=tool,
        )

    return VersionCheckResult(
        compatible=True,
        message=f"Version {tool} satisfies minimum version {required}.",
        required_version=required,
        tool_version=tool,
    )
