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

"""Custom exceptions for the project spec designer."""

from typing import List


class ProjectSpecError(Exception):
    """Base exception for project-spec related errors."""
    pass


class SpecParsingError(ProjectSpecError):
    """Exception raised when a spec file cannot be read or has an invalid shape."""
    pass


class ValidationError(ProjectSpecError):
    """Exception raised for validation errors."""
    pass


class FormatVersionError(ValidationError):
    """Exception raised when a spec requires a newer tool version or declares an unparsable one."""
    pass


class SpecValidationError(ValidationError):
    """Raised when a spec has one or more integrity defects.

    Carries every defect found in a single validation pass, in discovery order.
    """

    def __init__(self, defects: List["Defect"]):  # noqa: F821
        self.defects = list(defects)
        super().__init__(self._render())

    def _render(self) -> str:
        if len(self.defects) == 1:
            title = "Spec validation error: "
        else:
            title = f"{len(self.defects)} spec validation errors:\n\t- "
        return title + "\n\t- ".join(defect.description for defect in self.defects)
