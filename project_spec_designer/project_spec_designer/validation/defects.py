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

"""Defect kinds reported by the spec validator.

Each defect is a frozen dataclass carrying the names and paths needed to
render a message. ``yaml_path`` points at the spec element the defect is
about so reporters can look up a source line.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from ..models.project_spec import ConfigType


def _quoted(value: str) -> str:
    return f'"{value}"'


def _jp(*tokens: str) -> str:
    return "".join("/" + str(t).replace("~", "~0").replace("/", "~1") for t in tokens)


@dataclass(frozen=True)
class Defect:
    """Base class of all defects."""

    kind: ClassVar[str] = "defect"

    @property
    def description(self) -> str:
        raise NotImplementedError

    @property
    def yaml_path(self) -> str:
        return ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            data[f.name] = value.value if isinstance(value, ConfigType) else value
        data["message"] = self.description
        return data

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class InvalidTargetDependency(Defect):
    target: str
    dependency: str

    kind: ClassVar[str] = "invalid_target_dependency"

    @property
    def description(self) -> str:
        return f"Target {_quoted(self.target)} has invalid dependency: {_quoted(self.dependency)}"

    @property
    def yaml_path(self) -> str:
        return _jp("targets", self.target, "dependencies")


@dataclass(frozen=True)
class MissingTargetSource(Defect):
    target: str
    source: str

    kind: ClassVar[str] = "missing_target_source"

    @property
    def description(self) -> str:
        return f"Target {_quoted(self.target)} has a missing source directory {_quoted(self.source)}"

    @property
    def yaml_path(self) -> str:
        return _jp("targets", self.target, "sources")


@dataclass(frozen=True)
class InvalidTargetConfigFile(Defect):
    target: str
    config_file: str
    config: str

    kind: ClassVar[str] = "invalid_target_config_file"

    @property
    def description(self) -> str:
        return (
            f"Target {_quoted(self.target)} has invalid config file {_quoted(self.config_file)} "
            f"for config {_quoted(self.config)}"
        )

    @property
    def yaml_path(self) -> str:
        return _jp("targets", self.target, "configFiles", self.config)


@dataclass(frozen=True)
class InvalidTargetSchemeConfigVariant(Defect):
    target: str
    config_variant: str
    config_type: ConfigType

    kind: ClassVar[str] = "invalid_target_scheme_config_variant"

    @property
    def description(self) -> str:
        return (
            f"Target {_quoted(self.target)} has an invalid scheme config variant which requires "
            f"a config that has a {_quoted(self.config_type.value)} type and contains the name "
            f"{_quoted(self.config_variant)}"
        )

    @property
    def yaml_path(self) -> str:
        return _jp("targets", self.target, "scheme", "configVariants")


@dataclass(frozen=True)
class InvalidTargetSchemeTest(Defect):
    target: str
    test_target: str

    kind: ClassVar[str] = "invalid_target_scheme_test"

    @property
    def description(self) -> str:
        return f"Target {_quoted(self.target)} scheme has invalid test {_quoted(self.test_target)}"

    @property
    def yaml_path(self) -> str:
        return _jp("targets", self.target, "scheme", "testTargets")


@dataclass(frozen=True)
class InvalidSchemeTarget(Defect):
    scheme: str
    target: str

    kind: ClassVar[str] = "invalid_scheme_target"

    @property
    def description(self) -> str:
        return f"Scheme {_quoted(self.scheme)} has invalid build target {_quoted(self.target)}"

    @property
    def yaml_path(self) -> str:
        return _jp("schemes", self.scheme, "build", "targets", self.target)


@dataclass(frozen=True)
class InvalidSchemeConfig(Defect):
    scheme: str
    config: str

    kind: ClassVar[str] = "invalid_scheme_config"

    @property
    def description(self) -> str:
        return f"Scheme {_quoted(self.scheme)} has invalid build configuration {_quoted(self.config)}"

    @property
    def yaml_path(self) -> str:
        return _jp("schemes", self.scheme)


@dataclass(frozen=True)
class InvalidConfigFile(Defect):
    config_file: str
    config: str

    kind: ClassVar[str] = "invalid_config_file"

    @property
    def description(self) -> str:
        return f"Invalid config file {_quoted(self.config_file)} for config {_quoted(self.config)}"

    @property
    def yaml_path(self) -> str:
        return _jp("configFiles", self.config)


@dataclass(frozen=True)
class InvalidBuildSettingConfig(Defect):
    config: str

    kind: ClassVar[str] = "invalid_build_setting_config"

    @property
    def description(self) -> str:
        return f"Build setting has invalid build configuration {_quoted(self.config)}"


@dataclass(frozen=True)
class InvalidSettingsGroup(Defect):
    group: str

    kind: ClassVar[str] = "invalid_settings_group"

    @property
    def description(self) -> str:
        return f"Invalid settings group {_quoted(self.group)}"


@dataclass(frozen=True)
class InvalidBuildScriptPath(Defect):
    target: str
    script_name: Optional[str]
    path: str

    kind: ClassVar[str] = "invalid_build_script_path"

    @property
    def description(self) -> str:
        named = f"{_quoted(self.script_name)} which has a " if self.script_name is not None else ""
        return f"Target {_quoted(self.target)} has a script {named}path that doesn't exist {_quoted(self.path)}"

    @property
    def yaml_path(self) -> str:
        return _jp("targets", self.target)


@dataclass(frozen=True)
class InvalidFileGroup(Defect):
    group: str

    kind: ClassVar[str] = "invalid_file_group"

    @property
    def description(self) -> str:
        return f"Invalid file group {_quoted(self.group)}"

    @property
    def yaml_path(self) -> str:
        return _jp("fileGroups")


@dataclass(frozen=True)
class InvalidConfigFileConfig(Defect):
    config: str

    kind: ClassVar[str] = "invalid_config_file_config"

    @property
    def description(self) -> str:
        return f"Config file has invalid config {_quoted(self.config)}"


@dataclass(frozen=True)
class MissingConfigTypeForGeneratedTargetScheme(Defect):
    target: str
    config_type: ConfigType

    kind: ClassVar[str] = "missing_config_type_for_generated_target_scheme"

    @property
    def description(self) -> str:
        return (
            f"Target {_quoted(self.target)} is missing a config of type "
            f"{self.config_type.value} to generate its scheme"
        )

    @property
    def yaml_path(self) -> str:
        return _jp("targets", self.target, "scheme")
