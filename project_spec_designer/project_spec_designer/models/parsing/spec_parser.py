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

"""Build a ``ProjectSpec`` from the mapping loaded out of a spec YAML file."""

from typing import Any, Dict, List, Optional, Union
from pathlib import Path
import logging

from .yaml_parser import yaml_parser
from ..project_spec import (
    Build,
    BuildAction,
    BuildScript,
    BuildTarget,
    Config,
    ConfigType,
    Dependency,
    DependencyType,
    ProjectSpec,
    Scheme,
    ScriptSource,
    Settings,
    SpecOptions,
    Target,
    TargetScheme,
    default_configs,
)
from ..spec_schema import validate_against_schema
from ...utils.format_version import check_minimum_version
from ...exceptions import FormatVersionError, SpecParsingError

logger = logging.getLogger(__name__)

# Keys that mark a settings mapping as structured rather than plain build settings
_SETTINGS_KEYS = ("base", "groups", "configs")


def _expect(value: Any, expected: type, where: str) -> Any:
    if not isinstance(value, expected):
        raise SpecParsingError(
            f"'{where}' must be of type {expected.__name__}, got {type(value).__name__}"
        )
    return value


class SpecParser:
    """Parser turning raw spec mappings into ``ProjectSpec`` graphs.

    The parser only shapes data; it never checks whether referenced names or
    paths exist.
    """

    def __init__(self, check_schema: bool = True):
        self.check_schema = check_schema

    def parse_spec_file(self, spec_path: Union[str, Path]) -> ProjectSpec:
        """Load, check and parse a spec file. The base path is the file's directory."""
        file_path = Path(spec_path)
        data = yaml_parser.load_config(file_path)

        options = data.get("options") or {}
        version_result = check_minimum_version(
            options.get("minimumVersion") if isinstance(options, dict) else None
        )
        if not version_result.compatible:
            raise FormatVersionError(f"{version_result.message} File: {file_path}")

        if self.check_schema:
            issues = validate_against_schema(data)
            if issues:
                details = "\n".join(f"  - {issue.message} ({issue.yaml_path or '/'})" for issue in issues)
                raise SpecParsingError(f"Schema validation failed for {file_path}:\n{details}")

        return self.parse(data, base_path=file_path.parent, default_name=file_path.parent.name)

    def parse(self, data: Dict[str, Any], base_path: Union[str, Path] = ".", default_name: str = "") -> ProjectSpec:
        _expect(data, dict, "spec")
        name = data.get("name") or default_name

        spec = ProjectSpec(
            name=str(name),
            base_path=Path(base_path),
            configs=self._parse_configs(data.get("configs")),
            setting_groups=self._parse_setting_groups(data),
            settings=self.parse_settings(data.get("settings"), "settings"),
            targets=self._parse_targets(data.get("targets")),
            schemes=self._parse_schemes(data.get("schemes")),
            file_groups=[str(g) for g in _expect(data.get("fileGroups") or [], list, "fileGroups")],
            config_files=self._parse_config_files(data.get("configFiles"), "configFiles"),
            options=SpecOptions(
                minimum_version=_expect(data.get("options") or {}, dict, "options").get("minimumVersion"),
            ),
        )
        logger.debug(
            f"Parsed spec '{spec.name}' with {len(spec.configs)} configs, "
            f"{len(spec.targets)} targets and {len(spec.schemes)} schemes"
        )
        return spec

    @staticmethod
    def _parse_configs(raw: Optional[Dict[str, Any]]) -> List[Config]:
        if raw is None:
            return default_configs()
        _expect(raw, dict, "configs")
        configs = []
        for config_name, config_type in raw.items():
            if config_type not in ConfigType.get_all_types():
                raise SpecParsingError(
                    f"Config '{config_name}' has invalid type '{config_type}'. "
                    f"Valid types: {ConfigType.get_all_types()}"
                )
            configs.append(Config(str(config_name), ConfigType(config_type)))
        return configs

    def parse_settings(self, raw: Optional[Dict[str, Any]], where: str) -> Settings:
        if raw is None:
            return Settings()
        _expect(raw, dict, where)

        if not any(key in raw for key in _SETTINGS_KEYS):
            return Settings(build_settings=dict(raw))

        groups = _expect(raw.get("groups") or [], list, f"{where}.groups")
        config_settings = {
            str(config): self.parse_settings(value or {}, f"{where}.configs.{config}")
            for config, value in _expect(raw.get("configs") or {}, dict, f"{where}.configs").items()
        }
        return Settings(
            build_settings=dict(_expect(raw.get("base") or {}, dict, f"{where}.base")),
            groups=[str(g) for g in groups],
            config_settings=config_settings,
        )

    def _parse_setting_groups(self, data: Dict[str, Any]) -> Dict[str, Settings]:
        raw = data.get("settingGroups")
        if raw is None:
            # legacy key
            raw = data.get("settingPresets")
        raw = _expect(raw or {}, dict, "settingGroups")
        return {
            str(group): self.parse_settings(value or {}, f"settingGroups.{group}")
            for group, value in raw.items()
        }

    @staticmethod
    def _parse_config_files(raw: Optional[Dict[str, Any]], where: str) -> Dict[str, str]:
        raw = _expect(raw or {}, dict, where)
        return {str(config): str(path) for config, path in raw.items()}

    @staticmethod
    def _parse_sources(raw: Any, where: str) -> List[str]:
        if raw is None:
            return []
        if isinstance(raw, str):
            return [raw]
        sources = []
        for item in _expect(raw, list, where):
            if isinstance(item, str):
                sources.append(item)
            elif isinstance(item, dict) and "path" in item:
                sources.append(str(item["path"]))
            else:
                raise SpecParsingError(f"Invalid source entry in '{where}': {item!r}")
        return sources

    @staticmethod
    def _parse_dependency(raw: Any, where: str) -> Dependency:
        _expect(raw, dict, where)
        for dependency_type in DependencyType:
            if dependency_type.value in raw:
                return Dependency(dependency_type, str(raw[dependency_type.value]))
        raise SpecParsingError(
            f"Dependency in '{where}' must have one of the keys {DependencyType.get_all_types()}"
        )

    @staticmethod
    def _parse_scripts(raw: Any, where: str) -> List[BuildScript]:
        scripts = []
        for item in _expect(raw or [], list, where):
            _expect(item, dict, where)
            name = item.get("name")
            if "path" in item:
                source = ScriptSource.path(str(item["path"]))
            elif "script" in item:
                source = ScriptSource.inline(str(item["script"]))
            else:
                raise SpecParsingError(f"Build script in '{where}' needs either 'path' or 'script'")
            scripts.append(BuildScript(script=source, name=str(name) if name is not None else None))
        return scripts

    def _parse_target(self, name: str, raw: Dict[str, Any]) -> Target:
        where = f"targets.{name}"
        _expect(raw, dict, where)

        scheme = None
        if raw.get("scheme") is not None:
            raw_scheme = _expect(raw["scheme"], dict, f"{where}.scheme")
            scheme = TargetScheme(
                config_variants=[str(v) for v in raw_scheme.get("configVariants") or []],
                test_targets=[str(t) for t in raw_scheme.get("testTargets") or []],
            )

        return Target(
            name=name,
            type=str(raw.get("type", "")),
            platform=str(raw.get("platform", "")),
            sources=self._parse_sources(raw.get("sources"), f"{where}.sources"),
            dependencies=[
                self._parse_dependency(dep, f"{where}.dependencies")
                for dep in _expect(raw.get("dependencies") or [], list, f"{where}.dependencies")
            ],
            config_files=self._parse_config_files(raw.get("configFiles"), f"{where}.configFiles"),
            scheme=scheme,
            prebuild_scripts=self._parse_scripts(raw.get("prebuildScripts"), f"{where}.prebuildScripts"),
            postbuild_scripts=self._parse_scripts(raw.get("postbuildScripts"), f"{where}.postbuildScripts"),
            settings=self.parse_settings(raw.get("settings"), f"{where}.settings"),
        )

    def _parse_targets(self, raw: Optional[Dict[str, Any]]) -> List[Target]:
        raw = _expect(raw or {}, dict, "targets")
        return [self._parse_target(str(name), value or {}) for name, value in raw.items()]

    @staticmethod
    def _parse_build_targets(raw: Any, where: str) -> List[BuildTarget]:
        raw = _expect(raw or {}, dict, where)
        build_targets = []
        for target_name, build_types in raw.items():
            if isinstance(build_types, str):
                build_types = [build_types]
            elif not isinstance(build_types, list):
                raise SpecParsingError(f"Build types of '{where}.{target_name}' must be a string or list")
            build_targets.append(BuildTarget(str(target_name), [str(b) for b in build_types]))
        return build_targets

    def _parse_scheme(self, name: str, raw: Dict[str, Any]) -> Scheme:
        where = f"schemes.{name}"
        _expect(raw, dict, where)
        build = _expect(raw.get("build") or {}, dict, f"{where}.build")

        actions: Dict[str, Optional[BuildAction]] = {}
        for action_name in Scheme.ACTION_NAMES:
            raw_action = raw.get(action_name)
            if raw_action is None:
                actions[action_name] = None
                continue
            _expect(raw_action, dict, f"{where}.{action_name}")
            if "config" not in raw_action:
                raise SpecParsingError(f"'{where}.{action_name}' is missing required field 'config'")
            actions[action_name] = BuildAction(config=str(raw_action["config"]))

        return Scheme(
            name=name,
            build=Build(targets=self._parse_build_targets(build.get("targets"), f"{where}.build.targets")),
            **actions,
        )

    def _parse_schemes(self, raw: Optional[Dict[str, Any]]) -> List[Scheme]:
        raw = _expect(raw or {}, dict, "schemes")
        return [self._parse_scheme(str(name), value or {}) for name, value in raw.items()]


def parse_spec_file(spec_path: Union[str, Path], check_schema: bool = True) -> ProjectSpec:
    """Load and parse a spec file into a ``ProjectSpec``."""
    return SpecParser(check_schema=check_schema).parse_spec_file(spec_path)
