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

"""Referential integrity checks for a parsed project spec.

Every name and path the spec refers to is resolved once; each failure
becomes a defect and no single failure stops the pass.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..exceptions import SpecValidationError
from ..models.project_spec import Config, ConfigType, DependencyType, ProjectSpec, ScriptSource, Settings, Target
from .defects import (
    Defect,
    InvalidBuildScriptPath,
    InvalidBuildSettingConfig,
    InvalidConfigFile,
    InvalidConfigFileConfig,
    InvalidFileGroup,
    InvalidSchemeConfig,
    InvalidSchemeTarget,
    InvalidSettingsGroup,
    InvalidTargetConfigFile,
    InvalidTargetDependency,
    InvalidTargetSchemeConfigVariant,
    InvalidTargetSchemeTest,
    MissingConfigTypeForGeneratedTargetScheme,
    MissingTargetSource,
)

logger = logging.getLogger(__name__)

PathExists = Callable[[Path, str], bool]


def default_path_exists(base_path: Union[str, Path], relative_path: str) -> bool:
    """Return True if ``relative_path`` joined to ``base_path`` exists (file or directory).

    Any failure to stat the path, permission errors included, counts as missing.
    """
    return os.path.exists(Path(base_path) / relative_path)


class SpecValidator:
    """Single read-only pass over a ``ProjectSpec`` collecting defects."""

    def __init__(self, spec: ProjectSpec, path_exists: Optional[PathExists] = None):
        self.spec = spec
        self.path_exists = path_exists or default_path_exists
        self._targets: Dict[str, Target] = {t.name: t for t in spec.targets}
        self._configs: Dict[str, Config] = {c.name: c for c in spec.configs}

    def _exists(self, relative_path: str) -> bool:
        return self.path_exists(self.spec.base_path, relative_path)

    def _has_config_containing(self, fragment: str, config_type: ConfigType) -> bool:
        return any(fragment in c.name and c.type == config_type for c in self.spec.configs)

    def _has_config_type(self, config_type: ConfigType) -> bool:
        return any(c.type == config_type for c in self.spec.configs)

    def _check_settings(self, settings: Settings, visiting: Tuple[str, ...] = ()) -> List[Defect]:
        defects: List[Defect] = []
        for group in settings.groups:
            group_settings = self.spec.setting_groups.get(group)
            if group_settings is None:
                defects.append(InvalidSettingsGroup(group))
            elif group in visiting:
                logger.warning(
                    f"Possible circular settings group reference: {' -> '.join(visiting + (group,))}"
                )
            else:
                defects.extend(self._check_settings(group_settings, visiting + (group,)))

        for config in settings.config_settings:
            if not any(config.lower() in c.name.lower() for c in self.spec.configs):
                defects.append(InvalidBuildSettingConfig(config))
        return defects

    def _check_config_files(self, config_files: Dict[str, str], target: Optional[str] = None) -> List[Defect]:
        defects: List[Defect] = []
        for config, config_file in config_files.items():
            if not self._exists(config_file):
                if target is None:
                    defects.append(InvalidConfigFile(config_file=config_file, config=config))
                else:
                    defects.append(InvalidTargetConfigFile(target=target, config_file=config_file, config=config))
            if config not in self._configs:
                defects.append(InvalidConfigFileConfig(config))
        return defects

    def _check_target(self, target: Target) -> List[Defect]:
        defects: List[Defect] = []

        for dependency in target.dependencies:
            if dependency.type == DependencyType.TARGET and dependency.reference not in self._targets:
                defects.append(InvalidTargetDependency(target=target.name, dependency=dependency.reference))

        defects.extend(self._check_config_files(target.config_files, target=target.name))

        for source in target.sources:
            if not self._exists(source):
                source_path = Path(self.spec.base_path) / source
                defects.append(MissingTargetSource(target=target.name, source=str(source_path)))

        scheme = target.scheme
        if scheme is not None:
            for variant in scheme.config_variants:
                for config_type in (ConfigType.DEBUG, ConfigType.RELEASE):
                    if not self._has_config_containing(variant, config_type):
                        defects.append(
                            InvalidTargetSchemeConfigVariant(
                                target=target.name, config_variant=variant, config_type=config_type
                            )
                        )

            if not scheme.config_variants:
                for config_type in (ConfigType.DEBUG, ConfigType.RELEASE):
                    if not self._has_config_type(config_type):
                        defects.append(
                            MissingConfigTypeForGeneratedTargetScheme(target=target.name, config_type=config_type)
                        )

            for test_target in scheme.test_targets:
                if test_target not in self._targets:
                    defects.append(InvalidTargetSchemeTest(target=target.name, test_target=test_target))

        for script in target.prebuild_scripts + target.postbuild_scripts:
            if script.script.kind == ScriptSource.PATH and not self._exists(script.script.value):
                defects.append(
                    InvalidBuildScriptPath(target=target.name, script_name=script.name, path=script.script.value)
                )

        defects.extend(self._check_settings(target.settings))
        return defects

    def find_defects(self) -> List[Defect]:
        spec = self.spec
        defects: List[Defect] = []

        defects.extend(self._check_settings(spec.settings))

        for file_group in spec.file_groups:
            if not self._exists(file_group):
                defects.append(InvalidFileGroup(file_group))

        defects.extend(self._check_config_files(spec.config_files))

        for group_name, group_settings in spec.setting_groups.items():
            defects.extend(self._check_settings(group_settings, (group_name,)))

        for target in spec.targets:
            defects.extend(self._check_target(target))

        for scheme in spec.schemes:
            for build_target in scheme.build.targets:
                if build_target.target not in self._targets:
                    defects.append(InvalidSchemeTarget(scheme=scheme.name, target=build_target.target))
            for _, action in scheme.actions():
                if action.config not in self._configs:
                    defects.append(InvalidSchemeConfig(scheme=scheme.name, config=action.config))

        logger.debug(
            f"Validated spec '{spec.name}': {len(spec.targets)} targets, "
            f"{len(spec.schemes)} schemes, {len(defects)} defects"
        )
        return defects


def find_defects(spec: ProjectSpec, path_exists: Optional[PathExists] = None) -> List[Defect]:
    """Return every defect in ``spec``; an empty list means the spec is consistent."""
    return SpecValidator(spec, path_exists).find_defects()


def validate(spec: ProjectSpec, path_exists: Optional[PathExists] = None) -> None:
    """Validate ``spec``.

    Raises:
        SpecValidationError: carrying all defects, if any were found.
    """
    defects = find_defects(spec, path_exists)
    if defects:
        raise SpecValidationError(defects)
