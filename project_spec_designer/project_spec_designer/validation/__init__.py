"""Spec integrity validation."""

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
from .spec_validator import PathExists, SpecValidator, default_path_exists, find_defects, validate

__all__ = [
    "Defect",
    "InvalidBuildScriptPath",
    "InvalidBuildSettingConfig",
    "InvalidConfigFile",
    "InvalidConfigFileConfig",
    "InvalidFileGroup",
    "InvalidSchemeConfig",
    "InvalidSchemeTarget",
    "InvalidSettingsGroup",
    "InvalidTargetConfigFile",
    "InvalidTargetDependency",
    "InvalidTargetSchemeConfigVariant",
    "InvalidTargetSchemeTest",
    "MissingConfigTypeForGeneratedTargetScheme",
    "MissingTargetSource",
    "PathExists",
    "SpecValidator",
    "default_path_exists",
    "find_defects",
    "validate",
]
