"""Spec data model, schema and parsing."""

from .project_spec import (
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
)

__all__ = [
    "Build",
    "BuildAction",
    "BuildScript",
    "BuildTarget",
    "Config",
    "ConfigType",
    "Dependency",
    "DependencyType",
    "ProjectSpec",
    "Scheme",
    "ScriptSource",
    "Settings",
    "SpecOptions",
    "Target",
    "TargetScheme",
]
