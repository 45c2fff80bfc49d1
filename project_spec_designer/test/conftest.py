"""
conftest.py
-----------
Shared pytest fixtures for project_spec_designer tests.

Provides:
- A temporary project directory with a few real source files
- A ``make_spec`` factory for building ProjectSpec graphs in code
- A ``write_spec`` helper writing project.yml files
"""
from pathlib import Path

import pytest
import yaml

from project_spec_designer.models.project_spec import (
    Config,
    ConfigType,
    ProjectSpec,
)


# ----- Path Fixtures -----

@pytest.fixture
def project_dir(tmp_path):
    """Project directory containing sources, a config file and a script."""
    (tmp_path / "Sources" / "App").mkdir(parents=True)
    (tmp_path / "Sources" / "App" / "main.swift").write_text("print(1)\n")
    (tmp_path / "Tests").mkdir()
    (tmp_path / "Configs").mkdir()
    (tmp_path / "Configs" / "Debug.xcconfig").write_text("")
    (tmp_path / "Scripts").mkdir()
    (tmp_path / "Scripts" / "lint.sh").write_text("#!/bin/sh\n")
    (tmp_path / "Resources").mkdir()
    return tmp_path


# ----- Spec Factories -----

@pytest.fixture
def make_spec(project_dir):
    """Factory for ProjectSpec instances rooted at ``project_dir``."""

    def _make(**kwargs) -> ProjectSpec:
        kwargs.setdefault("name", "Demo")
        kwargs.setdefault("base_path", project_dir)
        return ProjectSpec(**kwargs)

    return _make


@pytest.fixture
def debug_release():
    return [Config("Debug", ConfigType.DEBUG), Config("Release", ConfigType.RELEASE)]


@pytest.fixture
def write_spec():
    """Write a mapping as ``project.yml`` into a directory and return its path."""

    def _write(directory: Path, data, file_name: str = "project.yml") -> Path:
        path = Path(directory) / file_name
        path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path

    return _write


@pytest.fixture
def valid_spec_data():
    """Raw spec mapping that is consistent with ``project_dir``."""
    return {
        "name": "Demo",
        "configs": {"Debug": "debug", "Release": "release"},
        "settingGroups": {
            "common": {"SWIFT_VERSION": "5.9"},
            "app": {"groups": ["common"], "configs": {"debug": {"OPT": "-Onone"}}},
        },
        "settings": {"groups": ["common"]},
        "fileGroups": ["Resources"],
        "configFiles": {"Debug": "Configs/Debug.xcconfig"},
        "targets": {
            "App": {
                "type": "application",
                "platform": "iOS",
                "sources": ["Sources/App"],
                "dependencies": [{"target": "AppTests"}, {"sdk": "UIKit.framework"}],
                "configFiles": {"Debug": "Configs/Debug.xcconfig"},
                "scheme": {"testTargets": ["AppTests"]},
                "prebuildScripts": [{"path": "Scripts/lint.sh", "name": "Lint"}],
                "postbuildScripts": [{"script": "echo done"}],
                "settings": {"groups": ["app"]},
            },
            "AppTests": {
                "type": "bundle.unit-test",
                "platform": "iOS",
                "sources": "Tests",
            },
        },
        "schemes": {
            "Demo": {
                "build": {"targets": {"App": "all"}},
                "run": {"config": "Debug"},
                "test": {"config": "Debug"},
                "archive": {"config": "Release"},
            },
        },
    }
