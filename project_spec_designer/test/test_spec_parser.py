#!/usr/bin/env python3
"""
test_spec_parser.py
-------------------
Tests for turning raw spec mappings and files into ProjectSpec graphs.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from project_spec_designer.exceptions import FormatVersionError, SpecParsingError
from project_spec_designer.models.parsing import SpecParser, parse_spec_file
from project_spec_designer.models.project_spec import (
    BuildAction,
    Config,
    ConfigType,
    Dependency,
    DependencyType,
    ScriptSource,
)
from project_spec_designer.validation import find_defects


@pytest.fixture
def parser():
    return SpecParser()


class TestParseMapping:

    def test_full_mapping(self, parser, valid_spec_data, project_dir):
        spec = parser.parse(valid_spec_data, base_path=project_dir)

        assert spec.name == "Demo"
        assert spec.base_path == project_dir
        assert spec.configs == [Config("Debug", ConfigType.DEBUG), Config("Release", ConfigType.RELEASE)]
        assert spec.settings.groups == ["common"]
        assert spec.setting_groups["app"].groups == ["common"]
        assert list(spec.setting_groups["app"].config_settings) == ["debug"]
        assert spec.file_groups == ["Resources"]
        assert spec.config_files == {"Debug": "Configs/Debug.xcconfig"}

        app = spec.get_target("App")
        assert app.sources == ["Sources/App"]
        assert app.dependencies == [
            Dependency(DependencyType.TARGET, "AppTests"),
            Dependency(DependencyType.SDK, "UIKit.framework"),
        ]
        assert app.scheme.test_targets == ["AppTests"]
        assert app.scheme.config_variants == []
        assert app.prebuild_scripts[0].script == ScriptSource.path("Scripts/lint.sh")
        assert app.prebuild_scripts[0].name == "Lint"
        assert app.postbuild_scripts[0].script == ScriptSource.inline("echo done")
        assert app.postbuild_scripts[0].name is None
        assert spec.get_target("AppTests").sources == ["Tests"]

        scheme = spec.schemes[0]
        assert [bt.target for bt in scheme.build.targets] == ["App"]
        assert scheme.run == BuildAction("Debug")
        assert scheme.profile is None
        assert [name for name, _ in scheme.actions()] == ["run", "test", "archive"]

    def test_parsed_valid_spec_has_no_defects(self, parser, valid_spec_data, project_dir):
        assert find_defects(parser.parse(valid_spec_data, base_path=project_dir)) == []

    def test_default_configs(self, parser):
        spec = parser.parse({"name": "X"})
        assert [(c.name, c.type) for c in spec.configs] == [
            ("Debug", ConfigType.DEBUG),
            ("Release", ConfigType.RELEASE),
        ]

    def test_invalid_config_type(self, parser):
        with pytest.raises(SpecParsingError, match="invalid type 'staging'"):
            parser.parse({"configs": {"Staging": "staging"}})

    def test_plain_settings_are_base_settings(self, parser):
        spec = parser.parse({"settings": {"SWIFT_VERSION": "5.9", "ENABLE_BITCODE": False}})
        assert spec.settings.build_settings == {"SWIFT_VERSION": "5.9", "ENABLE_BITCODE": False}
        assert spec.settings.groups == []

    def test_structured_settings(self, parser):
        spec = parser.parse(
            {
                "settings": {
                    "base": {"A": 1},
                    "groups": ["g"],
                    "configs": {"Debug": {"B": 2}, "Release": None},
                }
            }
        )
        assert spec.settings.build_settings == {"A": 1}
        assert spec.settings.groups == ["g"]
        assert spec.settings.config_settings["Debug"].build_settings == {"B": 2}
        assert spec.settings.config_settings["Release"].is_empty

    def test_setting_presets_alias(self, parser):
        spec = parser.parse({"settingPresets": {"old": {"X": 1}}})
        assert list(spec.setting_groups) == ["old"]

    def test_target_order_is_kept(self, parser):
        spec = parser.parse({"targets": {"Zeta": {}, "Alpha": {}, "Mid": {}}})
        assert [t.name for t in spec.targets] == ["Zeta", "Alpha", "Mid"]

    def test_source_forms(self, parser):
        spec = parser.parse({"targets": {"A": {"sources": ["a", {"path": "b", "excludes": ["x"]}]}}})
        assert spec.targets[0].sources == ["a", "b"]

    def test_invalid_dependency(self, parser):
        with pytest.raises(SpecParsingError, match="Dependency"):
            parser.parse({"targets": {"A": {"dependencies": [{"embed": True}]}}})

    def test_script_needs_path_or_script(self, parser):
        with pytest.raises(SpecParsingError, match="'path' or 'script'"):
            parser.parse({"targets": {"A": {"prebuildScripts": [{"name": "x"}]}}})

    def test_scheme_action_requires_config(self, parser):
        with pytest.raises(SpecParsingError, match="config"):
            parser.parse({"schemes": {"S": {"run": {}}}})

    def test_build_targets_list_form(self, parser):
        spec = parser.parse({"schemes": {"S": {"build": {"targets": {"App": ["run", "test"]}}}}})
        assert spec.schemes[0].build.targets[0].build_types == ["run", "test"]

    def test_wrong_container_type(self, parser):
        with pytest.raises(SpecParsingError, match="'targets' must be of type dict"):
            parser.parse({"targets": ["App"]})


class TestParseSpecFile:

    def test_base_path_is_spec_directory(self, project_dir, write_spec, valid_spec_data):
        spec = parse_spec_file(write_spec(project_dir, valid_spec_data))
        assert spec.base_path == project_dir
        assert find_defects(spec) == []

    def test_name_defaults_to_directory(self, tmp_path, write_spec):
        spec = parse_spec_file(write_spec(tmp_path, {"targets": {}}))
        assert spec.name == Path(tmp_path).name

    def test_minimum_version_too_new(self, tmp_path, write_spec):
        path = write_spec(tmp_path, {"options": {"minimumVersion": "99.0.0"}})
        with pytest.raises(FormatVersionError, match="99.0.0"):
            parse_spec_file(path)

    def test_minimum_version_satisfied(self, tmp_path, write_spec):
        spec = parse_spec_file(write_spec(tmp_path, {"options": {"minimumVersion": "0.1.0"}}))
        assert spec.options.minimum_version == "0.1.0"

    def test_unquoted_minimum_version(self, tmp_path):
        path = tmp_path / "project.yml"
        path.write_text("options:\n  minimumVersion: 2.10\n")
        with pytest.raises(FormatVersionError, match="quoted string"):
            parse_spec_file(path)

    def test_schema_violations_are_listed(self, tmp_path, write_spec):
        path = write_spec(tmp_path, {"configs": {"Debug": "dbg"}, "fileGroups": "Docs"})
        with pytest.raises(SpecParsingError) as exc_info:
            parse_spec_file(path)
        message = str(exc_info.value)
        assert "/configs/Debug" in message
        assert "/fileGroups" in message

    def test_missing_file(self, tmp_path):
        with pytest.raises(SpecParsingError, match="not found"):
            parse_spec_file(tmp_path / "project.yml")
