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

"""Checks run against a single spec file on disk."""

import logging
from pathlib import Path
from typing import Optional

from ..exceptions import SpecParsingError
from ..file_io.source_location import SourceLocation, format_source, lookup_source
from ..models.parsing.spec_parser import SpecParser
from ..models.parsing.yaml_parser import yaml_parser
from ..models.spec_schema import validate_against_schema
from ..utils.format_version import check_minimum_version
from ..validation.spec_validator import PathExists, find_defects
from .report import CheckResult

logger = logging.getLogger(__name__)


class SpecFileChecker:
    """Runs loading, version, schema and integrity checks for one spec file."""

    def __init__(self, path_exists: Optional[PathExists] = None):
        self.path_exists = path_exists
        self.parser = SpecParser(check_schema=False)

    @staticmethod
    def _add(result: CheckResult, message: str, source_map, yaml_path: str, kind: str, warning: bool = False):
        loc = lookup_source(source_map, yaml_path)
        src = SourceLocation(file_path=result.file_path, yaml_path=loc.yaml_path, line=loc.line, column=loc.column)
        add = result.add_warning if warning else result.add_error
        add(
            f"{message}{format_source(src)}",
            line=loc.line,
            column=loc.column,
            yaml_path=loc.yaml_path or None,
            kind=kind,
        )

    def check(self, file_path: Path, result: CheckResult) -> None:
        try:
            data, source_map = yaml_parser.load_config_with_source(file_path)
        except SpecParsingError as e:
            result.add_error(str(e), kind="load")
            return

        options = data.get("options")
        raw_version = options.get("minimumVersion") if isinstance(options, dict) else None
        version_result = check_minimum_version(raw_version)
        if not version_result.compatible:
            # Nothing else is meaningful if this tool is too old for the spec
            self._add(result, version_result.message, source_map, "/options/minimumVersion", "version")
            return

        issues = validate_against_schema(data)
        for issue in issues:
            self._add(result, issue.message, source_map, issue.yaml_path or "", "schema")
        if issues:
            return

        try:
            spec = self.parser.parse(data, base_path=file_path.parent, default_name=file_path.parent.name)
        except SpecParsingError as e:
            result.add_error(str(e), kind="parse")
            return

        if not spec.targets:
            self._add(result, "Spec declares no targets", source_map, "/targets", "no_targets", warning=True)

        defects = find_defects(spec, self.path_exists)
        for defect in defects:
            self._add(result, defect.description, source_map, defect.yaml_path, defect.kind)
        logger.info(f"Checked {file_path}: {len(defects)} defects")
