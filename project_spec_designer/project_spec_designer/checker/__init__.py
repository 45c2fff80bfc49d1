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

"""Checker package: validates project spec files and reports every problem found."""

from pathlib import Path
from typing import List, Optional

from ..validation.spec_validator import PathExists
from .report import CheckResult
from .spec_file_checker import SpecFileChecker

__all__ = ['check_files', 'CheckResult']


def check_files(file_paths: List[Path], path_exists: Optional[PathExists] = None) -> List[CheckResult]:
    """Check a list of spec files.

    Args:
        file_paths: List of spec file paths
        path_exists: Optional existence oracle used for referenced paths

    Returns:
        List of CheckResult objects, one per file
    """
    results = []
    checker = SpecFileChecker(path_exists=path_exists)

    for file_path in file_paths:
        result = CheckResult(Path(file_path))
        try:
            checker.check(Path(file_path), result)
        except Exception as e:
            result.add_error(f"Unexpected error during check: {str(e)}", kind="internal")
        results.append(result)

    return results
