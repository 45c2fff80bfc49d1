#!/usr/bin/env python3
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

"""CLI entry point for checking project spec files."""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from . import check_files, CheckResult
from ..file_io.template_renderer import TemplateRenderer
from ..runtime_config import designer_config

SPEC_FILE_NAMES = ['project.yml', 'project.yaml']
SPEC_EXTENSIONS = ['.yml', '.yaml']


def find_spec_files(paths: List[str]) -> List[Path]:
    """Find project spec files in the given files or directories."""
    spec_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            if path.suffix in SPEC_EXTENSIONS:
                spec_files.append(path)
            else:
                print(f"Warning: File is not a YAML spec: {path}", file=sys.stderr)
        elif path.is_dir():
            for name in SPEC_FILE_NAMES:
                spec_files.extend(path.rglob(name))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(spec_files))


def format_human(results: List[CheckResult]) -> str:
    lines = []
    for result in results:
        if result.errors or result.warnings:
            lines.append(f"\n{result.file_path}:")
            for error in result.errors:
                line_info = f":{error['line']}" if 'line' in error else ""
                lines.append(f"  ERROR{line_info}: {error['message']}")
            for warning in result.warnings:
                line_info = f":{warning['line']}" if 'line' in warning else ""
                lines.append(f"  WARNING{line_info}: {warning['message']}")
    return "\n".join(lines)


def format_json(results: List[CheckResult]) -> str:
    output = {
        'files': len(results),
        'errors': sum(r.error_count for r in results),
        'warnings': sum(r.warning_count for r in results),
        'results': [r.to_dict() for r in results],
    }
    return json.dumps(output, indent=2)


def format_github_actions(results: List[CheckResult]) -> str:
    lines = []
    for result in results:
        for error in result.errors:
            lines.append(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}")
        for warning in result.warnings:
            lines.append(f"::warning file={result.file_path},line={warning.get('line', 1)}::{warning['message']}")
    return "\n".join(lines)


def format_markdown(results: List[CheckResult]) -> str:
    return TemplateRenderer().render_template("check_report.md.jinja2", results=results)


FORMATTERS = {
    'human': format_human,
    'json': format_json,
    'github-actions': format_github_actions,
    'markdown': format_markdown,
}


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the checker CLI."""
    parser = argparse.ArgumentParser(
        description='Check project spec files for unresolved references and missing paths',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='Spec files or directories to check (default: current directory)',
    )
    parser.add_argument(
        '--format',
        choices=sorted(FORMATTERS),
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: from PROJECT_SPEC_DESIGNER_LOG_LEVEL or WARNING)',
    )

    args = parser.parse_args(argv)
    designer_config.set_logging(args.log_level)

    if not args.paths:
        args.paths = ['.']

    spec_files = find_spec_files(args.paths)

    if not spec_files:
        print("No project spec files found.", file=sys.stderr)
        sys.exit(1)

    results = check_files(spec_files)

    output = FORMATTERS[args.format](results)
    if output:
        print(output)

    total_errors = sum(r.error_count for r in results)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print("Spec check succeeded with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
