from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(source_map: Optional[Dict[str, Dict[str, int]]], yaml_path: Optional[str]) -> SourceLocation:
    """Find the location of ``yaml_path``, falling back to its closest recorded ancestor.

    Defects often point at an element (e.g. ``/targets/App/sources``) that is
    only implied by the file, so the nearest enclosing node is used instead.
    """
    if not source_map or yaml_path is None:
        return SourceLocation(yaml_path=yaml_path)

    path = yaml_path
    while True:
        entry = source_map.get(path)
        if entry:
            return SourceLocation(yaml_path=yaml_path, line=entry.get("line"), column=entry.get("column"))
        if not path:
            return SourceLocation(yaml_path=yaml_path)
        path = path.rsplit("/", 1)[0]


def _infer_workspace_root(path: Path) -> Optional[Path]:
    """Workspace root used to shorten displayed paths."""
    env_root = os.environ.get("PROJECT_SPEC_DESIGNER_SOURCE_ROOT")
    if env_root:
        return Path(env_root)
    return None


def _format_file_path(path: Path) -> str:
    root = _infer_workspace_root(path)
    if not root:
        return str(path)

    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        file_path = _format_file_path(loc.file_path)
        if loc.line is not None and loc.column is not None:
            parts.append(f"source= {file_path}:{loc.line}:{loc.column} ")
        elif loc.line is not None:
            parts.append(f"source= {file_path}:{loc.line} ")
        else:
            parts.append(f"source= {file_path} ")

    if loc.yaml_path:
        parts.append(f"yaml_path={loc.yaml_path}")

    if not parts:
        return ""

    return " (" + " ".join(parts) + ")"
