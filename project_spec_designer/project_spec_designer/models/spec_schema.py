from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import jsonschema

from .json_schema_loader import load_schema


JsonPointer = str


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _error_path(error: jsonschema.ValidationError) -> JsonPointer:
    return "".join(f"/{_jp_escape(str(p))}" for p in error.absolute_path)


def validate_against_schema(data: Any, json_schema_dict: Optional[dict] = None) -> List[SchemaIssue]:
    """Validate raw spec data against the bundled JSON Schema.

    Unlike ``jsonschema.validate`` every violation is returned, ordered by
    location, so a spec with several shape problems is reported in one pass.
    """
    if not isinstance(data, dict):
        return [SchemaIssue(message="Root must be a mapping/object", yaml_path="")]

    schema = json_schema_dict if json_schema_dict is not None else load_schema()
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)

    issues: List[SchemaIssue] = []
    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]):
        issues.append(SchemaIssue(message=error.message, yaml_path=_error_path(error)))
    return issues
