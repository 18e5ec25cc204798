"""
metadata/validator.py: JSON Schema validation for record schema YAML files.

Usage:
    from recordguard.metadata.validator import validate_schema_dir, validate_yaml_file

    issues = validate_schema_dir(Path("schemas"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"

RECORD_SCHEMA = "record.schema.json"

_SCHEMA_FILES = ("_defs.schema.json", RECORD_SCHEMA)


@dataclass
class SchemaIssue:
    """A single finding for a record schema YAML file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "attributes[0]/validation"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema(name: str) -> dict[str, Any]:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open() as fh:
        return json.load(fh)


def _load_registry() -> Registry:
    """Build a jsonschema Registry containing all recordguard schemas."""
    resources = []
    for name in _SCHEMA_FILES:
        schema = _load_schema(name)
        resources.append(
            (schema["$id"], Resource(contents=schema, specification=DRAFT202012))
        )
    return Registry().with_resources(resources)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _duplicate_field_issues(yaml_path: Path, doc: dict[str, Any]) -> list[SchemaIssue]:
    issues: list[SchemaIssue] = []
    seen: set[str] = set()
    for section in ("attributes", "relationships"):
        for index, field in enumerate(doc.get(section) or []):
            name = field.get("name") if isinstance(field, dict) else None
            if not name:
                continue
            if name in seen:
                issues.append(
                    SchemaIssue(
                        file=yaml_path,
                        message=f"Duplicate field name '{name}'",
                        path=f"{section}[{index}]",
                    )
                )
            seen.add(name)
    return issues


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_yaml_file(
    yaml_path: Path,
    *,
    registry: Registry | None = None,
) -> list[SchemaIssue]:
    """
    Validate a single record schema YAML file.

    Args:
        yaml_path: Path to the YAML file to validate.
        registry:  Pre-built schema registry.  Built automatically if omitted.

    Returns:
        A list of :class:`SchemaIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            doc = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [SchemaIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if doc is None:
        return [
            SchemaIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    if registry is None:
        registry = _load_registry()

    validator = Draft202012Validator(_load_schema(RECORD_SCHEMA), registry=registry)

    issues = [
        SchemaIssue(file=yaml_path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.absolute_path])
    ]

    if not issues and isinstance(doc, dict):
        issues.extend(_duplicate_field_issues(yaml_path, doc))

    if isinstance(doc, dict) and not doc.get("attributes") and not doc.get("relationships"):
        issues.append(
            SchemaIssue(
                file=yaml_path,
                message="Record type declares no attributes or relationships",
                severity="warning",
            )
        )

    return issues


def validate_schema_dir(
    schema_dir: Path,
    *,
    strict: bool = False,
) -> list[SchemaIssue]:
    """
    Validate all ``*.yaml`` files directly under *schema_dir*.

    Args:
        schema_dir: Directory holding one record type per YAML file.
        strict:     If ``True``, warnings are escalated to errors.

    Returns:
        A flat list of :class:`SchemaIssue` objects across all files.
        Empty list means all files are valid.
    """
    if not schema_dir.is_dir():
        return [
            SchemaIssue(
                file=schema_dir,
                message=f"Schema directory does not exist: {schema_dir}",
            )
        ]

    # Build registry once, shared across all file validations
    try:
        registry = _load_registry()
    except (FileNotFoundError, json.JSONDecodeError) as exc:
        return [
            SchemaIssue(
                file=_SCHEMAS_DIR,
                message=f"Failed to load JSON Schema files: {exc}",
            )
        ]

    all_issues: list[SchemaIssue] = []

    for yaml_file in sorted(schema_dir.glob("*.yaml")):
        file_issues = validate_yaml_file(yaml_file, registry=registry)
        if strict:
            for issue in file_issues:
                if issue.severity == "warning":
                    issue.severity = "error"
        all_issues.extend(file_issues)

    logger.debug("Checked %s: %d issue(s)", schema_dir, len(all_issues))
    return all_issues
