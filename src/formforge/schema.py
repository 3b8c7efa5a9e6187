"""
schema.py — JSON Schema checks for form YAML files.

Checks the structure of form files (known keys, value types, required field
keys) before loading. Whether field types and directive kinds are supported
is decided by the catalogs at load time, not here.

Usage:
    from formforge.schema import validate_forms_dir, validate_form_file

    issues = validate_forms_dir(Path("forms"))
    for issue in issues:
        print(issue)

YAML turns unquoted dates and timestamps into date objects; they are
converted back to ISO 8601 text before checking.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
FORM_SCHEMA = "form.schema.json"


@dataclass
class ValidationIssue:
    """A single finding for a form YAML file."""

    file: Path
    message: str
    path: str = ""           # location within the document, e.g. "fields[0]/name"
    severity: str = "error"  # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def _load_schema(name: str) -> dict[str, Any]:
    with (_SCHEMAS_DIR / name).open() as fh:
        return json.load(fh)


def _preprocess_dates(obj: Any) -> Any:
    """Recursively replace date/datetime values with their ISO 8601 text."""
    if isinstance(obj, dict):
        return {k: _preprocess_dates(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_preprocess_dates(item) for item in obj]
    if isinstance(obj, date):
        return obj.isoformat()
    return obj


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema error path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_form_data(data: Any, file: Path = Path("<memory>")) -> list[ValidationIssue]:
    """Check an already-parsed form document against the form schema."""
    validator = Draft202012Validator(_load_schema(FORM_SCHEMA))
    doc = _preprocess_dates(data)
    return [
        ValidationIssue(file=file, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: list(map(str, e.path)))
    ]


def validate_form_file(yaml_path: Path) -> list[ValidationIssue]:
    """
    Check a single form YAML file.

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [ValidationIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [
            ValidationIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    return validate_form_data(raw, yaml_path)


def validate_forms_dir(forms_dir: Path, *, strict: bool = False) -> list[ValidationIssue]:
    """
    Check every ``*.yaml`` file directly under *forms_dir*.

    Args:
        forms_dir: Directory holding form files.
        strict:    If ``True``, warnings are escalated to errors.

    Returns:
        A flat list of issues across all files. Empty means all files are valid.
    """
    if not forms_dir.is_dir():
        return [
            ValidationIssue(
                file=forms_dir,
                message=f"Forms directory does not exist: {forms_dir}",
            )
        ]

    all_issues: list[ValidationIssue] = []
    yaml_files = sorted(forms_dir.glob("*.yaml"))
    if not yaml_files:
        all_issues.append(
            ValidationIssue(file=forms_dir, message="No form files found", severity="warning")
        )

    for yaml_file in yaml_files:
        all_issues.extend(validate_form_file(yaml_file))

    if strict:
        for issue in all_issues:
            if issue.severity == "warning":
                issue.severity = "error"
    logger.debug("Checked %d form files in %s", len(yaml_files), forms_dir)
    return all_issues
