"""
JSON / YAML parsing and serialization for translated documents.

Parsing honours a loose format hint (e.g. a Content-Type header such as
"application/x-yaml"); without a recognizable hint JSON is tried first and
YAML second.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from doctranslate.errors import ErrorKind, ParseError, ValidationError

EXPORT_FORMATS = ("JSON", "YAML")


def parse_document(text: str, format_hint: str | None = None) -> Any:
    """
    Parse `text` into plain dicts / lists / scalars.

    Args:
        text:        raw document content
        format_hint: anything containing "json", "yaml" or "yml"
                     (case-insensitive); None or unrecognized → auto-detect

    Raises:
        ParseError: INVALID_JSON when a JSON hint was given and parsing failed,
                    INVALID_YAML otherwise.
    """
    hint = (format_hint or "").lower()

    if "json" in hint:
        return _load_json(text)
    if "yaml" in hint or "yml" in hint:
        return _load_yaml(text)

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return _load_yaml(text)


def coerce_to_tree(value: Any) -> Any:
    """
    Give a bare string a second chance to parse into a mapping or sequence.

    Anything that does not become a dict or list stays as the original string,
    which the walker then treats as a single root-level leaf.
    """
    if not isinstance(value, str):
        return value
    try:
        reparsed = yaml.safe_load(value)
    except yaml.YAMLError:
        return value
    if isinstance(reparsed, (dict, list)):
        return reparsed
    return value


def normalize_export_format(export_format: str | None) -> str:
    """Return "JSON" or "YAML" for a case-insensitive match, else raise ValidationError."""
    normalized = (export_format or "").strip().upper()
    if normalized not in EXPORT_FORMATS:
        raise ValidationError(
            f"export_format must be JSON or YAML, got {export_format!r}",
            ErrorKind.UNSUPPORTED_EXPORT_FORMAT,
        )
    return normalized


def serialize_document(tree: Any, export_format: str) -> str:
    """Pretty-print `tree` as JSON, or dump it as a YAML document starting with ---."""
    fmt = normalize_export_format(export_format)
    if fmt == "JSON":
        return json.dumps(tree, ensure_ascii=False, indent=2)
    return yaml.safe_dump(
        tree,
        explicit_start=True,
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
    )


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON format: {exc}", ErrorKind.INVALID_JSON) from exc


def _load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid YAML format: {exc}", ErrorKind.INVALID_YAML) from exc
