"""
Exceptions raised while parsing, walking and serializing documents.

Every error carries an ErrorKind so callers can map it to a response without
matching on message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_JSON              = "invalid_json"
    INVALID_YAML              = "invalid_yaml"
    UNSUPPORTED_EXPORT_FORMAT = "unsupported_export_format"
    MISSING_DOCUMENT          = "missing_document"
    MISSING_OVERRIDE_TEXT     = "missing_override_text"
    UNSUPPORTED_NODE_TYPE     = "unsupported_node_type"
    LEAF_TRANSLATION_FAILURE  = "leaf_translation_failure"


_CLIENT_ERROR_KINDS = frozenset({
    ErrorKind.INVALID_JSON,
    ErrorKind.INVALID_YAML,
    ErrorKind.UNSUPPORTED_EXPORT_FORMAT,
    ErrorKind.MISSING_DOCUMENT,
    ErrorKind.MISSING_OVERRIDE_TEXT,
    ErrorKind.UNSUPPORTED_NODE_TYPE,
})


class DocTranslateError(Exception):
    """Base class for all document translation errors."""

    def __init__(self, message: str, kind: ErrorKind):
        super().__init__(message)
        self.kind = kind

    @property
    def is_client_error(self) -> bool:
        """True when the input document or request was at fault."""
        return self.kind in _CLIENT_ERROR_KINDS


class ParseError(DocTranslateError):
    """The input text could not be parsed as JSON or YAML."""


class ValidationError(DocTranslateError):
    """The request or the parsed document has an unsupported shape."""

    def __init__(self, message: str, kind: ErrorKind, path: str | None = None):
        super().__init__(message, kind)
        self.path = path


class LeafTranslationError(DocTranslateError):
    """The leaf translator failed for the leaf at `path`."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message, ErrorKind.LEAF_TRANSLATION_FAILURE)
        self.path = path
