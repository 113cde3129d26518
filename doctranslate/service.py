"""
End-to-end document translation: parse → walk → serialize.
"""

from __future__ import annotations

import logging
from typing import Iterable

import config
from doctranslate.base import LeafTranslator
from doctranslate.codec import (
    coerce_to_tree,
    normalize_export_format,
    parse_document,
    serialize_document,
)
from doctranslate.errors import ErrorKind, ValidationError
from doctranslate.languages import language_name
from doctranslate.walker import LeafErrorPolicy, TreeWalker, WalkConfig

logger = logging.getLogger(__name__)


def merge_protected_strings(protected_strings: Iterable[str] = ()) -> tuple[str, ...]:
    """Built-in protected terms followed by the caller's, duplicates removed."""
    merged: list[str] = []
    for term in [*config.BUILTIN_PROTECTED_STRINGS, *protected_strings]:
        if term and term not in merged:
            merged.append(term)
    return tuple(merged)


def translate_document(
    doc_content: str,
    translator: LeafTranslator,
    input_format: str | None = None,
    export_format: str = config.DEFAULT_EXPORT_FORMAT,
    target_language: str = config.DEFAULT_TARGET_LANGUAGE,
    protected_strings: Iterable[str] = (),
    on_error: LeafErrorPolicy | str = config.ON_LEAF_ERROR,
    max_workers: int = config.MAX_WORKERS,
) -> str:
    """
    Translate every string leaf of a JSON / YAML document.

    Args:
        doc_content:       raw document text
        translator:        LeafTranslator called once per leaf
        input_format:      format hint such as a Content-Type header; None → auto-detect
        export_format:     "JSON" or "YAML" (case-insensitive)
        target_language:   language code or name for leaves without an override
        protected_strings: extra terms to keep verbatim
        on_error:          LeafErrorPolicy for failed leaves
        max_workers:       concurrent leaf translations

    Returns:
        The translated document serialized in `export_format`.

    Raises:
        ValidationError:      bad export format, empty document, malformed tree
        ParseError:           document is neither valid JSON nor YAML
        LeafTranslationError: a leaf failed under LeafErrorPolicy.RAISE
    """
    # Checked before anything else so a bad format never costs a parse.
    fmt = normalize_export_format(export_format)

    if not doc_content or not doc_content.strip():
        raise ValidationError("doc_to_translate is required", ErrorKind.MISSING_DOCUMENT)

    tree = coerce_to_tree(parse_document(doc_content, input_format))

    walk_config = WalkConfig(
        target_language=language_name(target_language),
        protected_strings=merge_protected_strings(protected_strings),
    )
    logger.info(
        "Translating document to %s (export=%s, protected=%d terms)",
        walk_config.target_language, fmt, len(walk_config.protected_strings),
    )

    walker = TreeWalker(translator, on_error=on_error, max_workers=max_workers)
    translated = walker.traverse(tree, walk_config)

    return serialize_document(translated, fmt)
