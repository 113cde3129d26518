"""
Recursive document walker.

A traversal runs in two steps:

    1. plan     – walk the tree depth-first, validate every node, copy the
                  structure and collect one (address, TranslationContext) job
                  per leaf
    2. dispatch – hand each job to the LeafTranslator (sequentially or through
                  a thread pool) and write the results back by address

Because the whole tree is validated during planning, a malformed document is
rejected before any leaf reaches the translator.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from doctranslate.base import LeafTranslator
from doctranslate.context import (
    DEFAULT_FORMALITY,
    DEFAULT_SOURCE_LANG,
    TranslationContext,
)
from doctranslate.errors import ErrorKind, LeafTranslationError, ValidationError

logger = logging.getLogger(__name__)

OVERRIDE_MARKER = "translation_hash"
OVERRIDE_FIELDS = ("target_lang", "source_lang", "context", "model_type", "formality")


class NodeKind(Enum):
    MAPPING     = "mapping"
    SEQUENCE    = "sequence"
    OVERRIDE    = "override"
    STRING      = "string"
    UNSUPPORTED = "unsupported"


class LeafErrorPolicy(str, Enum):
    """What to do when the translator fails on a leaf."""

    RAISE    = "raise"      # abort the traversal with LeafTranslationError
    FALLBACK = "fallback"   # keep the untranslated text and carry on


@dataclass(frozen=True)
class WalkConfig:
    """Document-wide settings applied to every leaf of one traversal."""

    target_language: str
    protected_strings: tuple[str, ...] = ()


@dataclass(frozen=True)
class _LeafJob:
    address: tuple        # keys / indices relative to the traversed node
    context: TranslationContext


def classify_node(node: Any) -> NodeKind:
    """Resolve the node's kind. Override is checked before plain mappings."""
    if isinstance(node, dict):
        if node.get(OVERRIDE_MARKER) is True:
            return NodeKind.OVERRIDE
        return NodeKind.MAPPING
    if isinstance(node, list):
        return NodeKind.SEQUENCE
    if isinstance(node, str):
        return NodeKind.STRING
    return NodeKind.UNSUPPORTED


def count_leaves(node: Any) -> int:
    """Number of translator calls a traversal of `node` would make."""
    kind = classify_node(node)
    if kind == NodeKind.MAPPING:
        return sum(count_leaves(v) for v in node.values())
    if kind == NodeKind.SEQUENCE:
        return sum(count_leaves(v) for v in node)
    if kind in (NodeKind.STRING, NodeKind.OVERRIDE):
        return 1
    return 0


def _join_path(path: Sequence) -> str | None:
    if not path:
        return None
    return ".".join(str(segment) for segment in path)


class TreeWalker:
    """
    Translates every leaf of a parsed document while keeping its shape.

    Args:
        translator:  LeafTranslator invoked once per leaf
        on_error:    LeafErrorPolicy (or its string value)
        max_workers: >1 dispatches leaves concurrently through a thread pool;
                     the result is identical to the sequential one
    """

    def __init__(
        self,
        translator: LeafTranslator,
        on_error: LeafErrorPolicy | str = LeafErrorPolicy.RAISE,
        max_workers: int = 1,
    ) -> None:
        self._translator = translator
        self._on_error = LeafErrorPolicy(on_error)
        self._max_workers = max(1, int(max_workers))

    def traverse(self, node: Any, config: WalkConfig, path: Sequence = ()) -> Any:
        """
        Return a copy of `node` with every leaf replaced by its translation.

        `path` seeds the context path, e.g. when translating a sub-tree.

        Raises:
            ValidationError:      MISSING_OVERRIDE_TEXT or UNSUPPORTED_NODE_TYPE
            LeafTranslationError: a leaf failed under LeafErrorPolicy.RAISE
        """
        jobs: list[_LeafJob] = []
        skeleton = self._plan(node, config, list(path), (), jobs)

        logger.debug(
            "Dispatching %d leaves (workers=%d, on_error=%s)",
            len(jobs), self._max_workers, self._on_error.value,
        )

        if self._max_workers > 1 and len(jobs) > 1:
            results = self._dispatch_parallel(jobs, config)
        else:
            results = [self._translate_leaf(job, config) for job in jobs]

        for job, translation in zip(jobs, results):
            if not job.address:
                return translation
            _set_by_address(skeleton, job.address, translation)
        return skeleton

    # ── Planning ──────────────────────────────────────────────────────────────

    def _plan(
        self,
        node: Any,
        config: WalkConfig,
        path: list,
        address: tuple,
        jobs: list[_LeafJob],
    ) -> Any:
        kind = classify_node(node)

        if kind == NodeKind.MAPPING:
            return {
                key: self._plan(value, config, path + [key], address + (key,), jobs)
                for key, value in node.items()
            }

        if kind == NodeKind.SEQUENCE:
            return [
                self._plan(value, config, path + [index], address + (index,), jobs)
                for index, value in enumerate(node)
            ]

        if kind == NodeKind.OVERRIDE:
            jobs.append(_LeafJob(address, self._context_from_override(node, config, path)))
            return None

        if kind == NodeKind.STRING:
            context = TranslationContext(
                text=node,
                target_lang=config.target_language,
                source_lang=DEFAULT_SOURCE_LANG,
                formality=DEFAULT_FORMALITY,
                context_path=_join_path(path),
            )
            jobs.append(_LeafJob(address, context))
            return None

        raise ValidationError(
            f"Unexpected node type: {type(node).__name__}. "
            f"Expected dict, list, or str.",
            ErrorKind.UNSUPPORTED_NODE_TYPE,
            path=_join_path(path),
        )

    @staticmethod
    def _context_from_override(
        node: dict, config: WalkConfig, path: list
    ) -> TranslationContext:
        text = node.get("text")
        if text is None:
            raise ValidationError(
                f"{OVERRIDE_MARKER} node must have 'text' property",
                ErrorKind.MISSING_OVERRIDE_TEXT,
                path=_join_path(path),
            )
        if not isinstance(text, str):
            raise ValidationError(
                f"{OVERRIDE_MARKER} node 'text' must be a string, "
                f"got {type(text).__name__}",
                ErrorKind.UNSUPPORTED_NODE_TYPE,
                path=_join_path(path),
            )

        for key in OVERRIDE_FIELDS:
            value = node.get(key)
            if value is not None and not isinstance(value, str):
                raise ValidationError(
                    f"{OVERRIDE_MARKER} node '{key}' must be a string, "
                    f"got {type(value).__name__}",
                    ErrorKind.UNSUPPORTED_NODE_TYPE,
                    path=_join_path(path),
                )

        # Absent or null fields take the ambient default; "" is kept as given.
        def field(key: str, default: str | None) -> str | None:
            value = node.get(key)
            return default if value is None else value

        return TranslationContext(
            text=text,
            target_lang=field("target_lang", config.target_language),
            source_lang=field("source_lang", DEFAULT_SOURCE_LANG),
            formality=field("formality", DEFAULT_FORMALITY),
            context_path=field("context", _join_path(path)),
            model_hint=field("model_type", None),
        )

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def _translate_leaf(self, job: _LeafJob, config: WalkConfig) -> str:
        context = job.context
        try:
            return self._translator.translate(context, config.protected_strings)
        except Exception as exc:
            if self._on_error == LeafErrorPolicy.FALLBACK:
                logger.warning(
                    "Leaf translation failed at %s, keeping original text: %s",
                    context.context_path or "<root>", exc,
                )
                return context.text
            raise LeafTranslationError(
                f"Translation failed at {context.context_path or '<root>'}: {exc}",
                path=context.context_path,
            ) from exc

    def _dispatch_parallel(self, jobs: list[_LeafJob], config: WalkConfig) -> list[str]:
        results: list[str | None] = [None] * len(jobs)
        executor = ThreadPoolExecutor(max_workers=self._max_workers)
        try:
            future_to_idx = {
                executor.submit(self._translate_leaf, job, config): idx
                for idx, job in enumerate(jobs)
            }
            for future in as_completed(future_to_idx):
                results[future_to_idx[future]] = future.result()
        finally:
            # On a fail-fast error, drop the leaves that have not started yet.
            executor.shutdown(wait=True, cancel_futures=True)
        return results


def _set_by_address(obj: Any, address: tuple, value: str) -> None:
    """Set a value at a given address (tuple of keys/indices) inside `obj`."""
    cur = obj
    for key in address[:-1]:
        cur = cur[key]
    cur[address[-1]] = value
