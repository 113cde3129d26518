"""Leaf translator interface (Strategy pattern) used by the tree walker."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Sequence

from doctranslate.context import TranslationContext


class LeafTranslator(ABC):
    """Translates a single leaf of a document."""

    @abstractmethod
    def translate(
        self,
        context: TranslationContext,
        protected_strings: Sequence[str],
    ) -> str:
        """Return the translation of `context.text`.

        Args:
            context: The leaf text and its per-leaf translation settings.
            protected_strings: Terms that must appear verbatim in the output.

        Returns:
            The translated text. Raising signals a failed leaf.
        """
        ...


class FunctionTranslator(LeafTranslator):
    """Adapts a plain `fn(context, protected_strings) -> str` callable."""

    def __init__(self, fn: Callable[[TranslationContext, Sequence[str]], str]) -> None:
        self._fn = fn

    def translate(
        self,
        context: TranslationContext,
        protected_strings: Sequence[str],
    ) -> str:
        return self._fn(context, protected_strings)
