"""
Per-leaf translation request passed from the tree walker to a LeafTranslator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Formality(str, Enum):
    """Tone directives understood by the translator prompt."""

    DEFAULT     = "default"
    MORE        = "more"
    LESS        = "less"
    PREFER_MORE = "prefer_more"
    PREFER_LESS = "prefer_less"
    FORMAL      = "formal"


DEFAULT_SOURCE_LANG = "en"
DEFAULT_FORMALITY   = Formality.FORMAL.value


@dataclass(frozen=True)
class TranslationContext:
    """
    Everything a translator needs to know about one leaf.

    Attributes:
        text:         exact leaf content, never altered before dispatch
        target_lang:  language to translate into; None means the caller's default
        source_lang:  language of `text`
        formality:    one of the Formality values (passed through unchecked)
        context_path: dotted trail of keys / indices from the document root,
                      None when the whole document is a single scalar
        model_hint:   opaque hint for the translator, unused by the walker
    """

    text: str
    target_lang: str | None = None
    source_lang: str = DEFAULT_SOURCE_LANG
    formality: str = DEFAULT_FORMALITY
    context_path: str | None = None
    model_hint: str | None = None
