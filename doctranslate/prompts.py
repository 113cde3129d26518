"""
Prompt templates for single-leaf translation.

The system prompt carries the per-leaf settings (target / source language,
formality) and the document-wide protected terms. The user turn is the raw
leaf text. The model must answer with {"translation": "..."}.
"""

from __future__ import annotations

from typing import Sequence

from doctranslate.context import Formality

RULES_TEMPLATE = """\


Rules:
1. Always translate to {target_language}
2. Keep {{variables}} unchanged: {{school_name}}, {{{{count}}}}, %{{user_name}}, etc.
3. Keep these terms unchanged: {protected_list}
4. Return JSON: {{"translation": "result"}}

Examples:
"Hello" → {{"translation": "Hola"}}
"{{school_name}} shared a form" → {{"translation": "{{school_name}} compartió un formulario"}}
"{{{{count}}}} ounces" → {{"translation": "{{{{count}}}} onzas"}}
"""

# Structured-output contract sent as `response_format`.
RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "translation_response",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "translation": {
                    "type": "string",
                    "description": "The translated text with preserved variables and protected terms",
                },
            },
            "required": ["translation"],
            "additionalProperties": False,
        },
    },
}


def build_system_prompt(
    target_language: str,
    protected_strings: Sequence[str],
    source_lang: str | None = None,
    formality: str | None = None,
) -> str:
    """
    Build the system message for one leaf.

    Args:
        target_language:   language name, e.g. "Spanish"
        protected_strings: terms to keep verbatim
        source_lang:       source language code or name, omitted when None
        formality:         Formality value; "default" adds no instruction

    Returns:
        A formatted prompt string.
    """
    protected_list = ", ".join(protected_strings) if protected_strings else "(none)"

    prompt = f"Translate text to {target_language}."
    if source_lang:
        prompt += f" Source language: {source_lang}."
    if formality and formality != Formality.DEFAULT.value:
        prompt += f" Use {formality} formality level."

    return prompt + RULES_TEMPLATE.format(
        target_language=target_language,
        protected_list=protected_list,
    )
