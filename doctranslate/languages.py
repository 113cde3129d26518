"""
Language code → language name resolution for prompts.

Accepts ISO 639-1 codes ("es", "pt-BR") or language names ("German"). Unknown
values fall back to FALLBACK_LANGUAGE.
"""

from __future__ import annotations

FALLBACK_LANGUAGE = "Spanish"

# ISO 639-1 codes to English language names
LANGUAGE_CODE_MAP = {
    'ar': 'Arabic',
    'bg': 'Bulgarian',
    'bn': 'Bengali',
    'ca': 'Catalan',
    'cs': 'Czech',
    'da': 'Danish',
    'de': 'German',
    'el': 'Greek',
    'en': 'English',
    'es': 'Spanish',
    'et': 'Estonian',
    'fa': 'Persian',
    'fi': 'Finnish',
    'fr': 'French',
    'he': 'Hebrew',
    'hi': 'Hindi',
    'hr': 'Croatian',
    'hu': 'Hungarian',
    'id': 'Indonesian',
    'it': 'Italian',
    'ja': 'Japanese',
    'ko': 'Korean',
    'lt': 'Lithuanian',
    'lv': 'Latvian',
    'ms': 'Malay',
    'nl': 'Dutch',
    'no': 'Norwegian',
    'pl': 'Polish',
    'pt': 'Portuguese',
    'ro': 'Romanian',
    'ru': 'Russian',
    'sk': 'Slovak',
    'sl': 'Slovenian',
    'sr': 'Serbian',
    'sv': 'Swedish',
    'sw': 'Swahili',
    'th': 'Thai',
    'tl': 'Tagalog',
    'tr': 'Turkish',
    'uk': 'Ukrainian',
    'ur': 'Urdu',
    'vi': 'Vietnamese',
    'zh': 'Chinese',
}

_KNOWN_NAMES = {name.lower(): name for name in LANGUAGE_CODE_MAP.values()}


def language_name(code_or_name: str | None) -> str:
    """
    Resolve a language code or name to an English language name.

    "es" → "Spanish", "pt-BR" → "Portuguese", "german" → "German",
    "xyz" → "Spanish".
    """
    if not code_or_name:
        return FALLBACK_LANGUAGE

    value = code_or_name.strip().lower()
    if value in _KNOWN_NAMES:
        return _KNOWN_NAMES[value]

    base = value.replace("_", "-").split("-", 1)[0]
    return LANGUAGE_CODE_MAP.get(base, FALLBACK_LANGUAGE)
