"""
Central configuration for the document translator.

Secrets and endpoint overrides come from the environment (or a .env file):
    OPENAI_API_KEY – API key; local llama.cpp / LM Studio servers ignore it
    LLM_URL        – OpenAI-compatible base URL, overrides LLM_URL below
    LLM_MODEL      – model name, overrides MODEL below

ON_LEAF_ERROR:
    "raise"    – abort the document on the first failed leaf
    "fallback" – keep the untranslated text for failed leaves and continue
"""

# ── Model ──────────────────────────────────────────────────────────────────────
MODEL = "qwen30b"              # any model served by the endpoint below
TEMPERATURE = 0.1              # lower = more consistent/literal translations
MAX_TOKENS = 20000
LLM_URL = "http://localhost:8080/v1"
REQUEST_TIMEOUT = 30.0         # seconds per request

# ── Translation defaults ───────────────────────────────────────────────────────
DEFAULT_TARGET_LANGUAGE = "es"
DEFAULT_EXPORT_FORMAT = "JSON"

# Always kept verbatim, in addition to any caller-supplied terms.
BUILTIN_PROTECTED_STRINGS: list[str] = ["Brightwheel"]

# ── Processing ─────────────────────────────────────────────────────────────────
ON_LEAF_ERROR = "raise"
# How many leaves to translate concurrently. 1 = strictly sequential.
MAX_WORKERS = 1

# ── Paths ──────────────────────────────────────────────────────────────────────
DATA_DIR   = "data"
RESULT_DIR = "result"
