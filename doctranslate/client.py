"""
OpenAI-compatible leaf translator with automatic retry and JSON-response parsing.

Works against the OpenAI API or any server that speaks its chat-completions
protocol (llama.cpp, LM Studio, vLLM).
"""

from __future__ import annotations

import json
import logging
import os
from typing import Sequence

from dotenv import load_dotenv
from openai import BadRequestError, OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

import config
from doctranslate.base import LeafTranslator
from doctranslate.context import TranslationContext
from doctranslate.languages import language_name
from doctranslate.prompts import RESPONSE_FORMAT, build_system_prompt

load_dotenv()

logger = logging.getLogger(__name__)


def parse_translation(raw: str | None, fallback: str) -> str:
    """
    Extract the "translation" field from the model's JSON answer.

    Empty content or a missing / non-string field yields `fallback`.

    Raises:
        ValueError: If the content is not a JSON object.
    """
    if raw is None:
        return fallback
    raw = raw.strip()

    # Strip markdown fences if the model wraps the object in ```json ... ```
    if raw.startswith("```"):
        raw = raw.split("```")[1]
        if raw.startswith("json"):
            raw = raw[4:]
        raw = raw.strip()

    if not raw:
        return fallback

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Model returned non-JSON output:\n{raw}") from exc

    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object, got: {type(payload)}")

    translation = payload.get("translation")
    return translation if isinstance(translation, str) else fallback


class OpenAITranslator(LeafTranslator):
    """
    Translates one leaf per chat-completion request.

    Args:
        target_language: default target (code or name) for leaves whose
                         context does not name one
        model:           model identifier; LLM_MODEL env, then config.MODEL
        base_url:        API base URL; LLM_URL env, then config.LLM_URL
        timeout:         per-request timeout in seconds
        client:          pre-built OpenAI client (mainly for tests)
    """

    def __init__(
        self,
        target_language: str = config.DEFAULT_TARGET_LANGUAGE,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float = config.REQUEST_TIMEOUT,
        temperature: float = config.TEMPERATURE,
        max_tokens: int = config.MAX_TOKENS,
        client: OpenAI | None = None,
    ) -> None:
        self.target_language = language_name(target_language)
        self.model = model or os.getenv("LLM_MODEL") or config.MODEL
        self.base_url = base_url or os.getenv("LLM_URL") or config.LLM_URL
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                # llama.cpp and LM Studio do not check the key, but the SDK requires one
                api_key=os.getenv("OPENAI_API_KEY") or "not-needed",
                base_url=self.base_url,
                timeout=self.timeout,
            )
        return self._client

    def translate(
        self,
        context: TranslationContext,
        protected_strings: Sequence[str],
    ) -> str:
        if not context.text.strip():
            return context.text

        if context.target_lang:
            target_language = language_name(context.target_lang)
        else:
            target_language = self.target_language

        system_prompt = build_system_prompt(
            target_language,
            protected_strings,
            context.source_lang,
            context.formality,
        )

        try:
            raw = self._complete(system_prompt, context.text)
        except Exception as exc:
            logger.error(
                "LLM translation error at %s: %s",
                context.context_path or "<root>", exc,
            )
            raise

        return parse_translation(raw, fallback=context.text)

    @retry(
        retry=retry_if_exception_type(Exception),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        stop=stop_after_attempt(4),
        reraise=True,
    )
    def _complete(self, system_prompt: str, text: str) -> str | None:
        """Send one chat completion and return the raw message content."""
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user",   "content": text},
        ]
        params = dict(
            model=self.model,
            messages=messages,
            response_format=RESPONSE_FORMAT,
            max_tokens=self.max_tokens,
            stream=False,
        )

        # Some newer models only accept the default temperature (1).
        # Try with the configured temperature first; if the API rejects it, retry
        # without the parameter so the model uses its default.
        try:
            response = self._get_client().chat.completions.create(
                temperature=self.temperature, **params
            )
        except BadRequestError as e:
            if "temperature" in str(e):
                response = self._get_client().chat.completions.create(**params)
            else:
                raise

        return response.choices[0].message.content
