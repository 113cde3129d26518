"""
Pytest configuration and fixtures for all tests.

Provides stub leaf translators so no test ever reaches a real LLM.
"""

import threading

import pytest

from doctranslate.base import LeafTranslator
from doctranslate.walker import TreeWalker, WalkConfig


class RecordingTranslator(LeafTranslator):
    """Applies `transform` to each leaf and records every call."""

    def __init__(self, transform=None):
        self.transform = transform or (lambda text: text)
        self.contexts = []
        self.protected = []
        self._lock = threading.Lock()

    def translate(self, context, protected_strings):
        with self._lock:
            self.contexts.append(context)
            self.protected.append(tuple(protected_strings))
        return self.transform(context.text)


class FailingTranslator(RecordingTranslator):
    """Raises for leaves whose text is in `fail_on`, uppercases the rest."""

    def __init__(self, fail_on):
        super().__init__(str.upper)
        self.fail_on = set(fail_on)

    def translate(self, context, protected_strings):
        if context.text in self.fail_on:
            with self._lock:
                self.contexts.append(context)
            raise RuntimeError(f"LLM unavailable for {context.text!r}")
        return super().translate(context, protected_strings)


@pytest.fixture
def identity_translator():
    return RecordingTranslator()


@pytest.fixture
def upper_translator():
    return RecordingTranslator(str.upper)


@pytest.fixture
def walk_config():
    return WalkConfig(target_language="Spanish", protected_strings=("Brightwheel",))


@pytest.fixture
def upper_walker(upper_translator):
    return TreeWalker(upper_translator)


@pytest.fixture
def sample_document():
    """i18n-style document mixing nesting, arrays and an override leaf."""
    return {
        "app": {
            "title": "Welcome to Brightwheel",
            "greeting": "Hello {user_name}",
        },
        "items": ["first", "second"],
        "legal": {
            "translation_hash": True,
            "text": "Terms of service",
            "formality": "more",
        },
    }
