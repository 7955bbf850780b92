"""
TESTS/CONFTEST.PY
══════════════════════════════════════════════════════════════════════════════
Shared fixtures. Forces the disposable memory cortex before any import.
══════════════════════════════════════════════════════════════════════════════
"""

import os

os.environ["PSYCHE_ENV"] = "test"

from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402

from psyche.soma.senses import Morpheme  # noqa: E402


class WhitespaceSenses:
    """Deterministic tokenizer: one noun per space-separated word."""

    def tokenize(self, text):
        return [Morpheme(surface=w, base_form=w, pos="名詞") for w in text.split()]


class FakeClock:
    """Manually driven time source."""

    def __init__(self, start=datetime(2026, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def senses():
    return WhitespaceSenses()


@pytest.fixture
def clock():
    return FakeClock()
