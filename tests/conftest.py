"""
Shared fixtures: in-memory stand-ins for the translation backend.
"""

import asyncio
from typing import Callable

import pytest

from apitranslator.i18n import TranslationCache, TranslationOrchestrator
from apitranslator.i18n.translator import DetectionError, TranslationError


class StubBackend:
    """Records calls; translates with ``transform`` (uppercase by default)."""

    def __init__(
        self,
        transform: Callable[[str], str] = str.upper,
        fail_on: tuple[str, ...] = (),
        detected: str = "en",
        detect_error: bool = False,
        delay: float = 0.0,
    ):
        self.transform = transform
        self.fail_on = fail_on
        self.detected = detected
        self.detect_error = detect_error
        self.delay = delay
        self.calls: list[tuple[str, str, str | None]] = []
        self.detect_calls: list[str] = []

    async def translate(self, text, target, source=None):
        self.calls.append((text, target, source))
        if self.delay:
            await asyncio.sleep(self.delay)
        if text in self.fail_on:
            raise TranslationError(f"cannot translate {text!r}")
        return self.transform(text)

    async def detect(self, text):
        self.detect_calls.append(text)
        if self.detect_error:
            raise DetectionError("detector offline")
        return self.detected


@pytest.fixture
def backend():
    """Uppercasing backend."""
    return StubBackend()


@pytest.fixture
def cache():
    return TranslationCache(capacity=100)


@pytest.fixture
def orchestrator(backend, cache):
    """Orchestrator over the uppercasing backend."""
    return TranslationOrchestrator(backend, cache=cache)
