"""
Language detection with memoization and a safe fallback.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any

from apitranslator.i18n.cache import TranslationCache
from apitranslator.i18n.languages import is_valid_language, normalize_language_code

logger = logging.getLogger(__name__)

SAMPLE_LENGTH = 200


class LanguageDetector:
    """
    Wraps a detection backend (anything with ``async detect(text) -> str``).

    Never raises: empty text, backend failures and unknown codes all resolve
    to ``fallback_language``. Long texts are sampled to their first
    200 characters, and results are cached per sample.
    """

    def __init__(
        self,
        backend: Any,
        fallback_language: str = "en",
        cache: TranslationCache | None = None,
    ):
        self.backend = backend
        self.fallback_language = normalize_language_code(fallback_language)
        self.cache = cache if cache is not None else TranslationCache(capacity=1000)

    def _make_key(self, sample: str) -> str:
        """Create cache key from content hash."""
        return hashlib.sha256(sample.encode()).hexdigest()[:16]

    async def detect(self, text: str) -> str:
        """Detect the language of text, or return the fallback."""
        if not text or not text.strip():
            return self.fallback_language

        sample = text[:SAMPLE_LENGTH]
        key = self._make_key(sample)

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            detected = normalize_language_code(await self.backend.detect(sample))
        except Exception as e:
            logger.warning(f"Language detection failed, using '{self.fallback_language}': {e}")
            return self.fallback_language

        if not is_valid_language(detected):
            logger.warning(f"Detected unknown language '{detected}', using '{self.fallback_language}'")
            return self.fallback_language

        self.cache.put(key, detected)
        return detected

    def clear_cache(self) -> None:
        self.cache.clear()
