"""
LLM-powered translation backend.

This is the raw capability the orchestrator calls: it translates or detects
one text and raises on failure. Caching, timeouts and fallback to the
original text live in the orchestrator, not here.
"""

from __future__ import annotations

import asyncio
import logging

import dspy

from apitranslator.config import Settings, get_settings
from apitranslator.i18n.languages import (
    Language,
    get_language_name,
    is_valid_language,
    normalize_language_code,
)

logger = logging.getLogger(__name__)


class TranslationError(Exception):
    """Raised when the backend cannot produce a translation."""
    pass


class DetectionError(Exception):
    """Raised when the backend cannot identify a language."""
    pass


# =============================================================================
# DSPy Signatures for Translation
# =============================================================================


class TranslateText(dspy.Signature):
    """Translate text while preserving meaning, tone, and style. Return only the translated text without explanations or notes."""

    text: str = dspy.InputField(desc="Text to translate")
    source_language: str = dspy.InputField(desc="Source language name, or 'auto-detect'")
    target_language: str = dspy.InputField(desc="Target language name")
    context: str = dspy.InputField(desc="Context about the text (optional)", default="")

    translated_text: str = dspy.OutputField(desc="Translated text")


class DetectLanguage(dspy.Signature):
    """Detect the language of text."""

    text: str = dspy.InputField(desc="Text to analyze")

    language_code: str = dspy.OutputField(desc="ISO 639-1 language code (e.g., 'en', 'es', 'fr')")


# =============================================================================
# Translator Service
# =============================================================================


class Translator:
    """
    Translation backend backed by DSPy.

    Usage:
        translator = Translator()

        es_text = await translator.translate("Hello", target="es")
        lang = await translator.detect("Bonjour le monde")  # -> "fr"

    Both methods raise (TranslationError / DetectionError) instead of
    degrading silently, so callers can decide how to fall back.
    """

    def __init__(self, settings: Settings | None = None, context: str = "API response text"):
        self.settings = settings or get_settings()
        self.context = context

        # DSPy modules (lazy initialized)
        self._translate_module: dspy.Predict | None = None
        self._detect_module: dspy.Predict | None = None

    @property
    def translate_module(self) -> dspy.Predict:
        if self._translate_module is None:
            self._translate_module = dspy.Predict(TranslateText)
        return self._translate_module

    @property
    def detect_module(self) -> dspy.Predict:
        if self._detect_module is None:
            self._detect_module = dspy.Predict(DetectLanguage)
        return self._detect_module

    def _lm(self) -> dspy.LM:
        from apitranslator.ai.client import get_lm
        return get_lm(self.settings.llm_provider)

    async def translate(
        self,
        text: str,
        target: str | Language,
        source: str | Language | None = None,
    ) -> str:
        """
        Translate text to target language.

        Args:
            text: Text to translate
            target: Target language code
            source: Source language (model infers it if None)

        Returns:
            Translated text

        Raises:
            TranslationError: the model call failed or returned nothing
        """
        target = normalize_language_code(target)
        source_name = get_language_name(source) if source else "auto-detect"

        try:
            lm = self._lm()
            # DSPy predictors are blocking; keep the event loop free
            result = await asyncio.to_thread(
                self.translate_module,
                lm=lm,
                text=text,
                source_language=source_name,
                target_language=get_language_name(target),
                context=self.context,
            )
        except Exception as e:
            raise TranslationError(f"Translation to '{target}' failed: {e}") from e

        translation = (result.translated_text or "").strip()
        if not translation:
            raise TranslationError(f"Empty translation to '{target}'")
        return translation

    async def detect(self, text: str) -> str:
        """
        Detect language of text.

        Returns:
            Normalized ISO 639-1 code

        Raises:
            DetectionError: the model call failed or returned an unknown code
        """
        try:
            lm = self._lm()
            result = await asyncio.to_thread(self.detect_module, lm=lm, text=text[:500])  # Limit text length
        except Exception as e:
            raise DetectionError(f"Language detection failed: {e}") from e

        code = normalize_language_code(result.language_code or "")
        if not is_valid_language(code):
            raise DetectionError(f"Model returned unknown language code: {result.language_code!r}")
        return code


class DebugTranslator:
    """
    Offline backend for development and tests.

    Prefixes text with the target code instead of calling a model, and
    reports every text as the configured detection language.
    """

    def __init__(self, detected_language: str = "en"):
        self.detected_language = detected_language

    async def translate(
        self,
        text: str,
        target: str | Language,
        source: str | Language | None = None,
    ) -> str:
        return f"[{normalize_language_code(target)}] {text}"

    async def detect(self, text: str) -> str:
        return self.detected_language


def get_translator(settings: Settings | None = None) -> Translator | DebugTranslator:
    """Build the backend selected by settings.llm_provider."""
    settings = settings or get_settings()
    if settings.llm_provider == "debug":
        logger.info("Using offline debug translator")
        return DebugTranslator(detected_language=settings.fallback_language)
    return Translator(settings)
