"""
Tests for the translation backends.

No model is called: the DSPy predictor and LM factory are patched out.
"""

from types import SimpleNamespace

import pytest

import apitranslator.ai.client as ai_client
from apitranslator.config import Settings
from apitranslator.i18n import (
    DebugTranslator,
    DetectionError,
    TranslationError,
    Translator,
    get_translator,
)


@pytest.fixture
def settings():
    return Settings(llm_provider="gemini", _env_file=None)


@pytest.fixture
def fake_lm(monkeypatch):
    lm = object()
    monkeypatch.setattr(ai_client, "get_lm", lambda provider=None, model=None: lm)
    return lm


class FakePredict:
    def __init__(self, **outputs):
        self.outputs = outputs
        self.calls = []

    def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(**self.outputs)


# =============================================================================
# Translator
# =============================================================================


class TestTranslator:
    @pytest.mark.asyncio
    async def test_translate_passes_language_names(self, settings, fake_lm):
        translator = Translator(settings)
        predict = FakePredict(translated_text="  Hola  ")
        translator._translate_module = predict

        result = await translator.translate("Hello", "es-ES")

        assert result == "Hola"
        call = predict.calls[0]
        assert call["lm"] is fake_lm
        assert call["target_language"] == "Spanish"
        assert call["source_language"] == "auto-detect"

    @pytest.mark.asyncio
    async def test_source_language_named(self, settings, fake_lm):
        translator = Translator(settings)
        predict = FakePredict(translated_text="Hallo")
        translator._translate_module = predict

        await translator.translate("Hello", "de", "en")

        assert predict.calls[0]["source_language"] == "English"

    @pytest.mark.asyncio
    async def test_empty_output_raises(self, settings, fake_lm):
        translator = Translator(settings)
        translator._translate_module = FakePredict(translated_text="   ")

        with pytest.raises(TranslationError):
            await translator.translate("Hello", "es")

    @pytest.mark.asyncio
    async def test_lm_errors_become_translation_errors(self, settings, monkeypatch):
        def missing_key(provider=None, model=None):
            raise ValueError("GOOGLE_API_KEY or GEMINI_API_KEY not set")

        monkeypatch.setattr(ai_client, "get_lm", missing_key)

        with pytest.raises(TranslationError):
            await Translator(settings).translate("Hello", "es")
        with pytest.raises(DetectionError):
            await Translator(settings).detect("Hello")

    @pytest.mark.asyncio
    async def test_detect_normalizes(self, settings, fake_lm):
        translator = Translator(settings)
        translator._detect_module = FakePredict(language_code="FR-fr")

        assert await translator.detect("Bonjour") == "fr"

    @pytest.mark.asyncio
    async def test_detect_unknown_code_raises(self, settings, fake_lm):
        translator = Translator(settings)
        translator._detect_module = FakePredict(language_code="gibberish")

        with pytest.raises(DetectionError):
            await translator.detect("???")


# =============================================================================
# Debug backend & factory
# =============================================================================


class TestDebugTranslator:
    @pytest.mark.asyncio
    async def test_prefixes_target(self):
        backend = DebugTranslator()
        assert await backend.translate("Hello", "es-MX") == "[es] Hello"
        assert await backend.detect("anything") == "en"

    def test_factory_selects_backend(self):
        assert isinstance(get_translator(Settings(llm_provider="debug", _env_file=None)), DebugTranslator)
        assert isinstance(get_translator(Settings(llm_provider="openai", _env_file=None)), Translator)


# =============================================================================
# LM credentials
# =============================================================================


class TestCredentials:
    def test_gemini_accepts_either_key(self):
        settings = Settings(google_api_key="", gemini_api_key="g-key", _env_file=None)
        assert ai_client._credentials(settings, "gemini") == (settings.gemini_model, "g-key")

    def test_missing_key_names_env_vars(self):
        settings = Settings(openai_api_key="", _env_file=None)
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            ai_client._credentials(settings, "openai")

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            ai_client._credentials(Settings(_env_file=None), "mystery")
