"""
Tests for the structured field translation orchestrator.

Core principle: translation is an enhancement - a failure anywhere leaves
the original text, never breaks the response.
"""

import pytest

from apitranslator.i18n import (
    MergeMode,
    MergePolicy,
    ResponseFormatter,
    TranslationCache,
    TranslationOptions,
    TranslationOrchestrator,
)
from tests.conftest import StubBackend


PRESERVE = TranslationOptions(preserve_original=True, response_field="translated")


# =============================================================================
# MergePolicy / Options Tests
# =============================================================================


class TestMergePolicy:
    def test_options_select_policy(self):
        assert TranslationOptions().merge_policy.mode is MergeMode.REPLACE
        assert PRESERVE.merge_policy == MergePolicy.preserve_at("translated")

    def test_mirrored_destination(self):
        policy = MergePolicy.preserve_at("meta.translated")
        assert policy.destination(("items", 2, "title")) == ("meta", "translated", "items", 2, "title")
        assert MergePolicy.replace().destination(("a",)) == ("a",)

    def test_invalid_response_path_rejected(self):
        with pytest.raises(ValueError):
            MergePolicy.preserve_at("")
        with pytest.raises(ValueError):
            TranslationOptions(preserve_original=True, response_field="a..b")


# =============================================================================
# Replace Mode
# =============================================================================


class TestReplace:
    @pytest.mark.asyncio
    async def test_scenario_two_fields(self, orchestrator):
        doc = {"message": "Hello", "description": "World"}

        result = await orchestrator.apply(doc, ["message", "description"], "es")

        assert result == {"message": "HELLO", "description": "WORLD"}

    @pytest.mark.asyncio
    async def test_single_field_string(self, orchestrator):
        result = await orchestrator.apply({"message": "hi", "other": "keep"}, "message", "fr")
        assert result == {"message": "HI", "other": "keep"}

    @pytest.mark.asyncio
    async def test_leaf_equals_backend_output(self, backend, orchestrator):
        doc = {"data": {"title": "welcome"}}

        await orchestrator.apply(doc, ["data.title"], "de")

        assert doc["data"]["title"] == "WELCOME"
        assert backend.calls == [("welcome", "de", None)]

    @pytest.mark.asyncio
    async def test_wildcard_translates_each_element_in_order(self, backend, orchestrator):
        doc = {"items": [{"title": "apple"}, {"title": "banana"}, {"id": 3}]}

        result = await orchestrator.apply(doc, ["items.*.title"], "es")

        assert result["items"] == [{"title": "APPLE"}, {"title": "BANANA"}, {"id": 3}]
        assert [c[0] for c in backend.calls] == ["apple", "banana"]

    @pytest.mark.asyncio
    async def test_terminal_wildcard_over_strings(self, orchestrator):
        doc = {"tags": ["red", {"code": 1}, "blue", 7]}

        await orchestrator.apply(doc, ["tags.*"], "es")

        assert doc["tags"] == ["RED", {"code": 1}, "BLUE", 7]

    @pytest.mark.asyncio
    async def test_array_document(self, orchestrator):
        result = await orchestrator.apply([{"title": "a"}, {"title": "b"}], ["*.title"], "es")
        assert result == [{"title": "A"}, {"title": "B"}]

    @pytest.mark.asyncio
    async def test_missing_and_non_string_fields_are_ignored(self, backend, orchestrator):
        doc = {"count": 1, "nested": {"value": 2}, "items": "not a list"}

        result = await orchestrator.apply(
            doc, ["count", "nested", "nested.value", "missing.path", "items.*.title"], "es"
        )

        assert result == {"count": 1, "nested": {"value": 2}, "items": "not a list"}
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_overlapping_specifiers_use_original_text(self):
        """Both specifiers resolve before any write, so text isn't translated twice."""
        backend = StubBackend(transform=lambda text: text + "!")
        orchestrator = TranslationOrchestrator(backend, cache=TranslationCache(capacity=0))

        doc = {"items": [{"title": "hi"}]}
        await orchestrator.apply(doc, ["items.*.title", "items.0.title"], "es")

        assert doc["items"][0]["title"] == "hi!"


# =============================================================================
# Preserve Mode
# =============================================================================


class TestPreserve:
    @pytest.mark.asyncio
    async def test_original_kept_translation_mirrored(self, orchestrator):
        doc = {"message": "Hello"}

        result = await orchestrator.apply(doc, ["message"], "es", PRESERVE)

        assert result == {"message": "Hello", "translated": {"message": "HELLO"}}

    @pytest.mark.asyncio
    async def test_wildcard_mirror_preserves_indices(self, orchestrator):
        doc = {"items": [{"title": "a"}, {"id": 2}, {"title": "c"}]}

        await orchestrator.apply(doc, ["items.*.title"], "es", PRESERVE)

        assert doc["items"] == [{"title": "a"}, {"id": 2}, {"title": "c"}]
        assert doc["translated"]["items"] == [{"title": "A"}, None, {"title": "C"}]

    @pytest.mark.asyncio
    async def test_placeholders_for_object_elements(self, orchestrator):
        doc = {"tags": ["red", {"code": 1}, "blue"]}

        await orchestrator.apply(doc, ["tags.*"], "es", PRESERVE)

        assert doc["tags"] == ["red", {"code": 1}, "blue"]
        assert doc["translated"] == {"tags": ["RED", {}, "BLUE"]}

    @pytest.mark.asyncio
    async def test_nested_response_root(self, orchestrator):
        doc = {"data": {"title": "hi"}}
        options = TranslationOptions(preserve_original=True, response_field="meta.i18n")

        await orchestrator.apply(doc, ["data.title"], "es", options)

        assert doc["meta"] == {"i18n": {"data": {"title": "HI"}}}

    @pytest.mark.asyncio
    async def test_multiple_specifiers_share_root(self, orchestrator):
        doc = {"message": "a", "description": "b"}

        await orchestrator.apply(doc, ["message", "description"], "es", PRESERVE)

        assert doc["translated"] == {"message": "A", "description": "B"}


# =============================================================================
# Edge Cases
# =============================================================================


class TestEdgeCases:
    @pytest.mark.asyncio
    async def test_empty_field_list_is_identity(self, backend, orchestrator):
        doc = {"message": "Hello", "items": [1, 2]}

        result = await orchestrator.apply(doc, [], "es")

        assert result == {"message": "Hello", "items": [1, 2]}
        assert backend.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("target", [None, "", "  "])
    async def test_no_target_language(self, backend, orchestrator, target):
        doc = {"message": "Hello"}
        assert await orchestrator.apply(doc, ["message"], target) == {"message": "Hello"}
        assert backend.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("doc", [None, "", 42, True])
    async def test_untranslatable_documents_returned_unchanged(self, orchestrator, doc):
        assert await orchestrator.apply(doc, ["message"], "es") == doc

    @pytest.mark.asyncio
    async def test_string_document_translated_whole(self, orchestrator):
        assert await orchestrator.apply("plain text body", ["message"], "es") == "PLAIN TEXT BODY"

    @pytest.mark.asyncio
    async def test_empty_string_leaf_not_sent(self, backend, orchestrator):
        doc = {"message": ""}
        await orchestrator.apply(doc, ["message"], "es")
        assert doc == {"message": ""}
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_same_source_and_target_skipped(self, backend, orchestrator):
        doc = {"message": "Hola"}
        await orchestrator.apply(doc, ["message"], "es", TranslationOptions(source_language="es"))
        assert doc == {"message": "Hola"}
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_target_language_normalized(self, backend, orchestrator):
        await orchestrator.apply({"message": "x"}, ["message"], "es-MX")
        assert backend.calls[0][1] == "es"


# =============================================================================
# Failure Isolation
# =============================================================================


class TestFailures:
    @pytest.mark.asyncio
    async def test_failing_field_keeps_original(self):
        backend = StubBackend(fail_on=("Hello",))
        orchestrator = TranslationOrchestrator(backend)

        result = await orchestrator.apply(
            {"message": "Hello", "description": "World"}, ["message", "description"], "es"
        )

        assert result == {"message": "Hello", "description": "WORLD"}

    @pytest.mark.asyncio
    async def test_failing_wildcard_element_isolated(self):
        backend = StubBackend(fail_on=("b",))
        orchestrator = TranslationOrchestrator(backend)
        doc = {"items": [{"title": "a"}, {"title": "b"}, {"title": "c"}]}

        await orchestrator.apply(doc, ["items.*.title"], "es", PRESERVE)

        assert doc["translated"]["items"] == [{"title": "A"}, None, {"title": "C"}]

    @pytest.mark.asyncio
    async def test_timeout_keeps_original(self):
        backend = StubBackend(delay=0.5)
        orchestrator = TranslationOrchestrator(backend, timeout=0.01)

        result = await orchestrator.apply({"message": "slow"}, ["message"], "es")

        assert result == {"message": "slow"}

    @pytest.mark.asyncio
    async def test_failures_are_not_cached(self):
        backend = StubBackend(fail_on=("Hello",))
        orchestrator = TranslationOrchestrator(backend)

        await orchestrator.apply({"message": "Hello"}, ["message"], "es")
        await orchestrator.apply({"message": "Hello"}, ["message"], "es")

        assert len(backend.calls) == 2
        assert len(orchestrator.cache) == 0

    @pytest.mark.asyncio
    async def test_non_string_backend_result_ignored(self):
        backend = StubBackend(transform=lambda text: None)
        orchestrator = TranslationOrchestrator(backend)

        assert await orchestrator.apply({"m": "x"}, ["m"], "es") == {"m": "x"}

    @pytest.mark.asyncio
    async def test_translate_text_falls_back(self):
        orchestrator = TranslationOrchestrator(StubBackend(fail_on=("oops",)))
        assert await orchestrator.translate_text("oops", "fr") == "oops"
        assert await orchestrator.translate_text("fine", "fr") == "FINE"

    @pytest.mark.asyncio
    async def test_translate_text_blank_target(self, backend, orchestrator):
        assert await orchestrator.translate_text("hi", "  ") == "hi"
        assert backend.calls == []


# =============================================================================
# Cache & Detection
# =============================================================================


class TestCachingAndDetection:
    @pytest.mark.asyncio
    async def test_repeated_text_hits_cache(self, backend, orchestrator):
        doc = {"items": [{"title": "same"}, {"title": "same"}]}

        await orchestrator.apply(doc, ["items.*.title"], "es")
        await orchestrator.apply({"message": "same"}, ["message"], "es")

        assert len(backend.calls) == 1
        assert orchestrator.cache.get(("same", "es", "auto")) == "SAME"

    @pytest.mark.asyncio
    async def test_cache_is_per_target_language(self, backend, orchestrator):
        await orchestrator.apply({"m": "x"}, ["m"], "es")
        await orchestrator.apply({"m": "x"}, ["m"], "fr")

        assert len(backend.calls) == 2

    @pytest.mark.asyncio
    async def test_detected_language_used_as_source(self):
        backend = StubBackend(detected="fr")
        orchestrator = TranslationOrchestrator(backend)
        options = TranslationOptions(detect_source_language=True)

        await orchestrator.apply({"message": "Bonjour"}, ["message"], "es", options)

        assert backend.detect_calls == ["Bonjour"]
        assert backend.calls == [("Bonjour", "es", "fr")]
        assert ("Bonjour", "es", "fr") in orchestrator.cache

    @pytest.mark.asyncio
    async def test_detection_failure_uses_fallback(self):
        backend = StubBackend(detect_error=True)
        orchestrator = TranslationOrchestrator(backend, fallback_language="en")
        options = TranslationOptions(detect_source_language=True)

        result = await orchestrator.apply({"message": "Hi"}, ["message"], "es", options)

        assert result == {"message": "HI"}
        assert backend.calls == [("Hi", "es", "en")]

    @pytest.mark.asyncio
    async def test_clear_cache(self, backend, orchestrator):
        await orchestrator.apply({"m": "x"}, ["m"], "es")
        orchestrator.clear_cache()
        await orchestrator.apply({"m": "x"}, ["m"], "es")

        assert len(backend.calls) == 2


# =============================================================================
# Metadata & Formatting
# =============================================================================


class TestMetadataAndFormatting:
    @pytest.mark.asyncio
    async def test_metadata_lists_translated_paths(self, orchestrator):
        options = TranslationOptions(include_metadata=True)
        doc = {"items": [{"title": "a"}, {"title": "b"}], "message": 5}

        await orchestrator.apply(doc, ["items.*.title", "message"], "es", options)

        info = doc["translationInfo"]
        assert info["translatedFields"] == ["items.0.title", "items.1.title"]
        assert info["targetLanguage"] == "es"
        assert info["sourceLanguage"] == "auto"
        assert "translatedAt" in info

    @pytest.mark.asyncio
    async def test_no_metadata_when_nothing_translated(self, orchestrator):
        doc = {"message": 5}
        await orchestrator.apply(doc, ["message"], "es", TranslationOptions(include_metadata=True))
        assert doc == {"message": 5}

    @pytest.mark.asyncio
    async def test_same_language_leaves_not_reported(self, backend, orchestrator):
        doc = {"message": "Hola"}
        options = TranslationOptions(include_metadata=True, source_language="es")

        await orchestrator.apply(doc, ["message"], "es", options)

        assert doc == {"message": "Hola"}
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_formatter_applied_on_merge(self):
        backend = StubBackend(transform=lambda text: "  hola mundo ")
        orchestrator = TranslationOrchestrator(
            backend, formatter=ResponseFormatter(trim=True, capitalize_first=True)
        )

        result = await orchestrator.apply({"message": "hello world"}, ["message"], "es")

        assert result == {"message": "Hola mundo"}
