"""
Response translation - translate selected fields of JSON documents.

Design:
1. Address fields with dotted paths ("items.*.title")
2. Translate string leaves through an LLM backend
3. Cache translations (bounded, insertion-order eviction)
4. Never fail a response because a translation failed

Usage:
    from apitranslator.i18n import TranslationOrchestrator, TranslationOptions, Translator

    orchestrator = TranslationOrchestrator(Translator())

    # Replace in place
    doc = await orchestrator.apply({"message": "Hello"}, ["message"], "es")

    # Keep originals, mirror translations under "translated"
    doc = await orchestrator.apply(
        {"items": [{"title": "Hello"}]},
        ["items.*.title"],
        "fr",
        TranslationOptions(preserve_original=True),
    )
"""

from apitranslator.i18n.cache import TranslationCache
from apitranslator.i18n.detector import LanguageDetector
from apitranslator.i18n.formatter import ResponseFormatter
from apitranslator.i18n.languages import (
    Language,
    LANGUAGE_NAMES,
    SUPPORTED_LANGUAGES,
    get_language_by_code,
    get_language_name,
    is_valid_language,
    normalize_language_code,
)
from apitranslator.i18n.orchestrator import (
    MergeMode,
    MergePolicy,
    TranslationOptions,
    TranslationOrchestrator,
    TranslationTask,
)
from apitranslator.i18n.paths import (
    FieldPathResolver,
    Location,
    NodeKind,
    node_kind,
    split_path,
)
from apitranslator.i18n.preferences import LanguagePreferenceResolver
from apitranslator.i18n.translator import (
    DebugTranslator,
    DetectionError,
    TranslationError,
    Translator,
    get_translator,
)

__all__ = [
    # Core
    "TranslationOrchestrator",
    "TranslationOptions",
    "TranslationTask",
    "MergeMode",
    "MergePolicy",
    # Paths
    "FieldPathResolver",
    "Location",
    "NodeKind",
    "node_kind",
    "split_path",
    # Cache & detection
    "TranslationCache",
    "LanguageDetector",
    "ResponseFormatter",
    "LanguagePreferenceResolver",
    # Backends
    "Translator",
    "DebugTranslator",
    "TranslationError",
    "DetectionError",
    "get_translator",
    # Language utilities
    "Language",
    "LANGUAGE_NAMES",
    "SUPPORTED_LANGUAGES",
    "get_language_name",
    "get_language_by_code",
    "is_valid_language",
    "normalize_language_code",
]
