"""
Structured field translation.

The orchestrator takes a JSON-shaped document and a list of field paths,
translates every string leaf those paths reach, and merges the results back
either in place or under a separate response field.

Design:
1. Resolve every path before anything is written, so all specifiers see the
   original document
2. Fetch translations for different specifiers concurrently, leaves within
   one specifier sequentially
3. Apply writes in declaration order (last writer wins, deterministically)
4. Never raise: a failing leaf keeps its original text

Usage:
    orchestrator = TranslationOrchestrator(Translator())

    doc = await orchestrator.apply(
        {"items": [{"title": "Hello"}, {"title": "Goodbye"}]},
        ["items.*.title"],
        "es",
        TranslationOptions(preserve_original=True, response_field="translated"),
    )
    # {"items": [...], "translated": {"items": [{"title": "Hola"}, {"title": "Adiós"}]}}
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from pydantic import BaseModel, field_validator

from apitranslator.config import Settings, get_settings
from apitranslator.i18n.cache import TranslationCache
from apitranslator.i18n.detector import LanguageDetector
from apitranslator.i18n.formatter import ResponseFormatter
from apitranslator.i18n.languages import Language, normalize_language_code
from apitranslator.i18n.paths import (
    FieldPathResolver,
    Location,
    NodeKind,
    Segment,
    join_path,
    node_kind,
    split_path,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Merge policy & options
# =============================================================================


class MergeMode(str, Enum):
    """Where a translated value goes."""

    REPLACE = "replace"  # Overwrite the source leaf
    PRESERVE_AT = "preserve_at"  # Mirror under a separate response path


@dataclass(frozen=True)
class MergePolicy:
    mode: MergeMode
    response_path: str | None = None

    @classmethod
    def replace(cls) -> MergePolicy:
        return cls(MergeMode.REPLACE)

    @classmethod
    def preserve_at(cls, response_path: str) -> MergePolicy:
        if not split_path(response_path):
            raise ValueError(f"Invalid response path: {response_path!r}")
        return cls(MergeMode.PRESERVE_AT, response_path)

    def destination(self, source_path: tuple[Segment, ...]) -> tuple[Segment, ...]:
        """Mirrored destination for a concrete source path."""
        if self.mode is MergeMode.REPLACE:
            return source_path
        return tuple(split_path(self.response_path or "")) + source_path


class TranslationOptions(BaseModel):
    """Per-invocation translation options."""

    preserve_original: bool = False
    response_field: str = "translated"
    detect_source_language: bool = False
    source_language: str | None = None
    include_metadata: bool = False
    metadata_field: str = "translationInfo"

    @field_validator("response_field", "metadata_field")
    @classmethod
    def _valid_path(cls, value: str) -> str:
        if not split_path(value):
            raise ValueError(f"Invalid field path: {value!r}")
        return value

    @property
    def merge_policy(self) -> MergePolicy:
        if self.preserve_original:
            return MergePolicy.preserve_at(self.response_field)
        return MergePolicy.replace()


@dataclass
class TranslationTask:
    """One string leaf on its way through the backend."""

    source_text: str
    location: Location
    target_language: str
    detected_source_language: str | None = None
    translated_text: str | None = None

    @property
    def source_path(self) -> tuple[Segment, ...]:
        return self.location.path


# =============================================================================
# Orchestrator
# =============================================================================


class TranslationOrchestrator:
    """
    Translates designated fields of a document.

    The backend is anything with ``async translate(text, target, source)``
    (and ``async detect(text)`` if source detection is used). The cache is
    injected so tests and callers control its capacity and lifetime.
    """

    def __init__(
        self,
        backend: Any,
        cache: TranslationCache | None = None,
        detector: LanguageDetector | None = None,
        resolver: FieldPathResolver | None = None,
        formatter: ResponseFormatter | None = None,
        timeout: float | None = None,
        max_concurrency: int | None = None,
        fallback_language: str = "en",
    ):
        self.backend = backend
        self.cache = cache if cache is not None else TranslationCache()
        self.detector = detector or LanguageDetector(backend, fallback_language=fallback_language)
        self.resolver = resolver or FieldPathResolver()
        self.formatter = formatter or ResponseFormatter()
        self.timeout = timeout
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    @classmethod
    def from_settings(cls, settings: Settings | None = None, backend: Any = None) -> TranslationOrchestrator:
        """Build an orchestrator wired from application settings."""
        from apitranslator.i18n.translator import get_translator

        settings = settings or get_settings()
        return cls(
            backend if backend is not None else get_translator(settings),
            cache=TranslationCache(capacity=settings.cache_size, enabled=settings.enable_cache),
            timeout=settings.translation_timeout,
            max_concurrency=settings.max_concurrency,
            fallback_language=settings.fallback_language,
        )

    # =========================================================================
    # Public API
    # =========================================================================

    async def apply(
        self,
        doc: Any,
        fields: str | Sequence[str],
        target_language: str | Language | None,
        options: TranslationOptions | None = None,
    ) -> Any:
        """
        Translate ``fields`` of ``doc`` into ``target_language``.

        Mutates ``doc`` in place (callers pass a document they own) and
        returns it. String documents are translated whole and the new string
        is returned. Always returns a usable document.
        """
        if doc is None or doc == "" or not target_language:
            return doc

        target = normalize_language_code(target_language)
        if not target:
            return doc

        options = options or TranslationOptions()
        kind = node_kind(doc)

        if kind is NodeKind.STRING:
            return await self._translate_whole(doc, target, options)
        if kind not in (NodeKind.OBJECT, NodeKind.ARRAY):
            return doc

        field_list = [fields] if isinstance(fields, str) else list(fields or [])
        if not field_list:
            return doc

        # Resolve first: every specifier sees the untranslated document
        plans = [(field, self.resolver.locate(doc, field)) for field in field_list]

        outcomes = await asyncio.gather(*(
            self._translate_field(field, locations, target, options)
            for field, locations in plans
        ))

        policy = options.merge_policy
        translated_paths: list[str] = []
        detected: set[str] = set()

        for (field, locations), tasks in zip(plans, outcomes):
            try:
                self._merge(doc, locations, tasks, policy)
            except Exception as e:
                logger.warning(f"Could not merge translations for '{field}': {e}")
                continue
            for task in tasks:
                if task.translated_text not in (None, task.source_text):
                    translated_paths.append(join_path(task.source_path))
                if task.detected_source_language:
                    detected.add(task.detected_source_language)

        logger.debug(f"Translated {len(translated_paths)} field(s) to '{target}'")

        if options.include_metadata and translated_paths and kind is NodeKind.OBJECT:
            source = options.source_language
            if len(detected) == 1:
                source = next(iter(detected))
            self.resolver.set_value(
                doc,
                split_path(options.metadata_field),
                self.formatter.build_metadata(source, target, translated_paths),
            )

        return doc

    async def translate_text(
        self,
        text: str,
        target_language: str | Language,
        source_language: str | Language | None = None,
    ) -> str:
        """Translate a single string; returns the original text on failure."""
        target = normalize_language_code(target_language) if target_language else ""
        if not text or not target:
            return text

        translated = await self._translate_one(
            text,
            target,
            normalize_language_code(source_language) if source_language else None,
        )
        return text if translated is None else self.formatter.format_value(translated)

    def clear_cache(self) -> None:
        self.cache.clear()
        self.detector.clear_cache()

    # =========================================================================
    # Internals
    # =========================================================================

    async def _translate_whole(self, text: str, target: str, options: TranslationOptions) -> str:
        source = options.source_language
        if options.detect_source_language:
            source = await self.detector.detect(text)
        return await self.translate_text(text, target, source)

    async def _translate_field(
        self,
        field: str,
        locations: list[Location],
        target: str,
        options: TranslationOptions,
    ) -> list[TranslationTask]:
        """Translate one specifier's string leaves, in order."""
        tasks: list[TranslationTask] = []
        try:
            for location in locations:
                if location.kind is not NodeKind.STRING or not location.value:
                    continue

                task = TranslationTask(
                    source_text=location.value,
                    location=location,
                    target_language=target,
                )
                tasks.append(task)

                source = options.source_language
                if options.detect_source_language:
                    source = await self.detector.detect(task.source_text)
                    task.detected_source_language = source

                source = normalize_language_code(source) if source else None
                task.translated_text = await self._translate_one(task.source_text, target, source)
        except Exception as e:
            logger.warning(f"Error translating field '{field}': {e}")
        return tasks

    async def _translate_one(self, text: str, target: str, source: str | None) -> str | None:
        """Cache-backed backend call. None means "keep the original"."""
        if source and source == target:
            return text

        key = TranslationCache.make_key(text, target, source)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            if self._semaphore is not None:
                async with self._semaphore:
                    translated = await self._call_backend(text, target, source)
            else:
                translated = await self._call_backend(text, target, source)
        except asyncio.TimeoutError:
            logger.warning(f"Translation to '{target}' timed out after {self.timeout}s")
            return None
        except Exception as e:
            logger.warning(f"Translation to '{target}' failed: {e}")
            return None

        if not isinstance(translated, str):
            logger.warning(f"Backend returned {type(translated).__name__} instead of text")
            return None

        self.cache.put(key, translated)
        return translated

    async def _call_backend(self, text: str, target: str, source: str | None) -> Any:
        return await asyncio.wait_for(
            self.backend.translate(text, target, source),
            timeout=self.timeout,
        )

    def _merge(
        self,
        doc: Any,
        locations: list[Location],
        tasks: list[TranslationTask],
        policy: MergePolicy,
    ) -> None:
        if policy.mode is MergeMode.REPLACE:
            for task in tasks:
                if task.translated_text is not None:
                    task.location.write(self.formatter.format_value(task.translated_text))
            return

        # Keep the mirrored shape parallel for arrays of objects
        for location in locations:
            if isinstance(location.key, int) and location.kind in (NodeKind.OBJECT, NodeKind.ARRAY):
                factory = dict if location.kind is NodeKind.OBJECT else list
                self.resolver.ensure_container(doc, policy.destination(location.path), factory)

        for task in tasks:
            if task.translated_text is None:
                continue
            written = self.resolver.set_value(
                doc,
                policy.destination(task.source_path),
                self.formatter.format_value(task.translated_text),
            )
            if not written:
                logger.debug(f"Cannot write translation for '{join_path(task.source_path)}' under '{policy.response_path}'")
