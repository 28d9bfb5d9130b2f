"""
Response interception.

Framework adapters never patch a framework's send/json methods. They call one
hook, ``before_transmit(payload)``, and wait for it before handing the payload
to the transport.
"""

from __future__ import annotations

import copy
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from pydantic import BaseModel

from apitranslator.i18n.languages import Language
from apitranslator.i18n.orchestrator import TranslationOptions, TranslationOrchestrator
from apitranslator.i18n.paths import NodeKind, node_kind
from apitranslator.i18n.preferences import LanguagePreferenceResolver

logger = logging.getLogger(__name__)


class TranslationMiddlewareOptions(BaseModel):
    """Options shared by every framework adapter."""

    target_language: str | None = None  # Default when the request names none
    field_to_translate: str | list[str] = "message"
    response_field: str = "translated"
    preserve_original: bool = True
    skip_condition: Callable[[Any], bool] | None = None
    lang_query_param: str = "lang"
    lang_header_name: str = "x-accept-language"
    detect_source_language: bool = False
    include_metadata: bool = False

    @property
    def fields(self) -> list[str]:
        if isinstance(self.field_to_translate, str):
            return [self.field_to_translate]
        return list(self.field_to_translate)

    def translation_options(self) -> TranslationOptions:
        return TranslationOptions(
            preserve_original=self.preserve_original,
            response_field=self.response_field,
            detect_source_language=self.detect_source_language,
            include_metadata=self.include_metadata,
        )


class ResponseInterceptor(ABC):
    """Single extension point between a handler's result and the wire."""

    @abstractmethod
    async def before_transmit(self, payload: Any, request: Any = None) -> Any:
        """
        Transform an outgoing payload.

        Args:
            payload: Raw body (str) or an already-parsed structure
            request: The inbound request, if the framework has one

        Returns:
            The payload to actually send
        """
        pass


class TranslationInterceptor(ResponseInterceptor):
    """
    Translates outgoing payloads for one adapter.

    Never raises: on any failure the original payload is returned.
    """

    def __init__(
        self,
        orchestrator: TranslationOrchestrator,
        options: TranslationMiddlewareOptions | None = None,
        preferences: LanguagePreferenceResolver | None = None,
    ):
        self.orchestrator = orchestrator
        self.options = options or TranslationMiddlewareOptions()
        self.preferences = preferences or LanguagePreferenceResolver(
            query_param=self.options.lang_query_param,
            header_name=self.options.lang_header_name,
            default=self.options.target_language,
        )
        self._translation_options = self.options.translation_options()

    def target_language(self, request: Any = None, explicit: str | Language | None = None) -> str | None:
        """Effective target language for this request."""
        if explicit is None:
            explicit = getattr(getattr(request, "state", None), "target_language", None)
        if request is None:
            return self.preferences.resolve(explicit, None, None, self.preferences.default)
        return self.preferences.resolve_from_request(request, explicit)

    def should_skip(self, request: Any) -> bool:
        """True when the skip predicate matches. A failing predicate also skips."""
        if self.options.skip_condition is None:
            return False
        try:
            return bool(self.options.skip_condition(request))
        except Exception:
            logger.exception("skip_condition failed, sending original payload")
            return True

    async def before_transmit(
        self,
        payload: Any,
        request: Any = None,
        language: str | Language | None = None,
    ) -> Any:
        try:
            if self.should_skip(request):
                logger.debug("Translation skipped by skip_condition")
                return payload

            state = getattr(request, "state", None)
            if state is not None and getattr(state, "translated", False):
                logger.debug("Response already translated")
                return payload

            target = self.target_language(request, language)
            if not target:
                return payload

            result = await self._translate_payload(payload, target)
            if state is not None:
                state.translated = True
            return result
        except Exception:
            logger.exception("Translation middleware failed, sending original payload")
            return payload

    async def translate_text(self, text: str, request: Any = None) -> str:
        """Direct translation helper for handlers."""
        target = self.target_language(request)
        if not target:
            return text
        return await self.orchestrator.translate_text(text, target)

    async def _translate_payload(self, payload: Any, target: str) -> Any:
        fields = self.options.fields
        options = self._translation_options

        if isinstance(payload, str):
            try:
                parsed = json.loads(payload)
            except ValueError:
                # Not JSON: translate the body as plain text
                if not payload.strip():
                    return payload
                return await self.orchestrator.apply(payload, fields, target, options)

            if node_kind(parsed) not in (NodeKind.OBJECT, NodeKind.ARRAY):
                return payload
            result = await self.orchestrator.apply(parsed, fields, target, options)
            return json.dumps(result, ensure_ascii=False)

        if node_kind(payload) in (NodeKind.OBJECT, NodeKind.ARRAY):
            # The caller keeps its object; we mutate a copy
            return await self.orchestrator.apply(copy.deepcopy(payload), fields, target, options)

        return payload
