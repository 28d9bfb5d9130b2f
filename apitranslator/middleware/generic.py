"""
Framework-neutral adapter.

Usage:
    translate_response = create_translation_function(
        orchestrator,
        TranslationMiddlewareOptions(field_to_translate=["title", "body"], target_language="es"),
    )

    body = await translate_response({"title": "Hello", "body": "World"})
    body = await translate_response("plain text", language="fr")
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from apitranslator.i18n.languages import Language
from apitranslator.i18n.orchestrator import TranslationOrchestrator
from apitranslator.middleware.base import TranslationInterceptor, TranslationMiddlewareOptions


def create_translation_function(
    orchestrator: TranslationOrchestrator,
    options: TranslationMiddlewareOptions | None = None,
) -> Callable[..., Awaitable[Any]]:
    """Return ``async fn(response, language=None)`` translating any payload."""
    interceptor = TranslationInterceptor(orchestrator, options)

    async def translate_response(response: Any, language: str | Language | None = None) -> Any:
        return await interceptor.before_transmit(response, None, language)

    return translate_response
