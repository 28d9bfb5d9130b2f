"""
FastAPI / Starlette adapter.

Installs an HTTP middleware that buffers the handler's response body, awaits
translation, and only then builds the response that goes to the client.
"""

from __future__ import annotations

import logging
from functools import partial

from fastapi import FastAPI, Request
from starlette.responses import Response, StreamingResponse

from apitranslator.i18n.orchestrator import TranslationOrchestrator
from apitranslator.middleware.base import TranslationInterceptor, TranslationMiddlewareOptions

logger = logging.getLogger(__name__)

TRANSLATABLE_TYPES = ("application/json", "text/plain")


def install_translation_middleware(
    app: FastAPI,
    orchestrator: TranslationOrchestrator,
    options: TranslationMiddlewareOptions | None = None,
    *,
    max_body_bytes: int = 1_000_000,
) -> TranslationInterceptor:
    """
    Install response translation on ``app``.

    Handlers can:
    - set ``request.state.target_language`` to override the language
    - call ``await request.state.translate(text)`` for ad-hoc strings
    """
    interceptor = TranslationInterceptor(orchestrator, options)

    @app.middleware("http")
    async def _translation_middleware(request: Request, call_next):
        request.state.translate = partial(interceptor.translate_text, request=request)

        response = await call_next(request)

        if interceptor.should_skip(request):
            return response

        content_type = (response.headers.get("content-type") or "").lower()
        if not any(media in content_type for media in TRANSLATABLE_TYPES):
            return response

        content_length = response.headers.get("content-length")
        if content_length is not None:
            try:
                if int(content_length) > max_body_bytes:
                    return response
            except ValueError:
                pass

        # Avoid huge bodies or streaming; if too large, pass through without rewrite.
        body_parts = []
        body_size = 0
        iterator = response.body_iterator.__aiter__()
        while True:
            try:
                chunk = await iterator.__anext__()
            except StopAsyncIteration:
                break
            body_parts.append(chunk)
            body_size += len(chunk)
            if body_size > max_body_bytes:
                async def _stream_body():
                    for part in body_parts:
                        yield part
                    async for rest in iterator:
                        yield rest

                streaming = StreamingResponse(
                    _stream_body(),
                    status_code=response.status_code,
                    background=response.background,
                )
                streaming.raw_headers = list(response.raw_headers)
                return streaming

        body = b"".join(body_parts)

        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError:
            return _rebuild(response, body)

        translated = await interceptor.before_transmit(text, request)
        if translated == text:
            return _rebuild(response, body)

        logger.debug(f"Translated response for {request.method} {request.url.path}")
        return _rebuild(response, translated.encode("utf-8"))

    return interceptor


def _rebuild(response: Response, body: bytes) -> Response:
    """New response with ``body``; every original header is kept, repeats included."""
    rebuilt = Response(
        content=body,
        status_code=response.status_code,
        background=response.background,
    )
    rebuilt.raw_headers = [
        (name, value) for name, value in response.raw_headers if name != b"content-length"
    ]
    rebuilt.raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
    return rebuilt
