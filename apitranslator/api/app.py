"""
Demo FastAPI application.

Shows the translation middleware on a couple of ordinary endpoints:

    GET /hello?lang=es
    GET /items            (x-accept-language: fr)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from apitranslator.config import Settings, get_settings
from apitranslator.i18n import (
    LANGUAGE_NAMES,
    TranslationOptions,
    TranslationOrchestrator,
    is_valid_language,
)
from apitranslator.middleware import TranslationMiddlewareOptions, install_translation_middleware

logger = logging.getLogger(__name__)

# Endpoints whose bodies are never rewritten by the middleware
UNTRANSLATED_PATHS = ("/health", "/languages", "/translate")


# =============================================================================
# Request/Response Models
# =============================================================================


class TranslateRequest(BaseModel):
    document: Any
    fields: list[str] = []
    target: str
    preserve_original: bool = False
    response_field: str = "translated"
    detect_source_language: bool = False


class TranslateResponse(BaseModel):
    document: Any
    target: str


# =============================================================================
# App Factory
# =============================================================================


def create_app(settings: Settings | None = None, backend: Any = None) -> FastAPI:
    """
    Build the demo app.

    Args:
        settings: Settings override (defaults to environment)
        backend: Translation backend override (defaults to settings.llm_provider)
    """
    settings = settings or get_settings()
    orchestrator = TranslationOrchestrator.from_settings(settings, backend=backend)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize and cleanup app resources."""
        logging.basicConfig(level=settings.log_level.upper())
        logger.info(f"Translation API starting in {settings.environment} mode")

        yield

        logger.info(f"Translation API shutting down (cache size: {len(orchestrator.cache)})")
        orchestrator.clear_cache()

    app = FastAPI(
        title="API Translator",
        description="Demo API whose responses are machine-translated on request",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.orchestrator = orchestrator

    install_translation_middleware(
        app,
        orchestrator,
        TranslationMiddlewareOptions(
            target_language=settings.default_target_language,
            field_to_translate=["message", "description", "items.*.title"],
            response_field=settings.response_field,
            preserve_original=True,
            skip_condition=lambda request: request.url.path in UNTRANSLATED_PATHS,
            lang_query_param=settings.lang_query_param,
            lang_header_name=settings.lang_header_name,
        ),
        max_body_bytes=settings.max_body_bytes,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "apitranslator"}

    # =========================================================================
    # Demo content
    # =========================================================================

    @app.get("/hello")
    async def hello():
        return {
            "status": "success",
            "message": "Hello! Welcome to our API.",
            "description": "This message will be automatically translated based on the lang parameter.",
        }

    @app.get("/items")
    async def list_items():
        return {
            "items": [
                {"id": 1, "title": "Fresh bread"},
                {"id": 2, "title": "Local honey"},
                {"id": 3, "title": "Goat cheese"},
            ],
        }

    @app.get("/greeting")
    async def greeting(request: Request):
        """Handler-side translation via the request helper."""
        return {"greeting": await request.state.translate("Good morning")}

    # =========================================================================
    # Utilities
    # =========================================================================

    @app.get("/languages")
    async def list_languages():
        return {
            "languages": [{"code": code, "name": name} for code, name in LANGUAGE_NAMES.items()],
            "count": len(LANGUAGE_NAMES),
        }

    @app.post("/translate", response_model=TranslateResponse)
    async def translate_document(request: TranslateRequest):
        """Translate an arbitrary document directly."""
        if not is_valid_language(request.target):
            raise HTTPException(status_code=422, detail=f"Unsupported language: {request.target}")

        try:
            options = TranslationOptions(
                preserve_original=request.preserve_original,
                response_field=request.response_field,
                detect_source_language=request.detect_source_language,
            )
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))

        document = await orchestrator.apply(request.document, request.fields, request.target, options)
        return TranslateResponse(document=document, target=request.target)

    return app


app = create_app()
