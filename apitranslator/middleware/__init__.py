"""
Framework adapters.

Each adapter captures an outgoing payload, runs it through a
TranslationInterceptor, and sends whatever comes back.
"""

from apitranslator.middleware.base import (
    ResponseInterceptor,
    TranslationInterceptor,
    TranslationMiddlewareOptions,
)
from apitranslator.middleware.generic import create_translation_function
from apitranslator.middleware.web import install_translation_middleware

__all__ = [
    "ResponseInterceptor",
    "TranslationInterceptor",
    "TranslationMiddlewareOptions",
    "create_translation_function",
    "install_translation_middleware",
]
