"""
Target language selection for one request.

Precedence, highest first:
1. Explicit per-call override
2. Query parameter (``?lang=fr``)
3. Header (``x-accept-language: fr``)
4. Configured default

If none is set the result is None and translation is skipped.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from apitranslator.i18n.languages import Language, normalize_language_code

logger = logging.getLogger(__name__)


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, Language):
        return value.value
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
        return _clean(value)
    if not isinstance(value, str):
        return None

    # Accept-Language style lists: take the first tag
    first = value.split(",", 1)[0].strip()
    if not first:
        return None
    return normalize_language_code(first)


def _header(headers: Mapping[str, Any] | None, name: str) -> Any:
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case sensitive; Starlette headers are not
    lowered = name.lower()
    for key, candidate in headers.items():
        if isinstance(key, str) and key.lower() == lowered:
            return candidate
    return None


class LanguagePreferenceResolver:
    """
    Derives the effective target language.

    Usage:
        resolver = LanguagePreferenceResolver(default="en")

        # From raw values
        resolver.resolve(None, "fr", "de", "en")  # -> "fr"

        # From a Starlette/FastAPI request
        lang = resolver.resolve_from_request(request)
    """

    def __init__(
        self,
        query_param: str = "lang",
        header_name: str = "x-accept-language",
        default: str | Language | None = None,
    ):
        self.query_param = query_param
        self.header_name = header_name
        self.default = default

    @staticmethod
    def resolve(
        explicit_language: Any = None,
        query_value: Any = None,
        header_value: Any = None,
        configured_default: Any = None,
    ) -> str | None:
        """First non-blank value in precedence order, normalized."""
        for candidate in (explicit_language, query_value, header_value, configured_default):
            language = _clean(candidate)
            if language:
                return language
        return None

    def resolve_from_request(self, request: Any, explicit: Any = None) -> str | None:
        """Resolve using the request's query parameters and headers."""
        query_params = getattr(request, "query_params", None) or {}
        headers = getattr(request, "headers", None)

        language = self.resolve(
            explicit,
            query_params.get(self.query_param),
            _header(headers, self.header_name),
            self.default,
        )
        logger.debug(f"Resolved target language: {language or 'NONE'}")
        return language
