"""
Language model used by the translation backend.

The provider comes from ``LLM_PROVIDER``; every provider is reached through
its litellm model prefix (``gemini/``, ``openai/``, ``anthropic/``). The
offline ``debug`` provider never gets here.
"""

from __future__ import annotations

from functools import lru_cache

import dspy

from apitranslator.config import Settings, get_settings

# provider -> env vars that may hold its key, in lookup order
PROVIDER_KEYS: dict[str, tuple[str, ...]] = {
    "gemini": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
}


def _credentials(settings: Settings, provider: str) -> tuple[str, str]:
    """Default model and API key for ``provider``."""
    if provider not in PROVIDER_KEYS:
        raise ValueError(f"Unknown provider: {provider}")

    model = getattr(settings, f"{provider}_model")
    for env_name in PROVIDER_KEYS[provider]:
        api_key = getattr(settings, env_name.lower())
        if api_key:
            return model, api_key

    raise ValueError(f"{' or '.join(PROVIDER_KEYS[provider])} not set")


@lru_cache
def get_lm(provider: str | None = None, model: str | None = None) -> dspy.LM:
    """
    Build (once per provider/model) the LM that translates API text.

    Raises:
        ValueError: unknown provider, or its API key is missing
    """
    settings = get_settings()
    provider = provider or settings.llm_provider

    default_model, api_key = _credentials(settings, provider)
    return dspy.LM(model=f"{provider}/{model or default_model}", api_key=api_key)
