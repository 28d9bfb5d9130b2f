"""LLM access for the translation backend."""

from apitranslator.ai.client import get_lm

__all__ = ["get_lm"]
