"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # ==========================================================================
    # API Server (demo app)
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # ==========================================================================
    # AI / LLM
    # ==========================================================================

    # Primary: Gemini (accepts either GOOGLE_API_KEY or GEMINI_API_KEY)
    google_api_key: str = ""
    gemini_api_key: str = ""  # Alias for google_api_key
    gemini_model: str = "gemini-2.0-flash"

    # Fallback providers
    openai_api_key: str = ""
    openai_model: str = "gpt-4-turbo"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-opus-20240229"

    # Which provider to use: gemini, openai, anthropic, or debug (offline)
    llm_provider: str = "gemini"

    # ==========================================================================
    # Translation
    # ==========================================================================

    default_target_language: str | None = None
    fallback_language: str = "en"  # Used when detection fails
    translation_timeout: float = 10.0  # Seconds per backend call
    max_concurrency: int = 8

    enable_cache: bool = True
    cache_size: int = 1000

    # ==========================================================================
    # Response middleware
    # ==========================================================================

    lang_query_param: str = "lang"
    lang_header_name: str = "x-accept-language"
    response_field: str = "translated"
    max_body_bytes: int = 1_000_000

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
