"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from pydantic_settings import BaseSettings

from services.token_protector import DEFAULT_PROTECTED_TERMS
from services.diff_selector import DEFAULT_MARKETING_PREFIXES


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Language files (<code>.json) served by /api/i18n
    i18n_dir: str = "i18n"
    source_language: str = "en"

    # Batching and size classification
    short_batch_size: int = 20
    long_batch_size: int = 5
    long_text_threshold: int = 50
    marketing_prefixes: list[str] = list(DEFAULT_MARKETING_PREFIXES)
    protected_terms: list[str] = list(DEFAULT_PROTECTED_TERMS)

    # Throttling (milliseconds, 0 disables)
    batch_delay_ms: int = 500
    free_provider_delay_ms: int = 100

    # Provider endpoints
    request_timeout: float = 30.0
    mymemory_url: str = "https://api.mymemory.translated.net/get"
    mymemory_email: str = ""  # Raises the anonymous daily quota
    azure_endpoint: str = "https://api.cognitive.microsofttranslator.com"
    azure_region: str = ""
    deepl_free_url: str = "https://api-free.deepl.com/v2/translate"
    deepl_pro_url: str = "https://api.deepl.com/v2/translate"

    # LLM providers
    openai_model: str = "gpt-4o-mini"
    gemini_model: str = "gemini-2.0-flash"
    llm_temperature: float = 0.3

    # Server-side credentials (can be updated at runtime via /api/keys)
    azure_api_key: str = ""
    deepl_api_key: str = ""
    openai_api_key: str = ""
    gemini_api_key: str = ""

    cors_origins: list[str] = [
        "http://localhost:3000",  # Next.js admin panel
        "http://localhost:5173",  # Vite dev server
    ]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


def get_settings() -> Settings:
    """Get the global settings instance (overridable as a FastAPI dependency)."""
    return settings


# Global settings instance (created on import)
settings = Settings()


def update_api_key(target: Settings, provider: str, api_key: str | None):
    """Update a provider credential at runtime."""
    setattr(target, f"{provider}_api_key", api_key or "")
