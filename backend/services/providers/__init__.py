"""
Providers package - Translation backends behind one translate() contract.

Adding a backend means adding a class and one entry in each table below.
"""

from services.providers.azure import AzureProvider
from services.providers.base import (
    MissingCredentialError,
    ProviderError,
    ProviderResponseError,
    TranslationProvider,
)
from services.providers.deepl import DeepLProvider
from services.providers.gemini import GeminiProvider
from services.providers.mymemory import MyMemoryProvider
from services.providers.openai import OpenAIProvider
from services.token_protector import TokenProtector

FREE_PROVIDER = "mymemory"

PROVIDER_CLASSES: dict[str, type[TranslationProvider]] = {
    "mymemory": MyMemoryProvider,
    "azure": AzureProvider,
    "deepl": DeepLProvider,
    "openai": OpenAIProvider,
    "gemini": GeminiProvider,
}

PROVIDER_INFO: dict[str, dict] = {
    "mymemory": {
        "name": "MyMemory",
        "description": "Free, no key needed (always used for short texts)",
        "is_free": True,
    },
    "azure": {
        "name": "Azure Translator",
        "description": "2M characters/month free",
        "is_free": True,
    },
    "deepl": {
        "name": "DeepL",
        "description": "500K characters/month free, best for European languages",
        "is_free": True,
    },
    "openai": {
        "name": "OpenAI GPT",
        "description": "Paid, best for marketing copy",
        "is_free": False,
    },
    "gemini": {
        "name": "Google Gemini",
        "description": "Free tier available",
        "is_free": True,
    },
}


def build_providers(settings, protector: TokenProtector) -> dict[str, TranslationProvider]:
    """Instantiate every provider from application settings."""
    common = {"protector": protector, "source_language": settings.source_language}
    return {
        "mymemory": MyMemoryProvider(
            **common,
            url=settings.mymemory_url,
            email=settings.mymemory_email,
            delay_ms=settings.free_provider_delay_ms,
            timeout=settings.request_timeout,
        ),
        "azure": AzureProvider(
            **common,
            endpoint=settings.azure_endpoint,
            region=settings.azure_region,
            timeout=settings.request_timeout,
        ),
        "deepl": DeepLProvider(
            **common,
            free_url=settings.deepl_free_url,
            pro_url=settings.deepl_pro_url,
            timeout=settings.request_timeout,
        ),
        "openai": OpenAIProvider(
            **common,
            model=settings.openai_model,
            temperature=settings.llm_temperature,
            timeout=settings.request_timeout,
        ),
        "gemini": GeminiProvider(
            **common,
            model=settings.gemini_model,
            temperature=settings.llm_temperature,
        ),
    }


__all__ = [
    "FREE_PROVIDER",
    "PROVIDER_CLASSES",
    "PROVIDER_INFO",
    "AzureProvider",
    "DeepLProvider",
    "GeminiProvider",
    "MissingCredentialError",
    "MyMemoryProvider",
    "OpenAIProvider",
    "ProviderError",
    "ProviderResponseError",
    "TranslationProvider",
    "build_providers",
]
