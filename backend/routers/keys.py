"""
API Keys Router - Manage server-side provider API keys at runtime.
"""

import logging
from fastapi import APIRouter, Depends

from config import Settings, get_settings, update_api_key
from models.requests import SetApiKeysRequest
from models.responses import ApiKeyStatus

logger = logging.getLogger(__name__)

router = APIRouter()

KEYED_PROVIDERS = ("azure", "deepl", "openai", "gemini")


def mask_key(key: str) -> str:
    return f"{key[:4]}...{key[-4:]}" if len(key) > 8 else "***"


def configured_credentials(settings: Settings) -> dict[str, str]:
    """Provider -> server-side key, for providers that have one."""
    credentials = {}
    for provider in KEYED_PROVIDERS:
        key = getattr(settings, f"{provider}_api_key", "")
        if key:
            credentials[provider] = key
    return credentials


def key_status(settings: Settings) -> ApiKeyStatus:
    credentials = configured_credentials(settings)
    return ApiKeyStatus(**{f"{p}_configured": p in credentials for p in KEYED_PROVIDERS})


@router.post("", response_model=ApiKeyStatus)
async def set_api_keys(request: SetApiKeysRequest, settings: Settings = Depends(get_settings)):
    """Set API keys; an empty string clears a key, an omitted field leaves it."""
    for provider in KEYED_PROVIDERS:
        key = getattr(request, provider)
        if key is None:
            continue
        update_api_key(settings, provider, key)
        if key:
            logger.info("%s key configured: %s", provider, mask_key(key))
        else:
            logger.info("%s key cleared", provider)

    return key_status(settings)


@router.get("/status", response_model=ApiKeyStatus)
async def get_key_status(settings: Settings = Depends(get_settings)):
    """Get current API key configuration status."""
    return key_status(settings)
