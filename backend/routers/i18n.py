"""
I18n Router - Serve and save language JSON files.
"""

import json
import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from models.responses import LanguageInfo
from services.i18n_store import I18nStore, LanguageFileNotFound
from services.languages import LANGUAGE_NAMES, is_supported

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(settings: Settings = Depends(get_settings)) -> I18nStore:
    return I18nStore(settings.i18n_dir)


def validate_code(lang: str) -> str:
    if not is_supported(lang):
        raise HTTPException(status_code=400, detail="Invalid language code")
    return lang


@router.get("/languages", response_model=list[LanguageInfo])
async def list_languages(store: I18nStore = Depends(get_store)):
    """List catalog languages and whether a language file exists for each."""
    available = set(store.available_codes())
    return [
        LanguageInfo(code=code, name=name, has_file=code in available)
        for code, name in LANGUAGE_NAMES.items()
    ]


@router.get("/{lang}")
async def get_language_file(lang: str, store: I18nStore = Depends(get_store)):
    """
    Return the language file content.

    GET /api/i18n/en -> en.json
    """
    validate_code(lang)
    try:
        content = store.load(lang)
    except LanguageFileNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Error reading i18n file for %s: %s", lang, e)
        raise HTTPException(status_code=500, detail="Failed to load translation file")

    return JSONResponse(content, headers={"Cache-Control": "public, max-age=3600"})


@router.put("/{lang}")
async def save_language_file(lang: str, content: Any = Body(...), store: I18nStore = Depends(get_store)):
    """Save a language document (pretty-printed UTF-8 JSON)."""
    validate_code(lang)
    try:
        store.save(lang, content)
    except OSError as e:
        logger.error("Error writing i18n file for %s: %s", lang, e)
        raise HTTPException(status_code=500, detail="Failed to save translation file")

    return {"success": True, "language": lang}
