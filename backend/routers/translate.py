"""
Translation Router - Document translation with SSE streaming.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from sse_starlette.sse import EventSourceResponse

from config import Settings, get_settings
from models.requests import TranslateRequest
from models.responses import ErrorEvent, ProviderInfo
from services.pipeline import PipelineConfig, TranslationPipeline
from services.providers import PROVIDER_CLASSES, PROVIDER_INFO, build_providers
from services.token_protector import TokenProtector
from routers.keys import configured_credentials

logger = logging.getLogger(__name__)

router = APIRouter()


def get_pipeline(settings: Settings = Depends(get_settings)) -> TranslationPipeline:
    """Build a fresh pipeline per request; nothing is shared between runs."""
    protector = TokenProtector(settings.protected_terms)
    return TranslationPipeline(
        providers=build_providers(settings, protector),
        config=PipelineConfig.from_settings(settings),
        credentials=configured_credentials(settings),
    )


def describe_validation_error(error: ValidationError) -> str:
    """First validation problem as 'field: message'."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {first.get('msg')}" if field else str(first.get("msg"))


async def parse_translate_request(request: Request) -> TranslateRequest:
    """Raises ValueError for malformed JSON or missing/invalid fields."""
    try:
        body = await request.json()
    except ValueError as e:
        raise ValueError(f"Malformed JSON body: {e}")

    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")

    try:
        return TranslateRequest.model_validate(body)
    except ValidationError as e:
        raise ValueError(f"Missing required parameters ({describe_validation_error(e)})")


@router.post("")
async def translate_document(request: Request, pipeline: TranslationPipeline = Depends(get_pipeline)):
    """
    Translate a nested JSON document with SSE streaming progress.

    Each frame is ``data: <json>`` where the JSON ``type`` is one of:
    - `info`: Human-readable status
    - `progress`: Batch about to start, with current/total
    - `translation`: One leaf translated
    - `error`: A batch failed (non-fatal) or the request failed (terminal)
    - `complete`: The merged document
    """

    # Read the body before streaming: the SSE response consumes receive() to watch for disconnects
    rejection = None
    try:
        translate_request = await parse_translate_request(request)
    except ValueError as e:
        logger.info("Rejected translation request: %s", e)
        rejection = ErrorEvent(message=str(e))

    async def event_generator():
        """Generate SSE events for translation progress."""
        if rejection is not None:
            yield {"data": rejection.model_dump_json()}
            return

        async for event in pipeline.run(translate_request):
            yield {"data": event.model_dump_json()}

    return EventSourceResponse(event_generator(), sep="\n")


@router.post("/sync")
async def translate_document_sync(request: Request, pipeline: TranslationPipeline = Depends(get_pipeline)):
    """
    Translate a nested JSON document and return the merged result (no streaming).

    Use the streaming endpoint for real-time progress updates via SSE.
    """
    try:
        translate_request = await parse_translate_request(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        data, _errors = await pipeline.translate_document(translate_request)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return data


@router.get("/providers", response_model=list[ProviderInfo])
async def list_providers(settings: Settings = Depends(get_settings)):
    """List selectable providers for long texts."""
    credentials = configured_credentials(settings)
    return [
        ProviderInfo(
            id=provider_id,
            requires_key=PROVIDER_CLASSES[provider_id].requires_key,
            key_configured=provider_id in credentials,
            **info,
        )
        for provider_id, info in PROVIDER_INFO.items()
    ]
