"""
Translation Pipeline - Diff, batch, translate and merge one document.

The pipeline is an async generator of stream events; the SSE router is
only one sink for it. A pipeline instance serves exactly one request.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, Mapping, Optional

from models.requests import TranslateRequest
from models.responses import CompleteEvent, ErrorEvent, InfoEvent, StreamEvent
from services.batch_scheduler import BatchScheduler, TranslationMap
from services.diff_selector import DEFAULT_MARKETING_PREFIXES, select_work, split_by_size
from services.providers import FREE_PROVIDER
from services.providers.base import TranslationProvider
from services.rate_limiter import FixedDelayLimiter
from services.tree_merger import merge

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Tuned routing and throttling constants, injected per pipeline."""
    short_batch_size: int = 20
    long_batch_size: int = 5
    long_text_threshold: int = 50
    marketing_prefixes: tuple[str, ...] = field(default=DEFAULT_MARKETING_PREFIXES)
    batch_delay_ms: int = 500
    free_provider: str = FREE_PROVIDER

    @classmethod
    def from_settings(cls, settings) -> "PipelineConfig":
        return cls(
            short_batch_size=settings.short_batch_size,
            long_batch_size=settings.long_batch_size,
            long_text_threshold=settings.long_text_threshold,
            marketing_prefixes=tuple(settings.marketing_prefixes),
            batch_delay_ms=settings.batch_delay_ms,
        )


class TranslationPipeline:
    """
    Short items always go to the free provider; long items go to the
    provider the caller selected.
    """

    def __init__(
        self,
        providers: Mapping[str, TranslationProvider],
        config: Optional[PipelineConfig] = None,
        credentials: Optional[Mapping[str, str]] = None,
    ):
        self.providers = providers
        self.config = config or PipelineConfig()
        # Server-side keys, used when the request carries none
        self.credentials = credentials or {}

    def credential_for(self, request: TranslateRequest) -> Optional[str]:
        return request.api_key or self.credentials.get(request.provider) or None

    async def run(self, request: TranslateRequest) -> AsyncIterator[StreamEvent]:
        """Yield progress events, ending with exactly one terminal event."""
        try:
            async for event in self._run(request):
                yield event
        except asyncio.CancelledError:
            logger.info("Client disconnected; stopping translation to %s", request.target_language)
            raise
        except Exception as e:
            logger.exception("Translation to %s failed", request.target_language)
            yield ErrorEvent(message=f"Translation failed: {e}")

    async def _run(self, request: TranslateRequest) -> AsyncIterator[StreamEvent]:
        config = self.config
        if request.provider not in self.providers:
            yield ErrorEvent(message=f"Unknown provider: {request.provider}")
            return

        work = select_work(
            request.source_data,
            request.existing_translations,
            long_text_threshold=config.long_text_threshold,
            marketing_prefixes=config.marketing_prefixes,
        )
        short_items, long_items = split_by_size(work)

        logger.info(
            "Translating %d keys to %s (short: %d, long: %d, provider: %s)",
            len(work), request.target_language, len(short_items), len(long_items), request.provider,
        )
        yield InfoEvent(message=f"{len(work)} keys to translate")
        yield InfoEvent(message=f"Short: {len(short_items)}, Long: {len(long_items)}")

        scheduler = BatchScheduler(
            total=len(work),
            translations=TranslationMap(),
            limiter=FixedDelayLimiter(config.batch_delay_ms),
        )

        if short_items:
            async for event in scheduler.run_group(
                short_items,
                self.providers[config.free_provider],
                config.short_batch_size,
                request.target_language,
                label="short",
            ):
                yield event

        if long_items:
            async for event in scheduler.run_group(
                long_items,
                self.providers[request.provider],
                config.long_batch_size,
                request.target_language,
                credential=self.credential_for(request),
                label="long",
            ):
                yield event

        merged = merge(request.source_data, request.existing_translations, scheduler.translations)
        yield InfoEvent(message=f"Translated {len(scheduler.translations)} keys")
        yield CompleteEvent(data=merged)

    async def translate_document(self, request: TranslateRequest) -> tuple[object, list[str]]:
        """
        Run to completion without streaming.

        Returns the merged document and the messages of any error events.
        Raises ValueError when the run ended with an error instead of a
        complete event.
        """
        errors = []
        async for event in self.run(request):
            if isinstance(event, ErrorEvent):
                errors.append(event.message)
            elif isinstance(event, CompleteEvent):
                return event.data, errors
        raise ValueError(errors[-1] if errors else "Translation ended without a result")
