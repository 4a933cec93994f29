"""
Batch Scheduler - Drive work items through a provider batch by batch.
"""

import logging
from typing import AsyncIterator, Optional

from models.responses import ErrorEvent, ProgressEvent, StreamEvent, TranslationEvent
from services.diff_selector import WorkItem
from services.providers.base import TranslationProvider
from services.rate_limiter import FixedDelayLimiter

logger = logging.getLogger(__name__)


class TranslationMap(dict):
    """
    Path -> translated text. The first value recorded for a path wins.

    ``sources`` keeps the source text each translation was made from, so a
    merge can tell apart leaves whose keys render the same path.
    """

    def __init__(self):
        super().__init__()
        self.sources: dict[str, str] = {}

    def record(self, path: str, source: str, value: str) -> bool:
        if path in self:
            logger.warning("Translation for %r already recorded; keeping the first", path)
            return False
        self[path] = value
        self.sources[path] = source
        return True


def make_batches(items: list[WorkItem], batch_size: int) -> list[list[WorkItem]]:
    size = max(1, batch_size)
    return [items[i:i + size] for i in range(0, len(items), size)]


class BatchScheduler:
    """
    Sequential batch runner for one request.

    Every item handed to :meth:`run_group` ends up in ``translations``:
    translated when the provider succeeds, its source text when the batch
    fails. Batches never run concurrently; ``limiter`` spaces them out.
    """

    def __init__(
        self,
        total: int,
        translations: Optional[TranslationMap] = None,
        limiter: Optional[FixedDelayLimiter] = None,
    ):
        self.total = total
        self.completed = 0
        self.translations = translations if translations is not None else TranslationMap()
        self.limiter = limiter or FixedDelayLimiter()

    async def run_group(
        self,
        items: list[WorkItem],
        provider: TranslationProvider,
        batch_size: int,
        target_language: str,
        credential: Optional[str] = None,
        label: str = "",
    ) -> AsyncIterator[StreamEvent]:
        batches = make_batches(items, batch_size)

        for number, batch in enumerate(batches, start=1):
            await self.limiter.wait()

            batch_name = f"{label or provider.name} batch {number}/{len(batches)}"
            yield ProgressEvent(
                current=self.completed,
                total=self.total,
                provider=provider.name,
                message=f"Translating {batch_name} ({len(batch)} items)",
            )

            try:
                translated = await provider.translate(
                    [item.text for item in batch], target_language, credential
                )
            except Exception as e:
                logger.warning("%s failed: %s", batch_name, e)
                for item in batch:
                    self.translations.record(item.path, item.text, item.text)
                self.completed += len(batch)
                yield ErrorEvent(message=f"{batch_name} failed ({provider.name}): {e}")
                continue

            for i, item in enumerate(batch):
                # Adapters promise alignment; a short list still must not lose paths
                value = translated[i] if i < len(translated) and translated[i] else item.text
                recorded = self.translations.record(item.path, item.text, value)
                self.completed += 1
                if recorded:
                    yield TranslationEvent(path=item.path, source=item.text, translated=value)
