"""
Shared test helpers: async drivers and a scriptable provider.
"""

import asyncio
from typing import Optional

from services.providers.base import ProviderError, TranslationProvider
from services.token_protector import TokenProtector


def run(coro):
    return asyncio.run(coro)


def collect(agen) -> list:
    """Drain an async generator into a list."""
    async def _collect():
        return [item async for item in agen]
    return asyncio.run(_collect())


class FakeProvider(TranslationProvider):
    """Prefixes texts with the target language, or fails every call."""

    def __init__(self, name: str, fail: bool = False, drop_last: bool = False):
        super().__init__(TokenProtector(()))
        self.name = name
        self.requires_key = False
        self.fail = fail
        self.drop_last = drop_last
        self.calls: list[tuple[list[str], str, Optional[str]]] = []

    async def translate(self, texts, target_language, credential=None):
        self.calls.append((list(texts), target_language, credential))
        if self.fail:
            raise ProviderError(f"{self.name} is down")
        results = [f"[{target_language}] {text}" for text in texts]
        return results[:-1] if self.drop_last else results

    @property
    def translated_texts(self) -> list[str]:
        return [text for texts, _, _ in self.calls for text in texts]


def fake_providers(**overrides) -> dict[str, FakeProvider]:
    providers = {name: FakeProvider(name) for name in ("mymemory", "azure", "deepl", "openai", "gemini")}
    providers.update(overrides)
    return providers
