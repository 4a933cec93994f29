"""
MyMemory provider - Free lookup service, one GET per text.
"""

import logging
from typing import Optional

import httpx

from services.languages import MYMEMORY_LOCALES, provider_locale
from services.providers.base import TranslationProvider
from services.rate_limiter import FixedDelayLimiter
from services.token_protector import TokenProtector

logger = logging.getLogger(__name__)

MIN_LOOKUP_LENGTH = 2


class MyMemoryProvider(TranslationProvider):
    """Sequential per-item lookups; a failed item keeps its source text."""

    name = "mymemory"
    requires_key = False

    def __init__(
        self,
        protector: TokenProtector,
        source_language: str = "en",
        url: str = "https://api.mymemory.translated.net/get",
        email: str = "",
        delay_ms: int = 100,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(protector, source_language)
        self.url = url
        self.email = email
        self.delay_ms = delay_ms
        self.timeout = timeout
        self._transport = transport

    async def translate(
        self,
        texts: list[str],
        target_language: str,
        credential: Optional[str] = None,
    ) -> list[str]:
        if not texts:
            return []

        langpair = f"{self.source_language}|{provider_locale(target_language, MYMEMORY_LOCALES)}"
        limiter = FixedDelayLimiter(self.delay_ms)
        results = []

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for text in texts:
                if len(text.strip()) < MIN_LOOKUP_LENGTH:
                    results.append(text)
                    continue

                await limiter.wait()
                results.append(await self._lookup(client, text, langpair))

        return results

    async def _lookup(self, client: httpx.AsyncClient, text: str, langpair: str) -> str:
        protected = self.protector.protect(text)
        params = {"q": str(protected), "langpair": langpair}
        if self.email:
            params["de"] = self.email

        try:
            response = await client.get(self.url, params=params)
        except httpx.HTTPError as e:
            logger.debug("MyMemory request failed for %r: %s", text[:40], e)
            return text

        if response.status_code != 200:
            logger.debug("MyMemory HTTP %s for %r", response.status_code, text[:40])
            return text

        try:
            data = response.json()
        except ValueError:
            return text
        if not isinstance(data, dict):
            return text

        # Quota and lookup errors still arrive with HTTP 200
        status = data.get("responseStatus")
        translated = (data.get("responseData") or {}).get("translatedText")
        if str(status) != "200" or not isinstance(translated, str) or not translated.strip():
            logger.debug("MyMemory returned no usable translation for %r (status %s)", text[:40], status)
            return text

        return self.protector.unprotect(translated, protected)
