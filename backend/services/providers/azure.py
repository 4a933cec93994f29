"""
Azure Translator provider - Whole batch in one POST to Translator Text v3.
"""

from typing import Optional

import httpx

from services.languages import AZURE_LOCALES, provider_locale
from services.providers.base import ProviderResponseError, TranslationProvider
from services.token_protector import TokenProtector


class AzureProvider(TranslationProvider):
    name = "azure"

    def __init__(
        self,
        protector: TokenProtector,
        source_language: str = "en",
        endpoint: str = "https://api.cognitive.microsofttranslator.com",
        region: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(protector, source_language)
        self.endpoint = endpoint.rstrip("/")
        self.region = region
        self.timeout = timeout
        self._transport = transport

    async def translate(
        self,
        texts: list[str],
        target_language: str,
        credential: Optional[str] = None,
    ) -> list[str]:
        api_key = self.require_credential(credential)
        if not texts:
            return []

        protected = [self.protector.protect(text) for text in texts]
        params = {
            "api-version": "3.0",
            "from": self.source_language,
            "to": provider_locale(target_language, AZURE_LOCALES),
        }
        headers = {"Ocp-Apim-Subscription-Key": api_key}
        # Multi-service and regional resources need the region header
        if self.region:
            headers["Ocp-Apim-Subscription-Region"] = self.region

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                f"{self.endpoint}/translate",
                params=params,
                headers=headers,
                json=[{"Text": str(p)} for p in protected],
            )

        if response.status_code != 200:
            raise ProviderResponseError(
                f"Azure Translator error: {response.status_code} - {response.text[:200]}"
            )

        body = response.json()
        if not isinstance(body, list) or len(body) != len(texts):
            raise ProviderResponseError(f"Azure returned an unexpected body: {response.text[:200]}")

        results = []
        for entry, p, text in zip(body, protected, texts):
            translations = entry.get("translations") or [{}]
            translated = translations[0].get("text", "")
            results.append(self.protector.unprotect(translated, p) or text)
        return results
