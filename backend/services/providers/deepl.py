"""
DeepL provider - Whole batch in one POST to the v2 translate endpoint.
"""

from typing import Optional

import httpx

from services.languages import DEEPL_LOCALES, DEEPL_UNSUPPORTED, provider_locale
from services.providers.base import ProviderError, ProviderResponseError, TranslationProvider
from services.token_protector import TokenProtector


class DeepLProvider(TranslationProvider):
    """Free-tier keys (suffix ``:fx``) go to the free endpoint."""

    name = "deepl"

    def __init__(
        self,
        protector: TokenProtector,
        source_language: str = "en",
        free_url: str = "https://api-free.deepl.com/v2/translate",
        pro_url: str = "https://api.deepl.com/v2/translate",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(protector, source_language)
        self.free_url = free_url
        self.pro_url = pro_url
        self.timeout = timeout
        self._transport = transport

    def endpoint_for(self, api_key: str) -> str:
        return self.free_url if api_key.endswith(":fx") else self.pro_url

    async def translate(
        self,
        texts: list[str],
        target_language: str,
        credential: Optional[str] = None,
    ) -> list[str]:
        api_key = self.require_credential(credential)
        if not texts:
            return []
        if target_language in DEEPL_UNSUPPORTED:
            raise ProviderError(f"DeepL does not support target language '{target_language}'")

        protected = [self.protector.protect(text) for text in texts]
        payload = {
            "text": [str(p) for p in protected],
            "source_lang": self.source_language.upper(),
            "target_lang": provider_locale(target_language, DEEPL_LOCALES, upper=True),
            "preserve_formatting": True,
        }
        headers = {"Authorization": f"DeepL-Auth-Key {api_key}"}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.endpoint_for(api_key), json=payload, headers=headers)

        if response.status_code != 200:
            raise ProviderResponseError(
                f"DeepL API error: {response.status_code} - {response.text[:200]}"
            )

        translations = response.json().get("translations")
        if not isinstance(translations, list) or len(translations) != len(texts):
            raise ProviderResponseError(f"DeepL returned an unexpected body: {response.text[:200]}")

        return [
            self.protector.unprotect(item.get("text", ""), p) or text
            for item, p, text in zip(translations, protected, texts)
        ]
