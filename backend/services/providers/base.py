"""
Base contract and errors for translation providers.
"""

from abc import ABC, abstractmethod
from typing import Optional

from services.token_protector import TokenProtector


class ProviderError(Exception):
    """A provider could not translate a batch."""


class MissingCredentialError(ProviderError):
    """The provider needs an API key and none was supplied."""


class ProviderResponseError(ProviderError):
    """Bad HTTP status or an unexpected response body."""


class TranslationProvider(ABC):
    """
    Uniform translate contract shared by every backend.

    ``translate`` returns exactly one string per input, in input order.
    Adapters that call per item degrade per item; batch adapters raise
    ProviderError and let the scheduler fall back for the whole batch.
    """

    name: str = ""
    requires_key: bool = True

    def __init__(self, protector: TokenProtector, source_language: str = "en"):
        self.protector = protector
        self.source_language = source_language

    @abstractmethod
    async def translate(
        self,
        texts: list[str],
        target_language: str,
        credential: Optional[str] = None,
    ) -> list[str]:
        ...

    def require_credential(self, credential: Optional[str]) -> str:
        if self.requires_key and not credential:
            raise MissingCredentialError(f"{self.name} requires an API key")
        return credential or ""
