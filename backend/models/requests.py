"""
Pydantic models for API request bodies.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Literal, Optional

ProviderName = Literal["mymemory", "azure", "deepl", "openai", "gemini"]


class TranslateRequest(BaseModel):
    """Request body for document translation (streaming and sync)."""
    model_config = ConfigDict(populate_by_name=True)

    source_data: Any = Field(..., alias="sourceData", description="Nested source document")
    target_language: str = Field(..., alias="targetLanguage", description="e.g. 'tr', 'de'")
    provider: ProviderName = Field(..., description="Provider for long texts")
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    existing_translations: Any = Field(default=None, alias="existingTranslations")

    @field_validator("source_data")
    @classmethod
    def source_data_present(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("sourceData is required")
        return value

    @field_validator("target_language")
    @classmethod
    def target_language_present(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("targetLanguage is required")
        return value


class SetApiKeysRequest(BaseModel):
    """Request body for setting server-side provider API keys."""
    azure: Optional[str] = Field(default=None, description="Azure Translator key")
    deepl: Optional[str] = Field(default=None, description="DeepL key")
    openai: Optional[str] = Field(default=None, description="OpenAI key")
    gemini: Optional[str] = Field(default=None, description="Gemini key")
