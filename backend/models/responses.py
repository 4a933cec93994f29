"""
Pydantic models for API response bodies and streamed events.
"""

from pydantic import BaseModel, Field
from typing import Any, Literal, Optional, Union


class InfoEvent(BaseModel):
    """Human-readable status line."""
    type: Literal["info"] = "info"
    message: str


class ProgressEvent(BaseModel):
    """Sent before each batch; ``current`` counts items already processed."""
    type: Literal["progress"] = "progress"
    current: int = 0
    total: int = 0
    provider: Optional[str] = None
    message: Optional[str] = None


class TranslationEvent(BaseModel):
    """One translated (or fallen-back) leaf."""
    type: Literal["translation"] = "translation"
    path: str
    source: str
    translated: str


class CompleteEvent(BaseModel):
    """Terminal event carrying the merged document."""
    type: Literal["complete"] = "complete"
    data: Any = None


class ErrorEvent(BaseModel):
    """Batch failure (non-fatal) or request failure (terminal)."""
    type: Literal["error"] = "error"
    message: str


StreamEvent = Union[InfoEvent, ProgressEvent, TranslationEvent, CompleteEvent, ErrorEvent]


class ProviderInfo(BaseModel):
    """A selectable translation provider."""
    id: str
    name: str
    description: str
    requires_key: bool
    is_free: bool
    key_configured: bool = Field(default=False, description="Server-side key available")


class LanguageInfo(BaseModel):
    """A catalog language and whether its language file exists."""
    code: str
    name: str
    has_file: bool = False


class ApiKeyStatus(BaseModel):
    """Which providers have a server-side API key."""
    azure_configured: bool = False
    deepl_configured: bool = False
    openai_configured: bool = False
    gemini_configured: bool = False
