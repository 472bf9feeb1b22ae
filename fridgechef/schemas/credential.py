"""AI credential request/response schemas."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class ProviderId(StrEnum):
    """AI providers a user can bring a key for."""

    GEMINI = "gemini"
    GROK = "grok"  # served through Groq's OpenAI-compatible API


LEGACY_PROVIDER = ProviderId.GEMINI
# Also the Gemini adapter's default model
LEGACY_MODEL = "gemini-2.5-flash-lite"


class AIConfigSet(BaseModel):
    api_key: str = Field(..., min_length=1)  # plaintext — encrypted before storage
    provider: str = ProviderId.GEMINI.value
    model: str | None = None


class ApiKeySet(BaseModel):
    """Legacy body: Gemini key only."""

    api_key: str = Field(..., min_length=1)


class CredentialStatus(BaseModel):
    configured: bool
    provider: str
    model: str
    warning: str | None = None
    # the key itself is NEVER returned


class AIConfigResponse(CredentialStatus):
    available_models: dict[str, list[str]] = Field(default_factory=dict)


class AIConfigValidation(BaseModel):
    valid: bool
    provider: str
    model: str


class ApiKeyStatus(BaseModel):
    has_api_key: bool
