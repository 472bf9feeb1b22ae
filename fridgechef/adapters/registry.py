"""Provider registry — static catalog of AI providers and their models."""

from __future__ import annotations

from fridgechef.adapters.base import AIProviderAdapter
from fridgechef.adapters.gemini import GeminiAdapter
from fridgechef.adapters.groq import GroqAdapter
from fridgechef.config import settings
from fridgechef.schemas.credential import ProviderId

_ADAPTERS: dict[ProviderId, AIProviderAdapter] = {
    ProviderId.GEMINI: GeminiAdapter(settings.gemini_base_url),
    ProviderId.GROK: GroqAdapter(settings.groq_base_url),
}


def _lookup(provider: ProviderId | str) -> ProviderId | None:
    try:
        return ProviderId(provider)
    except ValueError:
        return None


def get_adapter(provider: ProviderId | str) -> AIProviderAdapter | None:
    pid = _lookup(provider)
    return _ADAPTERS.get(pid) if pid else None


def is_known(provider: ProviderId | str) -> bool:
    return get_adapter(provider) is not None


def models_for(provider: ProviderId | str) -> list[str]:
    """Supported models in display order; empty for an unknown provider."""
    adapter = get_adapter(provider)
    return list(adapter.models) if adapter else []


def default_model_for(provider: ProviderId | str) -> str | None:
    adapter = get_adapter(provider)
    return adapter.default_model if adapter else None


def available_models() -> dict[str, list[str]]:
    return {pid.value: list(adapter.models) for pid, adapter in _ADAPTERS.items()}


def provider_ids() -> list[str]:
    return [pid.value for pid in _ADAPTERS]
