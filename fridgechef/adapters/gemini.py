"""Google Gemini adapter (Generative Language REST API)."""

from __future__ import annotations

import httpx

from fridgechef.adapters.base import AIProviderAdapter, ProviderResponseError
from fridgechef.schemas.credential import LEGACY_MODEL, ProviderId

# Gemini answers a bad key with 400 INVALID_ARGUMENT rather than 401
_INVALID_KEY_MARKERS = ("API_KEY_INVALID", "API key not valid", "API key expired")


class GeminiAdapter(AIProviderAdapter):
    provider_id = ProviderId.GEMINI
    models = (
        "gemini-2.5-flash-lite",
        "gemini-2.5-flash-preview-09-2025",
        "gemini-2.5-flash-lite-preview-09-2025",
        "gemini-2.0-flash",
        "gemini-2.0-flash-lite",
    )
    default_model = LEGACY_MODEL
    # 2.5 models spend thinking tokens against maxOutputTokens
    minimal_test_max_tokens = None

    async def complete(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str,
        prompt: str,
        *,
        max_tokens: int | None = 1024,
    ) -> str:
        body: dict = {"contents": [{"parts": [{"text": prompt}]}]}
        if max_tokens is not None:
            body["generationConfig"] = {"maxOutputTokens": max_tokens}

        # Key goes in a header, never the query string, so it can't leak via URLs
        resp = await client.post(
            f"{self.base_url}/v1beta/models/{model}:generateContent",
            headers={"x-goog-api-key": api_key},
            json=body,
        )
        resp.raise_for_status()

        try:
            # A candidate cut off by MAX_TOKENS carries no parts
            parts = resp.json()["candidates"][0]["content"].get("parts", [])
            return "".join(p.get("text", "") for p in parts)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            raise ProviderResponseError("Unexpected Gemini response shape") from exc

    def is_credential_rejection(self, response: httpx.Response) -> bool:
        if super().is_credential_rejection(response):
            return True
        if response.status_code != 400:
            return False
        return any(marker in response.text for marker in _INVALID_KEY_MARKERS)
