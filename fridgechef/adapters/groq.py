"""Groq adapter (OpenAI-compatible chat completions).

Exposed to users under the ``grok`` provider id.
"""

from __future__ import annotations

import httpx

from fridgechef.adapters.base import AIProviderAdapter, ProviderResponseError
from fridgechef.schemas.credential import ProviderId


class GroqAdapter(AIProviderAdapter):
    provider_id = ProviderId.GROK
    models = (
        "llama-3.3-70b-versatile",
        "llama-3.1-8b-instant",
        "meta-llama/llama-4-scout-17b-16e-instruct",
        "openai/gpt-oss-120b",
    )
    default_model = "llama-3.3-70b-versatile"

    async def complete(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str,
        prompt: str,
        *,
        max_tokens: int | None = 1024,
    ) -> str:
        body: dict = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": 0.7,
        }
        if max_tokens is not None:
            body["max_tokens"] = max_tokens

        resp = await client.post(
            f"{self.base_url}/openai/v1/chat/completions",
            headers={"Authorization": f"Bearer {api_key}"},
            json=body,
        )
        resp.raise_for_status()

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ProviderResponseError("Unexpected Groq response shape") from exc
        return content or ""
