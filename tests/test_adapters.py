"""Provider adapter tests."""

import httpx
import pytest

from fridgechef.adapters.base import ProviderResponseError
from fridgechef.adapters.gemini import GeminiAdapter
from fridgechef.adapters.groq import GroqAdapter


def _response(status: int, json_body: dict) -> httpx.Response:
    return httpx.Response(status, json=json_body, request=httpx.Request("POST", "https://x"))


def test_gemini_invalid_key_markers():
    adapter = GeminiAdapter("https://gemini.test")
    assert adapter.is_credential_rejection(
        _response(400, {"error": {"details": [{"reason": "API_KEY_INVALID"}]}})
    )
    assert adapter.is_credential_rejection(_response(403, {"error": {"message": "denied"}}))
    assert not adapter.is_credential_rejection(_response(400, {"error": {"message": "bad"}}))
    assert not adapter.is_credential_rejection(_response(429, {"error": {"message": "slow"}}))


def test_groq_rejection_is_status_based():
    adapter = GroqAdapter("https://groq.test/")
    assert adapter.base_url == "https://groq.test"
    assert adapter.is_credential_rejection(_response(401, {}))
    assert not adapter.is_credential_rejection(_response(400, {"error": "API_KEY_INVALID"}))


def test_supports():
    assert GroqAdapter("https://groq.test").supports("llama-3.1-8b-instant")
    assert not GeminiAdapter("https://gemini.test").supports("llama-3.1-8b-instant")


@pytest.mark.asyncio
async def test_gemini_complete_joins_parts():
    def handler(request):
        return httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": "Hello "}, {"text": "chef"}]}}]}
        )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        text = await GeminiAdapter("https://gemini.test").complete(
            client, "key", "gemini-2.0-flash", "hi"
        )
    assert text == "Hello chef"


@pytest.mark.asyncio
async def test_groq_complete_raises_on_error_status():
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "Invalid API Key"}})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(httpx.HTTPStatusError):
            await GroqAdapter("https://groq.test").complete(
                client, "key", "llama-3.1-8b-instant", "hi"
            )


@pytest.mark.asyncio
async def test_gemini_candidate_without_parts_is_empty():
    def handler(request):
        return httpx.Response(
            200, json={"candidates": [{"content": {"role": "model"}, "finishReason": "MAX_TOKENS"}]}
        )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        text = await GeminiAdapter("https://gemini.test").complete(
            client, "key", "gemini-2.5-flash", "hi"
        )
    assert text == ""


@pytest.mark.asyncio
@pytest.mark.parametrize("adapter", [GeminiAdapter("https://gemini.test"), GroqAdapter("https://groq.test")])
async def test_unreadable_body_raises_response_error(adapter):
    def handler(request):
        return httpx.Response(200, text="<html>gateway</html>")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ProviderResponseError):
            await adapter.complete(client, "key", adapter.default_model, "hi")
