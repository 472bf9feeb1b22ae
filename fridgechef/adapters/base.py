"""Abstract base class for AI provider adapters.

Add a provider by implementing this interface and registering it in
``fridgechef.adapters.registry``.
"""

from abc import ABC, abstractmethod

import httpx

from fridgechef.schemas.credential import ProviderId

MINIMAL_TEST_PROMPT = 'Say "OK"'


class ProviderResponseError(Exception):
    """A 2xx provider reply whose body could not be read."""


def is_header_safe(secret: str) -> bool:
    """API keys travel in HTTP headers: printable ASCII only."""
    return secret.isascii() and secret.isprintable()


class AIProviderAdapter(ABC):
    """Contract that any AI provider must satisfy."""

    provider_id: ProviderId
    models: tuple[str, ...]
    default_model: str
    # Output cap for the key check; None leaves it to the provider
    minimal_test_max_tokens: int | None = 10

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    @abstractmethod
    async def complete(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str,
        prompt: str,
        *,
        max_tokens: int | None = 1024,
    ) -> str:
        """Send a single-turn text prompt and return the reply text.

        Raises ``httpx.HTTPStatusError`` on a non-2xx response and
        ``ProviderResponseError`` when the response body has an unexpected shape.
        """

    async def call_minimal_test_prompt(
        self, client: httpx.AsyncClient, api_key: str, model: str
    ) -> str:
        """Cheapest possible authenticated call, used to validate a key."""
        return await self.complete(
            client, api_key, model, MINIMAL_TEST_PROMPT, max_tokens=self.minimal_test_max_tokens
        )

    def is_credential_rejection(self, response: httpx.Response) -> bool:
        """True when an error response means the key itself is bad."""
        return response.status_code in (401, 403)

    def supports(self, model: str) -> bool:
        return model in self.models
