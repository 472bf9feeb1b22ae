"""Provider key validator — confirms an API key works with one minimal live call."""

from __future__ import annotations

import asyncio
import logging

import httpx

from fridgechef.adapters import registry
from fridgechef.adapters.base import ProviderResponseError, is_header_safe
from fridgechef.config import settings
from fridgechef.errors import (
    InvalidCredentialError,
    ProviderUnavailableError,
    UnsupportedProviderError,
)

logger = logging.getLogger(__name__)


class ProviderKeyValidator:
    """Classifies every outcome as valid, invalid key, or provider unavailable.

    *transport* lets tests substitute ``httpx.MockTransport``.
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else settings.provider_timeout_seconds
        self._transport = transport

    async def validate(self, secret: str, provider: str, model: str) -> None:
        adapter = registry.get_adapter(provider)
        if adapter is None:
            raise UnsupportedProviderError(str(provider), registry.provider_ids())
        if not is_header_safe(secret):
            # httpx cannot put it in a header, so the provider would never see it
            raise InvalidCredentialError(
                f"Invalid {provider} API key. It contains unsupported characters."
            )

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                reply = await asyncio.wait_for(
                    adapter.call_minimal_test_prompt(client, secret, model),
                    timeout=self.timeout,
                )
            except (asyncio.TimeoutError, httpx.TimeoutException):
                logger.warning("Key validation timed out: provider=%s model=%s", provider, model)
                raise ProviderUnavailableError(
                    f"{provider} did not respond within {self.timeout:g}s"
                ) from None
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                if adapter.is_credential_rejection(exc.response):
                    logger.info("Key rejected: provider=%s model=%s status=%d", provider, model, status)
                    raise InvalidCredentialError(
                        f"Invalid {provider} API key. Please check your API key."
                    ) from None
                logger.warning(
                    "Key validation got HTTP %d: provider=%s model=%s", status, provider, model
                )
                raise ProviderUnavailableError(
                    f"{provider} API returned HTTP {status}", details={"status_code": status}
                ) from None
            except httpx.RequestError as exc:
                logger.warning(
                    "Key validation transport error: provider=%s %s", provider, type(exc).__name__
                )
                raise ProviderUnavailableError(f"Could not reach {provider} API") from None
            except ProviderResponseError:
                logger.warning("Key validation got an unreadable reply: provider=%s", provider)
                raise ProviderUnavailableError(f"{provider} API returned an unexpected response") from None

        if not reply.strip():
            raise ProviderUnavailableError(f"{provider} API returned an empty reply")


def get_validator() -> ProviderKeyValidator:
    """FastAPI dependency."""
    return ProviderKeyValidator()
