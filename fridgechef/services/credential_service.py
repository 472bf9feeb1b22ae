"""Credential service — set, inspect, validate and delete a user's AI key.

The plaintext key exists only in memory: it is validated, encrypted and
stored on the way in, and decrypted on demand for outbound provider calls
through :meth:`CredentialManager.resolve_credential_for_use`. It is never
logged, persisted in clear, or returned to an HTTP caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from fridgechef.adapters import registry
from fridgechef.adapters.base import is_header_safe
from fridgechef.config import settings
from fridgechef.errors import (
    InvalidInputError,
    NotConfiguredError,
    ProviderUnavailableError,
    UnsupportedModelError,
    UnsupportedProviderError,
)
from fridgechef.schemas.credential import CredentialStatus
from fridgechef.services import credential_store
from fridgechef.services.credential_store import SecretSource, resolve_stored_secret
from fridgechef.services.key_validator import ProviderKeyValidator
from fridgechef.utils.crypto import SecretCipher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedCredential:
    """Everything an outbound AI call needs. Keep it in memory only."""

    provider: str
    model: str
    secret: str = field(repr=False)
    source: SecretSource = SecretSource.CURRENT


class CredentialManager:
    """AI credential operations for one authenticated user."""

    def __init__(
        self,
        db: AsyncSession,
        user_id: str,
        cipher: SecretCipher,
        validator: ProviderKeyValidator,
        *,
        accept_unverified: bool | None = None,
    ) -> None:
        self.db = db
        self.user_id = user_id
        self.cipher = cipher
        self.validator = validator
        self.accept_unverified = (
            settings.accept_unverified_keys if accept_unverified is None else accept_unverified
        )

    async def set_credential(
        self, secret: str, provider: str, model: str | None = None
    ) -> CredentialStatus:
        if not isinstance(secret, str) or not secret.strip():
            raise InvalidInputError("Please provide a valid API key")
        if not is_header_safe(secret):
            raise InvalidInputError(
                "API key contains unsupported characters. Paste the key only, without smart quotes or line breaks."
            )
        if not registry.is_known(provider):
            raise UnsupportedProviderError(str(provider), registry.provider_ids())

        provider = registry.get_adapter(provider).provider_id.value
        selected_model = model or registry.default_model_for(provider)
        available = registry.models_for(provider)
        if selected_model not in available:
            raise UnsupportedModelError(provider, selected_model, available)

        # Make sure the user exists before spending a provider call
        await credential_store.load_record(self.db, self.user_id)

        warning = None
        try:
            await self.validator.validate(secret, provider, selected_model)
        except ProviderUnavailableError as exc:
            if not self.accept_unverified:
                raise
            warning = f"Saved without verification: {exc.message}. Validate again later."
            logger.warning(
                "Storing unverified key: user=%s provider=%s model=%s",
                self.user_id, provider, selected_model,
            )

        encrypted = self.cipher.encrypt(secret)
        await credential_store.save_current(self.db, self.user_id, provider, selected_model, encrypted)
        logger.info("AI config saved: user=%s provider=%s model=%s", self.user_id, provider, selected_model)

        return CredentialStatus(
            configured=True, provider=provider, model=selected_model, warning=warning
        )

    async def get_credential_status(self) -> CredentialStatus:
        record = await credential_store.load_record(self.db, self.user_id)
        provider, model = record.effective_provider()
        return CredentialStatus(configured=record.configured, provider=provider, model=model)

    async def resolve_credential_for_use(self) -> ResolvedCredential:
        """Decrypt the stored key for an outbound call (internal use only)."""
        record = await credential_store.load_record(self.db, self.user_id)
        picked = resolve_stored_secret(record)
        if picked is None:
            raise NotConfiguredError(
                "No API key configured. Please add your API key in profile settings."
            )

        encrypted, source = picked
        # MalformedCiphertextError / AuthenticationFailedError propagate as is
        plaintext = self.cipher.decrypt(encrypted)
        provider, model = record.effective_provider()
        return ResolvedCredential(provider=provider, model=model, secret=plaintext, source=source)

    async def resolve_secret_for_use(self) -> str:
        return (await self.resolve_credential_for_use()).secret

    async def validate_stored_credential(self) -> CredentialStatus:
        credential = await self.resolve_credential_for_use()
        await self.validator.validate(credential.secret, credential.provider, credential.model)
        logger.info(
            "Stored AI config is valid: user=%s provider=%s model=%s",
            self.user_id, credential.provider, credential.model,
        )
        return CredentialStatus(
            configured=True, provider=credential.provider, model=credential.model
        )

    async def delete_credential(self) -> CredentialStatus:
        await credential_store.clear(self.db, self.user_id)
        logger.info("AI config removed: user=%s", self.user_id)
        return await self.get_credential_status()

    async def migrate_legacy_credential(self) -> bool:
        """Fold the legacy Gemini key into the current fields. True if anything changed."""
        record = await credential_store.load_record(self.db, self.user_id)
        changed = await credential_store.promote_legacy(self.db, self.user_id, record)
        if changed:
            logger.info("Migrated legacy Gemini key: user=%s", self.user_id)
        return changed


async def migrate_all_legacy_credentials(db: AsyncSession) -> int:
    """Migrate every user still holding a legacy key. Returns how many changed."""
    migrated = 0
    for user_id in await credential_store.list_legacy_user_ids(db):
        record = await credential_store.load_record(db, user_id)
        if await credential_store.promote_legacy(db, user_id, record):
            migrated += 1
    if migrated:
        logger.info("Migrated %d legacy Gemini key(s)", migrated)
    return migrated
