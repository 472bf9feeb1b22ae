"""Credential store — reads and atomically writes a user's encrypted AI credential.

Every write touches provider, model and key in a single ``UPDATE`` so a
concurrent reader never sees a half-written record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fridgechef.errors import UserNotFoundError
from fridgechef.models.user import User
from fridgechef.schemas.credential import LEGACY_MODEL, LEGACY_PROVIDER
from fridgechef.utils.crypto import is_encrypted

logger = logging.getLogger(__name__)


class SecretSource(StrEnum):
    CURRENT = "current"
    LEGACY = "legacy"


@dataclass(frozen=True)
class CredentialRecord:
    provider: str
    model: str
    secret: str | None  # EncryptedSecret
    legacy_secret: str | None  # EncryptedSecret, Gemini only

    @property
    def configured(self) -> bool:
        return bool(self.secret or self.legacy_secret)

    def effective_provider(self) -> tuple[str, str]:
        """Provider/model that apply to the secret ``resolve_stored_secret`` picks."""
        if self.secret:
            return self.provider, self.model
        if self.legacy_secret:
            return LEGACY_PROVIDER.value, LEGACY_MODEL
        return self.provider or LEGACY_PROVIDER.value, self.model or LEGACY_MODEL


def resolve_stored_secret(record: CredentialRecord) -> tuple[str, SecretSource] | None:
    """Pick the encrypted secret to use: current field first, then legacy."""
    if record.secret:
        return record.secret, SecretSource.CURRENT
    if record.legacy_secret:
        return record.legacy_secret, SecretSource.LEGACY
    return None


async def load_record(db: AsyncSession, user_id: str) -> CredentialRecord:
    stmt = select(User.ai_provider, User.ai_model, User.ai_api_key, User.gemini_api_key).where(
        User.id == user_id
    )
    row = (await db.execute(stmt)).one_or_none()
    if row is None:
        raise UserNotFoundError(user_id)
    return CredentialRecord(
        provider=row.ai_provider,
        model=row.ai_model,
        secret=row.ai_api_key,
        legacy_secret=row.gemini_api_key,
    )


async def _update(db: AsyncSession, user_id: str, **values) -> None:
    result = await db.execute(update(User).where(User.id == user_id).values(**values))
    if result.rowcount == 0:
        await db.rollback()
        raise UserNotFoundError(user_id)
    await db.commit()


async def save_current(
    db: AsyncSession, user_id: str, provider: str, model: str, encrypted_secret: str
) -> None:
    """Replace provider/model/key together. The legacy field is left as is."""
    await _update(db, user_id, ai_provider=provider, ai_model=model, ai_api_key=encrypted_secret)


async def clear(db: AsyncSession, user_id: str) -> None:
    """Drop both keys and reset provider/model to their defaults."""
    await _update(
        db,
        user_id,
        ai_provider=LEGACY_PROVIDER.value,
        ai_model=LEGACY_MODEL,
        ai_api_key=None,
        gemini_api_key=None,
    )


async def promote_legacy(db: AsyncSession, user_id: str, record: CredentialRecord) -> bool:
    """Move a legacy-only key into the current fields, or retire a shadowed one.

    Returns True when the record changed. The ciphertext is copied as is;
    re-encryption is not needed because the master secret is unchanged.
    """
    if not record.legacy_secret:
        return False

    stmt = update(User).where(User.id == user_id, User.gemini_api_key == record.legacy_secret)
    if record.secret:
        stmt = stmt.values(gemini_api_key=None)
    elif not is_encrypted(record.legacy_secret):
        # Never promote a corrupt value into the current field
        logger.warning("Legacy key for user=%s is not in encrypted format; left in place", user_id)
        return False
    else:
        # Only if no current key was written since the record was loaded
        stmt = stmt.where(User.ai_api_key.is_(None)).values(
            ai_provider=LEGACY_PROVIDER.value,
            ai_model=LEGACY_MODEL,
            ai_api_key=record.legacy_secret,
            gemini_api_key=None,
        )
    result = await db.execute(stmt)
    await db.commit()
    return result.rowcount > 0


async def list_legacy_user_ids(db: AsyncSession) -> list[str]:
    stmt = select(User.id).where(User.gemini_api_key.is_not(None)).order_by(User.id)
    result = await db.execute(stmt)
    return list(result.scalars().all())
