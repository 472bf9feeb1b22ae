"""Shared FastAPI dependencies."""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from fridgechef.database import get_db
from fridgechef.services.credential_service import CredentialManager
from fridgechef.services.key_validator import ProviderKeyValidator, get_validator
from fridgechef.utils.crypto import SecretCipher, get_cipher


async def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Authenticated caller id, set by the upstream auth layer."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return x_user_id


async def get_credential_manager(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    cipher: SecretCipher = Depends(get_cipher),
    validator: ProviderKeyValidator = Depends(get_validator),
) -> CredentialManager:
    return CredentialManager(db, user_id, cipher, validator)
