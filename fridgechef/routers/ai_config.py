"""AI configuration endpoints — the user's provider, model and API key.

The ``/api-key`` routes keep older clients working; they map onto the same
operations with Gemini and its default model.
"""

from fastapi import APIRouter, Depends

from fridgechef.adapters import registry
from fridgechef.deps import get_credential_manager
from fridgechef.schemas.credential import (
    AIConfigResponse,
    AIConfigSet,
    AIConfigValidation,
    ApiKeySet,
    ApiKeyStatus,
    CredentialStatus,
    ProviderId,
)
from fridgechef.services.credential_service import CredentialManager

router = APIRouter()


@router.get("/ai-config", response_model=AIConfigResponse)
async def get_ai_config(manager: CredentialManager = Depends(get_credential_manager)):
    status = await manager.get_credential_status()
    return AIConfigResponse(**status.model_dump(), available_models=registry.available_models())


@router.post("/ai-config", response_model=CredentialStatus)
async def set_ai_config(
    data: AIConfigSet, manager: CredentialManager = Depends(get_credential_manager)
):
    return await manager.set_credential(data.api_key, data.provider, data.model)


@router.delete("/ai-config", response_model=CredentialStatus)
async def delete_ai_config(manager: CredentialManager = Depends(get_credential_manager)):
    return await manager.delete_credential()


@router.post("/ai-config/validate", response_model=AIConfigValidation)
async def validate_ai_config(manager: CredentialManager = Depends(get_credential_manager)):
    status = await manager.validate_stored_credential()
    return AIConfigValidation(valid=True, provider=status.provider, model=status.model)


@router.get("/ai-config/models")
async def list_models():
    return {
        "providers": [
            {
                "id": pid,
                "default_model": registry.default_model_for(pid),
                "models": registry.models_for(pid),
            }
            for pid in registry.provider_ids()
        ]
    }


# ── Legacy Gemini-only endpoints ─────────────────────────────────────


@router.post("/api-key", response_model=ApiKeyStatus)
async def set_api_key(data: ApiKeySet, manager: CredentialManager = Depends(get_credential_manager)):
    status = await manager.set_credential(data.api_key, ProviderId.GEMINI.value)
    return ApiKeyStatus(has_api_key=status.configured)


@router.get("/api-key/status", response_model=ApiKeyStatus)
async def get_api_key_status(manager: CredentialManager = Depends(get_credential_manager)):
    status = await manager.get_credential_status()
    return ApiKeyStatus(has_api_key=status.configured)


@router.delete("/api-key", response_model=ApiKeyStatus)
async def delete_api_key(manager: CredentialManager = Depends(get_credential_manager)):
    status = await manager.delete_credential()
    return ApiKeyStatus(has_api_key=status.configured)


@router.post("/api-key/validate")
async def validate_api_key(manager: CredentialManager = Depends(get_credential_manager)):
    await manager.validate_stored_credential()
    return {"valid": True}
