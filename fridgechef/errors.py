"""Error taxonomy for the credential lifecycle.

Every error carries a machine-readable ``code``, the HTTP status the route
layer should answer with, and whether its message may be shown to the end
user. Operator-facing errors (configuration, corrupt ciphertext) are logged
and replaced by a generic message at the HTTP boundary.

No message or ``details`` payload may ever contain a plaintext secret.
"""

from typing import Any


class FridgeChefError(Exception):
    """Base class for all FridgeChef errors."""

    status_code: int = 500
    default_code: str = "INTERNAL_ERROR"
    user_facing: bool = False

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# ── Operator-facing ──────────────────────────────────────────────────


class ConfigurationError(FridgeChefError):
    """Missing or unusable process configuration (e.g. no master secret)."""

    default_code = "CONFIGURATION_ERROR"


class MalformedCiphertextError(FridgeChefError):
    """A stored EncryptedSecret does not have the expected shape."""

    default_code = "MALFORMED_CIPHERTEXT"


class AuthenticationFailedError(FridgeChefError):
    """Authenticated decryption failed: tampered data or a different master secret."""

    default_code = "AUTHENTICATION_FAILED"


# ── User-facing ──────────────────────────────────────────────────────


class InvalidInputError(FridgeChefError):
    status_code = 400
    default_code = "INVALID_INPUT"
    user_facing = True


class UnsupportedProviderError(InvalidInputError):
    default_code = "UNSUPPORTED_PROVIDER"

    def __init__(self, provider: str, supported: list[str]) -> None:
        super().__init__(
            f'Provider must be one of: {", ".join(supported)}',
            details={"provider": provider, "supported_providers": supported},
        )


class UnsupportedModelError(FridgeChefError):
    status_code = 400
    default_code = "UNSUPPORTED_MODEL"
    user_facing = True

    def __init__(self, provider: str, model: str, available_models: list[str]) -> None:
        super().__init__(
            f'Model "{model}" is not available for provider "{provider}"',
            details={"provider": provider, "model": model, "available_models": available_models},
        )
        self.available_models = available_models


class InvalidCredentialError(FridgeChefError):
    """The provider rejected the API key. Fix the key and retry."""

    status_code = 400
    default_code = "INVALID_CREDENTIAL"
    user_facing = True


class ProviderUnavailableError(FridgeChefError):
    """The provider could not be reached or answered with a transient failure."""

    status_code = 503
    default_code = "PROVIDER_UNAVAILABLE"
    user_facing = True


class NotConfiguredError(FridgeChefError):
    status_code = 404
    default_code = "NOT_CONFIGURED"
    user_facing = True

    def __init__(self, message: str = "No API key configured") -> None:
        super().__init__(message)


class UserNotFoundError(FridgeChefError):
    status_code = 404
    default_code = "USER_NOT_FOUND"
    user_facing = True

    def __init__(self, user_id: str) -> None:
        super().__init__("User not found", details={"user_id": user_id})
