"""AES-256-GCM secret encryption/decryption keyed by a process-wide master secret.

Ciphertext format: ``salt:nonce:tag:ciphertext`` (hex segments). A fresh
salt and nonce are drawn for every call; the AES key is derived from the
master secret and the salt with PBKDF2-HMAC-SHA256.
"""

from __future__ import annotations

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from fridgechef.config import Settings, settings
from fridgechef.errors import (
    AuthenticationFailedError,
    ConfigurationError,
    InvalidInputError,
    MalformedCiphertextError,
)

SALT_LENGTH = 64
NONCE_LENGTH = 16
TAG_LENGTH = 16
KEY_LENGTH = 32
ITERATIONS = 100_000
DELIMITER = ":"


class MasterSecret:
    """Key-derivation input for :class:`SecretCipher`.

    Loaded once at process start and read-only afterwards. The value is
    kept out of ``repr`` so it cannot end up in logs or tracebacks.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str | None) -> None:
        self._value = value or ""

    @classmethod
    def from_settings(cls, cfg: Settings | None = None) -> MasterSecret:
        return cls((cfg or settings).encryption_secret)

    @property
    def is_set(self) -> bool:
        return bool(self._value)

    def require(self) -> bytes:
        if not self._value:
            raise ConfigurationError("FRIDGECHEF_ENCRYPTION_SECRET is not set")
        return self._value.encode("utf-8")

    def __repr__(self) -> str:
        return f"MasterSecret(is_set={self.is_set})"

    def __reduce__(self):
        raise TypeError("MasterSecret cannot be serialized")


def _derive_key(master: bytes, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=ITERATIONS,
    )
    return kdf.derive(master)


class SecretCipher:
    """Encrypts and decrypts single secret strings (API keys, tokens)."""

    def __init__(self, master_secret: MasterSecret) -> None:
        self._master = master_secret

    def encrypt(self, plaintext: str) -> str:
        master = self._master.require()
        if not isinstance(plaintext, str) or not plaintext:
            raise InvalidInputError("Invalid input for encryption")

        salt = os.urandom(SALT_LENGTH)
        nonce = os.urandom(NONCE_LENGTH)
        key = _derive_key(master, salt)

        # AESGCM appends the tag to the ciphertext
        sealed = AESGCM(key).encrypt(nonce, plaintext.encode("utf-8"), None)
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]

        return DELIMITER.join(part.hex() for part in (salt, nonce, tag, ciphertext))

    def decrypt(self, ciphertext: str) -> str:
        master = self._master.require()
        salt, nonce, tag, data = _split(ciphertext)
        key = _derive_key(master, salt)

        try:
            plaintext = AESGCM(key).decrypt(nonce, data + tag, None)
        except InvalidTag:
            raise AuthenticationFailedError(
                "Encrypted value failed authentication (tampered data or wrong master secret)"
            ) from None

        return plaintext.decode("utf-8")


def _split(ciphertext: str) -> tuple[bytes, bytes, bytes, bytes]:
    if not isinstance(ciphertext, str):
        raise MalformedCiphertextError("Invalid input for decryption")

    parts = ciphertext.split(DELIMITER)
    if len(parts) != 4:
        raise MalformedCiphertextError(
            f"Invalid encrypted data format: expected 4 segments, got {len(parts)}"
        )

    try:
        salt, nonce, tag, data = (bytes.fromhex(p) for p in parts)
    except ValueError:
        raise MalformedCiphertextError("Invalid encrypted data format: bad hex segment") from None

    if not salt or len(nonce) != NONCE_LENGTH or len(tag) != TAG_LENGTH:
        raise MalformedCiphertextError("Invalid encrypted data format: bad segment length")

    return salt, nonce, tag, data


def is_encrypted(text: str | None) -> bool:
    """Cheap format check — does *text* look like an EncryptedSecret?"""
    if not text or not isinstance(text, str):
        return False
    return len(text.split(DELIMITER)) == 4


def get_cipher() -> SecretCipher:
    """FastAPI dependency — cipher bound to the configured master secret."""
    return SecretCipher(MasterSecret.from_settings())
