"""Secret cipher tests."""

import pytest

from fridgechef.errors import (
    AuthenticationFailedError,
    ConfigurationError,
    InvalidInputError,
    MalformedCiphertextError,
)
from fridgechef.utils.crypto import (
    NONCE_LENGTH,
    SALT_LENGTH,
    TAG_LENGTH,
    MasterSecret,
    SecretCipher,
    is_encrypted,
)


def _flip_hex(segment: str, index: int) -> str:
    ch = segment[index]
    return segment[:index] + ("0" if ch != "0" else "1") + segment[index + 1 :]


@pytest.mark.parametrize(
    "plaintext",
    ["AIzaSyD-example-key", "gsk_" + "x" * 52, "ключ-🔑", " padded "],
)
def test_round_trip(cipher, plaintext):
    assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext


def test_format_has_four_hex_segments(cipher):
    token = cipher.encrypt("secret")
    salt, nonce, tag, data = token.split(":")
    assert len(bytes.fromhex(salt)) == SALT_LENGTH
    assert len(bytes.fromhex(nonce)) == NONCE_LENGTH
    assert len(bytes.fromhex(tag)) == TAG_LENGTH
    assert len(bytes.fromhex(data)) == len("secret")
    assert "secret" not in token


def test_encrypt_is_not_deterministic(cipher):
    a, b = cipher.encrypt("same-key"), cipher.encrypt("same-key")
    assert a != b
    assert a.split(":")[0] != b.split(":")[0]
    assert a.split(":")[1] != b.split(":")[1]


@pytest.mark.parametrize("segment", [2, 3])
def test_tampering_is_detected(cipher, segment):
    parts = cipher.encrypt("AIzaSyD-example-key").split(":")
    for index in (0, len(parts[segment]) // 2, len(parts[segment]) - 1):
        tampered = list(parts)
        tampered[segment] = _flip_hex(parts[segment], index)
        with pytest.raises(AuthenticationFailedError):
            cipher.decrypt(":".join(tampered))


def test_wrong_master_secret_fails_authentication(cipher):
    token = cipher.encrypt("AIzaSyD-example-key")
    other = SecretCipher(MasterSecret("rotated-master-secret"))
    with pytest.raises(AuthenticationFailedError):
        other.decrypt(token)


@pytest.mark.parametrize(
    "token",
    [
        "",
        "abcd",
        "aa:bb:cc",
        "aa:bb:cc:dd:ee",
        "zz:" + "00" * 16 + ":" + "00" * 16 + ":00",
        "aa:" + "00" * 16 + ":" + "00" * 8 + ":00",
        "aa:" + "00" * 4 + ":" + "00" * 16 + ":00",
        ":" + "00" * 16 + ":" + "00" * 16 + ":00",
    ],
)
def test_malformed_ciphertext(cipher, token):
    with pytest.raises(MalformedCiphertextError):
        cipher.decrypt(token)


def test_decrypt_rejects_non_string(cipher):
    with pytest.raises(MalformedCiphertextError):
        cipher.decrypt(None)  # type: ignore[arg-type]


@pytest.mark.parametrize("plaintext", ["", None, 42])
def test_encrypt_rejects_invalid_input(cipher, plaintext):
    with pytest.raises(InvalidInputError):
        cipher.encrypt(plaintext)  # type: ignore[arg-type]


def test_missing_master_secret():
    unset = SecretCipher(MasterSecret(""))
    with pytest.raises(ConfigurationError):
        unset.encrypt("secret")
    with pytest.raises(ConfigurationError):
        unset.decrypt("aa:bb:cc:dd")


def test_master_secret_is_not_exposed():
    master = MasterSecret("super-secret-value")
    assert "super-secret-value" not in repr(master)
    assert master.is_set
    assert not MasterSecret(None).is_set


def test_is_encrypted(cipher):
    assert is_encrypted(cipher.encrypt("secret"))
    assert not is_encrypted("AIzaSyD-plain-key")
    assert not is_encrypted(None)
