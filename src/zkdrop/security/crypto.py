"""AES-256-GCM primitives and file-key wrapping.

``aead_seal`` returns ``ciphertext || tag`` exactly as
:class:`cryptography.hazmat.primitives.ciphers.aead.AESGCM` produces it, so a
sealed payload is always ``len(plaintext) + 16`` bytes. ``aead_open`` fails
closed: on a bad tag it raises and hands back nothing.
"""
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..core.config import KEY_LENGTH, NONCE_LENGTH, TAG_LENGTH
from ..core.exceptions import (
    AuthenticationError,
    CorruptedDataError,
    FormatError,
    InputError,
    WrongPasswordError,
)
from .framing import frame
from .provider import CryptoProvider, resolve


def generate_file_key(provider: Optional[CryptoProvider] = None) -> bytes:
    return resolve(provider).random_bytes(KEY_LENGTH)


def generate_nonce(provider: Optional[CryptoProvider] = None) -> bytes:
    return resolve(provider).random_bytes(NONCE_LENGTH)


def _check_params(key: bytes, nonce: bytes) -> None:
    if len(key) != KEY_LENGTH:
        raise InputError(f"Key must be {KEY_LENGTH} bytes, got {len(key)}")
    if len(nonce) != NONCE_LENGTH:
        raise InputError(f"Nonce must be {NONCE_LENGTH} bytes, got {len(nonce)}")


def aead_seal(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    _check_params(key, nonce)
    return AESGCM(key).encrypt(nonce, plaintext, None)


def aead_open(key: bytes, nonce: bytes, sealed: bytes) -> bytes:
    _check_params(key, nonce)
    if len(sealed) < TAG_LENGTH:
        # too short to even hold a tag; cannot authenticate
        raise AuthenticationError("Ciphertext shorter than authentication tag")
    try:
        return AESGCM(key).decrypt(nonce, sealed, None)
    except InvalidTag as e:
        raise AuthenticationError("Authentication tag mismatch") from e


def wrap_file_key(password_key: bytes, file_key: bytes, provider: Optional[CryptoProvider] = None) -> bytes:
    """Encrypt the raw file key under the password key; returns ``nonce || ct || tag``."""
    nonce = generate_nonce(provider)
    return frame(nonce, aead_seal(password_key, nonce, file_key))


def unwrap_file_key(password_key: bytes, nonce: bytes, sealed: bytes) -> bytes:
    try:
        file_key = aead_open(password_key, nonce, sealed)
    except AuthenticationError as e:
        raise WrongPasswordError("Wrong password or corrupted key blob") from e
    if len(file_key) != KEY_LENGTH:
        raise FormatError("Unwrapped file key has the wrong length")
    return file_key


def encrypt_body(file_key: bytes, data: bytes, provider: Optional[CryptoProvider] = None) -> bytes:
    """Encrypt file bytes under the file key; returns ``nonce || ct || tag``."""
    nonce = generate_nonce(provider)
    return frame(nonce, aead_seal(file_key, nonce, data))


def decrypt_body(file_key: bytes, nonce: bytes, sealed: bytes) -> bytes:
    try:
        return aead_open(file_key, nonce, sealed)
    except AuthenticationError as e:
        raise CorruptedDataError("File data failed authentication") from e
