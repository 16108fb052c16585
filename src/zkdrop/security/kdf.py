"""Password-based key derivation for zkdrop."""
from typing import Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..core.config import KEY_LENGTH, MIN_PBKDF2_ITERATIONS, PBKDF2_ITERATIONS, SALT_LENGTH
from ..core.exceptions import InputError
from .provider import CryptoProvider, resolve


def generate_salt(length: int = SALT_LENGTH, provider: Optional[CryptoProvider] = None) -> bytes:
    """Return a cryptographically secure random salt."""
    return resolve(provider).random_bytes(length)


def encode_password(password) -> bytes:
    """Return the UTF-8 bytes of ``password``; raise InputError when missing."""
    if password is None:
        raise InputError("Password is required")
    if isinstance(password, str):
        password = password.encode("utf-8")
    if not isinstance(password, (bytes, bytearray)):
        raise InputError("Password must be str or bytes")
    if not password:
        raise InputError("Password is required")
    return bytes(password)


def derive_password_key(
    password: bytes,
    salt: bytes,
    iterations: int = PBKDF2_ITERATIONS,
    key_len: int = KEY_LENGTH,
) -> bytes:
    """
    Derive the key-wrapping key from a password using PBKDF2-HMAC-SHA256.
    Returns raw derived key bytes. The same inputs always give the same key.
    """
    password = encode_password(password)
    if not isinstance(salt, (bytes, bytearray)) or len(salt) != SALT_LENGTH:
        raise InputError(f"Salt must be exactly {SALT_LENGTH} bytes")
    if iterations < MIN_PBKDF2_ITERATIONS:
        raise InputError(f"Iteration count must be at least {MIN_PBKDF2_ITERATIONS}")

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=key_len,
        salt=bytes(salt),
        iterations=iterations,
    )
    return kdf.derive(password)
