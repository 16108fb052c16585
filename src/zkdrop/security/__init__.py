"""Security helpers: the zkdrop envelope encryption protocol.

This package provides:
- PBKDF2-SHA256 password key derivation
- Per-file key generation and wrapping
- AES-256-GCM sealing with ``nonce || ciphertext || tag`` framing
- The password verifier used by the share gate
"""

from .kdf import generate_salt, derive_password_key
from .crypto import (
    generate_file_key,
    aead_seal,
    aead_open,
    wrap_file_key,
    unwrap_file_key,
)
from .framing import frame, unframe, b64encode, b64decode
from .envelope import EnvelopeCipher, SealedFile, seal_file, open_file
from .provider import CryptoProvider, DeterministicProvider, default_provider
from .verifier import hash_password, verify_password

__all__ = [
    "generate_salt",
    "derive_password_key",
    "generate_file_key",
    "aead_seal",
    "aead_open",
    "wrap_file_key",
    "unwrap_file_key",
    "frame",
    "unframe",
    "b64encode",
    "b64decode",
    "EnvelopeCipher",
    "SealedFile",
    "seal_file",
    "open_file",
    "CryptoProvider",
    "DeterministicProvider",
    "default_provider",
    "hash_password",
    "verify_password",
]
