"""
Envelope encryption for zkdrop shares.

A file is sealed client-side so the share server only ever stores ciphertext
and non-secret parameters:

- a fresh random file key encrypts the file (AES-256-GCM)
- a PBKDF2 key derived from the password and a fresh salt wraps the file key
- both results are framed as ``nonce || ciphertext || tag`` and base64-encoded
- a SHA-256 password verifier is emitted for the server-side gate

Opening reverses the steps and checks the password on the small wrapped key
before touching the (possibly large) file body.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, NamedTuple, Optional

from ..core.config import PBKDF2_ITERATIONS
from ..core.exceptions import FormatError, InputError
from .crypto import decrypt_body, encrypt_body, generate_file_key, unwrap_file_key, wrap_file_key
from .framing import b64decode, b64encode, unframe
from .kdf import derive_password_key, encode_password, generate_salt
from .provider import CryptoProvider, resolve
from .verifier import hash_password

logger = logging.getLogger(__name__)


class SealedFile(NamedTuple):
    """The four values a sealed file travels as. Binary blobs are base64."""

    encrypted_data: str
    encrypted_file_key: str
    salt: str
    password_verifier: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "encryptedData": self.encrypted_data,
            "encryptedFileKey": self.encrypted_file_key,
            "salt": self.salt,
            "passwordHash": self.password_verifier,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SealedFile":
        try:
            return cls(
                encrypted_data=data["encryptedData"],
                encrypted_file_key=data["encryptedFileKey"],
                salt=data["salt"],
                password_verifier=data.get("passwordHash") or "",
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise FormatError(f"Envelope is missing field: {e}") from e


class EnvelopeCipher:
    """
    Seal and open files with the zkdrop envelope protocol.

    The cipher holds no key material between calls; it only carries the
    random source and the PBKDF2 iteration count, so one instance may be
    shared freely across threads.
    """

    def __init__(self, provider: Optional[CryptoProvider] = None, iterations: int = PBKDF2_ITERATIONS):
        self.provider = resolve(provider)
        self.iterations = iterations

    # ------------------------------------------------------------------
    # Sealing
    # ------------------------------------------------------------------

    def seal(self, file_bytes: bytes, password) -> SealedFile:
        """
        Encrypt ``file_bytes`` for sharing under ``password``.

        Steps:
        - generate salt and file key
        - encrypt the file under the file key with its own nonce
        - derive the password key from ``password`` and the salt
        - wrap the raw file key under the password key with a second nonce
        - hash the password for the server-side verifier
        """
        raw_password = encode_password(password)
        if not isinstance(file_bytes, (bytes, bytearray, memoryview)):
            raise InputError("File contents must be bytes")
        file_bytes = bytes(file_bytes)

        salt = generate_salt(provider=self.provider)
        file_key = generate_file_key(self.provider)
        encrypted_data = encrypt_body(file_key, file_bytes, self.provider)

        password_key = derive_password_key(raw_password, salt, iterations=self.iterations)
        encrypted_file_key = wrap_file_key(password_key, file_key, self.provider)

        verifier = hash_password(raw_password)
        logger.debug("sealed %d bytes into %d-byte envelope", len(file_bytes), len(encrypted_data))

        return SealedFile(
            encrypted_data=b64encode(encrypted_data),
            encrypted_file_key=b64encode(encrypted_file_key),
            salt=b64encode(salt),
            password_verifier=verifier,
        )

    # ------------------------------------------------------------------
    # Opening
    # ------------------------------------------------------------------

    def open(self, encrypted_data: str, encrypted_file_key: str, salt: str, password) -> bytes:
        """
        Decrypt a sealed file.

        Raises:
            InputError: missing password or salt of the wrong length
            FormatError: bad base64 or a blob shorter than its nonce
            WrongPasswordError: the file key did not unwrap
            CorruptedDataError: the file body did not authenticate
        """
        raw_password = encode_password(password)

        data_blob = b64decode(encrypted_data, "encryptedData")
        key_blob = b64decode(encrypted_file_key, "encryptedFileKey")
        salt_bytes = b64decode(salt, "salt")

        file_nonce, file_sealed = unframe(data_blob)
        key_nonce, key_sealed = unframe(key_blob)

        password_key = derive_password_key(raw_password, salt_bytes, iterations=self.iterations)
        # A wrong password stops here, before the file body is touched.
        file_key = unwrap_file_key(password_key, key_nonce, key_sealed)
        plaintext = decrypt_body(file_key, file_nonce, file_sealed)

        logger.debug("opened %d-byte envelope", len(data_blob))
        return plaintext


def seal_file(file_bytes: bytes, password, provider: Optional[CryptoProvider] = None) -> SealedFile:
    return EnvelopeCipher(provider).seal(file_bytes, password)


def open_file(
    encrypted_data: str,
    encrypted_file_key: str,
    salt: str,
    password,
    provider: Optional[CryptoProvider] = None,
) -> bytes:
    return EnvelopeCipher(provider).open(encrypted_data, encrypted_file_key, salt, password)
