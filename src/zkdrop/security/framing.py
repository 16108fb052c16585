"""Envelope framing: ``nonce || payload`` blobs carried as base64 text.

Both transportable blobs share one layout::

    EncryptedData    = nonce_file (12) || ciphertext_file || tag (16)
    EncryptedFileKey = nonce_key  (12) || ciphertext_key  || tag (16)

The nonce width is a protocol constant, so no length prefix is stored.
"""
import base64
import binascii
from typing import Tuple

from ..core.config import NONCE_LENGTH
from ..core.exceptions import FormatError


def frame(nonce: bytes, payload: bytes) -> bytes:
    if len(nonce) != NONCE_LENGTH:
        raise FormatError(f"Nonce must be {NONCE_LENGTH} bytes, got {len(nonce)}")
    return bytes(nonce) + bytes(payload)


def unframe(blob: bytes, nonce_len: int = NONCE_LENGTH) -> Tuple[bytes, bytes]:
    """Split a framed blob into ``(nonce, payload)``."""
    if len(blob) < nonce_len:
        raise FormatError("Blob too short to contain nonce")
    return bytes(blob[:nonce_len]), bytes(blob[nonce_len:])


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(text, field: str = "value") -> bytes:
    """
    Strictly decode standard base64 text.

    Characters outside the alphabet and bad padding raise FormatError rather
    than being silently discarded.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("ascii", errors="replace")
    if not isinstance(text, str):
        raise FormatError(f"{field} must be a base64 string")
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise FormatError(f"{field} is not valid base64: {e}") from e
