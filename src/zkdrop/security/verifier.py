"""Password verifier sent to the share server for gating downloads.

The default verifier is a single unsalted SHA-256 of the UTF-8 password,
lowercase hex. It shares nothing with the PBKDF2 wrap key: knowing it does not
yield the key that unwraps the file key. It is still open to offline
dictionary attack if a server database leaks, so ``scheme="argon2id"`` is
available as an opt-in salted slow hash. Both forms are accepted by
:func:`verify_password`.
"""
import hmac

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from ..core.exceptions import InputError
from ..core.hashing import calculate_sha256_bytes
from .kdf import encode_password

SCHEME_SHA256 = "sha256"
SCHEME_ARGON2ID = "argon2id"

_hasher = PasswordHasher()


def hash_password(password, scheme: str = SCHEME_SHA256) -> str:
    raw = encode_password(password)
    if scheme == SCHEME_SHA256:
        return calculate_sha256_bytes(raw)
    if scheme == SCHEME_ARGON2ID:
        return _hasher.hash(raw)
    raise InputError(f"Unknown verifier scheme: {scheme}")


def verify_password(password, stored: str) -> bool:
    """Return True when ``password`` matches the stored verifier."""
    if not stored:
        return False
    raw = encode_password(password)
    if stored.startswith("$argon2"):
        try:
            return _hasher.verify(stored, raw)
        except (VerificationError, InvalidHashError):
            return False
    candidate = calculate_sha256_bytes(raw)
    # bytes compare: a stored value from an uploader may hold any characters
    return hmac.compare_digest(candidate.encode("ascii"), stored.lower().encode("utf-8", "surrogatepass"))
