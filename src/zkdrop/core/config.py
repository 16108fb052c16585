"""Protocol constants and service limits.

The byte-level values are fixed for interoperability: every sealer and opener
must agree on them or opening fails with an authentication error.
"""

import os

# Envelope protocol
NONCE_LENGTH = 12  # AES-GCM 96-bit nonce
SALT_LENGTH = 16
KEY_LENGTH = 32  # AES-256
TAG_LENGTH = 16  # GCM tag
PBKDF2_ITERATIONS = 600_000
MIN_PBKDF2_ITERATIONS = 600_000

# Share service limits
MAX_FILE_SIZE = 100 * 1024 * 1024  # 100MB
MAX_EXPIRATION_HOURS = 720  # 30 days
MAX_FILE_NAME_LENGTH = 255
SHARE_LINK_LENGTH = 21
DEFAULT_EXPIRATION_HOURS = 24

# CLI environment
PASSWORD_ENV = "ZKDROP_PASSWORD"
LOG_LEVEL_ENV = "ZKDROP_LOG_LEVEL"


def env_password():
    """Return the password from the environment, or None when unset/empty."""
    return os.environ.get(PASSWORD_ENV) or None


__all__ = [
    "NONCE_LENGTH", "SALT_LENGTH", "KEY_LENGTH", "TAG_LENGTH",
    "PBKDF2_ITERATIONS", "MIN_PBKDF2_ITERATIONS",
    "MAX_FILE_SIZE", "MAX_EXPIRATION_HOURS", "MAX_FILE_NAME_LENGTH",
    "SHARE_LINK_LENGTH", "DEFAULT_EXPIRATION_HOURS",
    "PASSWORD_ENV", "LOG_LEVEL_ENV", "env_password",
]
