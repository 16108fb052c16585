"""
Server-side download gate.

The gate checks expiry, the download limit and the password verifier before a
wrapped key and ciphertext locator are released. It is a convenience check:
the confidentiality boundary is the client-side unwrap, which fails on a wrong
password whether or not the gate ran.
"""

from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional

from ..core.config import SHARE_LINK_LENGTH
from ..core.exceptions import (
    DownloadLimitReachedError,
    InvalidPasswordError,
    PasswordRequiredError,
    ShareNotFoundError,
    ShareExpiredError,
)
from ..core.models import ShareRecord, utcnow
from ..security.verifier import verify_password

logger = logging.getLogger(__name__)

# nanoid's default URL-safe alphabet
SHARE_LINK_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_share_link(length: int = SHARE_LINK_LENGTH) -> str:
    return "".join(secrets.choice(SHARE_LINK_ALPHABET) for _ in range(length))


class ShareGate:
    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or utcnow

    def lookup(self, records: Mapping[str, ShareRecord], share_link: str) -> ShareRecord:
        record = records.get(share_link)
        if record is None:
            raise ShareNotFoundError("File not found")
        return record

    def check_available(self, record: ShareRecord) -> None:
        """Raise if the share has expired, been deactivated or run out of downloads."""
        if record.is_expired(self._clock()):
            raise ShareExpiredError("This file has expired and is no longer available")
        if record.limit_reached():
            raise DownloadLimitReachedError("Download limit reached for this file")

    def info(self, record: ShareRecord) -> Dict[str, Any]:
        self.check_available(record)
        return record.to_info()

    def authorize(self, record: ShareRecord, password: Optional[str] = None) -> ShareRecord:
        """
        Admit one download of ``record``.

        On success the download count is incremented and the record returned;
        otherwise the matching AccessDeniedError subclass is raised and the
        record is left untouched.
        """
        self.check_available(record)

        if record.has_password:
            if not password:
                raise PasswordRequiredError("Password required for this file")
            if not verify_password(password, record.password_hash):
                logger.info("rejected download of %s: bad password", record.share_link)
                raise InvalidPasswordError("Incorrect password")

        record.download_count += 1
        logger.info(
            "download %d of %s admitted",
            record.download_count,
            record.share_link,
        )
        return record
