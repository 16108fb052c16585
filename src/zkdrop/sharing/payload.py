"""Upload and download payloads between a client and a share server."""

from __future__ import annotations

import logging
import mimetypes
from datetime import datetime, timedelta
from typing import Optional

from ..core.config import (
    DEFAULT_EXPIRATION_HOURS,
    MAX_EXPIRATION_HOURS,
    MAX_FILE_NAME_LENGTH,
    MAX_FILE_SIZE,
)
from ..core.exceptions import FileTooLargeError, InputError
from ..core.models import DownloadGrant, ShareRecord, UploadRequest, utcnow
from ..security.envelope import EnvelopeCipher
from .gate import generate_share_link

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def _validate_metadata(file_name: str, file_size: int, expiration_hours: int, max_downloads: Optional[int]) -> None:
    if not file_name:
        raise InputError("File name is required")
    if len(file_name) > MAX_FILE_NAME_LENGTH:
        raise InputError(f"File name longer than {MAX_FILE_NAME_LENGTH} characters")
    if file_size <= 0:
        raise InputError("File must not be empty")
    if file_size > MAX_FILE_SIZE:
        raise FileTooLargeError(
            f"File size exceeds maximum limit of {MAX_FILE_SIZE // 1024 // 1024}MB"
        )
    if expiration_hours <= 0 or expiration_hours > MAX_EXPIRATION_HOURS:
        raise InputError(f"Expiration must be between 1 and {MAX_EXPIRATION_HOURS} hours")
    if max_downloads is not None and max_downloads <= 0:
        raise InputError("Download limit must be positive")


def build_upload_request(
    file_bytes: bytes,
    password,
    file_name: str,
    mime_type: Optional[str] = None,
    expiration_hours: int = DEFAULT_EXPIRATION_HOURS,
    max_downloads: Optional[int] = None,
    cipher: Optional[EnvelopeCipher] = None,
) -> UploadRequest:
    """
    Seal ``file_bytes`` and attach the share metadata.

    Metadata is validated before sealing so no key derivation is spent on a
    request the server would refuse.
    """
    _validate_metadata(file_name, len(file_bytes), expiration_hours, max_downloads)
    if mime_type is None:
        mime_type = mimetypes.guess_type(file_name)[0] or DEFAULT_MIME_TYPE

    cipher = cipher or EnvelopeCipher()
    sealed = cipher.seal(file_bytes, password)
    logger.info("sealed %s (%d bytes) for upload", file_name, len(file_bytes))

    return UploadRequest(
        sealed=sealed,
        file_name=file_name,
        file_size=len(file_bytes),
        mime_type=mime_type,
        expiration_hours=expiration_hours,
        max_downloads=max_downloads,
    )


def accept_upload(
    request: UploadRequest,
    storage_key: str,
    now: Optional[datetime] = None,
    share_link: Optional[str] = None,
) -> ShareRecord:
    """
    Turn an accepted upload into the record a share server persists.

    The server re-checks the metadata limits, since it cannot trust the
    client. Only the wrapped key, salt and verifier are kept; the ciphertext
    itself lives under ``storage_key``.
    """
    _validate_metadata(request.file_name, request.file_size, request.expiration_hours, request.max_downloads)
    now = now or utcnow()
    record = ShareRecord(
        share_link=share_link or generate_share_link(),
        file_name=request.file_name,
        file_size=request.file_size,
        mime_type=request.mime_type,
        encrypted_file_key=request.sealed.encrypted_file_key,
        salt=request.sealed.salt,
        storage_key=storage_key,
        expires_at=now + timedelta(hours=request.expiration_hours),
        password_hash=request.sealed.password_verifier or None,
        max_downloads=request.max_downloads or None,
        created_at=now,
    )
    logger.info("accepted upload %s, expires %s", record.share_link, record.expires_at.isoformat())
    return record


def build_download_grant(record: ShareRecord, presigned_url: str) -> DownloadGrant:
    return DownloadGrant(
        presigned_url=presigned_url,
        encrypted_file_key=record.encrypted_file_key,
        salt=record.salt,
        file_name=record.file_name,
    )


def open_download(
    grant: DownloadGrant,
    encrypted_data: str,
    password,
    cipher: Optional[EnvelopeCipher] = None,
) -> bytes:
    """Decrypt the ciphertext fetched from ``grant.presigned_url``."""
    cipher = cipher or EnvelopeCipher()
    return cipher.open(encrypted_data, grant.encrypted_file_key, grant.salt, password)
