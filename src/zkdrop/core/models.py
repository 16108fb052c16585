"""
Data models for shares and the payloads exchanged with a share server
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..security.envelope import SealedFile
from .exceptions import FormatError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ShareRecord:
    """
    Server-side bookkeeping for one shared file.

    Holds only ciphertext locators and non-secret parameters: the wrapped
    file key, the salt and the password verifier.
    """

    share_link: str
    file_name: str
    file_size: int
    mime_type: str
    encrypted_file_key: str
    salt: str
    storage_key: str
    expires_at: datetime
    password_hash: Optional[str] = None
    max_downloads: Optional[int] = None
    download_count: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or utcnow()
        return self.expires_at < now or not self.is_active

    def limit_reached(self) -> bool:
        # a limit of None (or 0) means unlimited
        return bool(self.max_downloads) and self.download_count >= self.max_downloads

    def downloads_remaining(self) -> Optional[int]:
        if not self.max_downloads:
            return None
        return self.max_downloads - self.download_count

    def to_info(self) -> Dict[str, Any]:
        """Public file info, without any key material."""
        return {
            "fileName": self.file_name,
            "fileSize": self.file_size,
            "mimeType": self.mime_type,
            "expiresAt": self.expires_at.isoformat(),
            "hasPassword": self.has_password,
            "downloadsRemaining": self.downloads_remaining(),
        }


@dataclass
class UploadRequest:
    """What the uploading client sends: the sealed envelope plus metadata."""

    sealed: SealedFile
    file_name: str
    file_size: int
    mime_type: str
    expiration_hours: int
    max_downloads: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self.sealed.to_dict()
        data.update(
            {
                "fileName": self.file_name,
                "fileSize": self.file_size,
                "mimeType": self.mime_type,
                "expirationHours": self.expiration_hours,
            }
        )
        if self.max_downloads is not None:
            data["maxDownloads"] = self.max_downloads
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadRequest":
        try:
            return cls(
                sealed=SealedFile.from_dict(data),
                file_name=data["fileName"],
                file_size=int(data["fileSize"]),
                mime_type=data["mimeType"],
                expiration_hours=int(data["expirationHours"]),
                max_downloads=data.get("maxDownloads"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise FormatError(f"Malformed upload request: {e}") from e


@dataclass
class DownloadGrant:
    """What the server hands back once the gate lets a download through."""

    presigned_url: str
    encrypted_file_key: str
    salt: str
    file_name: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "presignedUrl": self.presigned_url,
            "encryptedFileKey": self.encrypted_file_key,
            "salt": self.salt,
            "fileName": self.file_name,
        }
