"""
End-to-end share flow: a sender seals and uploads, the server gates, a
recipient downloads and opens. The "server" here is an in-memory dict standing
in for the database and object storage.
"""

from datetime import datetime, timezone

import pytest

from zkdrop.core.exceptions import InvalidPasswordError, DownloadLimitReachedError, WrongPasswordError
from zkdrop.core.models import ShareRecord, UploadRequest
from zkdrop.sharing.gate import ShareGate
from zkdrop.sharing.payload import accept_upload, build_download_grant, build_upload_request, open_download


def _server_accept(body: dict, blobs: dict, now: datetime) -> ShareRecord:
    # What an upload endpoint persists: no plaintext, no keys.
    req = UploadRequest.from_dict(body)
    storage_key = f"uploads/{len(blobs)}"
    blobs[storage_key] = req.sealed.encrypted_data
    return accept_upload(req, storage_key, now=now)


def test_share_roundtrip_through_gate():
    now = datetime.now(timezone.utc)
    blobs = {}
    plaintext = b"quarterly numbers\n" * 50

    body = build_upload_request(plaintext, "hunter22", "numbers.csv", max_downloads=1).to_dict()
    record = _server_accept(body, blobs, now)

    assert plaintext not in str(record).encode()
    assert record.mime_type == "text/csv"

    gate = ShareGate(clock=lambda: now)
    record = gate.lookup({record.share_link: record}, record.share_link)
    with pytest.raises(InvalidPasswordError):
        gate.authorize(record, "guess")

    gate.authorize(record, "hunter22")
    grant = build_download_grant(record, f"https://storage.example/{record.storage_key}")
    assert open_download(grant, blobs[record.storage_key], "hunter22") == plaintext

    with pytest.raises(DownloadLimitReachedError):
        gate.authorize(record, "hunter22")


def test_client_unwrap_is_the_real_boundary():
    """Even if the gate is bypassed, a wrong password cannot open the file."""
    now = datetime.now(timezone.utc)
    blobs = {}
    body = build_upload_request(b"top secret", "right", "s.txt").to_dict()
    record = _server_accept(body, blobs, now)

    grant = build_download_grant(record, "https://storage.example/x")
    with pytest.raises(WrongPasswordError):
        open_download(grant, blobs[record.storage_key], "wrong")
