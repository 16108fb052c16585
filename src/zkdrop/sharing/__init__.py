"""Share plumbing around the envelope protocol: the download gate and payloads."""

from .gate import ShareGate, generate_share_link
from .payload import accept_upload, build_upload_request, build_download_grant, open_download

__all__ = [
    "ShareGate",
    "generate_share_link",
    "accept_upload",
    "build_upload_request",
    "build_download_grant",
    "open_download",
]
