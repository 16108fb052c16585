"""
zkdrop command line.

    zkdrop seal report.pdf -o report.zkdrop.json --expires 48 --max-downloads 3
    zkdrop open report.zkdrop.json -o report.pdf

``seal`` writes the same JSON body a client would POST to a share server;
``open`` reads it back and decrypts locally. The password is read from
``ZKDROP_PASSWORD`` when set, otherwise prompted for.
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from zkdrop.core.config import DEFAULT_EXPIRATION_HOURS, env_password
from zkdrop.core.exceptions import FormatError, ZKDropError
from zkdrop.core.hashing import calculate_sha256
from zkdrop.core.models import UploadRequest
from zkdrop.frontend.cli.logging_config import configure_logging
from zkdrop.security.envelope import EnvelopeCipher
from zkdrop.sharing.payload import build_upload_request

logger = logging.getLogger(__name__)

ENVELOPE_SUFFIX = ".zkdrop.json"


def _read_password(confirm: bool) -> str:
    password = env_password()
    if password:
        return password
    password = getpass.getpass("Password: ")
    if confirm and getpass.getpass("Confirm password: ") != password:
        raise ZKDropError("Passwords do not match")
    return password


def cmd_seal(args: argparse.Namespace) -> int:
    src = Path(args.file).expanduser()
    out = Path(args.output) if args.output else src.with_name(src.name + ENVELOPE_SUFFIX)
    data = src.read_bytes()

    request = build_upload_request(
        data,
        _read_password(confirm=True),
        file_name=args.name or src.name,
        mime_type=args.mime,
        expiration_hours=args.expires,
        max_downloads=args.max_downloads,
    )
    out.write_text(json.dumps(request.to_dict(), indent=2), encoding="utf-8")
    logger.info("wrote envelope %s (sha256 %s)", out, calculate_sha256(out))
    print(out)
    return 0


def _default_output(envelope: Path, file_name) -> Path:
    # only the basename of the recorded name is trusted
    name = Path(file_name).name if isinstance(file_name, str) else ""
    if name in ("", ".", ".."):
        raise FormatError(f"{envelope} records no usable file name; pass -o/--output")
    return envelope.with_name(name)


def cmd_open(args: argparse.Namespace) -> int:
    src = Path(args.envelope).expanduser()
    try:
        body = json.loads(src.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise FormatError(f"{src} is not a JSON envelope: {e}") from e
    if not isinstance(body, dict):
        raise FormatError(f"{src} is not a JSON envelope")
    request = UploadRequest.from_dict(body)
    out = Path(args.output) if args.output else _default_output(src, request.file_name)

    plaintext = EnvelopeCipher().open(
        request.sealed.encrypted_data,
        request.sealed.encrypted_file_key,
        request.sealed.salt,
        _read_password(confirm=False),
    )
    out.write_bytes(plaintext)
    logger.info("decrypted %d bytes to %s", len(plaintext), out)
    print(out)
    return 0


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zkdrop",
        description="Seal files client-side for zero-knowledge sharing, and open them again.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    seal = sub.add_parser("seal", help="Encrypt a file into a JSON envelope.")
    seal.add_argument("file", help="File to encrypt.")
    seal.add_argument("-o", "--output", default=None, help="Envelope path (default: FILE.zkdrop.json).")
    seal.add_argument("--name", default=None, help="File name recorded in the envelope.")
    seal.add_argument("--mime", default=None, help="MIME type (guessed from the name if omitted).")
    seal.add_argument(
        "--expires",
        type=int,
        default=DEFAULT_EXPIRATION_HOURS,
        help="Hours until the share expires.",
    )
    seal.add_argument("--max-downloads", type=int, default=None, help="Download limit.")
    seal.set_defaults(func=cmd_seal)

    opener = sub.add_parser("open", help="Decrypt a JSON envelope.")
    opener.add_argument("envelope", help="Envelope produced by 'zkdrop seal'.")
    opener.add_argument("-o", "--output", default=None, help="Output path (default: recorded file name).")
    opener.set_defaults(func=cmd_open)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else None)

    try:
        return args.func(args)
    except ZKDropError as e:
        print(f"error [{e.code}]: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
