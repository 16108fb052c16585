"""Unit tests for envelope framing and base64 transport encoding."""

import pytest

from zkdrop.core.exceptions import AuthenticationError, FormatError
from zkdrop.security.framing import b64decode, b64encode, frame, unframe


def test_frame_prefixes_nonce():
    assert frame(b"N" * 12, b"payload") == b"N" * 12 + b"payload"


def test_frame_rejects_wrong_nonce_width():
    with pytest.raises(FormatError):
        frame(b"N" * 11, b"payload")


def test_unframe_splits_at_nonce_length():
    nonce, payload = unframe(b"A" * 12 + b"rest")
    assert nonce == b"A" * 12
    assert payload == b"rest"


def test_unframe_exactly_nonce_length_gives_empty_payload():
    assert unframe(b"A" * 12) == (b"A" * 12, b"")


def test_unframe_too_short():
    with pytest.raises(FormatError, match="too short"):
        unframe(b"A" * 11)


def test_unframe_custom_nonce_len():
    assert unframe(b"abcdef", nonce_len=2) == (b"ab", b"cdef")


def test_b64_roundtrip_ascii_text():
    blob = bytes(range(256))
    text = b64encode(blob)
    assert isinstance(text, str)
    assert b64decode(text) == blob


@pytest.mark.parametrize("text", ["not base64!", "abc", "ab=c", "Zm9v\x00", "Zm9vü"])
def test_b64decode_rejects_malformed(text):
    with pytest.raises(FormatError):
        b64decode(text)


def test_b64decode_rejects_non_string():
    with pytest.raises(FormatError):
        b64decode(1234)


def test_format_error_is_not_authentication_error():
    assert not issubclass(FormatError, AuthenticationError)
