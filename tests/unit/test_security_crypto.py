"""Unit tests for the AES-GCM primitives and file-key wrapping."""

import os

import pytest

from zkdrop.core.exceptions import (
    AuthenticationError,
    CorruptedDataError,
    InputError,
    WrongPasswordError,
)
from zkdrop.security.crypto import (
    aead_open,
    aead_seal,
    decrypt_body,
    encrypt_body,
    generate_file_key,
    generate_nonce,
    unwrap_file_key,
    wrap_file_key,
)
from zkdrop.security.framing import unframe

KEY = b"k" * 32
NONCE = b"n" * 12


# ==============================================================================
# Tests: aead_seal / aead_open
# ==============================================================================

def test_generate_sizes():
    assert len(generate_file_key()) == 32
    assert len(generate_nonce()) == 12


def test_seal_appends_16_byte_tag():
    ct = aead_seal(KEY, NONCE, b"hello world")
    assert len(ct) == len(b"hello world") + 16


def test_seal_open_roundtrip():
    data = os.urandom(5000)
    assert aead_open(KEY, NONCE, aead_seal(KEY, NONCE, data)) == data


def test_open_empty_plaintext():
    ct = aead_seal(KEY, NONCE, b"")
    assert len(ct) == 16
    assert aead_open(KEY, NONCE, ct) == b""


def test_open_wrong_key_fails_closed():
    ct = aead_seal(KEY, NONCE, b"secret")
    with pytest.raises(AuthenticationError):
        aead_open(b"x" * 32, NONCE, ct)


def test_open_wrong_nonce_fails():
    ct = aead_seal(KEY, NONCE, b"secret")
    with pytest.raises(AuthenticationError):
        aead_open(KEY, b"m" * 12, ct)


def test_open_truncated_fails():
    ct = aead_seal(KEY, NONCE, b"secret")
    with pytest.raises(AuthenticationError):
        aead_open(KEY, NONCE, ct[:-1])
    with pytest.raises(AuthenticationError, match="shorter than authentication tag"):
        aead_open(KEY, NONCE, ct[:10])


@pytest.mark.parametrize("key,nonce", [(b"k" * 16, NONCE), (KEY, b"n" * 16), (b"", NONCE)])
def test_bad_key_or_nonce_length_is_input_error(key, nonce):
    with pytest.raises(InputError):
        aead_seal(key, nonce, b"x")


# ==============================================================================
# Tests: wrapping and body encryption
# ==============================================================================

def test_wrap_unwrap_roundtrip():
    file_key = generate_file_key()
    wrapped = wrap_file_key(KEY, file_key)
    assert len(wrapped) == 12 + 32 + 16
    nonce, sealed = unframe(wrapped)
    assert unwrap_file_key(KEY, nonce, sealed) == file_key


def test_unwrap_wrong_password_key():
    nonce, sealed = unframe(wrap_file_key(KEY, generate_file_key()))
    with pytest.raises(WrongPasswordError):
        unwrap_file_key(b"z" * 32, nonce, sealed)


def test_wrapping_uses_fresh_nonce():
    file_key = generate_file_key()
    assert wrap_file_key(KEY, file_key)[:12] != wrap_file_key(KEY, file_key)[:12]


def test_decrypt_body_reports_corruption():
    blob = bytearray(encrypt_body(KEY, b"file contents"))
    blob[20] ^= 0x01
    nonce, sealed = unframe(bytes(blob))
    with pytest.raises(CorruptedDataError):
        decrypt_body(KEY, nonce, sealed)


def test_wrong_password_and_corruption_are_authentication_errors():
    assert issubclass(WrongPasswordError, AuthenticationError)
    assert issubclass(CorruptedDataError, AuthenticationError)
