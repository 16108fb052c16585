"""Explicit source of randomness for the envelope protocol.

Every salt, nonce and file key the core generates is drawn through a
:class:`CryptoProvider`. Callers pass one in (or rely on the module default,
which reads ``os.urandom``); tests swap in :class:`DeterministicProvider` to
get reproducible envelopes without patching globals.
"""
from __future__ import annotations

import hashlib
import os
from typing import Callable, Optional


class CryptoProvider:
    def __init__(self, random_bytes: Optional[Callable[[int], bytes]] = None):
        self._random_bytes = random_bytes or os.urandom

    def random_bytes(self, length: int) -> bytes:
        """Return ``length`` bytes from the provider's random source."""
        if length < 0:
            raise ValueError("length must be non-negative")
        out = self._random_bytes(length)
        if len(out) != length:
            raise RuntimeError(f"random source returned {len(out)} bytes, expected {length}")
        return out


class DeterministicProvider(CryptoProvider):
    """SHA-256 counter stream keyed by ``seed``. Only for tests."""

    def __init__(self, seed: bytes | str = b"zkdrop-test"):
        if isinstance(seed, str):
            seed = seed.encode("utf-8")
        self._seed = seed
        self._counter = 0
        super().__init__(self._next_bytes)

    def _next_bytes(self, length: int) -> bytes:
        out = bytearray()
        while len(out) < length:
            block = hashlib.sha256(self._seed + self._counter.to_bytes(8, "big")).digest()
            self._counter += 1
            out += block
        return bytes(out[:length])


# module-level default provider
_default_provider = CryptoProvider()


def default_provider() -> CryptoProvider:
    return _default_provider


def resolve(provider: Optional[CryptoProvider]) -> CryptoProvider:
    return provider if provider is not None else _default_provider
