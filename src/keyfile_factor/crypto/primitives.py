"""Hash and random primitives used by the key file chain."""

from __future__ import annotations

import os
from typing import Callable

from cryptography.hazmat.primitives import hashes

from keyfile_factor.errors import RandomSourceError


RandomSource = Callable[[int], bytes]


def sha256(*chunks: bytes | bytearray) -> bytearray:
    """Return SHA-256 over the concatenation of ``chunks`` as a wipeable buffer."""

    digest = hashes.Hash(hashes.SHA256())
    for chunk in chunks:
        digest.update(chunk)
    return bytearray(digest.finalize())


def secure_random_bytes(length: int) -> bytes:
    """Return ``length`` bytes from the operating system CSPRNG."""

    return os.urandom(length)


def random_key_bytes(length: int, source: RandomSource | None = None) -> bytearray:
    """Draw ``length`` bytes from ``source`` and check that it delivered them."""

    source = source or secure_random_bytes
    try:
        data = source(length)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceError("Secure random source is unavailable") from exc
    if data is None or len(data) != length:
        raise RandomSourceError(f"Random source returned {0 if data is None else len(data)} bytes, expected {length}")
    return bytearray(data)
