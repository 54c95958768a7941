"""Raw key file formats: 32 bytes verbatim or 64 hexadecimal characters."""

from __future__ import annotations

import re
from enum import Enum

from keyfile_factor.crypto.secure_memory import secure_zeroize

KEY_LENGTH = 32
HEX_KEY_LENGTH = 2 * KEY_LENGTH

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")


class KeyFileFormat(str, Enum):
    """Step of the resolution chain that produced a key."""

    XML = "xml"
    BINARY = "binary"
    HEX = "hex"
    HASHED = "hashed"


def parse_binary_key(data: bytes | bytearray) -> bytearray | None:
    if len(data) != KEY_LENGTH:
        return None
    return bytearray(data)


def parse_hex_key(data: bytes | bytearray) -> bytearray | None:
    """Decode 64 hex characters into a 32-byte key, or return None."""

    if len(data) != HEX_KEY_LENGTH:
        return None
    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        return None
    if _HEX_RE.fullmatch(text) is None:
        return None

    key = bytearray.fromhex(text)
    if len(key) != KEY_LENGTH:
        secure_zeroize(key)
        return None
    return key
