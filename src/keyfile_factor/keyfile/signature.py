"""Password database signature detection.

Only the first 8 bytes are inspected. A match means the user most likely
picked their database instead of their key file.
"""

from __future__ import annotations

from enum import Enum
from struct import Struct

SIGNATURE_LEN = 8

_SIGNATURE_STRUCT = Struct("<II")

FILE_SIGNATURE_1 = 0x9AA2D903
FILE_SIGNATURE_2 = 0xB54BFB67
FILE_SIGNATURE_PRE_RELEASE_1 = 0x9AA2D903
FILE_SIGNATURE_PRE_RELEASE_2 = 0xB54BFB66
FILE_SIGNATURE_OLD_1 = 0x9AA2D903
FILE_SIGNATURE_OLD_2 = 0xB54BFB65


class DatabaseSignature(str, Enum):
    KDBX = "kdbx"
    KDBX_PRE_RELEASE = "kdbx-prerelease"
    KDB = "kdb"


_KNOWN_SIGNATURES = {
    (FILE_SIGNATURE_1, FILE_SIGNATURE_2): DatabaseSignature.KDBX,
    (FILE_SIGNATURE_PRE_RELEASE_1, FILE_SIGNATURE_PRE_RELEASE_2): DatabaseSignature.KDBX_PRE_RELEASE,
    (FILE_SIGNATURE_OLD_1, FILE_SIGNATURE_OLD_2): DatabaseSignature.KDB,
}


def detect_database_signature(data: bytes | bytearray) -> DatabaseSignature | None:
    """Return the database family whose signature opens ``data``, if any."""

    if len(data) < SIGNATURE_LEN:
        return None
    words = _SIGNATURE_STRUCT.unpack_from(data, 0)
    return _KNOWN_SIGNATURES.get(words)


def looks_like_database(data: bytes | bytearray) -> bool:
    return detect_database_signature(data) is not None
