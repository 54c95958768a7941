"""Resolution chain turning key file contents into key bytes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Callable, Optional, Type

from keyfile_factor.crypto.primitives import sha256
from keyfile_factor.crypto.secure_memory import secure_zeroize
from keyfile_factor.errors import DatabaseFileSelectedError, EmptyKeyFileError
from keyfile_factor.keyfile.formats import KeyFileFormat, parse_binary_key, parse_hex_key
from keyfile_factor.keyfile.signature import detect_database_signature
from keyfile_factor.keyfile.xml_format import parse_xml_key

logger = logging.getLogger(__name__)

Parser = Callable[[bytes], Optional[bytearray]]

# Tried in order; the first parser returning a key wins.
PARSERS: tuple[tuple[KeyFileFormat, Parser], ...] = (
    (KeyFileFormat.XML, parse_xml_key),
    (KeyFileFormat.BINARY, parse_binary_key),
    (KeyFileFormat.HEX, parse_hex_key),
)


@dataclass
class ResolvedKey:
    """Key bytes and the format they came from.

    The holder is expected to copy ``data`` into its own protected storage and
    then call :meth:`wipe` (or use the object as a context manager).
    """

    data: bytearray
    key_format: KeyFileFormat

    def __len__(self) -> int:
        return len(self.data)

    def wipe(self) -> None:
        secure_zeroize(self.data)

    def __enter__(self) -> ResolvedKey:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        self.wipe()
        return False


def resolve_key(data: bytes | bytearray, *, refuse_database_file: bool = False) -> ResolvedKey:
    """Resolve raw key file contents into a key.

    XML key files are tried first, then 32 raw bytes, then 64 hex characters.
    Anything else (including a 64-byte file that is not hex) is hashed with
    SHA-256, so every non-empty file yields a key.

    Raises:
        EmptyKeyFileError: ``data`` is empty.
        DatabaseFileSelectedError: ``refuse_database_file`` is set and ``data``
            starts with a password database signature.
    """

    if not data:
        raise EmptyKeyFileError("Key file is empty")

    if refuse_database_file:
        signature = detect_database_signature(data)
        if signature is not None:
            logger.debug("refusing key file with %s database signature", signature.value)
            raise DatabaseFileSelectedError()

    for key_format, parser in PARSERS:
        key = parser(data)
        if key is not None:
            logger.debug("key file resolved as %s (%d bytes)", key_format.value, len(key))
            return ResolvedKey(data=key, key_format=key_format)

    logger.debug("no structured key file format matched, hashing %d bytes", len(data))
    return ResolvedKey(data=sha256(data), key_format=KeyFileFormat.HASHED)
