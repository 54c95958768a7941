"""Generation of new random XML key files."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from keyfile_factor.crypto.primitives import RandomSource, random_key_bytes, sha256
from keyfile_factor.crypto.secure_memory import secure_zeroize, wiped
from keyfile_factor.keyfile.formats import KEY_LENGTH
from keyfile_factor.keyfile.xml_format import build_xml_key_file

logger = logging.getLogger(__name__)


def create_key_file_bytes(
    additional_entropy: bytes | bytearray | None = None,
    *,
    random_source: RandomSource | None = None,
) -> bytes:
    """Generate a fresh key and return it serialized as an XML key file.

    When ``additional_entropy`` is non-empty the key is
    ``SHA-256(additional_entropy || random)``; otherwise the random bytes are
    used directly. ``random_source`` defaults to the OS CSPRNG.
    """

    with wiped(random_key_bytes(KEY_LENGTH, random_source)) as random_key:
        if not additional_entropy:
            return build_xml_key_file(random_key)
        with wiped(sha256(additional_entropy, random_key)) as final_key:
            return build_xml_key_file(final_key)


def _ensure_output(path: Path, overwrite: bool) -> None:
    if path.exists():
        if not overwrite:
            raise FileExistsError(f"Refusing to overwrite existing file: {path}")
        if path.is_dir():
            raise IsADirectoryError(f"Key file path is a directory: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)


def create_key_file(
    path: Path | str,
    additional_entropy: bytes | bytearray | None = None,
    *,
    overwrite: bool = True,
    random_source: RandomSource | None = None,
) -> Path:
    """Create a new random key file at ``path`` and return the path.

    The document is written to a temporary file next to ``path`` and moved
    into place, so an existing key file is either fully replaced or untouched.
    """

    out_path = Path(path)
    _ensure_output(out_path, overwrite)
    document = bytearray(create_key_file_bytes(additional_entropy, random_source=random_source))

    fd, temp_name = tempfile.mkstemp(prefix=f".{out_path.name}.", suffix=".tmp", dir=out_path.parent)
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as temp_file:
            temp_file.write(document)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        if not overwrite and out_path.exists():
            raise FileExistsError(f"Refusing to overwrite existing file: {out_path}")
        temp_path.replace(out_path)
    finally:
        secure_zeroize(document)
        temp_path.unlink(missing_ok=True)

    logger.debug("created key file %s", out_path)
    return out_path
