"""Key files as supplied by the user."""

from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import Optional, Type

from keyfile_factor.crypto.secure_memory import SecureBuffer, wiped
from keyfile_factor.errors import KeyFileError
from keyfile_factor.keyfile.formats import KeyFileFormat
from keyfile_factor.keyfile.resolver import resolve_key


class KeyFileKey:
    """Key material resolved from a key file, plus the path it came from.

    The path is kept for display only. The key is held in a
    :class:`SecureBuffer` until :meth:`close` is called.
    """

    def __init__(self, path: Path, key: SecureBuffer, key_format: KeyFileFormat) -> None:
        self._path = path
        self._key = key
        self._key_format = key_format

    @classmethod
    def load(cls, path: Path | str, *, refuse_database_file: bool = False) -> KeyFileKey:
        """Read and resolve the key file at ``path``.

        Filesystem errors propagate unchanged. See
        :func:`keyfile_factor.keyfile.resolver.resolve_key` for the key file
        errors.
        """

        key_path = Path(path)
        with wiped(bytearray(key_path.read_bytes())) as raw:
            with resolve_key(raw, refuse_database_file=refuse_database_file) as resolved:
                secure = SecureBuffer.from_bytes(resolved.data)
                return cls(key_path, secure, resolved.key_format)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def key_format(self) -> KeyFileFormat:
        return self._key_format

    @property
    def key_data(self) -> bytes:
        if self._key.closed:
            raise KeyFileError("Key data has been cleared")
        return bytes(self._key.buffer)

    def close(self) -> None:
        self._key.close()

    def __enter__(self) -> KeyFileKey:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        self.close()
        return False
