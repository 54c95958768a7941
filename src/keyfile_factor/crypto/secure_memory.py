"""Secure memory helpers for key file material.

Key bytes produced by the resolution chain live in ``bytearray`` objects so
they can be overwritten once they have been handed off. ``SecureBuffer`` adds
best-effort memory locking (mlock) on POSIX systems so the protected copy is
not swapped to disk.
"""
from __future__ import annotations

import ctypes
import ctypes.util
import logging
import platform
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

_MLOCK_AVAILABLE = False
_libc: ctypes.CDLL | None = None

if platform.system() != "Windows":
    try:
        _libc_name = ctypes.util.find_library("c")
        if _libc_name:
            _libc = ctypes.CDLL(_libc_name, use_errno=True)
            _MLOCK_AVAILABLE = True
    except OSError:
        pass


def mlock_available() -> bool:
    """Return True if mlock is available on this platform."""
    return _MLOCK_AVAILABLE


def secure_zeroize(data: bytearray | None) -> None:
    """Overwrite a bytearray with zeros in place."""
    if data is None:
        return
    length = len(data)
    for i in range(length):
        data[i] = 0
    if length > 0:
        _ = data[0]


@contextmanager
def wiped(data: bytearray | None) -> Iterator[bytearray | None]:
    """Yield ``data`` and zero it when the block exits, however it exits."""
    try:
        yield data
    finally:
        secure_zeroize(data)


class SecureBuffer:
    """Fixed-size buffer that attempts to mlock memory and zeroes on close.

    Usage::

        with SecureBuffer.from_bytes(key) as buf:
            use_key(bytes(buf))
        # memory is zeroed and munlocked here
    """

    def __init__(self, size: int) -> None:
        self._buffer = bytearray(size)
        self._size = size
        self._locked = False
        self._closed = False

        if size and _MLOCK_AVAILABLE and _libc is not None:
            try:
                addr = (ctypes.c_char * size).from_buffer(self._buffer)
                if _libc.mlock(ctypes.addressof(addr), size) == 0:
                    self._locked = True
                else:
                    logger.debug("mlock failed (errno=%d), proceeding without lock", ctypes.get_errno())
            except (AttributeError, OSError, ValueError, TypeError):
                logger.debug("mlock unavailable, proceeding without lock")

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> SecureBuffer:
        """Copy ``data`` into a new locked buffer. The caller still owns ``data``."""
        secure = cls(len(data))
        secure._buffer[:] = data
        return secure

    def __enter__(self) -> bytearray:
        return self._buffer

    def __exit__(self, *args: object) -> None:
        self.close()

    def __len__(self) -> int:
        return self._size

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def buffer(self) -> bytearray:
        return self._buffer

    def close(self) -> None:
        """Zero the buffer and unlock its memory. Safe to call twice."""
        secure_zeroize(self._buffer)

        if self._locked and _libc is not None:
            try:
                addr = (ctypes.c_char * self._size).from_buffer(self._buffer)
                _libc.munlock(ctypes.addressof(addr), self._size)
            except (AttributeError, OSError, ValueError, TypeError):
                logger.debug("munlock failed, buffer already zeroed")
            self._locked = False
        self._closed = True
