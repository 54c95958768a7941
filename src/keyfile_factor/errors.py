"""Custom exceptions for Keyfile Factor."""


class KeyFileError(Exception):
    """Base exception for Keyfile Factor."""


class EmptyKeyFileError(KeyFileError):
    """Key file contains no data."""


class DatabaseFileSelectedError(KeyFileError):
    """Selected file is a password database, not a key file."""

    def __init__(self, message: str = "selected file is a database, not a key file") -> None:
        super().__init__(message)


class RandomSourceError(KeyFileError):
    """Secure random source could not produce key material."""
