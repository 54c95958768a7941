from __future__ import annotations

import hashlib
from pathlib import Path

import keyfile_factor.keyfile as keyfile
from keyfile_factor.keyfile import KeyFileFormat, KeyFileKey, create_key_file, resolve_key


def test_public_names_are_exported() -> None:
    for name in keyfile.__all__:
        assert hasattr(keyfile, name), name


def test_public_round_trip(tmp_path: Path) -> None:
    target = create_key_file(tmp_path / "vault.keyx", b"extra entropy")
    with KeyFileKey.load(target, refuse_database_file=True) as key:
        with resolve_key(target.read_bytes()) as resolved:
            assert bytes(resolved.data) == key.key_data
            assert resolved.key_format is KeyFileFormat.XML


def test_public_hash_fallback() -> None:
    data = b"any old file contents"
    with resolve_key(data) as resolved:
        assert bytes(resolved.data) == hashlib.sha256(data).digest()
