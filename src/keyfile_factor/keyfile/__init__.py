"""Public key file API re-exported for external users."""
from __future__ import annotations

from keyfile_factor.keyfile.creator import create_key_file, create_key_file_bytes
from keyfile_factor.keyfile.formats import KEY_LENGTH, KeyFileFormat, parse_binary_key, parse_hex_key
from keyfile_factor.keyfile.key import KeyFileKey
from keyfile_factor.keyfile.resolver import ResolvedKey, resolve_key
from keyfile_factor.keyfile.signature import DatabaseSignature, detect_database_signature, looks_like_database
from keyfile_factor.keyfile.xml_format import build_xml_key_file, parse_xml_key

__all__ = [
    "KEY_LENGTH",
    "DatabaseSignature",
    "KeyFileFormat",
    "KeyFileKey",
    "ResolvedKey",
    "build_xml_key_file",
    "create_key_file",
    "create_key_file_bytes",
    "detect_database_signature",
    "looks_like_database",
    "parse_binary_key",
    "parse_hex_key",
    "parse_xml_key",
    "resolve_key",
]
