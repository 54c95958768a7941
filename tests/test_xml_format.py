"""Tests for XML key file reading and writing."""
from __future__ import annotations

import base64

from hypothesis import given, strategies as st

from keyfile_factor.keyfile.xml_format import build_xml_key_file, parse_xml_key


def _document(*data_values: str, meta: str = "<Meta><Version>1.00</Version></Meta>") -> bytes:
    key_children = "".join(f"<Data>{value}</Data>" for value in data_values)
    return f'<?xml version="1.0" encoding="utf-8"?><KeyFile>{meta}<Key>{key_children}</Key></KeyFile>'.encode()


def test_canonical_layout() -> None:
    key = bytes(range(32))
    encoded = base64.b64encode(key).decode("ascii")
    expected = (
        '<?xml version="1.0" encoding="utf-8"?>\r\n'
        "<KeyFile>\r\n"
        "\t<Meta>\r\n"
        "\t\t<Version>1.00</Version>\r\n"
        "\t</Meta>\r\n"
        "\t<Key>\r\n"
        f"\t\t<Data>{encoded}</Data>\r\n"
        "\t</Key>\r\n"
        "</KeyFile>\r\n"
    ).encode("utf-8")
    assert build_xml_key_file(key) == expected


@given(st.binary(min_size=1, max_size=128))
def test_written_document_parses_back(key: bytes) -> None:
    assert parse_xml_key(build_xml_key_file(key)) == bytearray(key)


def test_parse_accepts_any_whitespace() -> None:
    key = b"\x42" * 32
    encoded = base64.b64encode(key).decode("ascii")
    doc = f"<KeyFile>\n  <Meta>\n    <Version>9.99</Version>\n  </Meta>\n  <Key>\n    <Data>\n      {encoded[:20]}\n      {encoded[20:]}\n    </Data>\n  </Key>\n</KeyFile>\n"
    assert parse_xml_key(doc.encode()) == bytearray(key)


def test_data_length_is_not_validated() -> None:
    short = b"sixteen byte key"
    assert parse_xml_key(_document(base64.b64encode(short).decode())) == bytearray(short)


def test_first_data_element_wins() -> None:
    first = base64.b64encode(b"A" * 32).decode()
    second = base64.b64encode(b"B" * 32).decode()
    assert parse_xml_key(_document(first, second)) == bytearray(b"A" * 32)


def test_first_data_wins_across_key_elements() -> None:
    first = base64.b64encode(b"A" * 32).decode()
    second = base64.b64encode(b"B" * 32).decode()
    doc = f"<KeyFile><Key><Data>{first}</Data></Key><Key><Data>{second}</Data></Key></KeyFile>".encode()
    assert parse_xml_key(doc) == bytearray(b"A" * 32)


def test_later_malformed_data_is_ignored() -> None:
    first = base64.b64encode(b"A" * 32).decode()
    assert parse_xml_key(_document(first, "!!not base64!!")) == bytearray(b"A" * 32)


def test_meta_is_ignored() -> None:
    encoded = base64.b64encode(b"C" * 32).decode()
    doc = _document(encoded, meta=f"<Meta><Data>{base64.b64encode(b'D' * 32).decode()}</Data></Meta>")
    assert parse_xml_key(doc) == bytearray(b"C" * 32)


def test_wrong_root_is_soft_miss() -> None:
    encoded = base64.b64encode(b"A" * 32).decode()
    doc = f"<KeyFileX><Meta/><Key><Data>{encoded}</Data></Key></KeyFileX>".encode()
    assert parse_xml_key(doc) is None


def test_root_with_single_child_is_soft_miss() -> None:
    encoded = base64.b64encode(b"A" * 32).decode()
    doc = f"<KeyFile><Key><Data>{encoded}</Data></Key></KeyFile>".encode()
    assert parse_xml_key(doc) is None


def test_malformed_base64_is_soft_miss() -> None:
    assert parse_xml_key(_document("not*base64")) is None


def test_missing_data_is_soft_miss() -> None:
    assert parse_xml_key(b"<KeyFile><Meta/><Key/></KeyFile>") is None


def test_empty_data_decodes_to_empty_key() -> None:
    assert parse_xml_key(_document("")) == bytearray()
    assert parse_xml_key(_document("   ")) == bytearray()


def test_malformed_markup_is_soft_miss() -> None:
    assert parse_xml_key(b"<KeyFile><Meta></KeyFile>") is None
    assert parse_xml_key(b"\x00\x01\x02 not xml at all") is None
