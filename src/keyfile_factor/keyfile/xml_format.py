"""XML key files.

Sample document::

    <?xml version="1.0" encoding="utf-8"?>
    <KeyFile>
        <Meta>
            <Version>1.00</Version>
        </Meta>
        <Key>
            <Data>ySFoKuCcJblw8ie6RkMBdVCnAf4EedSch7ItujK6bmI=</Data>
        </Key>
    </KeyFile>

The reader ignores ``Meta`` entirely and does not check the decoded length of
``Data``. Anything that is not a well-formed key file document is reported as
``None`` so the caller can try the next format.
"""

from __future__ import annotations

import base64
import binascii
import logging
import xml.etree.ElementTree as ET

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "KeyFile"
META_ELEMENT = "Meta"
VERSION_ELEMENT = "Version"
KEY_ELEMENT = "Key"
DATA_ELEMENT = "Data"

XML_KEY_FILE_VERSION = "1.00"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
NEWLINE = "\r\n"


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _decode_base64(text: str | None) -> bytearray:
    compact = "".join((text or "").split())
    return bytearray(base64.b64decode(compact, validate=True))


def parse_xml_key(data: bytes | bytearray) -> bytearray | None:
    """Return the key stored in an XML key file, or None if ``data`` is not one."""

    try:
        root = ET.fromstring(bytes(data))
    except (ET.ParseError, LookupError, ValueError):
        return None

    if _local_name(root.tag) != ROOT_ELEMENT or len(root) < 2:
        return None

    for child in root:
        name = _local_name(child.tag)
        if name == META_ELEMENT:
            continue
        if name != KEY_ELEMENT:
            continue
        for key_child in child:
            if _local_name(key_child.tag) != DATA_ELEMENT:
                continue
            try:
                key = _decode_base64(key_child.text)
            except (binascii.Error, ValueError):
                logger.debug("XML key file has malformed base64 data")
                return None
            return key
    return None


def build_xml_key_file(key: bytes | bytearray) -> bytes:
    """Serialize ``key`` into the canonical XML key file layout (UTF-8, CRLF)."""

    if key is None:
        raise ValueError("key must not be None")

    root = ET.Element(ROOT_ELEMENT)
    root.text = NEWLINE + "\t"

    meta = ET.SubElement(root, META_ELEMENT)
    meta.text = NEWLINE + "\t\t"
    meta.tail = NEWLINE + "\t"
    version = ET.SubElement(meta, VERSION_ELEMENT)
    version.text = XML_KEY_FILE_VERSION
    version.tail = NEWLINE + "\t"

    key_element = ET.SubElement(root, KEY_ELEMENT)
    key_element.text = NEWLINE + "\t\t"
    key_element.tail = NEWLINE
    data_element = ET.SubElement(key_element, DATA_ELEMENT)
    data_element.text = base64.b64encode(bytes(key)).decode("ascii")
    data_element.tail = NEWLINE + "\t"

    body = ET.tostring(root, encoding="unicode")
    return (XML_DECLARATION + NEWLINE + body + NEWLINE).encode("utf-8")
