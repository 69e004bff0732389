"""Encoding detection for XML templates."""

from __future__ import annotations

import codecs
import re

DEFAULT_ENCODING = "UTF-8"

_BOMS = (
    (codecs.BOM_UTF32_BE, "UTF-32BE"),
    (codecs.BOM_UTF32_LE, "UTF-32LE"),
    (codecs.BOM_UTF8, "UTF-8"),
    (codecs.BOM_UTF16_BE, "UTF-16BE"),
    (codecs.BOM_UTF16_LE, "UTF-16LE"),
)

# "<?xml" prefixes without a byte order mark (XML 1.0, appendix F).
_PROLOG_SIGNATURES = (
    (b"\x00\x00\x00\x3c", "UTF-32BE"),
    (b"\x3c\x00\x00\x00", "UTF-32LE"),
    (b"\x00\x3c\x00\x3f", "UTF-16BE"),
    (b"\x3c\x00\x3f\x00", "UTF-16LE"),
)

_DECLARATION = re.compile(
    rb"""^\s*<\?xml[^>]*?\sencoding\s*=\s*(?:"([A-Za-z][\w.\-]*)"|'([A-Za-z][\w.\-]*)')""",
)

_CANONICAL = {
    "utf8": "UTF-8",
    "utf16": "UTF-16",
    "utf16be": "UTF-16BE",
    "utf16le": "UTF-16LE",
    "utf32": "UTF-32",
    "utf32be": "UTF-32BE",
    "utf32le": "UTF-32LE",
    "usascii": "US-ASCII",
    "ascii": "US-ASCII",
    "iso88591": "ISO-8859-1",
    "latin1": "ISO-8859-1",
    "cp1252": "windows-1252",
    "windows1252": "windows-1252",
}


def detect_xml_encoding(data: bytes) -> str:
    """Return the canonical encoding name declared or implied by ``data``.

    Byte order marks win, then the byte layout of the ``<?xml`` prolog,
    then the declaration's ``encoding`` attribute. Documents carrying none
    of these are UTF-8.
    """

    for bom, name in _BOMS:
        if data.startswith(bom):
            return name

    head = data[:4]
    for signature, name in _PROLOG_SIGNATURES:
        if head == signature:
            return name

    match = _DECLARATION.match(data[:1024])
    if match:
        declared = (match.group(1) or match.group(2)).decode("ascii")
        return canonical_encoding(declared)
    return DEFAULT_ENCODING


def canonical_encoding(name: str) -> str:
    """Normalise a known encoding label; unknown labels are returned as declared."""

    key = re.sub(r"[\s_\-.]", "", name).lower()
    return _CANONICAL.get(key, name)
