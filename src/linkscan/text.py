"""Quoting helpers for link targets and paths.

Link targets are arbitrary bytes. ``quote_bytes`` renders them as a
double-quoted, escaped string that is always valid text, which is how
malformed targets are stored and how paths and targets are displayed.
"""

from __future__ import annotations

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _escape_codepoint(code: int) -> str:
    if code < 0x80:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def quote_bytes(raw: bytes) -> str:
    """Return ``raw`` as a double-quoted string with invalid UTF-8 bytes as ``\\xNN``."""
    text = raw.decode("utf-8", errors="surrogateescape")
    parts = ['"']
    for char in text:
        code = ord(char)
        if 0xDC80 <= code <= 0xDCFF:
            # surrogateescape maps an undecodable byte b to U+DC00 + b
            parts.append(f"\\x{code - 0xDC00:02x}")
        elif char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif not char.isprintable():
            parts.append(_escape_codepoint(code))
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


def quote(text: str) -> str:
    """Quote a str (which may carry surrogate-escaped bytes from ``os`` APIs)."""
    return quote_bytes(text.encode("utf-8", errors="surrogateescape"))


def is_valid_text(raw: bytes) -> bool:
    try:
        raw.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True
