"""Base64 encoding with optional line wrapping, and a lenient decoder."""

from __future__ import annotations

import base64 as _stdlib_base64

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_VALUES = {char: index for index, char in enumerate(_ALPHABET)}


def encode(data: bytes, line_length: int = -1) -> str:
    """Encode ``data``.

    With a positive ``line_length`` a newline is placed so that every line
    holds ``line_length - 1`` characters. Unless ``line_length`` is zero the
    result ends with a newline.
    """
    encoded = _stdlib_base64.b64encode(bytes(data)).decode("ascii")
    parts: list[str] = []
    size = 0
    for char in encoded:
        if line_length > 0 and (size + 1) % line_length == 0:
            parts.append("\n")
            size += 1
        parts.append(char)
        size += 1
    result = "".join(parts)
    if line_length != 0 and not result.endswith("\n"):
        result += "\n"
    return result


def decode(text: str) -> bytes:
    """Decode base64 text, ignoring newlines; unknown characters count as zero."""
    cleaned = text.replace("\n", "")
    length = len(cleaned)
    if length < 2:
        raise ValueError("invalid base64 string (too short)")
    pad = (cleaned[-1] == "=") + (cleaned[-2] == "=")

    def value(position: int) -> int:
        return _VALUES.get(cleaned[position], 0) if position < length else 0

    out = bytearray()
    last_quad = length - 4 - pad
    position = 0
    while position <= last_quad:
        a, b, c, d = (value(position + k) for k in range(4))
        out.append(((a << 2) | (b >> 4)) & 0xFF)
        out.append(((b << 4) | (c >> 2)) & 0xFF)
        out.append(((c << 6) | d) & 0xFF)
        position += 4

    if pad == 1:
        a, b, c = (value(position + k) for k in range(3))
        out.append(((a << 2) | (b >> 4)) & 0xFF)
        out.append(((b << 4) | (c >> 2)) & 0xFF)
    elif pad == 2:
        a, b = value(position), value(position + 1)
        out.append(((a << 2) | (b >> 4)) & 0xFF)
    return bytes(out)