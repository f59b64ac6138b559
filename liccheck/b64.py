"""Base64 encoding with optional line breaks, and a lenient decoder."""

from __future__ import annotations

import binascii

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_VALUE_OF = {symbol: value for value, symbol in enumerate(_ALPHABET)}


def base64_encode(data: bytes, line_length: int = -1) -> str:
    """Encode data as base64.

    With a positive ``line_length`` a newline is inserted so that every line
    holds ``line_length - 1`` symbols. Unless ``line_length`` is 0 the result
    always ends with a newline.
    """
    symbols = binascii.b2a_base64(bytes(data), newline=False).decode("ascii")
    chars: list[str] = []
    for symbol in symbols:
        if line_length > 0 and (len(chars) + 1) % line_length == 0:
            chars.append("\n")
        chars.append(symbol)
    if line_length and (not chars or chars[-1] != "\n"):
        chars.append("\n")
    return "".join(chars)


def base64_decode(text: str) -> bytes:
    """Decode base64 text, ignoring newlines.

    Unknown symbols count as zero; input shorter than two symbols yields no bytes.
    """
    cleaned = text.replace("\n", "")
    if len(cleaned) < 2:
        return b""
    pad = (cleaned[-1] == "=") + (cleaned[-2] == "=")
    values = [_VALUE_OF.get(symbol, 0) for symbol in cleaned]

    limit = len(values) - 4 - pad
    full_quads = limit // 4 + 1 if limit >= 0 else 0

    out = bytearray()
    for start in range(0, 4 * full_quads, 4):
        a, b, c, d = values[start:start + 4]
        out.append(((a << 2) | (b >> 4)) & 0xFF)
        out.append(((b << 4) | (c >> 2)) & 0xFF)
        out.append(((c << 6) | d) & 0xFF)

    a, b, c = (values[4 * full_quads:4 * full_quads + 3] + [0, 0, 0])[:3]
    if pad == 1:
        out.append(((a << 2) | (b >> 4)) & 0xFF)
        out.append(((b << 4) | (c >> 2)) & 0xFF)
    elif pad == 2:
        out.append(((a << 2) | (b >> 4)) & 0xFF)
    return bytes(out)