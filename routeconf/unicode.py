"""Conversion between UTF-8 byte sequences and UCS code points.

The encoder and decoder accept the original six-byte UTF-8 form, so code
points up to 0x7FFFFFFF can be represented.
"""

from __future__ import annotations

# Leading-byte markers for sequences of 1..6 bytes.
_PREFIXES = (0x00, 0xC0, 0xE0, 0xF0, 0xF8, 0xFC)
# Largest code point that fits in a sequence of 1..6 bytes.
_LIMITS = (0x7F, 0x7FF, 0xFFFF, 0x1FFFFF, 0x3FFFFFF, 0x7FFFFFFF)


def _sequence_length(lead: int) -> int | None:
    """Return the sequence length announced by a leading byte."""
    if lead >> 7 == 0:
        return 1
    if lead >> 5 == 0x6:
        return 2
    if lead >> 4 == 0xE:
        return 3
    if lead >> 3 == 0x1E:
        return 4
    if lead >> 2 == 0x3E:
        return 5
    if lead >> 1 == 0x7E:
        return 6
    return None


def utf8_to_ucs(data: bytes) -> tuple[int, int]:
    """Decode the first character of ``data``.

    Returns ``(code_point, bytes_consumed)``; raises ``ValueError`` when the
    bytes do not start with a complete, well-formed sequence.
    """
    if not data:
        raise ValueError("no input to decode")
    lead = data[0]
    length = _sequence_length(lead)
    if length is None:
        raise ValueError(f"invalid leading byte 0x{lead:02x}")
    if len(data) < length:
        raise ValueError("truncated UTF-8 sequence")
    if length == 1:
        return lead, 1

    value = lead & (0x7F >> length)
    for byte in data[1:length]:
        if byte >> 6 != 0x2:
            raise ValueError(f"invalid continuation byte 0x{byte:02x}")
        value = (value << 6) | (byte & 0x3F)
    return value, length


def ucs_to_utf8(code: int) -> bytes:
    """Encode a code point as UTF-8 bytes.

    Surrogates, U+FFFE, U+FFFF, negative values and values above 0x7FFFFFFF
    are rejected with ``ValueError``.
    """
    if 0xD800 <= code <= 0xDFFF:
        raise ValueError(f"surrogate code point U+{code:04X}")
    if 0xFFFE <= code <= 0xFFFF:
        raise ValueError(f"noncharacter U+{code:04X}")
    if code < 0:
        raise ValueError("negative code point")

    for length, limit in enumerate(_LIMITS, start=1):
        if code <= limit:
            break
    else:
        raise ValueError(f"code point 0x{code:X} out of range")

    if length == 1:
        return bytes((code,))
    shift = 6 * (length - 1)
    out = [_PREFIXES[length - 1] | (code >> shift)]
    out.extend(0x80 | ((code >> (6 * k)) & 0x3F) for k in range(length - 2, -1, -1))
    return bytes(out)