"""Single code point UTF-8 decoding used by the query cursor."""

from __future__ import annotations

from typing import Tuple

REPLACEMENT = 0xFFFD
MAX_SEQUENCE = 4

# Index is the sequence length; index 0 describes continuation bytes.
_LEAD_VALUE = (0x80, 0x00, 0xC0, 0xE0, 0xF0)
_LEAD_MASK = (0xC0, 0x80, 0xE0, 0xF0, 0xF8)
_MIN_VALUE = (0, 0, 0x80, 0x800, 0x10000)
_MAX_VALUE = (0x10FFFF, 0x7F, 0x7FF, 0xFFFF, 0x10FFFF)

DecodeResult = Tuple[int, int]  # (code point, bytes consumed)


def is_continuation(byte: int) -> bool:
    return (byte & 0xC0) == 0x80


def _classify(byte: int) -> Tuple[int, int]:
    """Return ``(kind, payload)`` where ``kind`` is the sequence length.

    Kind 0 is a continuation byte; kind 5 is a byte that can never appear in
    UTF-8 (``0xF8`` and above).
    """

    for kind in range(MAX_SEQUENCE + 1):
        if (byte & _LEAD_MASK[kind]) == _LEAD_VALUE[kind]:
            return kind, byte & ~_LEAD_MASK[kind] & 0xFF
    return MAX_SEQUENCE + 1, 0


def decode_codepoint(data: bytes, offset: int = 0) -> DecodeResult:
    """Decode one code point of ``data`` starting at ``offset``.

    Invalid input never raises: it decodes to ``REPLACEMENT`` and consumes at
    least one byte. When a continuation byte is missing, only the bytes read
    before the interruption are consumed so the next decode resynchronises
    on the offending byte.
    """

    if offset < 0 or offset >= len(data):
        return REPLACEMENT, 1

    length, value = _classify(data[offset])
    if not 1 <= length <= MAX_SEQUENCE:
        return REPLACEMENT, 1

    consumed = 1
    while consumed < length:
        index = offset + consumed
        if index >= len(data):
            return REPLACEMENT, consumed
        kind, payload = _classify(data[index])
        if kind != 0:
            return REPLACEMENT, consumed
        value = (value << 6) | payload
        consumed += 1

    if not _MIN_VALUE[length] <= value <= _MAX_VALUE[length]:
        return REPLACEMENT, length
    if 0xD800 <= value <= 0xDFFF:
        return REPLACEMENT, length
    return value, length


def encoded_length(codepoint: int) -> int:
    for length in range(1, MAX_SEQUENCE + 1):
        if codepoint <= _MAX_VALUE[length]:
            return length
    raise ValueError(f"code point {codepoint:#x} is outside the Unicode range")


def iter_boundaries(data: bytes):
    """Yield the byte offset of every code point start in ``data``."""

    offset = 0
    while offset < len(data):
        yield offset
        _, consumed = decode_codepoint(data, offset)
        offset += consumed


__all__ = [
    "REPLACEMENT",
    "DecodeResult",
    "decode_codepoint",
    "encoded_length",
    "is_continuation",
    "iter_boundaries",
]
