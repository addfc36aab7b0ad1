"""Base16384 text encoding: seven bytes become four CJK characters."""

from __future__ import annotations

_OFFSET = 0x4E00
_PAD = 0x3D00
_MASK = 0x3FFF
_SHIFTS = (42, 28, 14, 0)
_GROUP_BYTES = 7
_GROUP_CHARS = 4


def _chars_for(nbytes: int) -> int:
    """Number of 14-bit characters needed to hold ``nbytes`` bytes."""
    return -(-nbytes * 8 // 14)


def encode(data: bytes) -> str:
    """Encode bytes into a base16384 string."""
    out: list[str] = []
    for start in range(0, len(data), _GROUP_BYTES):
        chunk = bytes(data[start:start + _GROUP_BYTES])
        value = int.from_bytes(chunk.ljust(_GROUP_BYTES, b"\0"), "big")
        chars = [chr(_OFFSET + ((value >> shift) & _MASK)) for shift in _SHIFTS]
        out.extend(chars[:_chars_for(len(chunk))])
        if len(chunk) < _GROUP_BYTES:
            out.append(chr(_PAD + len(chunk)))
    return "".join(out)


def decode(text: str) -> bytes:
    """Decode a base16384 string back into bytes.

    Raises ValueError when the text is not valid base16384.
    """
    remainder = 0
    if text and _PAD + 1 <= ord(text[-1]) <= _PAD + _GROUP_BYTES - 1:
        remainder = ord(text[-1]) - _PAD
        text = text[:-1]

    values = []
    for ch in text:
        value = ord(ch) - _OFFSET
        if not 0 <= value <= _MASK:
            raise ValueError(f"invalid base16384 character {ch!r}")
        values.append(value)

    if remainder and not values:
        raise ValueError("padding marker without data")

    groups = [values[i:i + _GROUP_CHARS] for i in range(0, len(values), _GROUP_CHARS)]
    if groups:
        expected_last = _chars_for(remainder) if remainder else _GROUP_CHARS
        if len(groups[-1]) != expected_last:
            raise ValueError("truncated base16384 data")

    out = bytearray()
    for group in groups:
        value = sum(v << shift for v, shift in zip(group, _SHIFTS))
        out += value.to_bytes(_GROUP_BYTES, "big")
    if remainder:
        del out[len(out) - _GROUP_BYTES + remainder:]
    return bytes(out)