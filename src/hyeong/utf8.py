"""Single scalar value decoding from a byte stream."""

from __future__ import annotations

from typing import BinaryIO

from .errors import HyeongDecodeError

# Lead byte payload mask, indexed by continuation byte count.
_MASK = (0x7F, 0x1F, 0x0F, 0x07)


def _continuation_count(lead: int) -> int:
    if lead & 0x80 == 0:
        return 0
    if lead & 0xE0 == 0xC0:
        return 1
    if lead & 0xF0 == 0xE0:
        return 2
    if lead & 0xF8 == 0xF0:
        return 3
    raise HyeongDecodeError(f"Invalid UTF-8 lead byte 0x{lead:02x}")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) < size:
        raise HyeongDecodeError(f"Unexpected end of stream: wanted {size} bytes, got {len(data or b'')}")
    return data


def read_scalar(stream: BinaryIO) -> int:
    """Read exactly one UTF-8 encoded scalar value from ``stream``.

    Only the bit patterns are checked; overlong forms and surrogates decode to
    whatever integer the bits spell. Bytes consumed before a failure stay
    consumed.
    """
    lead = _read_exact(stream, 1)[0]
    count = _continuation_count(lead)
    if count == 0:
        return lead

    rest = _read_exact(stream, count)
    if not all(b & 0xC0 == 0x80 for b in rest):
        raise HyeongDecodeError(f"Invalid UTF-8 continuation in {bytes([lead]) + rest!r}")

    value = lead & _MASK[count]
    for b in rest:
        value = (value << 6) | (b & 0x3F)
    return value
