"""Binary codec primitives compatible with Hadoop Writable encodings.

Longs are 8-byte big-endian signed integers. Strings are written as a
variable-length integer byte count (the ``WritableUtils`` vint scheme)
followed by the UTF-8 bytes, which is how ``Text.writeString`` lays them out.
"""

from __future__ import annotations

import struct
from typing import BinaryIO

from .errors import SerializationError

_LONG = struct.Struct(">q")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise SerializationError(f"Unexpected end of stream: wanted {size} bytes")
    return data


def write_long(stream: BinaryIO, value: int) -> None:
    stream.write(_LONG.pack(value))


def read_long(stream: BinaryIO) -> int:
    return _LONG.unpack(_read_exact(stream, _LONG.size))[0]


def write_vlong(stream: BinaryIO, value: int) -> None:
    """Write a zero-compressed variable-length integer."""
    if -112 <= value <= 127:
        stream.write(struct.pack(">b", value))
        return

    length = -112
    if value < 0:
        value ^= -1
        length = -120

    tmp = value
    while tmp != 0:
        tmp >>= 8
        length -= 1

    stream.write(struct.pack(">b", length))
    length = -(length + 120) if length < -120 else -(length + 112)
    for idx in range(length, 0, -1):
        shift = (idx - 1) * 8
        stream.write(bytes([(value >> shift) & 0xFF]))


def read_vlong(stream: BinaryIO) -> int:
    """Read a zero-compressed variable-length integer."""
    first = struct.unpack(">b", _read_exact(stream, 1))[0]
    if first >= -112:
        return first

    size = -119 - first if first < -120 else -111 - first
    value = 0
    for byte in _read_exact(stream, size - 1):
        value = (value << 8) | byte
    negative = first < -120
    return value ^ -1 if negative else value


def write_string(stream: BinaryIO, value: str, max_length: int) -> None:
    """Write a length-prefixed UTF-8 string.

    ``max_length`` bounds the encoded byte count, the same unit the length
    prefix and readers use, so a string of ``max_length`` non-ASCII
    characters may not fit.

    Raises:
        SerializationError: If the encoded string is longer than ``max_length``
    """
    encoded = value.encode("utf-8")
    if len(encoded) > max_length:
        raise SerializationError(
            f"Encoded string of length {len(encoded)} exceeds limit of {max_length}"
        )
    write_vlong(stream, len(encoded))
    stream.write(encoded)


def read_string(stream: BinaryIO, max_length: int) -> str:
    """Read a length-prefixed UTF-8 string.

    Raises:
        SerializationError: If the length is out of range, the stream is
            truncated or the bytes are not valid UTF-8
    """
    length = read_vlong(stream)
    if length < 0:
        raise SerializationError(f"expected non-negative integer, got {length}")
    if length > max_length:
        raise SerializationError(
            f"expected integer less or equal to {max_length}, got {length}"
        )
    data = _read_exact(stream, length)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SerializationError(f"Invalid UTF-8 string: {e}") from e
