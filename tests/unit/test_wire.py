"""Tests for the binary codec primitives."""

from __future__ import annotations

import io

import pytest

from s3_sse_policy.utils.errors import SerializationError
from s3_sse_policy.utils.wire import (
    read_long,
    read_string,
    read_vlong,
    write_long,
    write_string,
    write_vlong,
)


def _vlong_bytes(value: int) -> bytes:
    buffer = io.BytesIO()
    write_vlong(buffer, value)
    return buffer.getvalue()


class TestVLong:
    """Test cases for variable-length integers."""

    @pytest.mark.parametrize(
        "value,encoded",
        [
            (0, b"\x00"),
            (127, b"\x7f"),
            (-112, b"\x90"),
            (128, b"\x8f\x80"),
            (300, b"\x8e\x01\x2c"),
            (2048, b"\x8e\x08\x00"),
            (-113, b"\x87\x70"),
        ],
    )
    def test_known_encodings(self, value, encoded):
        """Test encodings match the Hadoop WritableUtils layout."""
        assert _vlong_bytes(value) == encoded
        assert read_vlong(io.BytesIO(encoded)) == value

    @pytest.mark.parametrize("value", [2**31 - 1, -(2**31), 2**63 - 1, -(2**63)])
    def test_extremes(self, value):
        """Test large magnitudes survive encoding."""
        assert read_vlong(io.BytesIO(_vlong_bytes(value))) == value

    def test_truncated(self):
        """Test a truncated multi-byte integer is rejected."""
        with pytest.raises(SerializationError):
            read_vlong(io.BytesIO(b"\x8e\x01"))


class TestLong:
    """Test cases for fixed-width longs."""

    def test_big_endian(self):
        """Test longs are 8 bytes big-endian."""
        buffer = io.BytesIO()
        write_long(buffer, 1)
        assert buffer.getvalue() == b"\x00" * 7 + b"\x01"
        buffer.seek(0)
        assert read_long(buffer) == 1


class TestString:
    """Test cases for length-prefixed strings."""

    def test_empty_string(self):
        """Test the empty string is a single zero byte."""
        buffer = io.BytesIO()
        write_string(buffer, "", 10)
        assert buffer.getvalue() == b"\x00"
        buffer.seek(0)
        assert read_string(buffer, 10) == ""

    def test_bound_counts_encoded_bytes(self):
        """Test the bound applies to the UTF-8 byte length."""
        buffer = io.BytesIO()
        with pytest.raises(SerializationError, match="exceeds limit"):
            write_string(buffer, "üü", 3)
        write_string(buffer, "üü", 4)
        buffer.seek(0)
        assert read_string(buffer, 4) == "üü"

    def test_read_over_bound(self):
        """Test reading a string longer than the bound fails."""
        buffer = io.BytesIO()
        write_string(buffer, "abcdef", 10)
        buffer.seek(0)
        with pytest.raises(SerializationError, match="less or equal to 5"):
            read_string(buffer, 5)
