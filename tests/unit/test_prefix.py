"""Unit tests for length prefixes."""

from __future__ import annotations

import pytest

from isofield import (
    EncodeError,
    MalformedLengthPrefixError,
    PrefixOverflowError,
    TruncatedBufferError,
    TruncatedLengthPrefixError,
    prefix,
)


class TestDecimalPrefixers:
    """Test ASCII, EBCDIC and BCD length prefixes."""

    def test_ascii(self) -> None:
        assert prefix.ASCII.LL.encode_length(20, 5) == b"05"
        assert prefix.ASCII.LLL.encode_length(999, 5) == b"005"
        assert prefix.ASCII.LL.decode_length(20, b"05HELLO") == (5, 2)

    def test_ebcdic(self) -> None:
        assert prefix.EBCDIC.LL.encode_length(99, 5) == b"\xf0\xf5"
        assert prefix.EBCDIC.LL.decode_length(99, b"\xf0\xf5") == (5, 2)

    def test_bcd(self) -> None:
        """BCD prefixes pack two digits per byte."""
        assert prefix.BCD.LL.encode_length(99, 12) == b"\x12"
        assert prefix.BCD.LLL.encode_length(999, 123) == b"\x01\x23"
        assert prefix.BCD.LLL.decode_length(999, b"\x01\x23") == (123, 2)

    def test_exceeds_field_maximum(self) -> None:
        """A length above the field maximum is an encode error, not an overflow."""
        with pytest.raises(EncodeError) as exc_info:
            prefix.ASCII.LL.encode_length(20, 30)

        assert not isinstance(exc_info.value, PrefixOverflowError)

    def test_overflow(self) -> None:
        with pytest.raises(PrefixOverflowError) as exc_info:
            prefix.ASCII.LL.encode_length(999, 100)

        assert exc_info.value.max_length == 99

    def test_non_digit(self) -> None:
        with pytest.raises(MalformedLengthPrefixError):
            prefix.ASCII.LL.decode_length(99, b"0X")

    def test_invalid_bcd_nibble(self) -> None:
        with pytest.raises(MalformedLengthPrefixError):
            prefix.BCD.LL.decode_length(99, b"\x1f")

    def test_declared_above_maximum(self) -> None:
        with pytest.raises(MalformedLengthPrefixError):
            prefix.ASCII.LL.decode_length(10, b"20")

    def test_truncated(self) -> None:
        """A short prefix is both malformed and truncated."""
        with pytest.raises(TruncatedLengthPrefixError) as exc_info:
            prefix.ASCII.LLL.decode_length(999, b"05")

        assert isinstance(exc_info.value, MalformedLengthPrefixError)
        assert isinstance(exc_info.value, TruncatedBufferError)

    def test_inspect(self) -> None:
        assert prefix.ASCII.LL.inspect() == "ASCII.LL"
        assert prefix.BCD.LLL.inspect() == "BCD.LLL"


class TestBinaryPrefixers:
    """Test big-endian binary prefixes."""

    def test_one_byte(self) -> None:
        assert prefix.BINARY.L.encode_length(255, 255) == b"\xff"
        assert prefix.BINARY.L.decode_length(255, b"\x06rest") == (6, 1)

    def test_two_bytes(self) -> None:
        assert prefix.BINARY.LL.encode_length(1000, 256) == b"\x01\x00"
        assert prefix.BINARY.LL.decode_length(1000, b"\x01\x00") == (256, 2)

    def test_overflow(self) -> None:
        with pytest.raises(PrefixOverflowError):
            prefix.BINARY.L.encode_length(1000, 256)

    def test_truncated(self) -> None:
        with pytest.raises(TruncatedLengthPrefixError):
            prefix.BINARY.LL.decode_length(1000, b"\x01")

    def test_inspect(self) -> None:
        assert prefix.BINARY.L.inspect() == "BINARY.L"


class TestFixedPrefixer:
    """Test fixed length fields."""

    def test_writes_nothing(self) -> None:
        assert prefix.ASCII.Fixed.encode_length(10, 10) == b""
        assert prefix.ASCII.Fixed.decode_length(10, b"anything") == (10, 0)

    def test_length_must_match(self) -> None:
        with pytest.raises(EncodeError):
            prefix.ASCII.Fixed.encode_length(10, 9)
