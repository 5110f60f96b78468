"""Unit tests for wire encodings."""

from __future__ import annotations

import pytest

from isofield import DecodeError, EncodeError, TruncatedBufferError, encoding


class TestASCII:
    """Test the ASCII encoder."""

    def test_encode(self) -> None:
        assert encoding.ASCII.encode(b"HELLO") == b"HELLO"

    def test_decode_reads_requested_length(self) -> None:
        assert encoding.ASCII.decode(b"HELLO!", 5) == (b"HELLO", 5)

    def test_rejects_non_ascii(self) -> None:
        """Bytes above 0x7F are not ASCII."""
        with pytest.raises(EncodeError):
            encoding.ASCII.encode(b"\x80")
        with pytest.raises(DecodeError):
            encoding.ASCII.decode(b"\xff", 1)

    def test_truncated(self) -> None:
        with pytest.raises(TruncatedBufferError):
            encoding.ASCII.decode(b"AB", 3)


class TestEBCDIC:
    """Test the EBCDIC (cp037) encoder."""

    def test_encode(self) -> None:
        """Letters and digits map to their EBCDIC code points."""
        assert encoding.EBCDIC.encode(b"AB12") == b"\xc1\xc2\xf1\xf2"

    def test_decode(self) -> None:
        assert encoding.EBCDIC.decode(b"\xc1\xc2\xf1\xf2", 4) == (b"AB12", 4)


class TestBCD:
    """Test packed BCD."""

    def test_even_digits(self) -> None:
        assert encoding.BCD.encode(b"1234") == b"\x12\x34"
        assert encoding.BCD.decode(b"\x12\x34", 4) == (b"1234", 2)

    def test_odd_digits_left_padded(self) -> None:
        """Odd digit counts carry a leading zero nibble that decode drops."""
        assert encoding.BCD.encode(b"123") == b"\x01\x23"
        assert encoding.BCD.decode(b"\x01\x23", 3) == (b"123", 2)

    def test_wire_length(self) -> None:
        assert encoding.BCD.wire_length(3) == 2
        assert encoding.BCD.wire_length(4) == 2

    def test_rejects_non_digits(self) -> None:
        with pytest.raises(EncodeError):
            encoding.BCD.encode(b"12a")

    def test_rejects_invalid_nibble(self) -> None:
        with pytest.raises(DecodeError):
            encoding.BCD.decode(b"\xab", 2)


class TestBinaryAndHex:
    """Test raw and hex carried binary data."""

    def test_binary_passthrough(self) -> None:
        assert encoding.BINARY.encode(b"\x00\xff") == b"\x00\xff"
        assert encoding.BINARY.decode(b"\x00\xff\x01", 2) == (b"\x00\xff", 2)

    def test_hex(self) -> None:
        """HEX doubles the wire length."""
        assert encoding.HEX.encode(b"\xde\xad") == b"DEAD"
        assert encoding.HEX.decode(b"DEADBEEF", 2) == (b"\xde\xad", 4)

    def test_hex_rejects_invalid(self) -> None:
        with pytest.raises(DecodeError):
            encoding.HEX.decode(b"ZZ", 1)

    def test_hex_digits(self) -> None:
        """HEX_DIGITS carries hex text as raw bytes, e.g. EMV tags."""
        assert encoding.HEX_DIGITS.encode(b"9F02") == b"\x9f\x02"
        assert encoding.HEX_DIGITS.decode(b"\x9f\x02\x06", 4) == (b"9F02", 2)

    def test_hex_digits_odd_length(self) -> None:
        with pytest.raises(DecodeError):
            encoding.HEX_DIGITS.decode(b"\x9f\x02", 3)
        with pytest.raises(EncodeError):
            encoding.HEX_DIGITS.encode(b"9F0")
