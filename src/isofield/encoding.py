"""Character encodings for prefixes, tags and field values.

Encoders convert between the logical form of a value (ASCII digits or
characters, or raw bytes) and its wire form. Lengths passed to ``decode`` are
always logical lengths: characters for ASCII/EBCDIC, digits for BCD and raw
bytes for BINARY/HEX. The second value returned by ``decode`` is the number
of wire bytes that were read.
"""

from __future__ import annotations

import binascii
from abc import ABC, abstractmethod

from .exceptions import DecodeError, EncodeError, TruncatedBufferError


class Encoder(ABC):
    """Converts logical field bytes to and from their wire representation."""

    name: str = ""

    @abstractmethod
    def encode(self, data: bytes) -> bytes:
        """Encode logical bytes into wire bytes.

        Raises:
            EncodeError: If data cannot be represented in this encoding
        """

    @abstractmethod
    def decode(self, data: bytes, length: int) -> tuple[bytes, int]:
        """Decode ``length`` logical units from the start of ``data``.

        Args:
            data: Wire bytes, possibly followed by unrelated data
            length: Logical length to decode

        Returns:
            Tuple of (logical bytes, wire bytes read)

        Raises:
            TruncatedBufferError: If data is shorter than required
            DecodeError: If the wire bytes are invalid for this encoding
        """

    def wire_length(self, length: int) -> int:
        """Number of wire bytes used by ``length`` logical units."""
        return length

    def __repr__(self) -> str:
        return f"<Encoder {self.name}>"

    def _take(self, data: bytes, count: int) -> bytes:
        if count < 0:
            raise DecodeError(f"{self.name}: negative length {count}")
        if len(data) < count:
            raise TruncatedBufferError(
                f"{self.name}: need {count} bytes, got {len(data)}"
            )
        return bytes(data[:count])


class ASCIIEncoder(Encoder):
    """7-bit ASCII, byte for byte."""

    name = "ASCII"

    def encode(self, data: bytes) -> bytes:
        if any(b > 0x7F for b in data):
            raise EncodeError(f"{self.name}: non-ASCII data {data!r}")
        return bytes(data)

    def decode(self, data: bytes, length: int) -> tuple[bytes, int]:
        raw = self._take(data, length)
        if any(b > 0x7F for b in raw):
            raise DecodeError(f"{self.name}: non-ASCII data {raw!r}")
        return raw, length


class EBCDICEncoder(Encoder):
    """EBCDIC code page 037, mapped to latin-1 logical bytes."""

    name = "EBCDIC"
    codec = "cp037"

    def encode(self, data: bytes) -> bytes:
        try:
            return data.decode("latin-1").encode(self.codec)
        except UnicodeEncodeError as e:
            raise EncodeError(f"{self.name}: cannot encode {data!r}") from e

    def decode(self, data: bytes, length: int) -> tuple[bytes, int]:
        raw = self._take(data, length)
        return raw.decode(self.codec).encode("latin-1"), length


class BCDEncoder(Encoder):
    """Packed binary coded decimal, two digits per byte.

    Odd digit counts are left padded with a zero nibble.
    """

    name = "BCD"

    def wire_length(self, length: int) -> int:
        return (length + 1) // 2

    def encode(self, data: bytes) -> bytes:
        if not data.isdigit() and data:
            raise EncodeError(f"{self.name}: non-digit data {data!r}")
        digits = data.decode("ascii")
        if len(digits) % 2:
            digits = "0" + digits
        return bytes.fromhex(digits)

    def decode(self, data: bytes, length: int) -> tuple[bytes, int]:
        read = self.wire_length(length)
        raw = self._take(data, read)
        digits = raw.hex()
        if not digits.isdigit() and digits:
            raise DecodeError(f"{self.name}: invalid nibble in {raw.hex().upper()}")
        # Drop the pad nibble of odd lengths
        digits = digits[len(digits) - length:]
        return digits.encode("ascii"), read


class BinaryEncoder(Encoder):
    """Raw bytes, no transformation."""

    name = "BINARY"

    def encode(self, data: bytes) -> bytes:
        return bytes(data)

    def decode(self, data: bytes, length: int) -> tuple[bytes, int]:
        return self._take(data, length), length


class HexEncoder(Encoder):
    """Raw bytes carried as uppercase ASCII hex, two characters per byte."""

    name = "HEX"

    def wire_length(self, length: int) -> int:
        return length * 2

    def encode(self, data: bytes) -> bytes:
        return binascii.hexlify(data).upper()

    def decode(self, data: bytes, length: int) -> tuple[bytes, int]:
        read = self.wire_length(length)
        raw = self._take(data, read)
        try:
            return binascii.unhexlify(raw), read
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"{self.name}: invalid hex data {raw!r}") from e


class HexDigitsEncoder(Encoder):
    """Hex digit text carried as raw bytes on the wire (e.g. EMV tags ``9F02``).

    The logical length counts hex digits and must be even.
    """

    name = "HEX_DIGITS"

    def wire_length(self, length: int) -> int:
        return length // 2

    def encode(self, data: bytes) -> bytes:
        try:
            return binascii.unhexlify(data)
        except (binascii.Error, ValueError) as e:
            raise EncodeError(f"{self.name}: invalid hex digits {data!r}") from e

    def decode(self, data: bytes, length: int) -> tuple[bytes, int]:
        if length % 2:
            raise DecodeError(f"{self.name}: odd number of hex digits {length}")
        read = self.wire_length(length)
        return binascii.hexlify(self._take(data, read)).upper(), read


ASCII = ASCIIEncoder()
EBCDIC = EBCDICEncoder()
BCD = BCDEncoder()
BINARY = BinaryEncoder()
HEX = HexEncoder()
HEX_DIGITS = HexDigitsEncoder()
