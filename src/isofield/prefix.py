"""Length prefixes.

A prefixer writes and reads the length that precedes a variable length value.
Decimal prefixers count the length in a fixed number of digits (``LL`` is two
digits, ``LLL`` three, ...), written in any digit encoding; binary prefixers
store the length as a big-endian unsigned integer; the fixed prefixer writes
nothing and requires the value to have exactly the field length.

Example:
    >>> from isofield import prefix
    >>> prefix.ASCII.LL.encode_length(99, 5)
    b'05'
    >>> prefix.ASCII.LL.decode_length(99, b"05HELLO")
    (5, 2)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from . import encoding
from .encoding import Encoder
from .exceptions import (
    DecodeError,
    EncodeError,
    MalformedLengthPrefixError,
    PrefixOverflowError,
    TruncatedBufferError,
    TruncatedLengthPrefixError,
)


class Prefixer(ABC):
    """Encodes and decodes the length of a value."""

    @abstractmethod
    def encode_length(self, max_len: int, data_len: int) -> bytes:
        """Encode ``data_len`` as a length prefix.

        Args:
            max_len: Maximum length allowed by the field spec
            data_len: Logical length of the value

        Returns:
            Prefix bytes

        Raises:
            EncodeError: If data_len exceeds max_len
            PrefixOverflowError: If data_len does not fit in the prefix width
        """

    @abstractmethod
    def decode_length(self, max_len: int, data: bytes) -> tuple[int, int]:
        """Decode a length prefix from the start of ``data``.

        Args:
            max_len: Maximum length allowed by the field spec
            data: Bytes starting with the prefix

        Returns:
            Tuple of (declared length, prefix bytes consumed)

        Raises:
            MalformedLengthPrefixError: If the prefix is short, not digits,
                or declares more than max_len
        """

    @abstractmethod
    def inspect(self) -> str:
        """Short human-readable name of the prefix format."""

    def __repr__(self) -> str:
        return f"<Prefixer {self.inspect()}>"


class FixedPrefixer(Prefixer):
    """No prefix bytes; the value always has exactly ``max_len`` units."""

    def encode_length(self, max_len: int, data_len: int) -> bytes:
        if data_len != max_len:
            raise EncodeError(
                f"fixed length field requires {max_len} units, got {data_len}"
            )
        return b""

    def decode_length(self, max_len: int, data: bytes) -> tuple[int, int]:
        return max_len, 0

    def inspect(self) -> str:
        return "Fixed"


class VariablePrefixer(Prefixer):
    """Length written as ``digits`` decimal digits in a digit encoding."""

    def __init__(self, digits: int, encoder: Encoder) -> None:
        if digits < 1:
            raise ValueError(f"prefix needs at least one digit, got {digits}")
        self.digits = digits
        self.encoder = encoder

    @property
    def max_length(self) -> int:
        return 10**self.digits - 1

    def encode_length(self, max_len: int, data_len: int) -> bytes:
        if data_len > max_len:
            raise EncodeError(f"field length {data_len} exceeds maximum {max_len}")
        if data_len > self.max_length:
            raise PrefixOverflowError(data_len, self.max_length)
        return self.encoder.encode(str(data_len).zfill(self.digits).encode("ascii"))

    def decode_length(self, max_len: int, data: bytes) -> tuple[int, int]:
        try:
            raw, read = self.encoder.decode(data, self.digits)
        except TruncatedBufferError as e:
            raise TruncatedLengthPrefixError(f"{self.inspect()} prefix: {e}") from e
        except DecodeError as e:
            raise MalformedLengthPrefixError(f"{self.inspect()} prefix: {e}") from e

        if len(raw) != self.digits or not raw.isdigit():
            raise MalformedLengthPrefixError(
                f"{self.inspect()} prefix: invalid length digits {raw!r}"
            )

        length = int(raw)
        if length > max_len:
            raise MalformedLengthPrefixError(
                f"{self.inspect()} prefix: declared length {length} exceeds maximum {max_len}"
            )
        return length, read

    def inspect(self) -> str:
        return f"{self.encoder.name}.{'L' * self.digits}"


class BinaryPrefixer(Prefixer):
    """Length written as a ``nbytes`` wide big-endian unsigned integer."""

    def __init__(self, nbytes: int) -> None:
        if nbytes < 1:
            raise ValueError(f"prefix needs at least one byte, got {nbytes}")
        self.nbytes = nbytes

    @property
    def max_length(self) -> int:
        return (1 << (8 * self.nbytes)) - 1

    def encode_length(self, max_len: int, data_len: int) -> bytes:
        if data_len > max_len:
            raise EncodeError(f"field length {data_len} exceeds maximum {max_len}")
        if data_len > self.max_length:
            raise PrefixOverflowError(data_len, self.max_length)
        return data_len.to_bytes(self.nbytes, "big")

    def decode_length(self, max_len: int, data: bytes) -> tuple[int, int]:
        if len(data) < self.nbytes:
            raise TruncatedLengthPrefixError(
                f"{self.inspect()} prefix: need {self.nbytes} bytes, got {len(data)}"
            )
        length = int.from_bytes(data[: self.nbytes], "big")
        if length > max_len:
            raise MalformedLengthPrefixError(
                f"{self.inspect()} prefix: declared length {length} exceeds maximum {max_len}"
            )
        return length, self.nbytes

    def inspect(self) -> str:
        return f"BINARY.{'L' * self.nbytes}"


class DecimalPrefixers:
    """Namespace of prefixers sharing one digit encoding (``ASCII.LL`` ...)."""

    def __init__(self, encoder: Encoder) -> None:
        self.Fixed = FixedPrefixer()
        self.L = VariablePrefixer(1, encoder)
        self.LL = VariablePrefixer(2, encoder)
        self.LLL = VariablePrefixer(3, encoder)
        self.LLLL = VariablePrefixer(4, encoder)
        self.LLLLL = VariablePrefixer(5, encoder)
        self.LLLLLL = VariablePrefixer(6, encoder)


class BinaryPrefixers:
    """Namespace of binary length prefixers (``BINARY.L`` is one byte)."""

    def __init__(self) -> None:
        self.Fixed = FixedPrefixer()
        self.L = BinaryPrefixer(1)
        self.LL = BinaryPrefixer(2)
        self.LLL = BinaryPrefixer(3)
        self.LLLL = BinaryPrefixer(4)


ASCII = DecimalPrefixers(encoding.ASCII)
EBCDIC = DecimalPrefixers(encoding.EBCDIC)
BCD = DecimalPrefixers(encoding.BCD)
BINARY = BinaryPrefixers()
