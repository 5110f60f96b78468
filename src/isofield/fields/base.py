"""Leaf field codecs and the value objects they produce.

A field codec is stateless: it wraps a ``Spec`` and converts between wire
bytes (length prefix + encoded value) and an immutable value object. The same
codec instance can therefore be shared by every composite that uses its spec.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..exceptions import EncodeError, SchemaError
from ..spec import Spec

V = TypeVar("V")


@dataclass(frozen=True)
class StringValue:
    """Alphanumeric value."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumericValue:
    """Non-negative integer value."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BinaryValue:
    """Raw bytes value."""

    value: bytes

    def __str__(self) -> str:
        return self.value.hex().upper()


@dataclass(frozen=True)
class RawValue:
    """Undecoded value of an unknown tag kept by the PASSTHROUGH policy."""

    tag: str
    value: bytes

    def __str__(self) -> str:
        return self.value.hex().upper()


class Field(ABC, Generic[V]):
    """Codec for one field described by a ``Spec``.

    The capability every subfield of a composite provides: decode wire bytes
    into a value object, encode a value object back, and coerce plain Python
    values coming from application records.
    """

    value_type: type

    def __init__(self, spec: Spec) -> None:
        self.spec = spec
        self._check_spec()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.spec.name!r})"

    @abstractmethod
    def _check_spec(self) -> None:
        """Raise SchemaError if the field spec does not suit this codec."""

    @abstractmethod
    def decode(self, data: bytes, offset: int = 0) -> tuple[V, int]:
        """Decode one value starting at ``offset``.

        Returns:
            Tuple of (value object, bytes consumed)

        Raises:
            DecodeError: If the data is invalid or truncated
        """

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Encode a value object, including its length prefix.

        Raises:
            EncodeError: If the value has the wrong type or does not fit
        """

    def coerce(self, raw: Any) -> V:
        """Convert a record value (or value object) into this field's value object.

        Raises:
            EncodeError: If ``raw`` cannot represent a value of this field
        """
        if isinstance(raw, self.value_type):
            return raw
        return self.from_python(raw)

    @abstractmethod
    def from_python(self, raw: Any) -> V:
        """Build the value object from a plain Python value."""


class LeafField(Field[V]):
    """Scalar field: length prefix, encoded value and optional padding.

    Subclasses only convert between unpadded logical bytes and their value
    object.
    """

    def _check_spec(self) -> None:
        if self.spec.enc is None or self.spec.pref is None:
            raise SchemaError(
                f"{self.spec.name}: {type(self).__name__} requires an encoding and a length prefix"
            )

    def decode(self, data: bytes, offset: int = 0) -> tuple[V, int]:
        """Decode prefix and value starting at ``offset``.

        Returns:
            Tuple of (value object, bytes consumed)

        Raises:
            DecodeError: If the prefix or value is invalid or truncated
        """
        spec = self.spec
        assert spec.enc is not None and spec.pref is not None

        length, prefix_len = spec.pref.decode_length(spec.length, data[offset:])
        raw, read = spec.enc.decode(data[offset + prefix_len:], length)
        if spec.pad is not None:
            raw = spec.pad.unpad(raw)

        return self.from_bytes(raw), prefix_len + read

    def encode(self, value: Any) -> bytes:
        """Encode a value object as prefix + value.

        Raises:
            EncodeError: If the value has the wrong type or does not fit
        """
        spec = self.spec
        assert spec.enc is not None and spec.pref is not None

        if not isinstance(value, self.value_type):
            raise EncodeError(
                f"{spec.name}: expected {self.value_type.__name__}, got {type(value).__name__}"
            )

        raw = self.to_bytes(value)
        if spec.pad is not None:
            raw = spec.pad.pad(raw, spec.length)

        packed = spec.enc.encode(raw)
        return spec.pref.encode_length(spec.length, len(raw)) + packed

    @abstractmethod
    def from_bytes(self, raw: bytes) -> V:
        """Build the value object from unpadded logical bytes."""

    @abstractmethod
    def to_bytes(self, value: V) -> bytes:
        """Logical bytes of a value object (before padding and encoding)."""
