"""Binary field."""

from __future__ import annotations

from typing import Any

from ..exceptions import EncodeError
from .base import BinaryValue, LeafField


class Binary(LeafField[BinaryValue]):
    """Raw bytes; use ``encoding.BINARY`` or ``encoding.HEX`` on the wire."""

    value_type = BinaryValue

    def from_bytes(self, raw: bytes) -> BinaryValue:
        return BinaryValue(bytes(raw))

    def to_bytes(self, value: BinaryValue) -> bytes:
        return bytes(value.value)

    def from_python(self, raw: Any) -> BinaryValue:
        if not isinstance(raw, (bytes, bytearray)):
            raise EncodeError(f"{self.spec.name}: expected bytes, got {type(raw).__name__}")
        return BinaryValue(bytes(raw))
