"""Numeric field."""

from __future__ import annotations

from typing import Any

from ..exceptions import DecodeError, EncodeError
from .base import LeafField, NumericValue


class Numeric(LeafField[NumericValue]):
    """Non-negative integer written as decimal digits.

    With a left zero padder an all-zero value unpads to no digits at all,
    which decodes as 0.
    """

    value_type = NumericValue

    def from_bytes(self, raw: bytes) -> NumericValue:
        if not raw:
            return NumericValue(0)
        if not raw.isdigit():
            raise DecodeError(f"{self.spec.name}: invalid digits {raw!r}")
        return NumericValue(int(raw))

    def to_bytes(self, value: NumericValue) -> bytes:
        if value.value < 0:
            raise EncodeError(f"{self.spec.name}: negative value {value.value}")
        return str(value.value).encode("ascii")

    def from_python(self, raw: Any) -> NumericValue:
        # bool is an int subclass but never a valid amount or code
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise EncodeError(f"{self.spec.name}: expected int, got {type(raw).__name__}")
        return NumericValue(raw)
