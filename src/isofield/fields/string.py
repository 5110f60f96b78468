"""Alphanumeric field."""

from __future__ import annotations

from typing import Any

from ..exceptions import EncodeError
from .base import LeafField, StringValue


class String(LeafField[StringValue]):
    """Text field; logical bytes are latin-1 characters."""

    value_type = StringValue

    def from_bytes(self, raw: bytes) -> StringValue:
        return StringValue(raw.decode("latin-1"))

    def to_bytes(self, value: StringValue) -> bytes:
        try:
            return value.value.encode("latin-1")
        except UnicodeEncodeError as e:
            raise EncodeError(f"{self.spec.name}: cannot encode {value.value!r}") from e

    def from_python(self, raw: Any) -> StringValue:
        if not isinstance(raw, str):
            raise EncodeError(f"{self.spec.name}: expected str, got {type(raw).__name__}")
        return StringValue(raw)
