"""Field codecs for isofield.

Leaf codecs (String, Numeric, Binary) and the composite codec share the
``Field`` capability interface, so composites can nest arbitrarily.
"""

from __future__ import annotations

from .base import BinaryValue, Field, LeafField, NumericValue, RawValue, StringValue
from .binary import Binary
from .composite import Composite, CompositeField
from .numeric import Numeric
from .string import String

__all__ = [
    "Field",
    "LeafField",
    "String",
    "Numeric",
    "Binary",
    "Composite",
    "CompositeField",
    "StringValue",
    "NumericValue",
    "BinaryValue",
    "RawValue",
]
