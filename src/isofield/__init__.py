"""isofield: Composite Field Codec for Financial Messages

A Python library for the length-delimited, tag-length-value composite fields
found in ISO 8583 style transaction messages (private use and additional data
fields, EMV data, ...).

Key Features:
- Fixed, decimal (ASCII/EBCDIC/BCD) and binary length prefixes
- Composite fields nested to any depth
- Repeated tags are kept as ``1a``, ``1a_1``, ``1a_2``... and packed back in order
- Deterministic packing order via named tag sort strategies
- Pydantic-based record binding

Quick Start:
    >>> from typing import Optional
    >>> from isofield import (
    ...     BaseRecord, CompositeField, Index, Spec, String, TagSort, TagSpec,
    ...     encoding, padding, prefix,
    ... )
    >>>
    >>> spec = Spec(
    ...     length=100,
    ...     description="Field 104 Composite with TLV",
    ...     pref=prefix.ASCII.LL,
    ...     tag=TagSpec(length=2, enc=encoding.ASCII, pad=padding.Left("0"),
    ...                 sort=TagSort.STRINGS_BY_INT),
    ...     subfields={
    ...         "1a": String(Spec(length=10, description="Subfield 1a",
    ...                           enc=encoding.ASCII, pref=prefix.ASCII.LL)),
    ...     },
    ... )
    >>>
    >>> field = CompositeField(spec)
    >>> field.unpack(b"211a03ABC1a03DEF1a03GHI")
    23
    >>> sorted(field.get_subfields())
    ['1a', '1a_1', '1a_2']
"""

from __future__ import annotations

import logging

from . import encoding, padding, prefix
from .binding import BaseRecord, BindingTable, FieldBinding, Index
from .exceptions import (
    BindingError,
    DecodeError,
    EncodeError,
    IsofieldError,
    LeafDecodeError,
    LeafEncodeError,
    LengthMismatchError,
    MalformedLengthPrefixError,
    PrefixOverflowError,
    SchemaError,
    TruncatedBufferError,
    TruncatedLengthPrefixError,
    UnknownSubfieldTagError,
)
from .fields import (
    Binary,
    BinaryValue,
    Composite,
    CompositeField,
    Field,
    Numeric,
    NumericValue,
    RawValue,
    String,
    StringValue,
)
from .keys import occurrence_key, split_occurrence_key
from .sort import TagSort
from .spec import Spec, TagSpec, UnknownTagPolicy
from .utils import describe, packed_lengths, packed_size

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Spec",
    "TagSpec",
    "TagSort",
    "UnknownTagPolicy",
    "CompositeField",
    # Field codecs
    "Field",
    "String",
    "Numeric",
    "Binary",
    "Composite",
    # Values
    "StringValue",
    "NumericValue",
    "BinaryValue",
    "RawValue",
    # Occurrence keys
    "occurrence_key",
    "split_occurrence_key",
    # Records
    "BaseRecord",
    "Index",
    "FieldBinding",
    "BindingTable",
    # Wire building blocks
    "encoding",
    "padding",
    "prefix",
    # Exceptions
    "IsofieldError",
    "SchemaError",
    "BindingError",
    "EncodeError",
    "PrefixOverflowError",
    "LeafEncodeError",
    "DecodeError",
    "MalformedLengthPrefixError",
    "TruncatedBufferError",
    "TruncatedLengthPrefixError",
    "UnknownSubfieldTagError",
    "LengthMismatchError",
    "LeafDecodeError",
    # Inspection
    "describe",
    "packed_lengths",
    "packed_size",
    # Version
    "__version__",
]
