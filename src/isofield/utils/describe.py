"""Inspection helpers for decoded composite fields.

These functions report on a composite without changing it: a readable dump of
its occurrences and the encoded size of each entry.
"""

from __future__ import annotations

from typing import Any, List

from ..fields.base import RawValue
from ..fields.composite import CompositeField
from ..keys import split_occurrence_key


def packed_lengths(composite: CompositeField) -> dict[str, int]:
    """Encoded length in bytes of each entry (tag + prefix + value).

    Args:
        composite: Composite field to analyze

    Returns:
        Dictionary mapping occurrence keys to entry lengths, in insertion order

    Raises:
        EncodeError: If a value cannot be encoded

    Example:
        >>> field.unpack(b"21" b"1a03ABC" b"1a03DEF" b"1a03GHI")
        23
        >>> packed_lengths(field)
        {'1a': 7, '1a_1': 7, '1a_2': 7}
    """
    return {
        key: len(composite.packed_entry(key)) for key in composite.get_subfields()
    }


def packed_size(composite: CompositeField) -> int:
    """Total encoded size in bytes, including the composite's own prefix.

    Raises:
        EncodeError: If a value cannot be encoded
    """
    return len(composite.pack())


def describe(composite: CompositeField, indent: int = 0) -> str:
    """Human-readable dump, one line per occurrence key.

    Nested composites are listed below their key, indented.

    Example:
        >>> print(describe(field))
        1a     Subfield 1a: ABC
        1a_1   Subfield 1a: DEF
        1a_2   Subfield 1a: GHI
    """
    lines: List[str] = []
    pad = "  " * indent
    for key, value in composite.get_subfields().items():
        label = f"{pad}{key:<6} {_description(composite, key, value)}"
        if isinstance(value, CompositeField):
            lines.append(f"{label}:")
            nested = describe(value, indent + 1)
            if nested:
                lines.append(nested)
        else:
            lines.append(f"{label}: {value}")
    return "\n".join(lines)


def _description(composite: CompositeField, key: str, value: Any) -> str:
    if isinstance(value, RawValue):
        return f"Unknown tag {value.tag}"
    tag = split_occurrence_key(key)[0]
    codec = composite.spec.subfields.get(tag)
    if codec is None or not codec.spec.description:
        return f"Tag {tag}"
    return codec.spec.description

