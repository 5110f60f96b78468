#!/usr/bin/env python3
"""Basic usage example for isofield.

This example demonstrates:
1. Describing a TLV composite field with a Spec
2. Decoding a buffer with a repeated tag
3. Packing it back byte for byte
4. Binding the composite to a Pydantic record
"""

from __future__ import annotations

from typing import Optional

from isofield import (
    BaseRecord,
    CompositeField,
    Index,
    Spec,
    String,
    TagSort,
    TagSpec,
    describe,
    encoding,
    packed_lengths,
    padding,
    prefix,
)

FIELD_104 = Spec(
    length=100,
    description="Field 104 Composite with TLV",
    pref=prefix.ASCII.LL,
    tag=TagSpec(length=2, enc=encoding.ASCII, pad=padding.Left("0"), sort=TagSort.STRINGS_BY_INT),
    subfields={
        "1a": String(
            Spec(length=10, description="Terminal ID", enc=encoding.ASCII, pref=prefix.ASCII.LL)
        ),
    },
)


class TerminalList(BaseRecord):
    """Up to three terminal IDs carried as repeats of tag 1a."""

    primary: Optional[str] = Index("1a", required=True)
    secondary: Optional[str] = Index("1a_1")
    tertiary: Optional[str] = Index("1a_2")


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("isofield Basic Usage Example")
    print("=" * 60)
    print()

    data = b"21" + b"1a03ABC" + b"1a03DEF" + b"1a03GHI"

    print("1. Decoding a composite with a repeated tag...")
    field = CompositeField(FIELD_104)
    read = field.unpack(data)
    print(f"   Input: {data!r}")
    print(f"   Consumed: {read} bytes")
    print(describe(field))
    print()

    print("2. Entry sizes...")
    for key, size in packed_lengths(field).items():
        print(f"   {key}: {size} bytes")
    print()

    print("3. Packing back...")
    packed = field.pack()
    print(f"   Output: {packed!r}")
    print(f"   Identical: {packed == data}")
    print()

    print("4. Unmarshalling into a record...")
    record = TerminalList.model_construct()
    field.unmarshal(record)
    print(f"   {record!r}")
    print()

    print("5. Marshalling a new record...")
    out = CompositeField(FIELD_104)
    out.marshal(TerminalList(primary="HELLO"))
    print(f"   Packed: {out.pack()!r}")
    print()

    print("=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
