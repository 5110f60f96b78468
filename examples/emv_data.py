#!/usr/bin/env python3
"""Nested composite example: EMV data inside a private use field.

The inner composite uses two byte binary tags (read as hex digits), one byte
binary lengths and hex ordering of tags; the outer one uses two digit ASCII
tags. Unknown EMV tags are passed through unchanged.
"""

from __future__ import annotations

import logging
from typing import Optional

from isofield import (
    BaseRecord,
    Binary,
    Composite,
    CompositeField,
    Index,
    Spec,
    String,
    TagSort,
    TagSpec,
    UnknownTagPolicy,
    describe,
    encoding,
    padding,
    prefix,
)

ICC_SPEC = Spec(
    length=255,
    description="ICC system related data",
    pref=prefix.ASCII.LLL,
    tag=TagSpec(
        length=4,
        enc=encoding.HEX_DIGITS,
        sort=TagSort.STRINGS_BY_HEX,
        unknown=UnknownTagPolicy.PASSTHROUGH,
        skip_prefix=prefix.BINARY.L,
    ),
    subfields={
        "9F02": Binary(
            Spec(length=6, description="Amount, authorised", enc=encoding.BINARY, pref=prefix.BINARY.L)
        ),
        "9F1A": Binary(
            Spec(length=2, description="Terminal country code", enc=encoding.BINARY, pref=prefix.BINARY.L)
        ),
    },
)

PRIVATE_SPEC = Spec(
    length=999,
    description="Private use data",
    pref=prefix.ASCII.LLL,
    tag=TagSpec(length=2, pad=padding.Left("0"), sort=TagSort.STRINGS_BY_INT),
    subfields={
        "1": String(
            Spec(length=20, description="Merchant name", enc=encoding.ASCII, pref=prefix.ASCII.LL)
        ),
        "55": Composite(ICC_SPEC),
    },
)


class IccData(BaseRecord):
    amount: Optional[bytes] = Index("9F02")
    country: Optional[bytes] = Index("9F1A")


class PrivateData(BaseRecord):
    merchant: Optional[str] = Index("1")
    icc: Optional[IccData] = Index("55")


def main() -> None:
    """Run the nested composite example."""
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    record = PrivateData(
        merchant="ACME",
        icc=IccData(amount=b"\x00\x00\x00\x01\x00\x00", country=b"\x08\x40"),
    )

    field = CompositeField(PRIVATE_SPEC)
    field.marshal(record)
    data = field.pack()
    print(f"Packed: {data!r}")

    # Add an entry for a tag the ICC spec does not know (9F36, ATC)
    icc_body = field.get_subfield("55").pack()[3:] + b"\x9f\x36\x02\x00\x01"
    patched_icc = f"{len(icc_body):03d}".encode() + icc_body
    outer_body = b"0104ACME" + b"55" + patched_icc
    patched = f"{len(outer_body):03d}".encode() + outer_body

    decoded = CompositeField(PRIVATE_SPEC)
    decoded.unpack(patched)
    print(describe(decoded))
    print(f"Repacked unchanged: {decoded.pack() == patched}")

    restored = PrivateData()
    decoded.unmarshal(restored)
    print(restored)


if __name__ == "__main__":
    main()
