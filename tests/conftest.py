"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from isofield import Binary, Numeric, Spec, String, TagSort, TagSpec, encoding, padding, prefix


def make_tlv_spec() -> Spec:
    """Composite with a single repeatable subfield ``1a``."""
    return Spec(
        length=100,
        description="Field 104 Composite with TLV",
        pref=prefix.ASCII.LL,
        tag=TagSpec(
            length=2,
            enc=encoding.ASCII,
            pad=padding.Left("0"),
            sort=TagSort.STRINGS_BY_INT,
        ),
        subfields={
            "1a": String(
                Spec(
                    length=10,
                    description="Subfield 1a",
                    enc=encoding.ASCII,
                    pref=prefix.ASCII.LL,
                )
            ),
        },
    )


def make_additional_data_spec() -> Spec:
    """Composite mixing string, numeric and binary subfields."""
    return Spec(
        length=999,
        description="Additional data",
        pref=prefix.ASCII.LLL,
        tag=TagSpec(length=2, pad=padding.Left("0"), sort=TagSort.STRINGS_BY_INT),
        subfields={
            "1": String(
                Spec(length=20, description="Merchant name", enc=encoding.ASCII, pref=prefix.ASCII.LL)
            ),
            "2": Numeric(
                Spec(
                    length=6,
                    description="Amount",
                    enc=encoding.ASCII,
                    pref=prefix.ASCII.Fixed,
                    pad=padding.Left("0"),
                )
            ),
            "3": Binary(
                Spec(length=8, description="Token", enc=encoding.HEX, pref=prefix.ASCII.LL)
            ),
            "1a": String(
                Spec(length=10, description="Reference", enc=encoding.ASCII, pref=prefix.ASCII.LL)
            ),
        },
    )


@pytest.fixture
def tlv_spec() -> Spec:
    """Composite spec with repeatable tag 1a."""
    return make_tlv_spec()


@pytest.fixture
def additional_data_spec() -> Spec:
    """Composite spec with string, numeric and binary subfields."""
    return make_additional_data_spec()


@pytest.fixture
def repeated_1a() -> bytes:
    """Three occurrences of tag 1a."""
    return b"21" + b"1a03ABC" + b"1a03DEF" + b"1a03GHI"
