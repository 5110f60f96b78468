"""Property-based tests using hypothesis."""

from __future__ import annotations

import string
from typing import Dict, List, Tuple

from hypothesis import given
from hypothesis import strategies as st

from isofield import CompositeField, Spec, String, TagSort, TagSpec, encoding, padding, prefix

TAGS = ("1", "2", "1a")

SPEC = Spec(
    length=100,
    description="Property test composite",
    pref=prefix.ASCII.LL,
    tag=TagSpec(length=2, pad=padding.Left("0"), sort=TagSort.STRINGS_BY_INT),
    subfields={
        tag: String(Spec(length=10, description=f"Subfield {tag}", enc=encoding.ASCII, pref=prefix.ASCII.LL))
        for tag in TAGS
    },
)

values = st.text(alphabet=string.ascii_uppercase + string.digits, max_size=10)
entries = st.lists(st.tuples(st.sampled_from(TAGS), values), max_size=5)


def canonical_buffer(items: List[Tuple[str, str]]) -> bytes:
    """Entries grouped by tag in canonical tag order, repeats in given order."""
    groups: Dict[str, List[str]] = {}
    for tag, value in items:
        groups.setdefault(tag, []).append(value)

    body = b"".join(
        tag.zfill(2).encode() + f"{len(value):02d}".encode() + value.encode()
        for tag in TagSort.STRINGS_BY_INT.sort(groups)
        for value in groups[tag]
    )
    return f"{len(body):02d}".encode() + body


class TestCompositeProperties:
    """Property-based tests for composite decode/encode."""

    @given(items=entries)
    def test_canonical_roundtrip(self, items: List[Tuple[str, str]]) -> None:
        """Packing a decoded canonical buffer restores it exactly."""
        data = canonical_buffer(items)
        field = CompositeField(SPEC)

        assert field.unpack(data) == len(data)
        assert field.pack() == data

    @given(items=entries)
    def test_no_occurrence_lost(self, items: List[Tuple[str, str]]) -> None:
        """Every entry on the wire is kept under its own key."""
        field = CompositeField(SPEC)
        field.unpack(canonical_buffer(items))

        assert len(field) == len(items)
        for tag in TAGS:
            expected = [value for t, value in items if t == tag]
            assert [v.value for v in field.occurrences(tag)] == expected

    @given(tag=st.sampled_from(TAGS), repeats=st.lists(values, min_size=1, max_size=6))
    def test_occurrence_keys_are_dense(self, tag: str, repeats: List[str]) -> None:
        """N occurrences of a tag use the keys tag, tag_1 ... tag_(N-1)."""
        field = CompositeField(SPEC)
        field.unpack(canonical_buffer([(tag, value) for value in repeats]))

        expected = [tag] + [f"{tag}_{n}" for n in range(1, len(repeats))]
        assert list(field.get_subfields()) == expected

    @given(first=entries, second=entries)
    def test_unpack_is_independent_of_prior_state(
        self, first: List[Tuple[str, str]], second: List[Tuple[str, str]]
    ) -> None:
        """Reusing a field gives the same result as a fresh one."""
        reused = CompositeField(SPEC)
        reused.unpack(canonical_buffer(first))
        reused.unpack(canonical_buffer(second))

        fresh = CompositeField(SPEC)
        fresh.unpack(canonical_buffer(second))

        assert reused == fresh

    @given(items=entries, trailer=st.binary(max_size=20))
    def test_consumed_length_ignores_trailer(
        self, items: List[Tuple[str, str]], trailer: bytes
    ) -> None:
        """unpack consumes exactly the prefix plus the declared length."""
        data = canonical_buffer(items)
        field = CompositeField(SPEC)

        assert field.unpack(data + trailer) == len(data)

    @given(items=entries)
    def test_pack_is_deterministic(self, items: List[Tuple[str, str]]) -> None:
        """Assignment order across tags does not change the encoding."""
        forward = CompositeField(SPEC)
        backward = CompositeField(SPEC)
        counts: Dict[str, int] = {}
        keyed = []
        for tag, value in items:
            n = counts.get(tag, 0)
            counts[tag] = n + 1
            keyed.append((f"{tag}_{n}" if n else tag, value))

        for key, value in keyed:
            forward.set_subfield(key, value)
        # Reverse tag order but keep each tag's occurrences in order
        for tag in reversed(TAGS):
            for key, value in keyed:
                if key.split("_")[0] == tag:
                    backward.set_subfield(key, value)

        assert forward.pack() == backward.pack() == canonical_buffer(items)
