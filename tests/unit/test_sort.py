"""Unit tests for tag sort strategies."""

from __future__ import annotations

from isofield import TagSort


class TestTagSort:
    """Test canonical tag orderings."""

    def test_strings(self) -> None:
        assert TagSort.STRINGS.sort(["b", "10", "9", "a"]) == ["10", "9", "a", "b"]

    def test_strings_by_int(self) -> None:
        """Numeric tags compare as integers; others follow lexicographically."""
        assert TagSort.STRINGS_BY_INT.sort(["10", "9", "1a", "01"]) == ["01", "9", "10", "1a"]

    def test_strings_by_int_equal_values(self) -> None:
        """Tags with the same numeric value are ordered by their text."""
        assert TagSort.STRINGS_BY_INT.sort(["1", "01"]) == ["01", "1"]

    def test_strings_by_hex(self) -> None:
        assert TagSort.STRINGS_BY_HEX.sort(["9F1A", "5F2A", "zz", "9F02"]) == [
            "5F2A",
            "9F02",
            "9F1A",
            "zz",
        ]

    def test_signs_are_not_numeric(self) -> None:
        assert TagSort.STRINGS_BY_INT.sort(["+1", "2"]) == ["2", "+1"]

    def test_lookup_by_value(self) -> None:
        assert TagSort("strings_by_hex") is TagSort.STRINGS_BY_HEX
