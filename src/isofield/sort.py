"""Canonical tag orderings used when packing composite fields.

Strategies are named enum members rather than arbitrary callables so that a
TagSpec stays comparable and printable. Every strategy is total over tag
strings: tags that cannot be read as numbers are ordered after the numeric
ones, lexicographically.
"""

from __future__ import annotations

import enum
from typing import Any, Iterable, List, Tuple


_DIGITS = {
    10: frozenset("0123456789"),
    16: frozenset("0123456789abcdefABCDEF"),
}


def _numeric_key(tag: str, base: int) -> Tuple[Any, ...]:
    # int() would also accept signs, spaces and underscores
    if tag and all(c in _DIGITS[base] for c in tag):
        return (0, int(tag, base), tag)
    return (1, 0, tag)


class TagSort(str, enum.Enum):
    """Named sort strategy for the distinct tags of a composite field."""

    STRINGS = "strings"
    STRINGS_BY_INT = "strings_by_int"
    STRINGS_BY_HEX = "strings_by_hex"

    def key(self, tag: str) -> Tuple[Any, ...]:
        """Sort key for a single tag under this strategy."""
        if self is TagSort.STRINGS_BY_INT:
            return _numeric_key(tag, 10)
        if self is TagSort.STRINGS_BY_HEX:
            return _numeric_key(tag, 16)
        return (tag,)

    def sort(self, tags: Iterable[str]) -> List[str]:
        """Return ``tags`` in canonical order.

        Example:
            >>> TagSort.STRINGS_BY_INT.sort(["10", "9", "1a", "01"])
            ['01', '9', '10', '1a']
        """
        return sorted(tags, key=self.key)
