"""Occurrence keys for repeated composite subfields.

The first occurrence of a tag is stored under the bare tag, later ones under
``<tag>_<n>`` with n counting repeats from 1::

    1a, 1a_1, 1a_2, ...
"""

from __future__ import annotations

import re

OCCURRENCE_SEPARATOR = "_"

_SUFFIX = re.compile(r"^(?P<tag>.+)_(?P<n>[1-9][0-9]*)$", re.DOTALL)


def occurrence_key(tag: str, n: int) -> str:
    """Build the key of the ``n``-th repeat of ``tag`` (0 is the first occurrence)."""
    if n < 0:
        raise ValueError(f"occurrence index must be >= 0, got {n}")
    if n == 0:
        return tag
    return f"{tag}{OCCURRENCE_SEPARATOR}{n}"


def split_occurrence_key(key: str) -> tuple[str, int]:
    """Split an occurrence key into (tag, repeat index).

    Example:
        >>> split_occurrence_key("1a_2")
        ('1a', 2)
        >>> split_occurrence_key("1a")
        ('1a', 0)
    """
    match = _SUFFIX.match(key)
    if match is None:
        return key, 0
    return match.group("tag"), int(match.group("n"))


def looks_like_occurrence_key(tag: str) -> bool:
    """True if ``tag`` would be mistaken for a repeat of another tag."""
    return _SUFFIX.match(tag) is not None
