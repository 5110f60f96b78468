"""Utility functions for isofield.

This module provides inspection helpers for decoded composite fields.
"""

from __future__ import annotations

from .describe import describe, packed_lengths, packed_size

__all__ = [
    "describe",
    "packed_lengths",
    "packed_size",
]
