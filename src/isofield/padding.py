"""Padding for fixed-width values and tags."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .exceptions import EncodeError


class Padder(ABC):
    """Applies and strips a single pad character on one side of a value."""

    side: str = ""

    def __init__(self, char: str) -> None:
        if len(char) != 1:
            raise ValueError(f"pad character must be a single character, got {char!r}")
        self.char = char
        self._pad = char.encode("latin-1")

    @abstractmethod
    def pad(self, data: bytes, length: int) -> bytes:
        """Pad ``data`` to exactly ``length`` bytes.

        Raises:
            EncodeError: If data is already longer than ``length``
        """

    @abstractmethod
    def unpad(self, data: bytes) -> bytes:
        """Strip pad characters from ``data``."""

    def inspect(self) -> str:
        return f"{self.side}({self.char!r})"

    def __repr__(self) -> str:
        return f"<Padder {self.inspect()}>"

    def _fill(self, data: bytes, length: int) -> bytes:
        if len(data) > length:
            raise EncodeError(f"data length {len(data)} exceeds padded width {length}")
        return self._pad * (length - len(data))


class LeftPadder(Padder):
    side = "Left"

    def pad(self, data: bytes, length: int) -> bytes:
        return self._fill(data, length) + data

    def unpad(self, data: bytes) -> bytes:
        return data.lstrip(self._pad)


class RightPadder(Padder):
    side = "Right"

    def pad(self, data: bytes, length: int) -> bytes:
        return data + self._fill(data, length)

    def unpad(self, data: bytes) -> bytes:
        return data.rstrip(self._pad)


def Left(char: str) -> LeftPadder:
    """Pad on the left with ``char`` (e.g. ``Left('0')`` for numbers)."""
    return LeftPadder(char)


def Right(char: str) -> RightPadder:
    """Pad on the right with ``char`` (e.g. ``Right(' ')`` for text)."""
    return RightPadder(char)
