"""Errors raised by isofield.

Every error derives from IsofieldError. Decode errors describe problems in
wire data, which comes from a counterparty and may be malformed; encode and
schema errors describe problems in local values or configuration.
"""

from __future__ import annotations

from typing import Optional


class IsofieldError(Exception):
    """Base exception for all isofield errors."""

    pass


class SchemaError(IsofieldError):
    """Raised when a field spec or binding table is invalid.

    Examples:
        - Composite spec without subfields or length prefix
        - Subfield tag wider than the tag width
        - Subfield tag that looks like an occurrence key (``1a_1``)
        - Duplicate keys in a binding table
    """

    pass


class BindingError(IsofieldError):
    """Raised when marshalling a record into a composite (or back) fails.

    Attributes:
        attr: Record attribute name
        key: Occurrence key the attribute is bound to
    """

    def __init__(self, message: str, *, attr: str, key: str) -> None:
        super().__init__(message)
        self.attr = attr
        self.key = key


class EncodeError(IsofieldError):
    """Raised when encoding a field fails.

    Examples:
        - Value does not fit the field's maximum length
        - Non-ASCII data for an ASCII encoded field
        - Value object of the wrong type for the field
    """

    pass


class PrefixOverflowError(EncodeError):
    """Raised when a length does not fit in the prefix width.

    Attributes:
        length: Length that was being encoded
        max_length: Largest length the prefix can express
    """

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(
            f"length {length} does not fit in prefix (max {max_length})"
        )
        self.length = length
        self.max_length = max_length


class LeafEncodeError(EncodeError):
    """Raised when a subfield of a composite cannot be encoded.

    Attributes:
        tag: Wire tag of the subfield
        key: Occurrence key of the failing value
    """

    def __init__(self, tag: str, key: str, cause: Exception) -> None:
        super().__init__(f"subfield {key} (tag {tag}): {cause}")
        self.tag = tag
        self.key = key


class DecodeError(IsofieldError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Invalid digits in a numeric field or length prefix
        - Tag not present in the composite spec
        - Subfield lengths that disagree with the composite length
    """

    pass


class MalformedLengthPrefixError(DecodeError):
    """Raised when a length prefix is short, not made of digits, or too large."""

    pass


class TruncatedBufferError(DecodeError):
    """Raised when fewer bytes remain than a read requires."""

    pass


class TruncatedLengthPrefixError(MalformedLengthPrefixError, TruncatedBufferError):
    """Raised when the buffer ends before a length prefix is complete."""

    pass


class UnknownSubfieldTagError(DecodeError):
    """Raised when a composite meets a tag its spec does not define.

    Attributes:
        tag: Decoded tag
        offset: Offset of the TLV entry from the start of the composite buffer
    """

    def __init__(self, tag: str, offset: int, reason: Optional[str] = None) -> None:
        message = f"unknown subfield tag {tag!r} at offset {offset}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.tag = tag
        self.offset = offset


class LengthMismatchError(DecodeError):
    """Raised when subfield lengths disagree with the declared composite length.

    Attributes:
        declared: Declared length of the composite body
        consumed: Body bytes consumed before the overrunning entry
    """

    def __init__(self, declared: int, consumed: int, detail: str = "") -> None:
        message = f"subfields overrun declared length {declared} after {consumed} bytes"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.declared = declared
        self.consumed = consumed


class LeafDecodeError(DecodeError):
    """Raised when a subfield of a composite cannot be decoded.

    The original leaf error is available as ``__cause__``.

    Attributes:
        tag: Wire tag of the subfield
        offset: Offset of the TLV entry from the start of the composite buffer
    """

    def __init__(self, tag: str, offset: int, cause: Exception) -> None:
        super().__init__(f"subfield {tag} at offset {offset}: {cause}")
        self.tag = tag
        self.offset = offset
