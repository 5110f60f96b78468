"""Field specs: the immutable grammar shared by every decode/encode call.

A ``Spec`` describes one field. Leaf specs carry an encoding, a length prefix
and optionally a padder; composite specs additionally carry a ``TagSpec`` and
a mapping from wire tag to subfield codec.

Example:
    >>> from isofield import encoding, padding, prefix
    >>> from isofield.fields import String
    >>> spec = Spec(
    ...     length=100,
    ...     description="Additional data",
    ...     pref=prefix.ASCII.LL,
    ...     tag=TagSpec(length=2, pad=padding.Left("0"), sort=TagSort.STRINGS_BY_INT),
    ...     subfields={
    ...         "1a": String(Spec(length=10, enc=encoding.ASCII, pref=prefix.ASCII.LL)),
    ...     },
    ... )
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

from . import encoding
from .encoding import Encoder
from .exceptions import EncodeError, SchemaError, TruncatedBufferError
from .keys import looks_like_occurrence_key
from .padding import Padder
from .prefix import Prefixer
from .sort import TagSort

if TYPE_CHECKING:
    from .fields.base import Field


class UnknownTagPolicy(str, enum.Enum):
    """What a composite does with a tag that is not in its spec.

    FAIL raises UnknownSubfieldTagError. SKIP and PASSTHROUGH read the
    entry's length with ``TagSpec.skip_prefix``; SKIP drops the entry while
    PASSTHROUGH keeps its raw bytes so it is packed again unchanged.
    """

    FAIL = "fail"
    SKIP = "skip"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class TagSpec:
    """Fixed-width tag format of a composite field.

    Attributes:
        length: Tag width in logical units of ``enc``
        enc: Tag encoding
        pad: Padder applied to tags narrower than ``length``
        sort: Canonical order of distinct tags when packing
        unknown: Unknown tag policy
        skip_prefix: Length prefix of unknown entries (SKIP/PASSTHROUGH only)
    """

    length: int
    enc: Encoder = encoding.ASCII
    pad: Optional[Padder] = None
    sort: TagSort = TagSort.STRINGS
    unknown: UnknownTagPolicy = UnknownTagPolicy.FAIL
    skip_prefix: Optional[Prefixer] = None

    def __post_init__(self) -> None:
        if self.length < 1:
            raise SchemaError(f"tag length must be positive, got {self.length}")
        # Accept plain strings so specs can come from serialized config
        object.__setattr__(self, "sort", TagSort(self.sort))
        object.__setattr__(self, "unknown", UnknownTagPolicy(self.unknown))
        if self.unknown is not UnknownTagPolicy.FAIL and self.skip_prefix is None:
            raise SchemaError(f"unknown tag policy {self.unknown.value} requires skip_prefix")

    def decode_tag(self, data: bytes, offset: int = 0) -> tuple[str, int]:
        """Read one tag at ``offset``.

        Returns:
            Tuple of (tag with padding stripped, wire bytes consumed)

        Raises:
            TruncatedBufferError: If fewer bytes remain than the tag width
            DecodeError: If the tag bytes are invalid for the tag encoding
        """
        remaining = len(data) - offset
        if remaining < self.enc.wire_length(self.length):
            raise TruncatedBufferError(
                f"tag needs {self.enc.wire_length(self.length)} bytes at offset {offset}, "
                f"got {max(remaining, 0)}"
            )
        raw, read = self.enc.decode(data[offset:], self.length)
        if self.pad is not None:
            raw = self.pad.unpad(raw)
        return raw.decode("latin-1"), read

    def encode_tag(self, tag: str) -> bytes:
        """Pad and encode ``tag``.

        Raises:
            EncodeError: If the tag does not fit the tag width
        """
        raw = tag.encode("latin-1")
        if self.pad is not None:
            raw = self.pad.pad(raw, self.length)
        if len(raw) != self.length:
            raise EncodeError(f"tag {tag!r} does not match tag width {self.length}")
        return self.enc.encode(raw)


@dataclass(frozen=True, eq=False)
class Spec:
    """Immutable description of one field.

    Attributes:
        length: Maximum length (exact length for fixed prefixes)
        description: Human readable name
        enc: Value encoding (leaf fields)
        pref: Length prefix
        pad: Padder for fixed-width values
        tag: Tag format (composite fields only)
        subfields: Wire tag -> subfield codec (composite fields only)
    """

    length: int
    description: str = ""
    enc: Optional[Encoder] = None
    pref: Optional[Prefixer] = None
    pad: Optional[Padder] = None
    tag: Optional[TagSpec] = None
    subfields: Mapping[str, Field] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.length < 0:
            raise SchemaError(f"{self.name}: length must be >= 0, got {self.length}")
        object.__setattr__(self, "subfields", MappingProxyType(dict(self.subfields)))

        if self.tag is None:
            if self.subfields:
                raise SchemaError(f"{self.name}: subfields require a tag spec")
            return

        if self.pref is None:
            raise SchemaError(f"{self.name}: composite spec requires a length prefix")
        if not self.subfields:
            raise SchemaError(f"{self.name}: composite spec requires subfields")
        for tag in self.subfields:
            if not tag:
                raise SchemaError(f"{self.name}: empty subfield tag")
            if looks_like_occurrence_key(tag):
                raise SchemaError(
                    f"{self.name}: subfield tag {tag!r} is ambiguous with occurrence keys"
                )
            if len(tag) > self.tag.length:
                raise SchemaError(
                    f"{self.name}: subfield tag {tag!r} is wider than tag length {self.tag.length}"
                )
            if len(tag) < self.tag.length and self.tag.pad is None:
                raise SchemaError(
                    f"{self.name}: subfield tag {tag!r} is narrower than tag length "
                    f"{self.tag.length} and no tag padding is configured"
                )
            if self.tag.pad is not None:
                raw = tag.encode("latin-1")
                if self.tag.pad.unpad(self.tag.pad.pad(raw, self.tag.length)) != raw:
                    # "01" under Left("0") would decode as "1"
                    raise SchemaError(
                        f"{self.name}: subfield tag {tag!r} does not survive tag padding "
                        f"{self.tag.pad.inspect()}; declare it unpadded"
                    )

    @property
    def name(self) -> str:
        return self.description or "field"

    @property
    def is_composite(self) -> bool:
        return self.tag is not None
