"""Composite (tag-length-value) fields.

A composite value is a length prefix followed by a stream of entries::

    LengthPrefix(total) [Tag LengthPrefix(len) Value]...

Each entry is decoded with the codec its tag maps to in the ``Spec``, so
subfields can themselves be composites. Repeated tags never overwrite each
other: the first occurrence is stored under the tag, later ones under
``<tag>_1``, ``<tag>_2``, ... in the order they were read. Packing strips the
suffixes again and emits all occurrences of a tag together, tags ordered by
the ``TagSpec`` sort strategy.

Example:
    >>> field = CompositeField(spec)
    >>> field.unpack(b"21" b"1a03ABC" b"1a03DEF" b"1a03GHI")
    23
    >>> {key: value.value for key, value in field.get_subfields().items()}
    {'1a': 'ABC', '1a_1': 'DEF', '1a_2': 'GHI'}
    >>> field.pack()
    b'211a03ABC1a03DEF1a03GHI'

CompositeField instances are not thread-safe; use one per message field.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel

from .. import binding
from ..exceptions import (
    DecodeError,
    EncodeError,
    LeafDecodeError,
    LeafEncodeError,
    LengthMismatchError,
    SchemaError,
    TruncatedBufferError,
    UnknownSubfieldTagError,
)
from ..keys import looks_like_occurrence_key, occurrence_key, split_occurrence_key
from ..spec import Spec, UnknownTagPolicy
from .base import Field, RawValue

if TYPE_CHECKING:
    from ..binding import BindingTable

logger = logging.getLogger(__name__)


class CompositeField:
    """Decoded state of one composite field: occurrence key -> value object.

    Args:
        spec: Composite spec (one with a ``tag`` and ``subfields``)

    Raises:
        SchemaError: If ``spec`` is not a composite spec
    """

    def __init__(self, spec: Spec) -> None:
        if not spec.is_composite:
            raise SchemaError(f"{spec.name}: CompositeField requires a spec with a tag spec")
        self.spec = spec
        self._subfields: Dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"CompositeField({self.spec.name!r}, keys={list(self._subfields)})"

    def __len__(self) -> int:
        return len(self._subfields)

    def __contains__(self, key: object) -> bool:
        return key in self._subfields

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompositeField):
            return NotImplemented
        return self.spec is other.spec and list(self._subfields.items()) == list(
            other._subfields.items()
        )

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def get_subfields(self) -> Mapping[str, Any]:
        """Read-only snapshot of occurrence key -> value object, in insertion order."""
        return MappingProxyType(dict(self._subfields))

    def get_subfield(self, key: str) -> Optional[Any]:
        """Value stored under ``key``, or None."""
        return self._subfields.get(key)

    def occurrences(self, tag: str) -> List[Any]:
        """All values of ``tag`` by occurrence index (first occurrence first)."""
        items = [
            (key, value) for key, value in self._subfields.items() if _tag_of(key, value) == tag
        ]
        return [value for _, value in sorted(items, key=_occurrence_index)]

    def set_subfield(self, key: str, raw: Any) -> None:
        """Store a value under ``key``, coerced through the codec of its tag.

        Args:
            key: Occurrence key (``"1a"``, ``"1a_1"``, ...)
            raw: Value object or plain Python value (str, int, bytes, record)

        Raises:
            SchemaError: If the tag of ``key`` has no subfield codec
            EncodeError: If ``raw`` is not valid for the subfield
        """
        tag, _ = split_occurrence_key(key)
        codec = self.spec.subfields.get(tag)
        if codec is None:
            raise SchemaError(f"{self.spec.name}: no subfield with tag {tag!r} (key {key!r})")
        self._subfields[key] = codec.coerce(raw)

    def reset(self) -> None:
        """Forget all decoded or assigned subfields."""
        self._subfields.clear()

    def copy(self) -> CompositeField:
        """Deep copy; nested composites are copied too, value objects are immutable."""
        clone = CompositeField(self.spec)
        for key, value in self._subfields.items():
            clone._subfields[key] = value.copy() if isinstance(value, CompositeField) else value
        return clone

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def unpack(self, data: bytes) -> int:
        """Decode a composite value from the start of ``data``.

        Prior state is discarded first. Bytes after the composite are ignored.

        Args:
            data: Buffer starting with the composite length prefix

        Returns:
            Bytes consumed: prefix width plus declared length

        Raises:
            DecodeError: If the data is malformed (see the DecodeError subclasses);
                the instance is left empty
        """
        self.reset()
        try:
            return self._unpack(data)
        except DecodeError:
            self.reset()
            raise

    def _unpack(self, data: bytes) -> int:
        spec = self.spec
        assert spec.tag is not None and spec.pref is not None

        total, prefix_len = spec.pref.decode_length(spec.length, data)
        end = prefix_len + total
        if len(data) < end:
            raise TruncatedBufferError(
                f"{spec.name}: declares {total} bytes, only {len(data) - prefix_len} available"
            )

        # Subfield reads are bounded by the composite itself
        body = bytes(data[:end])
        offset = prefix_len
        seen: Dict[str, int] = {}

        while offset < end:
            entry_start = offset
            try:
                tag, read = spec.tag.decode_tag(body, offset)
                offset += read

                codec = spec.subfields.get(tag)
                if codec is None:
                    value, read = self._decode_unknown(tag, body, offset, entry_start)
                else:
                    value, read = _decode_leaf(codec, tag, body, offset, entry_start)
                offset += read
            except TruncatedBufferError as e:
                raise LengthMismatchError(
                    total, entry_start - prefix_len, f"entry at offset {entry_start}: {e}"
                ) from e

            if value is None:
                continue

            count = seen.get(tag, 0)
            key = occurrence_key(tag, count)
            seen[tag] = count + 1
            self._subfields[key] = value
            logger.debug(
                "%s: decoded %s at offset %d (%d bytes)",
                spec.name,
                key,
                entry_start,
                offset - entry_start,
            )

        return end

    def _decode_unknown(
        self, tag: str, body: bytes, offset: int, entry_start: int
    ) -> Tuple[Optional[RawValue], int]:
        """Apply the unknown tag policy to the entry whose value starts at ``offset``."""
        tag_spec = self.spec.tag
        assert tag_spec is not None

        if tag_spec.unknown is UnknownTagPolicy.FAIL:
            raise UnknownSubfieldTagError(tag, entry_start)
        if tag_spec.unknown is UnknownTagPolicy.PASSTHROUGH and looks_like_occurrence_key(tag):
            raise UnknownSubfieldTagError(
                tag, entry_start, "cannot keep a tag that looks like an occurrence key"
            )

        assert tag_spec.skip_prefix is not None
        length, prefix_len = tag_spec.skip_prefix.decode_length(self.spec.length, body[offset:])
        start = offset + prefix_len
        if start + length > len(body):
            raise TruncatedBufferError(f"unknown tag {tag!r} declares {length} bytes")

        if tag_spec.unknown is UnknownTagPolicy.SKIP:
            logger.warning(
                "%s: skipping unknown tag %r at offset %d (%d bytes)",
                self.spec.name,
                tag,
                entry_start,
                length,
            )
            return None, prefix_len + length

        return RawValue(tag, body[start : start + length]), prefix_len + length

    def pack(self) -> bytes:
        """Encode the current state.

        Occurrences are grouped by tag and emitted by occurrence index (``1a``,
        ``1a_1``, ...); distinct tags are emitted in the order given by the
        tag spec's sort strategy.

        Returns:
            Length prefix followed by all entries

        Raises:
            LeafEncodeError: If a subfield value cannot be encoded
            EncodeError: If the composite exceeds its maximum length
        """
        spec = self.spec
        assert spec.tag is not None and spec.pref is not None

        groups: Dict[str, List[Tuple[str, Any]]] = {}
        for key, value in self._subfields.items():
            groups.setdefault(_tag_of(key, value), []).append((key, value))

        body = bytearray()
        for tag in spec.tag.sort.sort(groups):
            for key, value in sorted(groups[tag], key=_occurrence_index):
                entry = self._pack_entry(tag, key, value)
                logger.debug("%s: packed %s (%d bytes)", spec.name, key, len(entry))
                body += entry

        return spec.pref.encode_length(spec.length, len(body)) + bytes(body)

    def packed_entry(self, key: str) -> bytes:
        """Encoded TLV entry (tag, length prefix and value) stored under ``key``.

        Raises:
            KeyError: If ``key`` is not present
            LeafEncodeError: If the value cannot be encoded
        """
        value = self._subfields[key]
        return self._pack_entry(_tag_of(key, value), key, value)

    def _pack_entry(self, tag: str, key: str, value: Any) -> bytes:
        tag_spec = self.spec.tag
        assert tag_spec is not None
        try:
            if isinstance(value, RawValue):
                assert tag_spec.skip_prefix is not None
                data = tag_spec.skip_prefix.encode_length(self.spec.length, len(value.value))
                data += value.value
            else:
                data = self.spec.subfields[tag].encode(value)
            return tag_spec.encode_tag(tag) + data
        except EncodeError as e:
            raise LeafEncodeError(tag, key, e) from e

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def marshal(self, record: BaseModel, bindings: Optional[BindingTable] = None) -> None:
        """Store the bound fields of ``record`` under their occurrence keys.

        Fields whose value is None are left out. Existing keys not bound by
        the record are kept.

        Args:
            record: Application record (pydantic model)
            bindings: Explicit binding table; defaults to the record's ``Index`` fields

        Raises:
            BindingError: If a bound key has no subfield or a value is invalid
            SchemaError: If an explicit table binds an unknown tag
        """
        binding.marshal(self, record, bindings)

    def unmarshal(self, record: BaseModel, bindings: Optional[BindingTable] = None) -> None:
        """Copy decoded values into the bound fields of ``record``.

        Raises:
            BindingError: If a required key is missing
            SchemaError: If an explicit table binds an unknown tag
        """
        binding.unmarshal(self, record, bindings)


class Composite(Field[CompositeField]):
    """Codec for a composite used as a subfield of another composite."""

    value_type = CompositeField

    def _check_spec(self) -> None:
        if not self.spec.is_composite:
            raise SchemaError(f"{self.spec.name}: Composite requires a spec with a tag spec")

    def decode(self, data: bytes, offset: int = 0) -> Tuple[CompositeField, int]:
        field = CompositeField(self.spec)
        read = field.unpack(data[offset:])
        return field, read

    def encode(self, value: Any) -> bytes:
        if not isinstance(value, CompositeField) or value.spec is not self.spec:
            raise EncodeError(
                f"{self.spec.name}: expected CompositeField of this spec, got {value!r}"
            )
        return value.pack()

    def coerce(self, raw: Any) -> CompositeField:
        if isinstance(raw, CompositeField):
            if raw.spec is not self.spec:
                raise EncodeError(f"{self.spec.name}: composite value has a different spec")
            return raw.copy()
        return self.from_python(raw)

    def from_python(self, raw: Any) -> CompositeField:
        field = CompositeField(self.spec)
        if isinstance(raw, BaseModel):
            field.marshal(raw)
        elif isinstance(raw, Mapping):
            for key, value in raw.items():
                field.set_subfield(key, value)
        else:
            raise EncodeError(
                f"{self.spec.name}: expected a record or mapping, got {type(raw).__name__}"
            )
        return field


def _tag_of(key: str, value: Any) -> str:
    if isinstance(value, RawValue):
        return value.tag
    return split_occurrence_key(key)[0]


def _occurrence_index(item: Tuple[str, Any]) -> int:
    return split_occurrence_key(item[0])[1]


def _decode_leaf(
    codec: Field[Any], tag: str, body: bytes, offset: int, entry_start: int
) -> Tuple[Any, int]:
    try:
        return codec.decode(body, offset)
    except TruncatedBufferError:
        raise
    except DecodeError as e:
        raise LeafDecodeError(tag, entry_start, e) from e
