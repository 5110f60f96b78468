"""Binding between application records and composite fields.

Records are pydantic models. Each record field that corresponds to a
subfield declares its occurrence key with ``Index``; the key -> field table is
built once per record class and reused for every marshal/unmarshal call.

Example:
    >>> from typing import Optional
    >>> class AdditionalData(BaseRecord):
    ...     terminal_id: Optional[str] = Index("1a")
    ...     second_terminal_id: Optional[str] = Index("1a_1")
    ...     amount: Optional[int] = Index("2", required=True)
    >>>
    >>> field = CompositeField(spec)
    >>> field.marshal(AdditionalData(terminal_id="T1", amount=100))
    >>> data = field.pack()

Marshal never invents repeat keys: a record that needs several occurrences
of one tag binds one field per occurrence key (``"1a"``, ``"1a_1"``, ...).
Tables can also be written out explicitly with ``FieldBinding`` rows and
passed to ``marshal``/``unmarshal`` for records that cannot carry ``Index``
declarations.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Iterable,
    Iterator,
    Optional,
    Tuple,
    Type,
    cast,
    get_args,
    get_origin,
)

from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

from .exceptions import BindingError, IsofieldError, SchemaError
from .keys import split_occurrence_key

if TYPE_CHECKING:
    from .fields.composite import CompositeField
    from .spec import Spec

INDEX_KEY = "isofield_index"
REQUIRED_KEY = "isofield_required"


class BaseRecord(BaseModel):
    """Base class for application records bound to composite fields.

    Bound fields should be Optional with a None default (``Index`` provides
    it) so that records can be built from partially populated composites.
    """

    model_config = ConfigDict(
        # Value objects (StringValue, ...) may be used as field types
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra="forbid",
    )


def Index(key: str, *, required: bool = False, **kwargs: Any) -> FieldInfo:
    """Declare the occurrence key a record field is bound to.

    Args:
        key: Occurrence key (``"1a"``, ``"1a_1"``, ...)
        required: If True, unmarshal fails when the key is absent
        **kwargs: Additional Field() arguments (description, default, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default.

    Example:
        >>> class Record(BaseRecord):
        ...     terminal_id: Optional[str] = Index("1a", description="Terminal")
    """
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[INDEX_KEY] = key
    extra[REQUIRED_KEY] = required
    kwargs.setdefault("default", None)
    return cast(FieldInfo, Field(json_schema_extra=extra, **kwargs))


@dataclass(frozen=True)
class FieldBinding:
    """One row of a binding table.

    Attributes:
        attr: Record attribute name
        key: Occurrence key in the composite
        required: Whether unmarshal requires the key to be present
        record: Record class for nested composite subfields
        keep_value: Copy value objects as-is instead of their Python value
    """

    attr: str
    key: str
    required: bool = False
    record: Optional[Type[BaseModel]] = None
    keep_value: bool = False

    @property
    def tag(self) -> str:
        return split_occurrence_key(self.key)[0]


class BindingTable:
    """Ordered, validated collection of field bindings.

    Raises:
        SchemaError: If two rows share an attribute or an occurrence key
    """

    def __init__(self, bindings: Iterable[FieldBinding]) -> None:
        self._bindings: Tuple[FieldBinding, ...] = tuple(bindings)

        attrs = [b.attr for b in self._bindings]
        keys = [b.key for b in self._bindings]
        for label, values in (("attribute", attrs), ("key", keys)):
            duplicates = sorted({v for v in values if values.count(v) > 1})
            if duplicates:
                raise SchemaError(f"duplicate binding {label}s: {duplicates}")

    def __iter__(self) -> Iterator[FieldBinding]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        rows = ", ".join(f"{b.attr}={b.key}" for b in self._bindings)
        return f"BindingTable({rows})"

    def validate(self, spec: Spec) -> None:
        """Check every bound tag exists in a composite spec.

        Raises:
            SchemaError: If a key's tag is not a subfield of ``spec``
        """
        for b in self._bindings:
            if b.tag not in spec.subfields:
                raise SchemaError(
                    f"binding {b.attr} -> {b.key}: {spec.name} has no subfield {b.tag!r}"
                )

    @classmethod
    def for_model(cls, model_class: Type[BaseModel]) -> BindingTable:
        """Binding table of a record class, built from its ``Index`` fields.

        The table is built on first use and cached per class.

        Raises:
            SchemaError: If the class declares no ``Index`` fields
        """
        return _table_for_model(model_class)


@functools.lru_cache(maxsize=None)
def _table_for_model(model_class: Type[BaseModel]) -> BindingTable:
    from .fields.base import BinaryValue, NumericValue, RawValue, StringValue

    value_types = (StringValue, NumericValue, BinaryValue, RawValue)
    bindings = []

    for name, info in model_class.model_fields.items():
        extra = info.json_schema_extra
        if not isinstance(extra, dict) or INDEX_KEY not in extra:
            continue

        types = _annotation_types(info.annotation)
        record = next(
            (t for t in types if isinstance(t, type) and issubclass(t, BaseModel)), None
        )
        bindings.append(
            FieldBinding(
                attr=name,
                key=str(extra[INDEX_KEY]),
                required=bool(extra.get(REQUIRED_KEY, False)),
                record=record,
                keep_value=any(t in value_types for t in types),
            )
        )

    if not bindings:
        raise SchemaError(f"{model_class.__name__} declares no Index fields")
    return BindingTable(bindings)


def _annotation_types(annotation: Any) -> Tuple[Any, ...]:
    # Optional[X] and X | None both unwrap to their members
    if get_origin(annotation) is not None:
        return get_args(annotation)
    return (annotation,)


def _resolve_table(
    composite: CompositeField, record: BaseModel, bindings: Optional[BindingTable]
) -> BindingTable:
    if bindings is None:
        return BindingTable.for_model(type(record))
    bindings.validate(composite.spec)
    return bindings


def marshal(
    composite: CompositeField, record: BaseModel, bindings: Optional[BindingTable] = None
) -> None:
    """Store the bound, non-None fields of ``record`` in ``composite``.

    Raises:
        BindingError: If a key's tag is unknown or a value is invalid
        SchemaError: If an explicit table binds a tag the composite does not have
    """
    table = _resolve_table(composite, record, bindings)

    for b in table:
        try:
            raw = getattr(record, b.attr)
        except AttributeError as e:
            raise BindingError(
                f"{type(record).__name__} has no attribute {b.attr!r}", attr=b.attr, key=b.key
            ) from e
        if raw is None:
            continue

        try:
            composite.set_subfield(b.key, raw)
        except IsofieldError as e:
            raise BindingError(
                f"{type(record).__name__}.{b.attr} -> {b.key}: {e}", attr=b.attr, key=b.key
            ) from e


def unmarshal(
    composite: CompositeField, record: BaseModel, bindings: Optional[BindingTable] = None
) -> None:
    """Copy values present in ``composite`` into the bound fields of ``record``.

    Raises:
        BindingError: If a required key is absent or a value does not fit the field
        SchemaError: If an explicit table binds a tag the composite does not have
    """
    from .fields.composite import CompositeField

    table = _resolve_table(composite, record, bindings)

    for b in table:
        value = composite.get_subfield(b.key)
        if value is None:
            if b.required:
                raise BindingError(
                    f"{type(record).__name__}.{b.attr}: required key {b.key!r} is missing",
                    attr=b.attr,
                    key=b.key,
                )
            continue

        result: Any
        if isinstance(value, CompositeField):
            if b.record is not None:
                result = b.record.model_construct()
                value.unmarshal(result)
            else:
                result = value.copy()
        elif b.keep_value:
            result = value
        else:
            result = value.value

        try:
            setattr(record, b.attr, result)
        except (ValueError, TypeError, AttributeError) as e:
            # pydantic's ValidationError is a ValueError
            raise BindingError(
                f"{type(record).__name__}.{b.attr} <- {b.key}: {e}", attr=b.attr, key=b.key
            ) from e
