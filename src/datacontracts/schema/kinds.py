"""Value kinds, type specs and direction flags.

Every field descriptor carries a ``TypeSpec``: a closed tagged variant that
tells the three engines how to check, coerce and export the field's value.
Declarations may pass ordinary Python hints (``int``, ``list[Order]``,
``dict[int, str]``); :func:`type_spec` turns them into a ``TypeSpec`` once, at
class-definition time, so the engines never inspect hints themselves.

ARCHITECTURE
────────────
::

    ValueKind   NUMBER | STRING | BOOLEAN | TIMESTAMP | OPAQUE
                SEQUENCE(item) | MAPPING(key, value) | RECORD(record_type)
                UNSPECIFIED

    Direction   IGNORE=0  SERIALIZE_ONLY=1  DESERIALIZE_ONLY=2  BOTH=3

Tags:
    datacontracts, schema, type-system, value-kinds

Doc-Types:
    api-reference
"""

from __future__ import annotations

import math
import types
import typing
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntFlag
from typing import Any


class ValueKind(str, Enum):
    """Kind of value a member holds."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    OPAQUE = "opaque"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    RECORD = "record"
    UNSPECIFIED = "unspecified"


class Direction(IntFlag):
    """Which traversals a member takes part in.

    ``SERIALIZE_ONLY`` and ``DESERIALIZE_ONLY`` are independent bits.
    """

    IGNORE = 0
    SERIALIZE_ONLY = 1
    DESERIALIZE_ONLY = 2
    BOTH = SERIALIZE_ONLY | DESERIALIZE_ONLY


SerializeOption = Direction


@dataclass(frozen=True)
class TypeSpec:
    """Tagged variant describing a member's value.

    ``record_type`` is set only for ``RECORD``; ``item`` only for
    ``SEQUENCE``; ``key`` and ``value`` only for ``MAPPING``. A missing
    element spec means elements are taken as-is.
    """

    kind: ValueKind = ValueKind.UNSPECIFIED
    record_type: type | None = None
    item: TypeSpec | None = None
    key: TypeSpec | None = None
    value: TypeSpec | None = None

    def __post_init__(self) -> None:
        if (self.record_type is not None) != (self.kind is ValueKind.RECORD):
            raise ValueError("record_type must be given exactly for RECORD specs")
        if self.item is not None and self.kind is not ValueKind.SEQUENCE:
            raise ValueError("item spec is only valid for SEQUENCE specs")
        if (self.key is not None or self.value is not None) and self.kind is not ValueKind.MAPPING:
            raise ValueError("key/value specs are only valid for MAPPING specs")

    @classmethod
    def record(cls, record_type: type) -> TypeSpec:
        return cls(ValueKind.RECORD, record_type=record_type)

    @classmethod
    def sequence(cls, item: Any = None) -> TypeSpec:
        return cls(ValueKind.SEQUENCE, item=_element_spec(item))

    @classmethod
    def mapping(cls, key: Any = None, value: Any = None) -> TypeSpec:
        return cls(ValueKind.MAPPING, key=_element_spec(key), value=_element_spec(value))

    @property
    def label(self) -> str:
        """Short human-readable form (``sequence[number]``, ``record:Order``)."""
        if self.kind is ValueKind.RECORD:
            return f"record:{self.record_type.__name__}"
        if self.kind is ValueKind.SEQUENCE and self.item is not None:
            return f"sequence[{self.item.label}]"
        if self.kind is ValueKind.MAPPING and (self.key is not None or self.value is not None):
            key = self.key.label if self.key is not None else "any"
            value = self.value.label if self.value is not None else "any"
            return f"mapping[{key}, {value}]"
        return self.kind.value


UNSPECIFIED = TypeSpec()

_SEQUENCE_ORIGINS = (list, tuple, Sequence, MutableSequence)
_MAPPING_ORIGINS = (dict, Mapping, MutableMapping)


def _element_spec(hint: Any) -> TypeSpec | None:
    return None if hint is None else type_spec(hint)


def _is_record_class(hint: Any) -> bool:
    from datacontracts.schema.record import Record

    return isinstance(hint, type) and issubclass(hint, Record)


def type_spec(hint: Any) -> TypeSpec:
    """Convert a declaration hint into a :class:`TypeSpec`.

    Examples:
        >>> type_spec(int).kind
        <ValueKind.NUMBER: 'number'>
        >>> type_spec(list[int]).label
        'sequence[number]'
        >>> type_spec(dict[int, str]).label
        'mapping[number, string]'
    """
    if hint is None:
        return UNSPECIFIED
    if isinstance(hint, TypeSpec):
        return hint
    if isinstance(hint, ValueKind):
        if hint is ValueKind.RECORD:
            raise ValueError("RECORD kind needs a record type; pass the class instead")
        return TypeSpec(hint)

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not type(None)]
        return type_spec(members[0]) if len(members) == 1 else TypeSpec(ValueKind.OPAQUE)

    if origin in _SEQUENCE_ORIGINS:
        if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
            args = args[:1]
        item = args[0] if len(args) == 1 else None
        return TypeSpec.sequence(item)
    if origin in _MAPPING_ORIGINS:
        key, value = args if len(args) == 2 else (None, None)
        return TypeSpec.mapping(key, value)
    if origin is not None:
        return TypeSpec(ValueKind.OPAQUE)

    if hint is bool:
        return TypeSpec(ValueKind.BOOLEAN)
    if hint in (int, float, Decimal):
        return TypeSpec(ValueKind.NUMBER)
    if hint is str:
        return TypeSpec(ValueKind.STRING)
    if hint in (datetime, date):
        return TypeSpec(ValueKind.TIMESTAMP)
    if hint in _SEQUENCE_ORIGINS:
        return TypeSpec(ValueKind.SEQUENCE)
    if hint in _MAPPING_ORIGINS:
        return TypeSpec(ValueKind.MAPPING)
    if _is_record_class(hint):
        return TypeSpec.record(hint)
    return TypeSpec(ValueKind.OPAQUE)


# =============================================================================
# Runtime kind predicates (shared by the engines)
# =============================================================================


def is_finite_number(value: Any) -> bool:
    """Real number, not ``bool``, neither infinite nor NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_timestamp(value: Any) -> bool:
    return isinstance(value, (datetime, date))


def is_primitive(value: Any) -> bool:
    """Values exported unchanged: numbers, strings, booleans and timestamps."""
    return isinstance(value, (int, float, Decimal, str, bool, datetime, date))
