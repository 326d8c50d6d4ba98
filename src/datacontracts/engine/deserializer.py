"""Deserialization Engine — key/value tree to typed record instances.

Manifesto:
    A tree produced by ``json.loads`` (or any equivalent) is turned into a
    record instance graph by walking the tree's keys, looking each up by
    exposed name, and coercing the raw value to the member's declared kind.
    Nested records go back through ``deserialize`` so every level performs
    its own polymorphic type selection.

ARCHITECTURE
────────────
::

    deserialize(record_type, tree)
        actual   = record_type.resolve_type(tree)
        instance = actual()
        no declared members  → setattr every tree key (untyped passthrough);
                               dunder keys and class attributes rejected
        otherwise, per tree key:
            unknown key                      → ignored
            direction lacks DESERIALIZE_ONLY → skipped
            else instance.<internal> = coerce(descriptor, value, path)

    coerce: custom hook > None passthrough > kind rules
        NUMBER     decimal literal, int or float, must be finite
        STRING     str(value)        BOOLEAN   bool(value)
        TIMESTAMP  datetime / epoch / ISO-8601
        SEQUENCE   list, items coerced with item spec
        MAPPING    dict, keys then values coerced per entry
        RECORD     deserialize(nested type, value)

Errors are ``InvalidValueError`` carrying the dotted path reached by
recursion and the literal raw value; nothing is recovered.

Tags:
    datacontracts, engine, deserialization, coercion, polymorphism

Doc-Types:
    api-reference
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any

from datacontracts.core.errors import InvalidValueError
from datacontracts.core.logging import get_logger
from datacontracts.core.settings import get_settings
from datacontracts.engine.validation import join_path
from datacontracts.schema.descriptor import FieldDescriptor
from datacontracts.schema.kinds import ValueKind, is_mapping, is_sequence
from datacontracts.schema.resolver import Index, effective_descriptors, has_schema

logger = get_logger(__name__)

_EPOCH_DIVISORS = {"s": 1, "ms": 1000}

# Plain decimal literals only: no digit separators, non-ASCII digits, nan or inf
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _to_number(value: Any, path: str) -> int | float | Decimal:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float, Decimal)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _INTEGER.fullmatch(text):
            number = int(text)
        elif _DECIMAL.fullmatch(text):
            number = float(text)
        else:
            raise InvalidValueError(path, value)
    else:
        raise InvalidValueError(path, value)

    finite = number.is_finite() if isinstance(number, Decimal) else math.isfinite(number)
    if not finite:
        raise InvalidValueError(path, value)
    return number


def _to_timestamp(value: Any, path: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        divisor = _EPOCH_DIVISORS[get_settings().timestamp_epoch_unit]
        try:
            return datetime.fromtimestamp(value / divisor, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidValueError(path, value, cause=exc) from exc
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidValueError(path, value, cause=exc) from exc
    raise InvalidValueError(path, value)


def coerce(descriptor: FieldDescriptor | None, value: Any, path: str = "") -> Any:
    """Convert one raw tree value according to ``descriptor``."""
    if descriptor is None:
        return value
    if descriptor.deserializer is not None:
        return descriptor.deserializer(value)
    if value is None:
        return None

    spec = descriptor.spec
    kind = spec.kind

    if kind is ValueKind.NUMBER:
        return _to_number(value, path)
    if kind is ValueKind.STRING:
        return str(value)
    if kind is ValueKind.BOOLEAN:
        return bool(value)
    if kind is ValueKind.TIMESTAMP:
        return _to_timestamp(value, path)
    if kind is ValueKind.SEQUENCE:
        if not is_sequence(value):
            raise InvalidValueError(path, value)
        item = descriptor.item_descriptor()
        if item is None:
            return value
        item_path = join_path(path, "item")
        return [coerce(item, element, item_path) for element in value]
    if kind is ValueKind.MAPPING:
        if not is_mapping(value):
            raise InvalidValueError(path, value)
        key_descriptor = descriptor.key_descriptor()
        value_descriptor = descriptor.value_descriptor()
        key_path = join_path(path, "key")
        value_path = join_path(path, "value")
        return {
            coerce(key_descriptor, key, key_path): coerce(value_descriptor, raw, value_path)
            for key, raw in value.items()
        }
    if kind is ValueKind.RECORD:
        return _deserialize_record(spec.record_type, value, path)
    return value


def _deserialize_record(record_type: type, tree: Any, path: str) -> Any:
    if tree is None:
        tree = {}
    elif not isinstance(tree, Mapping):
        raise InvalidValueError(path, tree)

    resolve = getattr(record_type, "resolve_type", None)
    actual = resolve(tree) if resolve is not None else record_type
    instance = actual()

    if not has_schema(actual):
        logger.debug("untyped_passthrough", record_type=actual.__qualname__, keys=len(tree))
        for key, value in tree.items():
            # Only plain instance attributes: never dunders or class members
            if not isinstance(key, str) or key.startswith("__") or hasattr(actual, key):
                raise InvalidValueError(join_path(path, key), value)
            setattr(instance, key, value)
        return instance

    by_exposed = effective_descriptors(actual, Index.EXPOSED)

    for key, raw in tree.items():
        descriptor = by_exposed.get(key)
        if descriptor is None:
            logger.debug("unknown_key_ignored", record_type=actual.__qualname__, key=key)
            continue
        if not descriptor.deserializable:
            continue
        setattr(instance, descriptor.internal_name, coerce(descriptor, raw, join_path(path, key)))
    return instance


def deserialize(record_type: type, tree: Mapping[str, Any] | None) -> Any:
    """
    Build a record instance from a key/value tree.

    Args:
        record_type: Declared type; its ``resolve_type`` hook picks the class
        tree: Parsed key/value tree (``None`` behaves like ``{}``)

    Returns:
        Instance of the resolved type

    Raises:
        InvalidValueError: a value cannot be coerced to its member's kind
    """
    return _deserialize_record(record_type, tree, "")
