"""Validation Engine — first member whose live value breaks its declaration.

Manifesto:
    Validation answers one question deterministically: which member, walking
    the effective descriptors in order and descending depth-first into
    nested records and typed collections, is the first one that fails? The
    query form returns the answer as data; ``validate`` raises it.

ARCHITECTURE
────────────
::

    find_first_invalid_field(instance)  → InvalidField(path, value) | None
        for descriptor in effective_descriptors(type(instance)):
            check(descriptor, live value, exposed name)
                1. None  → fail iff required
                2. kind check (number/string/boolean/timestamp/
                   sequence items/map keys then values/nested record)
                3. validators, in order (also run for None)

    validate(instance)                  → raises InvalidValueError

Paths: ``outer.inner``, ``field.item.x``, ``field.key``, ``field.value.x``.

Tags:
    datacontracts, engine, validation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any, NamedTuple

from datacontracts.core.errors import InvalidValueError
from datacontracts.core.logging import get_logger
from datacontracts.schema.descriptor import FieldDescriptor
from datacontracts.schema.kinds import (
    ValueKind,
    is_finite_number,
    is_mapping,
    is_sequence,
    is_timestamp,
)
from datacontracts.schema.members import MISSING, read_field
from datacontracts.schema.resolver import effective_descriptors

logger = get_logger(__name__)


class InvalidField(NamedTuple):
    """Location and value of the first invalid member."""

    path: str
    value: Any


def join_path(*parts: Any) -> str:
    """Join path segments with dots, skipping empty ones."""
    return ".".join(str(part) for part in parts if part is not None and part != "")


def _kind_ok(kind: ValueKind, value: Any) -> bool:
    if kind is ValueKind.NUMBER:
        return is_finite_number(value)
    if kind is ValueKind.STRING:
        return isinstance(value, str)
    if kind is ValueKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is ValueKind.TIMESTAMP:
        return is_timestamp(value)
    if kind is ValueKind.SEQUENCE:
        return is_sequence(value)
    if kind is ValueKind.MAPPING:
        return is_mapping(value)
    return True


def _check_elements(
    descriptor: FieldDescriptor | None, values: Any, path: str
) -> InvalidField | None:
    if descriptor is None:
        return None
    for element in values:
        failure = check_value(descriptor, element, path)
        if failure is not None:
            return failure
    return None


def check_value(descriptor: FieldDescriptor, value: Any, path: str) -> InvalidField | None:
    """Check one value against its descriptor; return the first failure."""
    if value is None:
        if descriptor.required:
            return InvalidField(path, value)
    else:
        kind = descriptor.spec.kind
        if not _kind_ok(kind, value):
            return InvalidField(path, value)

        if kind is ValueKind.SEQUENCE:
            failure = _check_elements(descriptor.item_descriptor(), value, join_path(path, "item"))
            if failure is not None:
                return failure
        elif kind is ValueKind.MAPPING:
            failure = _check_elements(descriptor.key_descriptor(), value.keys(), join_path(path, "key"))
            if failure is None:
                failure = _check_elements(
                    descriptor.value_descriptor(), value.values(), join_path(path, "value")
                )
            if failure is not None:
                return failure
        elif kind is ValueKind.RECORD:
            nested = find_first_invalid_field(value)
            if nested is not None:
                return InvalidField(join_path(path, nested.path), nested.value)

    for checker in descriptor.validators:
        if not checker(value):
            return InvalidField(path, value)
    return None


def find_first_invalid_field(instance: Any) -> InvalidField | None:
    """
    Find the first member of ``instance`` that fails its declaration.

    Args:
        instance: Record instance (``None`` passes)

    Returns:
        ``InvalidField(path, value)`` for the first failure, else ``None``
    """
    if instance is None:
        return None
    for name, descriptor in effective_descriptors(type(instance)).items():
        value = read_field(instance, name)
        if value is MISSING:
            value = None
        failure = check_value(descriptor, value, descriptor.exposed_name)
        if failure is not None:
            return failure
    return None


def validate(instance: Any) -> None:
    """
    Raise on the first invalid member of ``instance``.

    Raises:
        InvalidValueError: carrying the dotted path and the offending value
    """
    failure = find_first_invalid_field(instance)
    if failure is None:
        return
    logger.debug(
        "validation_failed",
        record_type=type(instance).__qualname__,
        path=failure.path,
    )
    raise InvalidValueError(failure.path, failure.value).with_context(
        record_type=type(instance).__qualname__
    )
