"""Traversal engines: validation, deserialization, serialization."""

from datacontracts.engine.deserializer import coerce, deserialize
from datacontracts.engine.serializer import export, serialize
from datacontracts.engine.validation import (
    InvalidField,
    check_value,
    find_first_invalid_field,
    join_path,
    validate,
)

__all__ = [
    "coerce",
    "deserialize",
    "export",
    "serialize",
    "InvalidField",
    "check_value",
    "find_first_invalid_field",
    "join_path",
    "validate",
]
