"""Serialization Engine — typed record instances to a plain key/value tree.

Serialization is an allow-list: only members with a descriptor whose
direction includes ``SERIALIZE_ONLY`` and that are present on the instance
appear in the result, under their exposed names. Values are exported by
their runtime shape; the declared kind only supplies element descriptors
for collections. The function is total and never raises.

Tags:
    datacontracts, engine, serialization

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from datacontracts.schema.descriptor import FieldDescriptor
from datacontracts.schema.kinds import is_primitive, is_sequence
from datacontracts.schema.members import MISSING, read_field
from datacontracts.schema.record import Record
from datacontracts.schema.resolver import effective_descriptors


def export(descriptor: FieldDescriptor | None, value: Any) -> Any:
    """Export one live value according to ``descriptor``."""
    if descriptor is not None and descriptor.serializer is not None:
        return descriptor.serializer(value)
    if value is None or is_primitive(value):
        return value
    if is_sequence(value):
        item = descriptor.item_descriptor() if descriptor is not None else None
        return [export(item, element) for element in value]
    if isinstance(value, Mapping):
        key_descriptor = descriptor.key_descriptor() if descriptor is not None else None
        value_descriptor = descriptor.value_descriptor() if descriptor is not None else None
        return {
            str(export(key_descriptor, key)): export(value_descriptor, entry)
            for key, entry in value.items()
        }
    if isinstance(value, Record):
        return serialize(value)
    return value


def serialize(instance: Any) -> dict[str, Any] | None:
    """
    Convert a record instance to a plain key/value tree.

    Args:
        instance: Record instance, or ``None``

    Returns:
        Dict keyed by exposed names, or ``None`` for ``None``
    """
    if instance is None:
        return None
    tree: dict[str, Any] = {}
    for name, descriptor in effective_descriptors(type(instance)).items():
        if not descriptor.serializable:
            continue
        value = read_field(instance, name)
        if value is MISSING:
            continue
        tree[descriptor.exposed_name] = export(descriptor, value)
    return tree
