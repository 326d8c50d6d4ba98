"""Schema layer: value kinds, descriptors, registry, resolver, records."""

from datacontracts.schema.descriptor import FieldDescriptor
from datacontracts.schema.kinds import Direction, SerializeOption, TypeSpec, ValueKind, type_spec
from datacontracts.schema.members import MISSING, DataMember, read_field
from datacontracts.schema.record import Record
from datacontracts.schema.registry import MetadataRegistry, register_field, registry
from datacontracts.schema.resolver import Index, effective_descriptors, has_schema

__all__ = [
    "FieldDescriptor",
    "Direction",
    "SerializeOption",
    "TypeSpec",
    "ValueKind",
    "type_spec",
    "MISSING",
    "DataMember",
    "read_field",
    "Record",
    "MetadataRegistry",
    "register_field",
    "registry",
    "Index",
    "effective_descriptors",
    "has_schema",
]
