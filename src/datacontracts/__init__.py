"""datacontracts -- schema-driven marshalling for Python record types.

Manifesto:
    A record type declares, member by member, how it maps to and from a
    plain key/value tree (the shape ``json.loads`` produces), and which
    constraints its values must satisfy. One registry of member metadata
    drives three recursive traversals -- validation, deserialization and
    serialization -- including nested records, typed collections,
    polymorphic type selection, and inheritance-aware member shadowing.

Architecture::

    Layer 1 -- Core
        core/errors.py        ContractError hierarchy (InvalidValueError, ...)
        core/logging.py       structlog configuration and loggers
        core/settings.py      ContractSettings (pydantic-settings)

    Layer 2 -- Schema
        schema/kinds.py       ValueKind, TypeSpec, Direction
        schema/descriptor.py  FieldDescriptor
        schema/registry.py    MetadataRegistry (per-type local members)
        schema/resolver.py    effective_descriptors (MRO merge)
        schema/members.py     DataMember declaration descriptor
        schema/record.py      Record base type, resolve_type hook

    Layer 3 -- Engines
        engine/validation.py    find_first_invalid_field / validate
        engine/deserializer.py  deserialize (tree -> instance)
        engine/serializer.py    serialize (instance -> tree)

    Layer 4 -- Surfaces
        contract.py           DataContract public base class
        codec.py              JSON text codec
        cli/                  ``datacontracts`` command line

Examples:
    >>> from datacontracts import DataContract, DataMember
    >>> class Release(DataContract):
    ...     version: str = DataMember()
    ...     takes: int = DataMember()
    >>> Release.from_json('{"version": "4.0", "takes": "100"}').takes
    100
"""

from datacontracts.contract import DataContract
from datacontracts.core.errors import (
    ContractError,
    ContractNotFoundError,
    DecodeError,
    EncodeError,
    InvalidValueError,
)
from datacontracts.engine import (
    InvalidField,
    deserialize,
    find_first_invalid_field,
    serialize,
    validate,
)
from datacontracts.schema import (
    MISSING,
    DataMember,
    Direction,
    FieldDescriptor,
    Record,
    SerializeOption,
    TypeSpec,
    ValueKind,
    effective_descriptors,
    register_field,
)

__version__ = "0.1.0"

__all__ = [
    "DataContract",
    "DataMember",
    "Direction",
    "SerializeOption",
    "FieldDescriptor",
    "Record",
    "TypeSpec",
    "ValueKind",
    "MISSING",
    "register_field",
    "effective_descriptors",
    "deserialize",
    "serialize",
    "validate",
    "find_first_invalid_field",
    "InvalidField",
    "ContractError",
    "ContractNotFoundError",
    "DecodeError",
    "EncodeError",
    "InvalidValueError",
    "__version__",
]
