"""Descriptor Resolver — effective field descriptors of a record type.

Walks ``record_type.__mro__`` from the type itself upward and merges the
local maps kept by the registry. The first definition seen for a name wins,
so a subclass redeclaring a member fully replaces the ancestor's descriptor
while members it does not redeclare stay visible unchanged.

Iteration order of the result is the walk order: the type's own members in
declaration order, then each ancestor's (mixins included) in MRO order,
skipping names already taken.

Tags:
    datacontracts, schema, resolver, inheritance

Doc-Types:
    api-reference
"""

from __future__ import annotations

from enum import Enum

from datacontracts.schema.descriptor import FieldDescriptor
from datacontracts.schema.registry import MetadataRegistry, registry as default_registry


class Index(str, Enum):
    """Which name the effective mapping is keyed by."""

    INTERNAL = "internal"
    EXPOSED = "exposed"


def effective_descriptors(
    record_type: type,
    by: Index = Index.INTERNAL,
    *,
    registry: MetadataRegistry | None = None,
) -> dict[str, FieldDescriptor]:
    """
    Merge the local descriptors of ``record_type`` and its ancestors.

    Args:
        record_type: Type whose effective members are wanted
        by: Key the result by internal or exposed name
        registry: Registry to read (defaults to the global one)

    Returns:
        New dict, first-seen-wins along the MRO
    """
    source = registry if registry is not None else default_registry
    lookup = source.by_internal_name if by is Index.INTERNAL else source.by_exposed_name

    result: dict[str, FieldDescriptor] = {}
    for klass in record_type.__mro__:
        for name, descriptor in lookup(klass).items():
            if name not in result:
                result[name] = descriptor
    return result


def has_schema(record_type: type, *, registry: MetadataRegistry | None = None) -> bool:
    """True when any class on the MRO of ``record_type`` declares members."""
    source = registry if registry is not None else default_registry
    return any(source.is_registered(klass) for klass in record_type.__mro__)
