"""Field descriptors: per-member marshalling metadata.

Tags:
    datacontracts, schema, descriptor, metadata

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from datacontracts.schema.kinds import UNSPECIFIED, Direction, TypeSpec

Validator = Callable[[Any], bool]
Hook = Callable[[Any], Any]


def normalize_validators(validate: Validator | Iterable[Validator] | None) -> tuple[Validator, ...]:
    """Accept one predicate, an ordered collection of them, or nothing."""
    if validate is None:
        return ()
    if callable(validate):
        return (validate,)
    validators = tuple(validate)
    for checker in validators:
        if not callable(checker):
            raise TypeError(f"Validator {checker!r} is not callable")
    return validators


@dataclass(frozen=True)
class FieldDescriptor:
    """Metadata describing how one member maps to and from the tree.

    Attributes:
        internal_name: Attribute name on the instance
        exposed_name: Key used in the external tree (defaults to internal_name)
        spec: Value kind, with element specs for collections
        validators: Predicates that must all hold, checked in order
        deserializer: Total override for deserialization
        serializer: Total override for serialization
        required: ``None`` is invalid when set
        direction: Traversals this member takes part in
    """

    internal_name: str
    exposed_name: str = ""
    spec: TypeSpec = UNSPECIFIED
    validators: tuple[Validator, ...] = field(default=(), compare=False)
    deserializer: Hook | None = field(default=None, compare=False)
    serializer: Hook | None = field(default=None, compare=False)
    required: bool = False
    direction: Direction = Direction.BOTH

    def __post_init__(self) -> None:
        if not self.exposed_name:
            object.__setattr__(self, "exposed_name", self.internal_name)
        object.__setattr__(self, "direction", Direction(self.direction))

    @classmethod
    def for_element(cls, spec: TypeSpec | None, name: str = "") -> FieldDescriptor:
        """Ad hoc descriptor for a sequence item, map key or map value.

        Carries only the spec: no validators, hooks, requiredness or direction.
        """
        return cls(internal_name=name or "<element>", spec=spec or UNSPECIFIED)

    @property
    def serializable(self) -> bool:
        return bool(self.direction & Direction.SERIALIZE_ONLY)

    @property
    def deserializable(self) -> bool:
        return bool(self.direction & Direction.DESERIALIZE_ONLY)

    def item_descriptor(self) -> FieldDescriptor | None:
        if self.spec.item is None:
            return None
        return FieldDescriptor.for_element(self.spec.item, "item")

    def key_descriptor(self) -> FieldDescriptor | None:
        if self.spec.key is None:
            return None
        return FieldDescriptor.for_element(self.spec.key, "key")

    def value_descriptor(self) -> FieldDescriptor | None:
        if self.spec.value is None:
            return None
        return FieldDescriptor.for_element(self.spec.value, "value")

    def to_dict(self) -> dict[str, Any]:
        """Summary for display (CLI ``describe``) and logging."""
        return {
            "member": self.internal_name,
            "name": self.exposed_name,
            "type": self.spec.label,
            "required": self.required,
            "direction": self.direction.name,
            "validators": len(self.validators),
            "custom_serialize": self.serializer is not None,
            "custom_deserialize": self.deserializer is not None,
        }
