"""DataMember — declarative member registration.

``DataMember`` is a data descriptor placed on a record class body. When the
class is created Python calls ``__set_name__``, which builds the member's
:class:`FieldDescriptor` and writes it into the metadata registry. Values
live in the instance ``__dict__`` under the attribute name, so a member that
was never assigned is *absent* (reads return ``None``) while one assigned
``None`` is present and null.

Examples:
    >>> class Order(DataContract):
    ...     id: str = DataMember(required=True)
    ...     total: float = DataMember(name="amount", validate=lambda v: v >= 0)
    ...     lines: list = DataMember(item_type=OrderLine)
    ...     tags: dict[str, int] = DataMember()

The member type comes from ``type=`` when given, otherwise from the class
annotation for the attribute; ``item_type`` implies a sequence and
``key_type``/``value_type`` imply a mapping. String annotations are resolved
with :func:`typing.get_type_hints`; one naming a class defined later in the
module is resolved on the first registry lookup instead, and raises
``TypeError`` if the name is still undefined then.

Tags:
    datacontracts, schema, declaration, descriptor-protocol

Doc-Types:
    api-reference
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Iterable
from typing import Any

from datacontracts.schema.descriptor import FieldDescriptor, Hook, Validator, normalize_validators
from datacontracts.schema.kinds import UNSPECIFIED, Direction, TypeSpec, ValueKind, type_spec
from datacontracts.schema.registry import register_field


class _Missing:
    """Sentinel for a member that was never assigned."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def _declared_annotation(owner: type, name: str) -> Any:
    """Resolved annotation of ``name`` declared on ``owner`` itself, or None.

    Raises:
        NameError: the annotation names something not defined yet
    """
    if name not in inspect.get_annotations(owner):
        return None
    return typing.get_type_hints(owner, localns={owner.__name__: owner})[name]


class DataMember:
    """Declare a record member and how it is marshalled.

    Args:
        name: Key in the external tree (defaults to the attribute name)
        type: Member type (``int``, ``str``, ``list[X]``, a record class,
            a ``ValueKind`` or a ``TypeSpec``); defaults to the annotation
        item_type: Element type of a sequence member
        key_type: Key type of a mapping member
        value_type: Value type of a mapping member
        serialize: Custom export function, bypasses default rules
        deserialize: Custom import function, bypasses default coercion
        validate: A predicate or an ordered list of predicates
        required: Reject ``None``/absent values during validation
        serialize_option: ``Direction`` flags (default ``BOTH``)
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        type: Any = None,
        item_type: Any = None,
        key_type: Any = None,
        value_type: Any = None,
        serialize: Hook | None = None,
        deserialize: Hook | None = None,
        validate: Validator | Iterable[Validator] | None = None,
        required: bool = False,
        serialize_option: Direction = Direction.BOTH,
    ) -> None:
        self._name = name
        self._type = type
        self._item_type = item_type
        self._key_type = key_type
        self._value_type = value_type
        self._serialize = serialize
        self._deserialize = deserialize
        self._validators = normalize_validators(validate)
        self._required = required
        self._direction = Direction(serialize_option)

        if type is not None:
            explicit = type_spec(type)
            if item_type is not None and explicit.kind is not ValueKind.SEQUENCE:
                raise TypeError(f"item_type requires a sequence member, got {explicit.label}")
            if (key_type is not None or value_type is not None) and explicit.kind is not ValueKind.MAPPING:
                raise TypeError(f"key_type/value_type require a mapping member, got {explicit.label}")
        if item_type is not None and (key_type is not None or value_type is not None):
            raise TypeError("A member cannot have both item_type and key_type/value_type")

        self.attribute: str | None = None
        self.owner: type | None = None
        self.descriptor: FieldDescriptor | None = None

    def _spec_for(self, owner: type, attribute: str) -> TypeSpec:
        if self._item_type is not None:
            return TypeSpec.sequence(self._item_type)

        hint = self._type if self._type is not None else _declared_annotation(owner, attribute)
        spec = type_spec(hint) if hint is not None else UNSPECIFIED

        if self._key_type is not None or self._value_type is not None:
            base = spec if spec.kind is ValueKind.MAPPING else TypeSpec(ValueKind.MAPPING)
            return TypeSpec(
                ValueKind.MAPPING,
                key=type_spec(self._key_type) if self._key_type is not None else base.key,
                value=type_spec(self._value_type) if self._value_type is not None else base.value,
            )
        return spec

    def _build(self, spec: TypeSpec) -> FieldDescriptor:
        return FieldDescriptor(
            internal_name=self.attribute,
            exposed_name=self._name or self.attribute,
            spec=spec,
            validators=self._validators,
            deserializer=self._deserialize,
            serializer=self._serialize,
            required=self._required,
            direction=self._direction,
        )

    def _resolve(self) -> FieldDescriptor:
        """Build the final descriptor once every annotated name exists."""
        try:
            spec = self._spec_for(self.owner, self.attribute)
        except NameError as exc:
            raise TypeError(
                f"Cannot resolve the annotation of {self.owner.__qualname__}.{self.attribute}"
                f" ({exc}); pass type= to DataMember"
            ) from exc
        self.descriptor = self._build(spec)
        return self.descriptor

    def __set_name__(self, owner: type, attribute: str) -> None:
        self.attribute = attribute
        self.owner = owner
        try:
            spec = self._spec_for(owner, attribute)
        except NameError:
            # Forward reference to a class defined later: settled on first lookup
            self.descriptor = self._build(UNSPECIFIED)
            register_field(owner, attribute, self.descriptor, resolve=self._resolve)
            return
        self.descriptor = self._build(spec)
        register_field(owner, attribute, self.descriptor)

    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.__dict__.get(self.attribute)

    def __set__(self, instance: object, value: Any) -> None:
        instance.__dict__[self.attribute] = value

    def __delete__(self, instance: object) -> None:
        try:
            del instance.__dict__[self.attribute]
        except KeyError:
            raise AttributeError(self.attribute) from None

    def __repr__(self) -> str:
        owner = self.owner.__qualname__ if self.owner is not None else "?"
        return f"DataMember({owner}.{self.attribute})"


def read_field(instance: object, name: str) -> Any:
    """Stored value of member ``name`` or ``MISSING`` when never assigned.

    Members declared with ``DataMember`` live in the instance ``__dict__``;
    members registered explicitly over plain attributes, properties or class
    defaults are read through normal attribute access.
    """
    values = getattr(instance, "__dict__", None)
    if values is not None and name in values:
        return values[name]
    attribute = getattr(type(instance), name, MISSING)
    if attribute is MISSING or isinstance(attribute, DataMember):
        return MISSING
    return getattr(instance, name, MISSING)
