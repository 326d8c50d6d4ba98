"""
DataContract — the public record base class.

Manifesto:
    Application code should declare a record once and get validation,
    dict/JSON import and dict/JSON export from the class itself. The
    engines live in :mod:`datacontracts.engine`; ``DataContract`` is the thin
    wrapper that exposes them as methods.

Architecture:
    ::

        ┌────────────────────────────────────────────────────────────┐
        │                       DataContract                          │
        ├────────────────────────────────────────────────────────────┤
        │  from_dict(tree)   → resolve_type → deserialize             │
        │  from_json(text)   → codec.loads  → from_dict               │
        │  to_dict()         → serialize                              │
        │  to_json()         → to_dict      → codec.dumps             │
        │  find_first_invalid_field() → InvalidField | None           │
        │  validate()        → raises InvalidValueError               │
        └────────────────────────────────────────────────────────────┘

Examples:
    Declaring and round-tripping a contract:

    >>> class Release(DataContract):
    ...     version: str = DataMember()
    ...     takes: int = DataMember()
    >>> Release.from_dict({"version": "4.0", "takes": "100"}).takes
    100
    >>> Release(version="4.0", takes=100).to_json()
    '{"version":"4.0","takes":100}'

    Validation:

    >>> class Page(DataContract):
    ...     size: int = DataMember(name="page_size", validate=lambda k: k > 0)
    >>> Page(size=-1).find_first_invalid_field()
    InvalidField(path='page_size', value=-1)

    Polymorphic selection:

    >>> class Shape(DataContract):
    ...     kind: str = DataMember(name="type")
    ...     @classmethod
    ...     def resolve_type(cls, tree):
    ...         return SHAPES.get((tree or {}).get("type"), cls)

Guardrails:
    ❌ DON'T: Annotate without ``DataMember`` and expect the field to marshal
    ✅ DO: Every marshalled member is a ``DataMember``

    ❌ DON'T: Rely on ``from_dict`` to validate
    ✅ DO: Call ``validate()`` after building an instance from untrusted input

Tags:
    datacontracts, contract, public-api, json

Doc-Types:
    - API Reference
    - Getting Started
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from datacontracts import codec
from datacontracts.engine.deserializer import deserialize
from datacontracts.engine.serializer import serialize
from datacontracts.engine.validation import InvalidField, find_first_invalid_field, validate
from datacontracts.schema.record import Record

C = TypeVar("C", bound="DataContract")


class DataContract(Record):
    """Record base with marshalling and validation methods."""

    @classmethod
    def from_dict(cls: type[C], tree: Mapping[str, Any] | None) -> C:
        """Build an instance (of the type ``resolve_type`` selects) from a tree."""
        return deserialize(cls, tree)

    @classmethod
    def from_json(cls: type[C], text: str | bytes) -> C:
        return cls.from_dict(codec.loads(text))

    def to_dict(self) -> dict[str, Any]:
        return serialize(self)

    def to_json(self, **options: Any) -> str:
        """Serialize to JSON text; ``indent``/``ensure_ascii`` override settings."""
        return codec.dumps(self.to_dict(), **options)

    def find_first_invalid_field(self) -> InvalidField | None:
        return find_first_invalid_field(self)

    def validate(self) -> None:
        """Raise ``InvalidValueError`` for the first invalid member."""
        validate(self)
