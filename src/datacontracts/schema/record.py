"""Base record type.

``Record`` is the root of every schema-bearing type: it gives keyword
construction over declared members, value equality, a readable ``repr``, and
the ``resolve_type`` hook the deserializer calls to pick the concrete class
for a raw tree.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from datacontracts.schema.members import MISSING, read_field
from datacontracts.schema.resolver import effective_descriptors


class Record:
    """Base class for record types."""

    def __init__(self, **members: Any) -> None:
        if not members:
            return
        declared = effective_descriptors(type(self))
        for name, value in members.items():
            if name not in declared:
                raise TypeError(f"{type(self).__name__} has no member '{name}'")
            setattr(self, name, value)

    @classmethod
    def resolve_type(cls, tree: Mapping[str, Any] | None) -> type[Record]:
        """Pick the class to instantiate for ``tree``.

        Override in a hierarchy root to dispatch on a discriminator key::

            @classmethod
            def resolve_type(cls, tree):
                if not tree or "type" not in tree:
                    return cls
                return {"circle": Circle, "square": Square}[tree["type"]]
        """
        return cls

    def _present_members(self) -> dict[str, Any]:
        present = {}
        for name in effective_descriptors(type(self)):
            value = read_field(self, name)
            if value is not MISSING:
                present[name] = value
        return present

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._present_members() == other._present_members()

    def __repr__(self) -> str:
        members = ", ".join(f"{name}={value!r}" for name, value in self._present_members().items())
        return f"{type(self).__name__}({members})"
