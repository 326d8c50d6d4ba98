"""Metadata Registry — process-wide store of declared field descriptors.

Manifesto:
Record types declare their members in many modules. The registry keeps,
for each type, the descriptors declared *on that type only*, indexed by
internal (attribute) name and separately by exposed (tree key) name.
Merging along the inheritance chain is the resolver's job; nothing is
copied here at registration time.

ARCHITECTURE
────────────
::

    register_field(owner, internal_name, descriptor)  → local maps of owner
    registry.by_internal_name(owner)                   → {internal: descriptor}
    registry.by_exposed_name(owner)                    → {exposed: descriptor}
    registry.clear()                                   → reset (for testing)

    register_field(..., resolve=build) stores a stand-in descriptor and
    calls build() on the first by_*_name lookup of the owner.

BEST PRACTICES
──────────────
- Registration happens at class-definition time (``DataMember``), before
  any instance is marshalled. Registration takes a lock. Reads take it only
  while deferred members are being settled.
- Re-registering an internal name on the same type silently replaces the
  previous descriptor.

Related modules:
    members.py   — DataMember declares fields and calls register_field
    resolver.py  — merges local maps along the MRO

Tags:
    datacontracts, schema, registry, metadata

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from datacontracts.core.logging import get_logger
from datacontracts.schema.descriptor import FieldDescriptor

logger = get_logger(__name__)


Resolver = Callable[[], FieldDescriptor]


class _LocalEntry:
    """Descriptors declared directly on one type, in declaration order."""

    __slots__ = ("by_internal", "by_exposed", "pending")

    def __init__(self) -> None:
        self.by_internal: dict[str, FieldDescriptor] = {}
        self.by_exposed: dict[str, FieldDescriptor] = {}
        self.pending: dict[str, Resolver] = {}

    def store(self, internal_name: str, descriptor: FieldDescriptor) -> FieldDescriptor | None:
        previous = self.by_internal.get(internal_name)
        if (
            previous is not None
            and previous.exposed_name != descriptor.exposed_name
            and self.by_exposed.get(previous.exposed_name) is previous
        ):
            del self.by_exposed[previous.exposed_name]
        self.by_internal[internal_name] = descriptor
        self.by_exposed[descriptor.exposed_name] = descriptor
        return previous


class MetadataRegistry:
    """Mapping from record type to its locally declared descriptors."""

    def __init__(self) -> None:
        self._entries: dict[type, _LocalEntry] = {}
        self._lock = threading.RLock()

    def register(
        self,
        owner: type,
        internal_name: str,
        descriptor: FieldDescriptor,
        *,
        resolve: Resolver | None = None,
    ) -> None:
        """Store ``descriptor`` under ``owner``'s local maps.

        A previous registration for the same internal name is replaced,
        including its exposed-name entry when the exposed name changed.

        Args:
            owner: Type declaring the member
            internal_name: Attribute name of the member
            descriptor: Descriptor to store
            resolve: Builds the final descriptor on the first lookup of
                ``owner``; ``descriptor`` stands in until then
        """
        with self._lock:
            entry = self._entries.get(owner)
            if entry is None:
                entry = _LocalEntry()
                self._entries[owner] = entry

            previous = entry.store(internal_name, descriptor)
            if resolve is not None:
                entry.pending[internal_name] = resolve
            else:
                entry.pending.pop(internal_name, None)

        logger.debug(
            "field_registered",
            owner=owner.__qualname__,
            member=internal_name,
            name=descriptor.exposed_name,
            type=descriptor.spec.label,
            replaced=previous is not None,
            deferred=resolve is not None,
        )

    def _entry(self, owner: type) -> _LocalEntry | None:
        entry = self._entries.get(owner)
        if entry is None or not entry.pending:
            return entry
        with self._lock:
            for internal_name, resolve in list(entry.pending.items()):
                descriptor = resolve()
                entry.store(internal_name, descriptor)
                del entry.pending[internal_name]
                logger.debug(
                    "field_resolved",
                    owner=owner.__qualname__,
                    member=internal_name,
                    type=descriptor.spec.label,
                )
        return entry

    def by_internal_name(self, owner: type) -> dict[str, FieldDescriptor]:
        """Local descriptors of ``owner`` keyed by internal name (no ancestors)."""
        entry = self._entry(owner)
        return dict(entry.by_internal) if entry is not None else {}

    def by_exposed_name(self, owner: type) -> dict[str, FieldDescriptor]:
        """Local descriptors of ``owner`` keyed by exposed name (no ancestors)."""
        entry = self._entry(owner)
        return dict(entry.by_exposed) if entry is not None else {}

    def is_registered(self, owner: type) -> bool:
        return owner in self._entries

    def clear(self) -> None:
        """Forget every registration. Primarily for testing."""
        with self._lock:
            self._entries.clear()
        logger.debug("registry_cleared")

    def __len__(self) -> int:
        return len(self._entries)


# Global registry
registry = MetadataRegistry()


def register_field(
    owner: type,
    internal_name: str,
    descriptor: FieldDescriptor,
    *,
    resolve: Resolver | None = None,
) -> None:
    """Register ``descriptor`` for ``owner`` in the global registry."""
    registry.register(owner, internal_name, descriptor, resolve=resolve)
