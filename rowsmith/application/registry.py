"""Registry of factory definitions with parent-chain resolution."""

from __future__ import annotations

import logging
import threading
from typing import Any

from sqlalchemy import Table

from rowsmith.domain.definitions import FactoryDefinition
from rowsmith.domain.errors import (
    CircularInheritanceError,
    DefinitionNotFoundError,
    ParentNotFoundError,
)

logger = logging.getLogger(__name__)


def registry_key(key: str | Table | Any) -> str:
    """Normalise a name, table or mapped class to a lower-cased registry key."""

    if isinstance(key, str):
        return key.lower()
    if isinstance(key, Table):
        return key.name.lower()
    table = getattr(key, "__table__", None)
    if isinstance(table, Table):
        return table.name.lower()
    raise TypeError(f"Cannot derive a factory name from {key!r}")


class FactoryDefinitionRegistry:
    """Case-insensitive name -> :class:`FactoryDefinition` store.

    Registration overwrites unconditionally. Resolution never writes back:
    a definition with a parent is flattened on every call, from a fresh
    visited set, so concurrent ``register``/``resolve`` calls need no
    external locking.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, FactoryDefinition] = {}
        self._lock = threading.Lock()

    def register(self, key: str | Table, definition: FactoryDefinition) -> None:
        normalised = registry_key(key)
        with self._lock:
            replaced = normalised in self._definitions
            self._definitions[normalised] = definition
        logger.debug(
            "%s factory definition %r (parent=%r)",
            "Replaced" if replaced else "Registered",
            normalised,
            definition.parent_name,
        )

    def find(self, key: str | Table) -> FactoryDefinition | None:
        """Like :meth:`resolve`, but return ``None`` when *key* is unregistered."""

        normalised = registry_key(key)
        definition = self._lookup(normalised)
        if definition is None:
            return None
        if definition.is_root:
            return definition
        return self._merge_with_parent(definition, set())

    def resolve(self, key: str | Table) -> FactoryDefinition:
        """Return the definition for *key* with its parent chain flattened.

        Raises:
            DefinitionNotFoundError: nothing is registered under *key*.
            ParentNotFoundError: a parent in the chain is unregistered.
            CircularInheritanceError: the parent chain revisits a name.
        """

        definition = self.find(key)
        if definition is None:
            raise DefinitionNotFoundError(registry_key(key))
        return definition

    def names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._definitions)

    def __contains__(self, key: object) -> bool:
        try:
            normalised = registry_key(key)
        except TypeError:
            return False
        return self._lookup(normalised) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._definitions)

    def _lookup(self, normalised: str) -> FactoryDefinition | None:
        with self._lock:
            return self._definitions.get(normalised)

    def _merge_with_parent(
        self, child: FactoryDefinition, visited: set[str]
    ) -> FactoryDefinition:
        assert child.parent_name is not None
        parent_key = child.parent_name.lower()
        if parent_key in visited:
            raise CircularInheritanceError(child.parent_name)
        visited.add(parent_key)

        parent = self._lookup(parent_key)
        if parent is None:
            raise ParentNotFoundError(child.parent_name)
        if not parent.is_root:
            parent = self._merge_with_parent(parent, visited)

        logger.debug("Merged factory definition over parent %r", parent_key)
        return child.merged_over(parent)


__all__ = ["FactoryDefinitionRegistry", "registry_key"]
