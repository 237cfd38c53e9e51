"""Declaration surface used to populate definitions and traits.

Usage:
    def author_factory(f: FactoryDefinitionBuilder) -> None:
        f.set(authors.c.name, "Ada").set(authors.c.country, "UK")
        f.trait("european", lambda t: t.set(authors.c.country, "DE"))
        f.after_create(lambda record, transients: ...)

    ctx.define(authors, author_factory)
"""

from __future__ import annotations

from typing import Any, Callable

from sqlalchemy import Table

from rowsmith.adapters.schema import column_key
from rowsmith.domain.callbacks import (
    RecordCallback,
    TransientAwareCallback,
    accepts_transients,
)
from rowsmith.domain.definitions import FactoryDefinition
from rowsmith.domain.generators import ValueGenerator
from rowsmith.domain.traits import Trait


class _LayerBuilder:
    """Shared fields/callbacks bookkeeping for definitions and traits."""

    def __init__(self, table: Table) -> None:
        self.table = table
        self._values: dict[str, Any] = {}
        self._generators: dict[str, ValueGenerator[Any]] = {}
        self._before: list[RecordCallback] = []
        self._after: list[RecordCallback] = []
        self._transient_before: list[TransientAwareCallback] = []
        self._transient_after: list[TransientAwareCallback] = []

    def set(self, field: Any, value: Any):
        """Declare a literal value; replaces an earlier generator for the field."""

        key = column_key(self.table, field)
        self._generators.pop(key, None)
        self._values[key] = value
        return self

    def with_generator(self, field: Any, generator: ValueGenerator[Any]):
        """Declare a generator; replaces an earlier literal for the field."""

        key = column_key(self.table, field)
        self._values.pop(key, None)
        self._generators[key] = generator
        return self

    def before_create(self, callback: Callable[..., Any], *, transient: bool | None = None):
        """Run *callback* before the record is inserted.

        Callbacks taking ``(record, transients)`` are registered as
        transient-aware unless *transient* says otherwise.
        """

        if self._is_transient(callback, transient):
            self._transient_before.append(callback)
        else:
            self._before.append(callback)
        return self

    def after_create(self, callback: Callable[..., Any], *, transient: bool | None = None):
        """Run *callback* after the record is inserted."""

        if self._is_transient(callback, transient):
            self._transient_after.append(callback)
        else:
            self._after.append(callback)
        return self

    @staticmethod
    def _is_transient(callback: Callable[..., Any], transient: bool | None) -> bool:
        return accepts_transients(callback) if transient is None else transient


class TraitBuilder(_LayerBuilder):
    def __init__(self, table: Table, name: str) -> None:
        super().__init__(table)
        self.name = name

    def build(self) -> Trait:
        return Trait(
            name=self.name,
            overrides=self._values,
            generators=self._generators,
            before_create_callbacks=tuple(self._before),
            after_create_callbacks=tuple(self._after),
            transient_before_create_callbacks=tuple(self._transient_before),
            transient_after_create_callbacks=tuple(self._transient_after),
        )


class FactoryDefinitionBuilder(_LayerBuilder):
    """Collects declarations and produces an immutable :class:`FactoryDefinition`."""

    def __init__(self, table: Table) -> None:
        super().__init__(table)
        self._parent_name: str | None = None
        self._traits: dict[str, Trait] = {}

    def parent(self, name: str) -> "FactoryDefinitionBuilder":
        """Inherit defaults, generators, traits and callbacks from *name*."""

        self._parent_name = name
        return self

    def trait(
        self, name: str, configure: Callable[[TraitBuilder], Any]
    ) -> "FactoryDefinitionBuilder":
        """Declare a named trait; redeclaring a name replaces the earlier trait."""

        builder = TraitBuilder(self.table, name)
        configure(builder)
        self._traits[name] = builder.build()
        return self

    def build(self) -> FactoryDefinition:
        return FactoryDefinition(
            table=self.table,
            parent_name=self._parent_name,
            default_values=self._values,
            generators=self._generators,
            traits=self._traits,
            before_create_callbacks=tuple(self._before),
            after_create_callbacks=tuple(self._after),
            transient_before_create_callbacks=tuple(self._transient_before),
            transient_after_create_callbacks=tuple(self._transient_after),
        )


__all__ = ["FactoryDefinitionBuilder", "TraitBuilder"]
