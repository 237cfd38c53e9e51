"""Builder that turns a factory definition into a row of its table."""

from __future__ import annotations

import logging
from typing import Any, Callable

from sqlalchemy import Column

from rowsmith.adapters.schema import (
    Record,
    column_is_unique,
    column_max_length,
)
from rowsmith.domain.definitions import FactoryDefinition
from rowsmith.domain.generators import ValueGenerator
from rowsmith.domain.transients import TransientAttributes

from .base import BuilderConfiguration

logger = logging.getLogger(__name__)


def _database_managed(column: Column[Any]) -> bool:
    return (
        column.default is not None
        or column.server_default is not None
        or column.computed is not None
        or column.identity is not None
        or column is column.table.autoincrement_column
    )


class RecordBuilder(BuilderConfiguration):
    """Build, insert or merely compute attributes for one row.

    Attribute precedence, highest first: explicit ``set`` values,
    per-build generators, the most recent active trait, the definition
    (child over parent), and finally type-driven generation for columns
    that still need a value.
    """

    def clone(self) -> "RecordBuilder":
        """Return an independent copy of this builder's configuration."""

        clone = RecordBuilder(self.table, **self._collaborators())
        self._copy_configuration_to(clone)
        return clone

    # ------------------------------------------------------------------
    # Build strategies
    # ------------------------------------------------------------------

    def build(self) -> Record:
        """Resolve attributes, run before-create callbacks, insert, run after-create callbacks."""

        definition = self._resolve_definition()
        record = Record(self.table, self._resolve_attributes(definition))
        transients = TransientAttributes(self.transient_attrs)

        self._run_callbacks(
            definition.resolve_before_create_callbacks(self.active_traits),
            definition.resolve_transient_before_create_callbacks(self.active_traits),
            record,
            transients,
        )
        persisted = self.persister.insert(record)
        self._run_callbacks(
            definition.resolve_after_create_callbacks(self.active_traits),
            definition.resolve_transient_after_create_callbacks(self.active_traits),
            persisted,
            transients,
        )
        return persisted

    def build_without_insert(self) -> Record:
        """Resolve attributes into a record; no insert, no callbacks."""

        definition = self._resolve_definition()
        return Record(self.table, self._resolve_attributes(definition))

    def build_attributes(self) -> dict[str, Any]:
        """Return the resolved column-key -> value map only."""

        return self._resolve_attributes(self._resolve_definition())

    def times(
        self,
        count: int,
        customizer: Callable[["RecordBuilder", int], Any] | None = None,
    ) -> list[Record]:
        """Build *count* records, each from a fresh clone of this builder."""

        records: list[Record] = []
        for index in range(count):
            builder = self.clone()
            if customizer is not None:
                customizer(builder, index)
            records.append(builder.build())
        return records

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _resolve_definition(self) -> FactoryDefinition:
        if self.factory_name is not None:
            return self.registry.resolve(self.factory_name)
        return self.registry.find(self.table) or FactoryDefinition.bare(self.table)

    def _generate(self, key: str, generator: ValueGenerator[Any]) -> Any:
        column = self.table.c[key]
        return generator(column_max_length(column), column_is_unique(column))

    def _resolve_attributes(self, definition: FactoryDefinition) -> dict[str, Any]:
        defaults, generators = definition.resolve_fields(self.active_traits)
        values: dict[str, Any] = {}

        for key, value in defaults.items():
            values[key] = value
        for key, generator in generators.items():
            if key in self.explicit_values or key in self.per_builder_generators:
                continue
            values[key] = self._generate(key, generator)
        for key, generator in self.per_builder_generators.items():
            if key in self.explicit_values:
                continue
            values[key] = self._generate(key, generator)
        values.update(self.explicit_values)

        self._fill_missing(values)
        return values

    def _fill_missing(self, values: dict[str, Any]) -> None:
        for column in self.table.c:
            if column.key in values or _database_managed(column):
                continue
            # Foreign keys must reference an existing row; the caller supplies them.
            if column.foreign_keys:
                continue
            if column.nullable and not self.should_generate_nullables:
                continue
            generator = self.type_generators.generator_for(column)
            if generator is not None:
                values[column.key] = self._generate(column.key, generator)

    @staticmethod
    def _run_callbacks(
        plain: list[Callable[[Record], Any]],
        transient_aware: list[Callable[[Record, TransientAttributes], Any]],
        record: Record,
        transients: TransientAttributes,
    ) -> None:
        # Plain callbacks run before transient-aware ones within a phase.
        for callback in plain:
            callback(record)
        for callback in transient_aware:
            callback(record, transients)
        if plain or transient_aware:
            logger.debug(
                "Ran %d callback(s) for %s",
                len(plain) + len(transient_aware),
                record.table.name,
            )


__all__ = ["RecordBuilder"]
