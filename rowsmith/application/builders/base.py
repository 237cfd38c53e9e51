"""Per-build configuration shared by record and model builders."""

from __future__ import annotations

from typing import Any, Self

from sqlalchemy import Table

from rowsmith.adapters.persistence import RecordPersister
from rowsmith.adapters.schema import column_key
from rowsmith.adapters.value_generation import TypeGeneratorRegistry
from rowsmith.application.registry import FactoryDefinitionRegistry
from rowsmith.domain.generators import ValueGenerator


class BuilderConfiguration:
    """Mutable configuration owned by exactly one builder.

    ``explicit_values`` beat ``per_builder_generators``, which beat whatever
    the resolved definition and its active traits provide. Clones copy
    every collection so that customising one clone never affects another.
    """

    def __init__(
        self,
        table: Table,
        *,
        registry: FactoryDefinitionRegistry,
        persister: RecordPersister,
        type_generators: TypeGeneratorRegistry,
        factory_name: str | None = None,
        generate_nullables: bool = False,
    ) -> None:
        self.table = table
        self.registry = registry
        self.persister = persister
        self.type_generators = type_generators
        self.factory_name = factory_name
        self.explicit_values: dict[str, Any] = {}
        self.per_builder_generators: dict[str, ValueGenerator[Any]] = {}
        self.active_traits: list[str] = []
        self.transient_attrs: dict[str, Any] = {}
        self.should_generate_nullables = generate_nullables

    def set(self, field: Any, value: Any) -> Self:
        """Set an explicit value; the last call per field wins."""

        self.explicit_values[column_key(self.table, field)] = value
        return self

    def with_generator(self, field: Any, generator: ValueGenerator[Any]) -> Self:
        """Generate *field* with *generator* unless an explicit value is set."""

        self.per_builder_generators[column_key(self.table, field)] = generator
        return self

    def trait(self, name: str) -> Self:
        """Activate trait *name*; traits apply in the order they were added."""

        self.active_traits.append(name)
        return self

    def traits(self, *names: str) -> Self:
        self.active_traits.extend(names)
        return self

    def transient_attr(self, name: str, value: Any) -> Self:
        """Pass *name* to transient-aware callbacks without persisting it."""

        self.transient_attrs[name] = value
        return self

    def generate_nullables(self, generate: bool = True) -> Self:
        self.should_generate_nullables = generate
        return self

    def _collaborators(self) -> dict[str, Any]:
        return {
            "registry": self.registry,
            "persister": self.persister,
            "type_generators": self.type_generators,
            "factory_name": self.factory_name,
            "generate_nullables": self.should_generate_nullables,
        }

    def _copy_configuration_to(self, other: "BuilderConfiguration") -> None:
        other.should_generate_nullables = self.should_generate_nullables
        other.explicit_values = dict(self.explicit_values)
        other.per_builder_generators = dict(self.per_builder_generators)
        other.active_traits = list(self.active_traits)
        other.transient_attrs = dict(self.transient_attrs)


__all__ = ["BuilderConfiguration"]
