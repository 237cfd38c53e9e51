"""Explicit owner of a factory registry and its collaborators.

A :class:`FactoryContext` is created once per test process or test scope
and passed around explicitly; rowsmith keeps no module-level registry.

Usage:
    ctx = FactoryContext(engine)
    ctx.define(authors, lambda f: f.set(authors.c.name, "Ada"))
    author = ctx.create(authors, Author).trait("european").build()
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from faker import Faker
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import Session

from rowsmith.adapters.persistence import RecordPersister, SQLAlchemyRecordPersister
from rowsmith.adapters.schema import resolve_table
from rowsmith.adapters.value_generation import TypeGeneratorRegistry
from rowsmith.config.settings import FactorySettings, get_settings
from rowsmith.domain.definitions import FactoryDefinition

from .builders import ModelBuilder, RecordBuilder
from .declarations import FactoryDefinitionBuilder
from .registry import FactoryDefinitionRegistry

M = TypeVar("M")


class FactoryContext:
    """Registry, persister and value generation for one test scope."""

    def __init__(
        self,
        bind: Engine | Connection | Session | None = None,
        *,
        persister: RecordPersister | None = None,
        settings: FactorySettings | None = None,
        type_generators: TypeGeneratorRegistry | None = None,
    ) -> None:
        if persister is None:
            if bind is None:
                raise ValueError("FactoryContext needs a bind or a persister")
            persister = SQLAlchemyRecordPersister(bind)
        self.settings = settings or get_settings()
        self.persister = persister
        self.registry = FactoryDefinitionRegistry()
        self.type_generators = type_generators or self._default_type_generators()

    def _default_type_generators(self) -> TypeGeneratorRegistry:
        faker = Faker(self.settings.faker_locale)
        if self.settings.faker_seed is not None:
            faker.seed_instance(self.settings.faker_seed)
        return TypeGeneratorRegistry(
            faker, string_max_length=self.settings.string_max_length
        )

    def define(
        self,
        target: Any,
        configure: Callable[[FactoryDefinitionBuilder], Any],
        *,
        name: str | None = None,
    ) -> FactoryDefinition:
        """Declare and register a definition for *target*.

        The definition is stored under *name* when given, otherwise under
        the table name. Redefining a name replaces the earlier definition.
        """

        table = resolve_table(target)
        builder = FactoryDefinitionBuilder(table)
        configure(builder)
        definition = builder.build()
        self.registry.register(name or table.name, definition)
        return definition

    def register(self, name: str, definition: FactoryDefinition) -> None:
        self.registry.register(name, definition)

    def create_record(self, target: Any, *, factory: str | None = None) -> RecordBuilder:
        """Return a record builder for *target*.

        Without *factory* the definition registered under the table name is
        used when there is one; a named *factory* must be registered.
        """

        return RecordBuilder(
            resolve_table(target),
            registry=self.registry,
            persister=self.persister,
            type_generators=self.type_generators,
            factory_name=factory,
            generate_nullables=self.settings.generate_nullables,
        )

    def create(
        self, target: Any, model_type: type[M], *, factory: str | None = None
    ) -> ModelBuilder[M]:
        """Return a builder projecting rows of *target* into *model_type*."""

        return ModelBuilder(
            resolve_table(target),
            model_type,
            registry=self.registry,
            persister=self.persister,
            type_generators=self.type_generators,
            factory_name=factory,
            generate_nullables=self.settings.generate_nullables,
        )


__all__ = ["FactoryContext"]
