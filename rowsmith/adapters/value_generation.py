"""Type-driven value generation for columns a factory leaves unset.

The builder asks :class:`TypeGeneratorRegistry` for a generator whenever a
column still needs a value after explicit values, per-build generators,
traits and definition defaults have been applied. Generators are built on
Faker; ``is_unique`` routes through ``Faker.unique``.
"""

from __future__ import annotations

import logging
from datetime import UTC
from typing import Any, Callable, TypeAlias

from faker import Faker
from sqlalchemy import Column
from sqlalchemy.types import (
    JSON,
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Enum,
    Float,
    Integer,
    LargeBinary,
    Numeric,
    SmallInteger,
    String,
    Time,
    TypeEngine,
    Uuid,
)

from rowsmith.domain.generators import ValueGenerator

logger = logging.getLogger(__name__)

GeneratorFactory: TypeAlias = Callable[[TypeEngine[Any]], ValueGenerator[Any]]


class TypeGeneratorRegistry:
    """Map SQLAlchemy column types to value generators.

    Lookup walks the MRO of the column's type class, so dialect-specific
    subclasses (``VARCHAR``, ``postgresql.UUID`` ...) resolve to the generic
    entry unless a more specific one was registered.
    """

    def __init__(self, faker: Faker | None = None, *, string_max_length: int = 32) -> None:
        self.faker = faker or Faker()
        self._string_max_length = string_max_length
        self._factories: dict[type, GeneratorFactory] = {}
        self._register_defaults()

    def register(self, type_class: type[TypeEngine[Any]], generator: ValueGenerator[Any]) -> None:
        """Use *generator* for every column whose type derives from *type_class*."""

        self._factories[type_class] = lambda _type: generator

    def register_factory(self, type_class: type[TypeEngine[Any]], factory: GeneratorFactory) -> None:
        """Register a factory that builds a generator from the column type instance."""

        self._factories[type_class] = factory

    def generator_for(self, column: Column[Any]) -> ValueGenerator[Any] | None:
        for klass in type(column.type).__mro__:
            factory = self._factories.get(klass)
            if factory is not None:
                return factory(column.type)
        logger.debug("No generator for %s.%s (%r)", column.table.name, column.key, column.type)
        return None

    def reset_unique(self) -> None:
        """Forget values already handed out for unique columns."""

        self.faker.unique.clear()

    def _source(self, is_unique: bool) -> Any:
        return self.faker.unique if is_unique else self.faker

    # ------------------------------------------------------------------
    # Built-in generators
    # ------------------------------------------------------------------

    def _register_defaults(self) -> None:
        self._factories.update(
            {
                String: self._string,
                Enum: self._enum,
                Integer: self._integer(2_147_483_647),
                SmallInteger: self._integer(32_767),
                BigInteger: self._integer(9_223_372_036_854_775_807),
                Float: self._float,
                Numeric: self._numeric,
                Boolean: lambda _type: lambda max_length, is_unique: self.faker.pybool(),
                Date: lambda _type: lambda max_length, is_unique: self.faker.date_object(),
                Time: lambda _type: lambda max_length, is_unique: self.faker.time_object(),
                DateTime: self._datetime,
                Uuid: self._uuid,
                JSON: lambda _type: lambda max_length, is_unique: self.faker.pydict(
                    nb_elements=3, value_types=[str, int]
                ),
                LargeBinary: lambda _type: lambda max_length, is_unique: self.faker.binary(
                    length=min(max_length or 16, 16)
                ),
            }
        )

    def _string(self, type_: TypeEngine[Any]) -> ValueGenerator[str]:
        def generate(max_length: int | None, is_unique: bool) -> str:
            limit = min(max_length or self._string_max_length, self._string_max_length)
            return self._source(is_unique).pystr(min_chars=1, max_chars=max(limit, 1))

        return generate

    def _enum(self, type_: TypeEngine[Any]) -> ValueGenerator[Any]:
        enum_class = getattr(type_, "enum_class", None)
        choices: list[Any] = list(enum_class) if enum_class is not None else list(type_.enums)  # type: ignore[attr-defined]

        def generate(max_length: int | None, is_unique: bool) -> Any:
            return self.faker.random_element(choices)

        return generate

    def _integer(self, upper: int) -> GeneratorFactory:
        def factory(type_: TypeEngine[Any]) -> ValueGenerator[int]:
            def generate(max_length: int | None, is_unique: bool) -> int:
                return self._source(is_unique).random_int(min=1, max=upper)

            return generate

        return factory

    def _float(self, type_: TypeEngine[Any]) -> ValueGenerator[float]:
        def generate(max_length: int | None, is_unique: bool) -> float:
            return self._source(is_unique).pyfloat(min_value=0, max_value=10_000)

        return generate

    def _numeric(self, type_: TypeEngine[Any]) -> ValueGenerator[Any]:
        precision = getattr(type_, "precision", None) or 10
        scale = getattr(type_, "scale", None) or 2
        left_digits = max(precision - scale, 1)

        def generate(max_length: int | None, is_unique: bool) -> Any:
            return self._source(is_unique).pydecimal(
                left_digits=left_digits, right_digits=scale, positive=True
            )

        return generate

    def _datetime(self, type_: TypeEngine[Any]) -> ValueGenerator[Any]:
        tzinfo = UTC if getattr(type_, "timezone", False) else None

        def generate(max_length: int | None, is_unique: bool) -> Any:
            return self.faker.date_time(tzinfo=tzinfo)

        return generate

    def _uuid(self, type_: TypeEngine[Any]) -> ValueGenerator[Any]:
        as_uuid = getattr(type_, "as_uuid", True)

        def generate(max_length: int | None, is_unique: bool) -> Any:
            return self.faker.uuid4(cast_to=None if as_uuid else str)

        return generate


__all__ = ["GeneratorFactory", "TypeGeneratorRegistry"]
