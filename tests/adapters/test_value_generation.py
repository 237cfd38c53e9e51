"""Tests for Faker-backed type-driven value generation."""

from __future__ import annotations

import enum
import uuid

import pytest
from faker import Faker
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.types import NullType

from rowsmith.adapters.value_generation import TypeGeneratorRegistry
from rowsmith.domain.generators import constant


class Genre(enum.Enum):
    FICTION = "fiction"
    POETRY = "poetry"


samples = Table(
    "samples",
    MetaData(),
    Column("code", String(5)),
    Column("body", Text),
    Column("count", Integer),
    Column("flag", Boolean),
    Column("price", Numeric(6, 2)),
    Column("stamp", DateTime(timezone=True)),
    Column("token", Uuid),
    Column("token_text", Uuid(as_uuid=False)),
    Column("kind", Enum("a", "b", name="kind")),
    Column("genre", Enum(Genre)),
    Column("payload", JSON),
    Column("opaque", NullType()),
)


@pytest.fixture
def registry() -> TypeGeneratorRegistry:
    faker = Faker()
    faker.seed_instance(7)
    return TypeGeneratorRegistry(faker, string_max_length=12)


def _generate(registry: TypeGeneratorRegistry, key: str, *, unique: bool = False):
    column = samples.c[key]
    generator = registry.generator_for(column)
    assert generator is not None
    return generator(getattr(column.type, "length", None), unique)


def test_strings_respect_column_length(registry: TypeGeneratorRegistry) -> None:
    for _ in range(20):
        value = _generate(registry, "code")
        assert isinstance(value, str) and 1 <= len(value) <= 5


def test_unbounded_strings_use_configured_cap(registry: TypeGeneratorRegistry) -> None:
    assert len(_generate(registry, "body")) <= 12


def test_scalar_types(registry: TypeGeneratorRegistry) -> None:
    assert isinstance(_generate(registry, "count"), int)
    assert isinstance(_generate(registry, "flag"), bool)
    assert _generate(registry, "price") >= 0
    assert _generate(registry, "stamp").tzinfo is not None
    assert isinstance(_generate(registry, "token"), uuid.UUID)
    assert isinstance(_generate(registry, "token_text"), str)
    assert isinstance(_generate(registry, "payload"), dict)


def test_enum_values_come_from_the_type(registry: TypeGeneratorRegistry) -> None:
    assert _generate(registry, "kind") in {"a", "b"}
    assert isinstance(_generate(registry, "genre"), Genre)


def test_unique_hint_yields_distinct_values(registry: TypeGeneratorRegistry) -> None:
    values = [_generate(registry, "count", unique=True) for _ in range(100)]

    assert len(set(values)) == 100
    registry.reset_unique()


def test_unknown_types_have_no_generator(registry: TypeGeneratorRegistry) -> None:
    assert registry.generator_for(samples.c.opaque) is None


def test_registered_generator_applies_to_subtypes(registry: TypeGeneratorRegistry) -> None:
    registry.register(String, constant("custom"))

    assert _generate(registry, "code") == "custom"
    assert _generate(registry, "body") == "custom"
    assert _generate(registry, "kind") in {"a", "b"}


def test_registered_factory_sees_the_column_type(registry: TypeGeneratorRegistry) -> None:
    registry.register_factory(
        String, lambda type_: constant(f"len={type_.length}")
    )

    assert _generate(registry, "code") == "len=5"
