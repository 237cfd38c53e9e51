"""Global pytest fixtures for the rowsmith test suite.

- ``engine``: fresh in-memory SQLite database per test with the
  ``authors``/``books`` schema from :mod:`tests.fixtures.schema`.
- ``settings``: seeded :class:`FactorySettings` so generated data is stable.
- ``ctx``: :class:`FactoryContext` bound to ``engine``.
- ``recording_ctx`` / ``persister``: context backed by a recording fake.
- ``count_rows``: helper returning the number of rows in a table.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from sqlalchemy import Table, create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from rowsmith import FactoryContext, FactorySettings, get_settings
from tests.fakes import RecordingPersister
from tests.fixtures.schema import metadata


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Create an isolated in-memory SQLite engine for one test."""

    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def settings() -> FactorySettings:
    return FactorySettings(faker_seed=20241017)


@pytest.fixture
def ctx(engine: Engine, settings: FactorySettings) -> FactoryContext:
    return FactoryContext(engine, settings=settings)


@pytest.fixture
def persister() -> RecordingPersister:
    return RecordingPersister()


@pytest.fixture
def recording_ctx(persister: RecordingPersister, settings: FactorySettings) -> FactoryContext:
    return FactoryContext(persister=persister, settings=settings)


@pytest.fixture
def count_rows(engine: Engine) -> Callable[[Table], int]:
    def _count(table: Table) -> int:
        with engine.connect() as connection:
            return connection.execute(select(func.count()).select_from(table)).scalar_one()

    return _count
