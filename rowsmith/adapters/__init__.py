"""SQLAlchemy and Faker adapters used by the factory builders."""

from .persistence import RecordPersister, SQLAlchemyRecordPersister
from .schema import Record, column_key, resolve_table
from .value_generation import TypeGeneratorRegistry

__all__ = [
    "Record",
    "RecordPersister",
    "SQLAlchemyRecordPersister",
    "TypeGeneratorRegistry",
    "column_key",
    "resolve_table",
]
