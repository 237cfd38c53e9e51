"""rowsmith: test-data factories for SQLAlchemy tables.

Preferred usage:
    from rowsmith import FactoryContext

    ctx = FactoryContext(engine)
    ctx.define(authors, lambda f: f.set(authors.c.name, "Ada"))
    record = ctx.create_record(authors).build()
"""

from rowsmith.adapters import (
    Record,
    RecordPersister,
    SQLAlchemyRecordPersister,
    TypeGeneratorRegistry,
)
from rowsmith.application import (
    FactoryContext,
    FactoryDefinitionBuilder,
    FactoryDefinitionRegistry,
    ModelBuilder,
    RecordBuilder,
    TraitBuilder,
)
from rowsmith.config import FactorySettings, get_settings
from rowsmith.domain import (
    CircularInheritanceError,
    DefinitionNotFoundError,
    FactoryDefinition,
    FactoryError,
    ParentNotFoundError,
    Trait,
    TransientAttributes,
    TransientTypeError,
    UnknownFieldError,
    ValueGenerator,
    constant,
    sequence,
)

__all__ = [
    # Context and builders
    "FactoryContext",
    "ModelBuilder",
    "RecordBuilder",
    # Declarations
    "FactoryDefinition",
    "FactoryDefinitionBuilder",
    "FactoryDefinitionRegistry",
    "Trait",
    "TraitBuilder",
    # Values
    "Record",
    "TransientAttributes",
    "ValueGenerator",
    "constant",
    "sequence",
    # Collaborators
    "RecordPersister",
    "SQLAlchemyRecordPersister",
    "TypeGeneratorRegistry",
    # Configuration
    "FactorySettings",
    "get_settings",
    # Errors
    "CircularInheritanceError",
    "DefinitionNotFoundError",
    "FactoryError",
    "ParentNotFoundError",
    "TransientTypeError",
    "UnknownFieldError",
]
