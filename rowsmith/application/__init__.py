"""Application layer: registry, declarations, builders and the owning context."""

from .builders import ModelBuilder, RecordBuilder
from .context import FactoryContext
from .declarations import FactoryDefinitionBuilder, TraitBuilder
from .registry import FactoryDefinitionRegistry

__all__ = [
    "FactoryContext",
    "FactoryDefinitionBuilder",
    "FactoryDefinitionRegistry",
    "ModelBuilder",
    "RecordBuilder",
    "TraitBuilder",
]
