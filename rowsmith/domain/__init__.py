"""Domain model for factory definitions: traits, callbacks and transients."""

from .callbacks import RecordCallback, TransientAwareCallback, accepts_transients
from .definitions import FactoryDefinition
from .errors import (
    CircularInheritanceError,
    DefinitionNotFoundError,
    FactoryError,
    ParentNotFoundError,
    TransientTypeError,
    UnknownFieldError,
)
from .generators import ValueGenerator, constant, sequence
from .traits import Trait
from .transients import TransientAttributes

__all__ = [
    "CircularInheritanceError",
    "DefinitionNotFoundError",
    "FactoryDefinition",
    "FactoryError",
    "ParentNotFoundError",
    "RecordCallback",
    "Trait",
    "TransientAttributes",
    "TransientAwareCallback",
    "TransientTypeError",
    "UnknownFieldError",
    "ValueGenerator",
    "accepts_transients",
    "constant",
    "sequence",
]
