from .base import BuilderConfiguration
from .model import ModelBuilder
from .record import RecordBuilder

__all__ = ["BuilderConfiguration", "ModelBuilder", "RecordBuilder"]
