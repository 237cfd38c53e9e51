"""Exceptions raised while resolving and building factory definitions."""

from __future__ import annotations


class FactoryError(Exception):
    """Base class for every error raised by rowsmith itself."""


class DefinitionNotFoundError(FactoryError, LookupError):
    """Raised when no factory definition is registered under a key."""

    def __init__(self, key: str):
        super().__init__(f"Factory definition not found: {key!r}")
        self.key = key


class ParentNotFoundError(FactoryError):
    """Raised when a definition names a parent that was never registered."""

    def __init__(self, name: str):
        self.name = name
        self.expected_call = f'ctx.define(..., name="{name}")'
        super().__init__(
            f"Parent factory definition {name!r} not found. "
            f"Register it with {self.expected_call} before referencing it."
        )


class CircularInheritanceError(FactoryError):
    """Raised when a parent chain visits the same definition twice."""

    def __init__(self, name: str):
        super().__init__(
            f"Circular factory inheritance detected: {name!r} forms a cycle"
        )
        self.name = name


class TransientTypeError(FactoryError, TypeError):
    """Raised when a transient attribute is read back as the wrong type."""

    def __init__(self, name: str, expected: type, actual: type):
        super().__init__(
            f"Transient attribute {name!r} is {actual.__name__}, "
            f"not {expected.__name__}"
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class UnknownFieldError(FactoryError, KeyError):
    """Raised when a field handle does not belong to the target table."""

    def __init__(self, table_name: str, field: object):
        message = f"Table {table_name!r} has no column {field!r}"
        super().__init__(message)
        self.table_name = table_name
        self.field = field

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = [
    "CircularInheritanceError",
    "DefinitionNotFoundError",
    "FactoryError",
    "ParentNotFoundError",
    "TransientTypeError",
    "UnknownFieldError",
]
