"""Typed, read-only bag of transient (non-persisted) attributes.

Transient attributes are supplied on a builder with ``transient_attr`` and
handed to transient-aware lifecycle callbacks. They never reach the table.

Usage:
    def add_books(record, transients):
        for _ in range(transients.get_or_default("book_count", int, 0)):
            ...
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from .errors import TransientTypeError

T = TypeVar("T")


class TransientAttributes:
    """Immutable snapshot of the transient values set on one build."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: Mapping[str, Any] = MappingProxyType(dict(values or {}))

    @classmethod
    def empty(cls) -> "TransientAttributes":
        return cls()

    def get(self, name: str, type_: type[T] | None = None) -> T | None:
        """Return the value stored under *name*, or ``None`` when unset.

        When *type_* is given the stored value must be an instance of it;
        otherwise :class:`TransientTypeError` is raised at access time.
        """

        value = self._values.get(name)
        if value is None:
            return None
        return self._checked(name, value, type_)

    def get_or_default(self, name: str, type_: type[T], default: T) -> T:
        """Return the value stored under *name*, or *default* when unset."""

        value = self._values.get(name)
        if value is None:
            return default
        return self._checked(name, value, type_)

    def has(self, name: str) -> bool:
        return name in self._values

    def as_dict(self) -> Mapping[str, Any]:
        """Return a read-only view of every transient attribute."""

        return self._values

    @staticmethod
    def _checked(name: str, value: Any, type_: type[T] | None) -> T:
        if type_ is None:
            return value
        # bool is an int subclass but is not accepted as one.
        if not isinstance(value, type_) or (type_ is int and isinstance(value, bool)):
            raise TransientTypeError(name, type_, type(value))
        return value

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TransientAttributes({dict(self._values)!r})"


__all__ = ["TransientAttributes"]
