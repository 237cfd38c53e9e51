"""Schema bridge between rowsmith and SQLAlchemy tables.

Factories target a SQLAlchemy Core :class:`~sqlalchemy.Table` or an ORM
mapped class (its ``__table__`` is used). Field handles may be ``Column``
objects, ORM instrumented attributes or column-key strings; they are all
normalised to the column key.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from types import MappingProxyType
from typing import Any, Mapping, TypeVar

from sqlalchemy import Column, Table

from rowsmith.domain.errors import UnknownFieldError

M = TypeVar("M")


def resolve_table(target: Any) -> Table:
    """Return the Core table behind *target*."""

    if isinstance(target, Table):
        return target
    table = getattr(target, "__table__", None)
    if isinstance(table, Table):
        return table
    raise TypeError(f"Expected a SQLAlchemy Table or mapped class, got {target!r}")


def column_key(table: Table, field: Any) -> str:
    """Normalise *field* to a column key of *table*."""

    if isinstance(field, str):
        if field in table.c:
            return field
        raise UnknownFieldError(table.name, field)

    if hasattr(field, "__clause_element__"):
        field = field.__clause_element__()
    key = getattr(field, "key", None)
    owner = getattr(field, "table", None)
    if key is not None and key in table.c and (owner is None or owner.name == table.name):
        return key
    raise UnknownFieldError(table.name, field)


def column_max_length(column: Column[Any]) -> int | None:
    length = getattr(column.type, "length", None)
    return length if isinstance(length, int) else None


def column_is_unique(column: Column[Any]) -> bool:
    return bool(column.primary_key or column.unique)


class Record:
    """An in-flight or persisted row of one table.

    Values are keyed by column key and can be read or written with any
    field handle accepted by :func:`column_key`.
    """

    __slots__ = ("table", "_values")

    def __init__(self, table: Table, values: Mapping[str, Any] | None = None) -> None:
        self.table = table
        self._values: dict[str, Any] = {}
        for field, value in (values or {}).items():
            self._values[column_key(table, field)] = value

    def get(self, field: Any, default: Any = None) -> Any:
        return self._values.get(column_key(self.table, field), default)

    def set(self, field: Any, value: Any) -> "Record":
        self._values[column_key(self.table, field)] = value
        return self

    def values(self) -> Mapping[str, Any]:
        """Read-only view of the current values."""

        return MappingProxyType(self._values)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def into(self, model_type: type[M]) -> M:
        """Project the record into *model_type*.

        Pydantic models are validated with ``model_validate``; dataclasses
        receive only the values matching their init fields; any other class
        is called with the values as keyword arguments.
        """

        if hasattr(model_type, "model_validate"):
            return model_type.model_validate(dict(self._values))  # type: ignore[attr-defined]
        if is_dataclass(model_type):
            names = {item.name for item in fields(model_type) if item.init}
            return model_type(**{k: v for k, v in self._values.items() if k in names})
        return model_type(**self._values)

    def __getitem__(self, field: Any) -> Any:
        return self._values[column_key(self.table, field)]

    def __setitem__(self, field: Any, value: Any) -> None:
        self.set(field, value)

    def __contains__(self, field: Any) -> bool:
        try:
            return column_key(self.table, field) in self._values
        except UnknownFieldError:
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.table is other.table and self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Record({self.table.name}, {self._values!r})"


__all__ = [
    "Record",
    "column_is_unique",
    "column_key",
    "column_max_length",
    "resolve_table",
]
