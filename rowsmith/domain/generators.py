"""Value generator contract shared by definitions, traits and builders."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class ValueGenerator(Protocol[T_co]):
    """Produce a value for one column.

    ``max_length`` is the declared length of the column type (``None`` when
    the type has none) and ``is_unique`` is true for primary key and unique
    columns. Generators hold no state the builder relies on.
    """

    def __call__(self, max_length: int | None, is_unique: bool) -> T_co: ...


def constant(value: Any) -> ValueGenerator[Any]:
    """Return a generator that always produces *value*."""

    def _generate(max_length: int | None, is_unique: bool) -> Any:
        return value

    return _generate


def sequence(template: str = "{n}", *, start: int = 1) -> ValueGenerator[str]:
    """Return a generator producing ``template.format(n=...)`` for n = start, start+1, ...

    The produced value is truncated to ``max_length`` when the column has one.
    """

    counter = iter(range(start, 2**63))

    def _generate(max_length: int | None, is_unique: bool) -> str:
        value = template.format(n=next(counter))
        return value[:max_length] if max_length else value

    return _generate


__all__ = ["ValueGenerator", "constant", "sequence"]
