"""Builder that projects factory-built rows into plain model objects."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from sqlalchemy import Table

from .base import BuilderConfiguration
from .record import RecordBuilder

M = TypeVar("M")


class ModelBuilder(BuilderConfiguration, Generic[M]):
    """Record builder front-end returning instances of ``model_type``.

    Every build replays the stored configuration onto a fresh
    :class:`RecordBuilder` and projects the resulting record with
    :meth:`~rowsmith.adapters.schema.Record.into`.
    """

    def __init__(self, table: Table, model_type: type[M], **kwargs: Any) -> None:
        super().__init__(table, **kwargs)
        self.model_type = model_type

    def clone(self) -> "ModelBuilder[M]":
        clone = ModelBuilder(self.table, self.model_type, **self._collaborators())
        self._copy_configuration_to(clone)
        return clone

    def build(self) -> M:
        return self._delegate().build().into(self.model_type)

    def build_without_insert(self) -> M:
        return self._delegate().build_without_insert().into(self.model_type)

    def build_attributes(self) -> dict[str, Any]:
        return self._delegate().build_attributes()

    def times(
        self,
        count: int,
        customizer: Callable[["ModelBuilder[M]", int], Any] | None = None,
    ) -> list[M]:
        """Build *count* objects; *customizer* receives each clone and its index."""

        results: list[M] = []
        for index in range(count):
            builder = self.clone()
            if customizer is not None:
                customizer(builder, index)
            results.append(builder.build())
        return results

    def _delegate(self) -> RecordBuilder:
        builder = RecordBuilder(self.table, **self._collaborators())
        builder.generate_nullables(self.should_generate_nullables)
        for key, value in self.explicit_values.items():
            builder.set(key, value)
        for key, generator in self.per_builder_generators.items():
            builder.with_generator(key, generator)
        for name in self.active_traits:
            builder.trait(name)
        for name, value in self.transient_attrs.items():
            builder.transient_attr(name, value)
        return builder


__all__ = ["ModelBuilder"]
