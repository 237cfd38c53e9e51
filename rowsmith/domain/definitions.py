"""Immutable factory definitions and their trait resolution rules.

A :class:`FactoryDefinition` is the registered recipe for one table: literal
defaults, per-column generators, named traits and four lifecycle callback
lists. Field maps are keyed by column key.

Resolution is layered. Each layer (parent, child, then every requested
trait in request order) overlays the previous ones column by column. A layer
that supplies a literal for a column drops any generator inherited for it
and vice versa, so a column is always resolved from the most recent layer
that mentions it. Callbacks are concatenated in layer order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from .callbacks import RecordCallback, TransientAwareCallback
from .generators import ValueGenerator
from .traits import Trait

if TYPE_CHECKING:
    from sqlalchemy import Table

logger = logging.getLogger(__name__)


def _overlay(
    defaults: dict[str, Any],
    generators: dict[str, ValueGenerator[Any]],
    layer_defaults: Mapping[str, Any],
    layer_generators: Mapping[str, ValueGenerator[Any]],
) -> None:
    # Within one layer a literal beats a generator for the same column.
    for key, generator in layer_generators.items():
        defaults.pop(key, None)
        generators[key] = generator
    for key, value in layer_defaults.items():
        generators.pop(key, None)
        defaults[key] = value


@dataclass(frozen=True, slots=True)
class FactoryDefinition:
    """Registered recipe for populating rows of ``table``.

    ``parent_name`` names another registered definition to inherit from;
    ``None`` marks a root. Definitions returned by the registry after
    inheritance has been flattened are always roots.
    """

    table: "Table"
    parent_name: str | None = None
    default_values: Mapping[str, Any] = field(default_factory=dict)
    generators: Mapping[str, ValueGenerator[Any]] = field(default_factory=dict)
    traits: Mapping[str, Trait] = field(default_factory=dict)
    before_create_callbacks: tuple[RecordCallback, ...] = ()
    after_create_callbacks: tuple[RecordCallback, ...] = ()
    transient_before_create_callbacks: tuple[TransientAwareCallback, ...] = ()
    transient_after_create_callbacks: tuple[TransientAwareCallback, ...] = ()

    def __post_init__(self) -> None:
        for name in ("default_values", "generators", "traits"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        for name in (
            "before_create_callbacks",
            "after_create_callbacks",
            "transient_before_create_callbacks",
            "transient_after_create_callbacks",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @classmethod
    def bare(cls, table: "Table") -> "FactoryDefinition":
        """Return an empty root definition for *table*."""

        return cls(table=table)

    @property
    def is_root(self) -> bool:
        return self.parent_name is None

    def has_trait(self, name: str) -> bool:
        return name in self.traits

    def trait_names(self) -> frozenset[str]:
        return frozenset(self.traits)

    # ------------------------------------------------------------------
    # Trait resolution
    # ------------------------------------------------------------------

    def _active_traits(self, trait_names: Iterable[str]) -> list[Trait]:
        active: list[Trait] = []
        for trait_name in trait_names:
            trait = self.traits.get(trait_name)
            if trait is None:
                logger.debug(
                    "Ignoring unknown trait %r for table %s",
                    trait_name,
                    self.table.name,
                )
                continue
            active.append(trait)
        return active

    def resolve_fields(
        self, trait_names: Sequence[str] = ()
    ) -> tuple[dict[str, Any], dict[str, ValueGenerator[Any]]]:
        """Return the flattened ``(defaults, generators)`` for *trait_names*.

        The two maps never share a column key.
        """

        defaults: dict[str, Any] = {}
        generators: dict[str, ValueGenerator[Any]] = {}
        _overlay(defaults, generators, self.default_values, self.generators)
        for trait in self._active_traits(trait_names):
            _overlay(defaults, generators, trait.overrides, trait.generators)
        return defaults, generators

    def resolve_defaults(self, trait_names: Sequence[str] = ()) -> dict[str, Any]:
        """Merge base defaults with trait overrides; later traits win."""

        return self.resolve_fields(trait_names)[0]

    def resolve_generators(
        self, trait_names: Sequence[str] = ()
    ) -> dict[str, ValueGenerator[Any]]:
        """Merge base generators with trait generators; later traits win."""

        return self.resolve_fields(trait_names)[1]

    def _resolve_callbacks(self, attribute: str, trait_names: Sequence[str]) -> list[Any]:
        resolved = list(getattr(self, attribute))
        for trait in self._active_traits(trait_names):
            resolved.extend(getattr(trait, attribute))
        return resolved

    def resolve_before_create_callbacks(
        self, trait_names: Sequence[str] = ()
    ) -> list[RecordCallback]:
        return self._resolve_callbacks("before_create_callbacks", trait_names)

    def resolve_after_create_callbacks(
        self, trait_names: Sequence[str] = ()
    ) -> list[RecordCallback]:
        return self._resolve_callbacks("after_create_callbacks", trait_names)

    def resolve_transient_before_create_callbacks(
        self, trait_names: Sequence[str] = ()
    ) -> list[TransientAwareCallback]:
        return self._resolve_callbacks("transient_before_create_callbacks", trait_names)

    def resolve_transient_after_create_callbacks(
        self, trait_names: Sequence[str] = ()
    ) -> list[TransientAwareCallback]:
        return self._resolve_callbacks("transient_after_create_callbacks", trait_names)

    # ------------------------------------------------------------------
    # Inheritance
    # ------------------------------------------------------------------

    def merged_over(self, parent: "FactoryDefinition") -> "FactoryDefinition":
        """Return this definition flattened on top of an already-flat *parent*.

        Parent callbacks run before the child's; a child trait replaces a
        parent trait of the same name. The result is a root.
        """

        defaults: dict[str, Any] = {}
        generators: dict[str, ValueGenerator[Any]] = {}
        _overlay(defaults, generators, parent.default_values, parent.generators)
        _overlay(defaults, generators, self.default_values, self.generators)

        return FactoryDefinition(
            table=self.table,
            parent_name=None,
            default_values=defaults,
            generators=generators,
            traits={**parent.traits, **self.traits},
            before_create_callbacks=parent.before_create_callbacks
            + self.before_create_callbacks,
            after_create_callbacks=parent.after_create_callbacks
            + self.after_create_callbacks,
            transient_before_create_callbacks=parent.transient_before_create_callbacks
            + self.transient_before_create_callbacks,
            transient_after_create_callbacks=parent.transient_after_create_callbacks
            + self.transient_after_create_callbacks,
        )


__all__ = ["FactoryDefinition"]
