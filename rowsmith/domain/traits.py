"""Named overlays applied on top of a factory definition."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .callbacks import RecordCallback, TransientAwareCallback
from .generators import ValueGenerator


def _frozen_mapping(values: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True, slots=True)
class Trait:
    """A named set of field overrides, generators and callbacks.

    Traits carry no inheritance of their own: when a child definition
    declares a trait with the same name as its parent, the child's trait
    replaces the parent's as a whole.
    """

    name: str
    overrides: Mapping[str, Any] = field(default_factory=dict)
    generators: Mapping[str, ValueGenerator[Any]] = field(default_factory=dict)
    before_create_callbacks: tuple[RecordCallback, ...] = ()
    after_create_callbacks: tuple[RecordCallback, ...] = ()
    transient_before_create_callbacks: tuple[TransientAwareCallback, ...] = ()
    transient_after_create_callbacks: tuple[TransientAwareCallback, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "overrides", _frozen_mapping(self.overrides))
        object.__setattr__(self, "generators", _frozen_mapping(self.generators))
        for name in (
            "before_create_callbacks",
            "after_create_callbacks",
            "transient_before_create_callbacks",
            "transient_after_create_callbacks",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))


__all__ = ["Trait"]
