"""Lifecycle callback shapes.

Two variants of the same capability exist: a plain callback receives only
the in-flight record, a transient-aware callback also receives the
:class:`~rowsmith.domain.transients.TransientAttributes` of the build.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Callable, TypeAlias

if TYPE_CHECKING:
    from .transients import TransientAttributes

RecordCallback: TypeAlias = Callable[[Any], None]
TransientAwareCallback: TypeAlias = Callable[[Any, "TransientAttributes"], None]


def accepts_transients(callback: Callable[..., Any]) -> bool:
    """Return True when *callback* requires a second positional argument.

    Positional parameters with a default do not count; register such
    callbacks with ``transient=True`` to receive the transients. Callables
    whose signature cannot be inspected are treated as plain record
    callbacks.
    """

    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return False

    positional = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ) and parameter.default is inspect.Parameter.empty:
            positional += 1
    return positional >= 2


__all__ = ["RecordCallback", "TransientAwareCallback", "accepts_transients"]
