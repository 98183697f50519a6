"""
Type-chain walking.

Produces the view types consulted during resolution, from the most-derived
runtime type upwards, stopping before a designated base type.

Notes
-----
The walk terminates when the reflector cannot name a supertype, when the base
type is reached, or when a type repeats (a malformed custom reflector).
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Protocol

logger = logging.getLogger(__name__)


class TypeReflector(Protocol):
    """Capability to inspect the runtime type ancestry of views."""

    def runtime_type(self, view: Any) -> type:
        """Return the most-derived runtime type of ``view``."""
        raise NotImplementedError

    def supertype(self, view_type: type) -> type | None:
        """Return the immediate supertype of ``view_type``, or None if unavailable."""
        raise NotImplementedError


class DefaultTypeReflector:
    """
    Reflect through Python classes.

    With several declared bases, the supertype is the base with the deepest
    lineage among those derived from ``base_type`` (first declared wins a
    tie), so a mixin listed first does not hide the view ancestry.
    """

    def __init__(self, base_type: type = object) -> None:
        self.base_type = base_type

    def runtime_type(self, view: Any) -> type:
        return type(view)

    def supertype(self, view_type: type) -> type | None:
        bases = getattr(view_type, "__bases__", None)
        if not bases:
            return None
        candidates = [base for base in bases if issubclass(base, self.base_type)] or list(bases)
        return max(candidates, key=lambda base: len(base.__mro__))


def walk_type_chain(view: Any, *, base_type: type, reflector: TypeReflector) -> Iterator[type]:
    """
    Yield the type chain of ``view`` from most-derived up to, excluding, ``base_type``.

    Parameters
    ----------
    view:
        View instance being resolved.
    base_type:
        Exclusive upper bound of the walk.
    reflector:
        Type reflection capability.

    Yields
    ------
    type
        View types in derived-to-base order.
    """
    seen: set[type] = set()
    current: type | None = reflector.runtime_type(view)
    while current is not None and current is not base_type:
        if current in seen:
            logger.debug("Type chain of %r revisits %r; stopping", view, current)
            return
        seen.add(current)
        yield current
        current = reflector.supertype(current)
