"""
Automatic application when a view is materialized from a declarative description.

A host toolkit calls ``materialize`` once it has built a view (for Qt, see
``gui.qt_binding``). A ``MaterializationDelegate`` chooses which factory, if
any, styles that view, which allows different themes per window or screen.

Invariants
----------
- A view is configured automatically at most once; the flag lives on the view
  itself through the factory's ``TagStorage``. It is set only after the
  application succeeds, so a view whose application raised is retried.
- Untagged views are configured only when the factory's
  ``apply_to_untagged`` is set.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

from factory_engine.factory import ViewFactory

logger = logging.getLogger(__name__)


class MaterializationDelegate(Protocol):
    """Chooses the factory used to configure a freshly materialized view."""

    def factory_for(self, view: Any) -> ViewFactory[Any] | None:
        """
        Return the factory for ``view``.

        Returns
        -------
        ViewFactory | None
            Factory to apply, or None to leave the view untouched.
        """
        raise NotImplementedError


class SingleFactoryDelegate:
    """Delegate that answers the same factory for every view."""

    def __init__(self, factory: ViewFactory[Any] | None) -> None:
        self.factory = factory

    def factory_for(self, view: Any) -> ViewFactory[Any] | None:
        return self.factory


def materialize(view: Any, delegate: MaterializationDelegate) -> bool:
    """
    Apply the delegate's factory to a newly materialized view.

    Parameters
    ----------
    view:
        View built from a declarative description.
    delegate:
        Supplies the factory for ``view``.

    Returns
    -------
    bool
        True if configuration ran during this call.
    """
    factory = delegate.factory_for(view)
    if factory is None:
        return False

    storage = factory.tag_storage
    if storage.is_materialized(view):
        return False
    if not factory.apply_to_untagged and not factory.tag_tokens_of(view):
        return False

    invoked = factory.apply(view)
    storage.mark_materialized(view)
    logger.debug("Materialized %r with %d rule(s)", view, len(invoked))
    return True


def materialize_all(views: Iterable[Any], delegate: MaterializationDelegate) -> int:
    """Materialize each view in order. Returns how many were configured."""
    return sum(1 for view in views if materialize(view, delegate))
