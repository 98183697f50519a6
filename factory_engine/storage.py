"""
Per-view state storage.

The engine never assumes where a view keeps its tags. A ``TagStorage`` reads
and writes the persisted tag string and the per-instance "already
materialized" flag. Toolkit bindings provide their own implementation (see
``gui.qt_binding.QtPropertyTagStorage``).
"""

from __future__ import annotations

from typing import Any, Protocol

TAGS_ATTRIBUTE = "factory_tags"
MATERIALIZED_ATTRIBUTE = "factory_materialized"


class TagStorage(Protocol):
    """Access to the persisted tag string and materialization flag of a view."""

    def read_tags(self, view: Any) -> str:
        """
        Return the persisted tag string of ``view``.

        Returns
        -------
        str
            Whitespace-joined tokens, or an empty string when none are stored.
        """
        raise NotImplementedError

    def write_tags(self, view: Any, text: str) -> None:
        """Replace the persisted tag string of ``view``."""
        raise NotImplementedError

    def is_materialized(self, view: Any) -> bool:
        """Return True once automatic application has run for ``view``."""
        raise NotImplementedError

    def mark_materialized(self, view: Any) -> None:
        """Record that automatic application has run for ``view``."""
        raise NotImplementedError


class AttributeTagStorage:
    """
    Store view state on dedicated instance attributes.

    Suitable for plain Python view objects. The attributes are created on
    first write; reading an untouched view yields defaults.
    """

    def __init__(
        self,
        *,
        tags_attribute: str = TAGS_ATTRIBUTE,
        materialized_attribute: str = MATERIALIZED_ATTRIBUTE,
    ) -> None:
        self._tags_attribute = tags_attribute
        self._materialized_attribute = materialized_attribute

    def read_tags(self, view: Any) -> str:
        value = getattr(view, self._tags_attribute, None)
        return value.strip() if isinstance(value, str) else ""

    def write_tags(self, view: Any, text: str) -> None:
        setattr(view, self._tags_attribute, text)

    def is_materialized(self, view: Any) -> bool:
        return bool(getattr(view, self._materialized_attribute, False))

    def mark_materialized(self, view: Any) -> None:
        setattr(view, self._materialized_attribute, True)
