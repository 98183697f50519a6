"""
Rule storage for the view factory engine.

Rules are indexed by (view type, tag token). A registration with several tags
fans out into several buckets, all holding the same ``ConfigRule`` and
therefore the same registration index.

Invariants
----------
- The registration counter advances exactly once per ``register`` call.
- Type-level rules live only in the ``TYPE_LEVEL_TAG`` bucket and order before
  every tagged rule of the same type.
- Bucket order is insertion order; apply order is recomputed by ``lookup``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator

from factory_engine.tags import TYPE_LEVEL_TAG

TYPE_LEVEL_ORDERING = -1

Action = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class ConfigRule:
    """
    A registered configuration action.

    Attributes
    ----------
    registration_index:
        Counter value allocated by the owning store at registration time.
    is_type_level:
        True when the rule was registered without tags.
    view_type:
        Class the action was registered for. The action is only ever invoked
        with instances of this class.
    action:
        Callable that mutates a view in place.
    """

    registration_index: int
    is_type_level: bool
    view_type: type
    action: Action

    @property
    def ordering(self) -> int:
        """Sort value: ``TYPE_LEVEL_ORDERING`` for type-level rules, else the index."""
        return TYPE_LEVEL_ORDERING if self.is_type_level else self.registration_index

    def sort_key(self) -> tuple[int, int]:
        return (self.ordering, self.registration_index)

    def applies_to(self, view: Any) -> bool:
        """Return True when ``view`` is an instance of the registered type."""
        return isinstance(view, self.view_type)


class RuleStore:
    """
    Mapping of view type -> tag token -> registered rules.

    One store belongs to exactly one factory (typically one visual theme).
    It is not safe for concurrent mutation; register during setup, look up
    afterwards.
    """

    def __init__(self) -> None:
        self._next_index = 0
        self._buckets: dict[type, dict[str, list[ConfigRule]]] = {}

    def __len__(self) -> int:
        return len({rule.registration_index for _, _, rule in self.iter_rules()})

    @property
    def next_index(self) -> int:
        """Index that the next registration will receive."""
        return self._next_index

    def register(self, view_type: type, tokens: Iterable[str], action: Action) -> ConfigRule:
        """
        Store ``action`` for ``view_type`` under each token.

        Parameters
        ----------
        view_type:
            Class the action targets.
        tokens:
            Tag tokens. An empty iterable registers a type-level rule.
        action:
            Callable invoked with the view at apply time.

        Returns
        -------
        ConfigRule
            The stored rule (shared by every bucket it fans out into).
        """
        token_set = sorted(set(tokens))
        rule = ConfigRule(
            registration_index=self._next_index,
            is_type_level=not token_set,
            view_type=view_type,
            action=action,
        )
        self._next_index += 1

        by_tag = self._buckets.setdefault(view_type, {})
        for token in token_set or [TYPE_LEVEL_TAG]:
            by_tag.setdefault(token, []).append(rule)
        return rule

    def lookup(self, view_type: type, tokens: Iterable[str]) -> list[ConfigRule]:
        """
        Return rules for ``view_type`` matching any of ``tokens``.

        Rules reachable through several tokens are returned once. The result is
        sorted type-level first, then by registration order. Unknown types or
        tokens contribute nothing.
        """
        by_tag = self._buckets.get(view_type)
        if not by_tag:
            return []

        matched: dict[int, ConfigRule] = {}
        for token in tokens:
            for rule in by_tag.get(token, ()):
                matched.setdefault(rule.registration_index, rule)
        return sorted(matched.values(), key=ConfigRule.sort_key)

    def view_types(self) -> tuple[type, ...]:
        """Return view types with at least one rule, in first-registration order."""
        return tuple(self._buckets)

    def iter_rules(self) -> Iterator[tuple[type, str, ConfigRule]]:
        """Yield ``(view_type, token, rule)`` for every bucket entry in store order."""
        for view_type, by_tag in self._buckets.items():
            for token, rules in by_tag.items():
                for rule in rules:
                    yield view_type, token, rule
