"""
Public façade of the view factory engine.

A ``ViewFactory`` owns one ``RuleStore`` (typically one per visual theme).
Callers register configuration actions with ``configure`` and later ``apply``
the matching actions to concrete views.

Example
-------
>>> factory = ViewFactory(tag_type=ThemeTag)
>>> factory.configure(Box, lambda box: setattr(box, "color", "black"))
>>> factory.configure(Box, lambda box: setattr(box, "color", "red"), tagged=ThemeTag.DANGER)
>>> factory.apply(box, ThemeTag.DANGER)

Notes
-----
Factories are plain objects. Pass them explicitly to the code that needs them
rather than sharing module-level instances.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

from factory_engine.errors import ViewTypeMismatchError
from factory_engine.resolution import resolve_rules
from factory_engine.rule_store import ConfigRule, RuleStore
from factory_engine.storage import AttributeTagStorage, TagStorage
from factory_engine.tags import (
    TagT,
    as_tag_set,
    decode_tokens,
    encode_tokens,
    parse_tags,
    tokens_for,
)
from factory_engine.type_chain import DefaultTypeReflector, TypeReflector

logger = logging.getLogger(__name__)

ViewT = TypeVar("ViewT")


class ViewFactory(Generic[TagT]):
    """
    Tag-driven registry of view configuration actions.

    Parameters
    ----------
    tag_type:
        Optional closed enum of domain tags. Used by ``tags_of`` to decode
        persisted tokens. Without it, tags are plain string tokens.
    base_type:
        Exclusive upper bound of the type walk. Rules registered for
        ``base_type`` itself are never consulted.
    tag_storage:
        Where views keep their persisted tags. Defaults to
        ``AttributeTagStorage``.
    reflector:
        Type reflection capability. Defaults to ``DefaultTypeReflector``.
    apply_to_untagged:
        If True, automatic application at materialization also covers views
        that carry no persisted tags.
    strict:
        If True, unusable tags, unknown persisted tokens and mismatched rule
        targets raise ``ViewFactoryError`` subclasses instead of being dropped.
    """

    def __init__(
        self,
        *,
        tag_type: type[Enum] | None = None,
        base_type: type = object,
        tag_storage: TagStorage | None = None,
        reflector: TypeReflector | None = None,
        apply_to_untagged: bool = True,
        strict: bool = False,
    ) -> None:
        self.tag_type = tag_type
        self.base_type = base_type
        self.tag_storage: TagStorage = tag_storage or AttributeTagStorage()
        self.reflector: TypeReflector = reflector or DefaultTypeReflector(base_type)
        self.apply_to_untagged = apply_to_untagged
        self.strict = strict
        self._store = RuleStore()

    @property
    def store(self) -> RuleStore:
        """The rule store owned by this factory."""
        return self._store

    # -- registration --

    def configure(
        self,
        view_type: type[ViewT],
        action: Callable[[ViewT], None],
        tagged: TagT | Iterable[TagT] = (),
    ) -> ConfigRule | None:
        """
        Register ``action`` for instances of ``view_type``.

        Parameters
        ----------
        view_type:
            Class whose instances (including subclass instances) the action
            configures.
        action:
            Idempotent mutation applied to a view.
        tagged:
            A tag or iterable of tags. Empty registers a type-level rule that
            applies regardless of the view's tags.

        Returns
        -------
        ConfigRule | None
            The stored rule, or None when tags were given but none of them
            yields a usable token (nothing is registered in that case).
        """
        requested = as_tag_set(tagged)  # type: ignore[arg-type]
        tokens = tokens_for(requested, strict=self.strict)
        if requested and not tokens:
            logger.warning(
                "Not registering %s rule: no usable tag in %r", view_type.__name__, requested
            )
            return None
        return self._store.register(view_type, tokens, action)

    def style(
        self,
        view_type: type[ViewT],
        tagged: TagT | Iterable[TagT] = (),
    ) -> Callable[[Callable[[ViewT], None]], Callable[[ViewT], None]]:
        """Decorator form of ``configure``. Returns the decorated function unchanged."""

        def decorator(action: Callable[[ViewT], None]) -> Callable[[ViewT], None]:
            self.configure(view_type, action, tagged=tagged)
            return action

        return decorator

    def registered_rules(self) -> Iterator[tuple[type, str, ConfigRule]]:
        """Yield ``(view_type, token, rule)`` for every stored rule in store order."""
        return self._store.iter_rules()

    # -- tags --

    def tag_view(self, view: Any, tags: TagT | Iterable[TagT]) -> None:
        """
        Add ``tags`` to the persisted tag set of ``view``.

        This does not re-apply any configuration.
        """
        added = tokens_for(tags, strict=self.strict)  # type: ignore[arg-type]
        if not added:
            return
        current = decode_tokens(self.tag_storage.read_tags(view))
        self.tag_storage.write_tags(view, encode_tokens(current | added))

    def tag_tokens_of(self, view: Any) -> frozenset[str]:
        """Return the raw persisted tokens of ``view``."""
        return decode_tokens(self.tag_storage.read_tags(view))

    def tags_of(self, view: Any) -> frozenset[Any]:
        """
        Return the persisted tags of ``view``.

        Returns
        -------
        frozenset
            Members of ``tag_type`` when the factory has one (unknown tokens
            dropped, or rejected in strict mode); raw tokens otherwise.
        """
        tokens = self.tag_tokens_of(view)
        if self.tag_type is None:
            return tokens
        return parse_tags(tokens, self.tag_type, strict=self.strict)

    # -- application --

    def resolve(self, view: Any) -> list[ConfigRule]:
        """Return the rules that ``apply`` would invoke for ``view``, in order."""
        return resolve_rules(
            view,
            store=self._store,
            tag_storage=self.tag_storage,
            reflector=self.reflector,
            base_type=self.base_type,
        )

    def apply(self, view: Any, tags: TagT | Iterable[TagT] = ()) -> tuple[ConfigRule, ...]:
        """
        Persist ``tags`` on ``view``, then invoke every matching rule.

        Parameters
        ----------
        view:
            View instance to configure.
        tags:
            Tags added to the view before resolution. They stay on the view.

        Returns
        -------
        tuple[ConfigRule, ...]
            Rules actually invoked, in invocation order.

        Raises
        ------
        ViewTypeMismatchError
            In strict mode, if a resolved rule targets a type ``view`` is not
            an instance of.
        """
        self.tag_view(view, tags)

        invoked: list[ConfigRule] = []
        for rule in self.resolve(view):
            if not rule.applies_to(view):
                if self.strict:
                    raise ViewTypeMismatchError(
                        f"Rule {rule.registration_index} targets {rule.view_type.__name__}, "
                        f"got {type(view).__name__}."
                    )
                logger.debug(
                    "Skipping rule %d for %s on %r",
                    rule.registration_index,
                    rule.view_type.__name__,
                    view,
                )
                continue
            rule.action(view)
            invoked.append(rule)
        return tuple(invoked)

    def create(
        self,
        view_type: Callable[..., ViewT],
        *args: Any,
        tagged: TagT | Iterable[TagT] = (),
        **kwargs: Any,
    ) -> ViewT:
        """
        Construct ``view_type(*args, **kwargs)`` and apply this factory with ``tagged``.

        The new view counts as materialized, so automatic application will not
        configure it a second time.
        """
        view = view_type(*args, **kwargs)
        self.tag_storage.mark_materialized(view)
        self.apply(view, tagged)
        return view
