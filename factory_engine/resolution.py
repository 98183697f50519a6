"""
Rule resolution.

Given a view, compute the ordered list of rules to invoke:

1. read the view's persisted tokens and add ``TYPE_LEVEL_TAG``
2. walk the view's type chain (derived to base)
3. look up each level in the store
4. concatenate levels base-first, so derived types apply last

Within one level, type-level rules precede tagged rules, and tagged rules
follow registration order. Conflicts are settled by invocation order only.
"""

from __future__ import annotations

from typing import Any

from factory_engine.rule_store import ConfigRule, RuleStore
from factory_engine.storage import TagStorage
from factory_engine.tags import TYPE_LEVEL_TAG, decode_tokens
from factory_engine.type_chain import TypeReflector, walk_type_chain


def resolve_rules(
    view: Any,
    *,
    store: RuleStore,
    tag_storage: TagStorage,
    reflector: TypeReflector,
    base_type: type,
) -> list[ConfigRule]:
    """
    Resolve the rules that apply to ``view``, in invocation order.

    Parameters
    ----------
    view:
        View instance to resolve.
    store:
        Rule store to query.
    tag_storage:
        Source of the view's persisted tags.
    reflector:
        Type reflection capability used to walk the view's ancestry.
    base_type:
        Exclusive upper bound of the type walk.

    Returns
    -------
    list[ConfigRule]
        Ordered rules; empty when nothing matches.
    """
    tokens = decode_tokens(tag_storage.read_tags(view)) | {TYPE_LEVEL_TAG}
    levels = list(walk_type_chain(view, base_type=base_type, reflector=reflector))

    rules: list[ConfigRule] = []
    for view_type in reversed(levels):
        rules.extend(store.lookup(view_type, tokens))
    return rules
