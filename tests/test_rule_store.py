from __future__ import annotations

from factory_engine.rule_store import TYPE_LEVEL_ORDERING, RuleStore
from factory_engine.tags import TYPE_LEVEL_TAG
from tests.views import Box, Card


def _noop(view: object) -> None:
    return None


def test_counter_advances_once_per_registration_not_per_tag() -> None:
    store = RuleStore()
    first = store.register(Box, {"danger", "warning", "rounded"}, _noop)
    second = store.register(Box, (), _noop)
    third = store.register(Box, {"danger"}, _noop)

    assert first.registration_index == 0
    assert second.registration_index == 1
    assert third.registration_index == 2
    assert store.next_index == 3
    assert len(store) == 3


def test_type_level_rule_uses_sentinel_bucket_and_ordering() -> None:
    store = RuleStore()
    rule = store.register(Box, (), _noop)

    assert rule.is_type_level
    assert rule.ordering == TYPE_LEVEL_ORDERING
    assert store.lookup(Box, {TYPE_LEVEL_TAG}) == [rule]
    assert store.lookup(Box, {"danger"}) == []


def test_lookup_sorts_type_level_before_tagged_regardless_of_registration() -> None:
    store = RuleStore()
    tagged = store.register(Box, {"danger"}, _noop)
    type_level = store.register(Box, (), _noop)

    assert store.lookup(Box, {"danger", TYPE_LEVEL_TAG}) == [type_level, tagged]


def test_lookup_returns_union_of_fanned_out_rule() -> None:
    store = RuleStore()
    rule = store.register(Box, {"danger", "warning"}, _noop)

    assert store.lookup(Box, {"danger", "warning"}) == [rule]


def test_lookup_orders_tagged_rules_by_registration_across_buckets() -> None:
    store = RuleStore()
    warning = store.register(Box, {"warning"}, _noop)
    danger = store.register(Box, {"danger"}, _noop)
    both = store.register(Box, {"warning", "danger"}, _noop)

    assert store.lookup(Box, ["danger", "warning"]) == [warning, danger, both]


def test_lookup_is_exact_on_type_and_tolerates_unknowns() -> None:
    store = RuleStore()
    store.register(Box, (), _noop)

    assert store.lookup(Card, {TYPE_LEVEL_TAG}) == []
    assert store.lookup(Box, {"nope"}) == []
    assert store.lookup(int, {TYPE_LEVEL_TAG}) == []


def test_iter_rules_lists_every_bucket_entry() -> None:
    store = RuleStore()
    fanned = store.register(Box, {"b", "a"}, _noop)
    plain = store.register(Card, (), _noop)

    assert list(store.iter_rules()) == [
        (Box, "a", fanned),
        (Box, "b", fanned),
        (Card, TYPE_LEVEL_TAG, plain),
    ]
    assert store.view_types() == (Box, Card)
