from __future__ import annotations

from typing import Any

from factory_engine.type_chain import DefaultTypeReflector, walk_type_chain
from tests.views import Box, Card, View


class _UnresolvableReflector:
    """Knows the runtime type but never a supertype."""

    def runtime_type(self, view: Any) -> type:
        return type(view)

    def supertype(self, view_type: type) -> type | None:
        return None


class _CyclicReflector:
    def runtime_type(self, view: Any) -> type:
        return Card

    def supertype(self, view_type: type) -> type | None:
        return Box if view_type is Card else Card


def test_chain_runs_from_most_derived_to_base_exclusive() -> None:
    chain = list(walk_type_chain(Card(), base_type=View, reflector=DefaultTypeReflector()))
    assert chain == [Card, Box]


def test_chain_with_object_base_includes_every_class() -> None:
    chain = list(walk_type_chain(Card(), base_type=object, reflector=DefaultTypeReflector()))
    assert chain == [Card, Box, View]


def test_view_of_base_type_yields_empty_chain() -> None:
    assert list(walk_type_chain(View(), base_type=View, reflector=DefaultTypeReflector())) == []


def test_unresolvable_supertype_terminates_walk() -> None:
    chain = list(walk_type_chain(Card(), base_type=View, reflector=_UnresolvableReflector()))
    assert chain == [Card]


def test_cyclic_reflector_terminates_walk() -> None:
    chain = list(walk_type_chain(Card(), base_type=View, reflector=_CyclicReflector()))
    assert chain == [Card, Box]


def test_default_reflector_follows_first_base() -> None:
    class Mixin:
        pass

    class Mixed(Box, Mixin):
        pass

    reflector = DefaultTypeReflector()
    assert reflector.supertype(Mixed) is Box
    assert reflector.supertype(object) is None


def test_default_reflector_skips_mixin_listed_first() -> None:
    class Mixin:
        pass

    class Fancy(Mixin, Box):
        pass

    assert DefaultTypeReflector().supertype(Fancy) is Box
    assert DefaultTypeReflector(base_type=View).supertype(Fancy) is Box
    chain = list(walk_type_chain(Fancy(), base_type=View, reflector=DefaultTypeReflector(View)))
    assert chain == [Fancy, Box]


def test_default_reflector_prefers_bases_derived_from_base_type() -> None:
    class Deep:
        pass

    class Deeper(Deep):
        pass

    class Deepest(Deeper):
        pass

    class Widget(Deepest, View):
        pass

    assert DefaultTypeReflector().supertype(Widget) is Deepest
    assert DefaultTypeReflector(base_type=View).supertype(Widget) is View
