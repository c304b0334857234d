"""
Tests for the override chain.

Tests cover:
- ordering and last-wins semantics
- factories that see earlier overrides
- conversion to the declared member type
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

import pytest

from blueprint_builder.core.errors import ConversionError
from blueprint_builder.core.overrides import OverrideChain
from blueprint_builder.core.selectors import MemberSelector
from tests.fakes.blueprints import BadgeBlueprint, FrozenPersonBlueprint, PersonBlueprint, SettingsBlueprint
from tests.fakes.builders import FrozenPersonBuilder, PlainPersonBuilder


@dataclass
class ScheduleBlueprint:
    starts_on: date
    ratio: float = 0.5
    note: Optional[str] = "note"


def _person() -> PersonBlueprint:
    return PersonBlueprint("default", "SomeName", "SomeMetadata", 0)


def _chain(*pairs) -> OverrideChain:
    chain = OverrideChain()
    for name, value in pairs:
        chain.add(MemberSelector(name=name), value)
    return chain


class TestChainOrdering:
    def test_later_override_wins(self):
        blueprint = _chain(("name", "First"), ("name", "Second")).apply(_person())
        assert blueprint.name == "Second"

    def test_factory_sees_earlier_overrides(self):
        chain = _chain(("counter", 5))
        chain.add(MemberSelector(name="name"), factory=lambda b: f"Person{b.counter}")

        blueprint = chain.apply(_person())
        assert blueprint.name == "Person5"

    def test_factory_runs_on_every_apply(self):
        calls = []

        def next_counter(blueprint):
            calls.append(blueprint)
            return len(calls)

        chain = OverrideChain()
        chain.add(MemberSelector(name="counter"), factory=next_counter)

        assert chain.apply(_person()).counter == 1
        assert chain.apply(_person()).counter == 2

    def test_copy_is_independent(self):
        chain = _chain(("name", "First"))
        twin = chain.copy()
        twin.add(MemberSelector(name="metadata"), "Other")

        assert len(chain) == 1
        assert len(twin) == 2

    def test_empty_chain_returns_snapshot_untouched(self):
        blueprint = _person()
        assert OverrideChain().apply(blueprint) is blueprint
        assert blueprint.name == "SomeName"


class TestConversion:
    def test_string_to_int(self):
        assert _chain(("counter", "42")).apply(_person()).counter == 42

    def test_int_kept_for_float_member(self):
        blueprint = _chain(("ratio", 2)).apply(ScheduleBlueprint(starts_on=date(2026, 1, 1)))
        assert blueprint.ratio == 2

    def test_iso_string_to_date(self):
        blueprint = _chain(("starts_on", "2026-03-01")).apply(ScheduleBlueprint(starts_on=date(2026, 1, 1)))
        assert blueprint.starts_on == date(2026, 3, 1)

    def test_none_for_optional_member(self):
        blueprint = _chain(("note", None)).apply(ScheduleBlueprint(starts_on=date(2026, 1, 1)))
        assert blueprint.note is None

    def test_unconvertible_value(self):
        with pytest.raises(ConversionError) as exc_info:
            _chain(("counter", "abc")).apply(_person())
        assert exc_info.value.member == "counter"
        assert "'abc'" in str(exc_info.value)

    def test_typeddict_member(self):
        blueprint = _chain(("settings", {"level": 2})).apply(SettingsBlueprint(settings={"level": 1}))
        assert blueprint.settings == {"level": 2}

    def test_read_only_property_fails_as_conversion_error(self):
        with pytest.raises(ConversionError) as exc_info:
            _chain(("label", "Other")).apply(BadgeBlueprint(holder="Ada"))
        assert exc_info.value.member == "label"

    def test_frozen_blueprint_is_still_overridden(self):
        blueprint = _chain(("counter", 7)).apply(FrozenPersonBlueprint("Frozen"))
        assert blueprint.counter == 7


class TestBuilderOverrides:
    """Overrides registered through BlueprintBuilder.set."""

    def test_bad_value_fails_at_build_not_at_set(self):
        builder = PlainPersonBuilder.create().set("counter", "abc")

        with pytest.raises(ConversionError):
            builder.build()

    def test_set_requires_value_or_factory(self):
        builder = PlainPersonBuilder.create()

        with pytest.raises(TypeError):
            builder.set("counter")
        with pytest.raises(TypeError):
            builder.set("counter", 1, factory=lambda b: 2)

    def test_none_for_required_member_fails_at_build(self):
        builder = PlainPersonBuilder.create().set("metadata", None)

        with pytest.raises(ConversionError):
            builder.build()

    def test_frozen_blueprint_through_builder(self):
        person = FrozenPersonBuilder.create().set(lambda b: b.counter, 9).build()
        assert person.name == "Frozen"
        assert person.counter == 9
