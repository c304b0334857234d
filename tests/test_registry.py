"""
Tests for blueprint selection.

Tests cover:
- precedence of key, index, default key and first blueprint
- failure modes and their messages
- duplicate registration
"""

import pytest

from blueprint_builder.core.errors import (
    BlueprintIndexError,
    BlueprintNotFoundError,
    ConfigurationError,
    KeyIndexMismatchError,
)
from blueprint_builder.core.ordered_map import OrderedMap
from blueprint_builder.core.registry import BlueprintRegistry
from tests.fakes.builders import DuplicateKeyBuilder, EmptyBuilder, PlainPersonBuilder


def _registry(*keys: str) -> BlueprintRegistry:
    entries = OrderedMap(case_insensitive=True)
    for key in keys:
        entries[key] = lambda key=key: {"key": key}
    return BlueprintRegistry.from_entries(entries)


class TestResolutionOrder:
    """Key, then index, then default key, then the first blueprint."""

    def test_first_blueprint_when_nothing_given(self):
        assert _registry("a", "b").realize() == {"key": "a"}

    def test_default_key_used_without_key_or_index(self):
        assert _registry("a", "b").realize(default_key="b") == {"key": "b"}

    def test_index_beats_default_key(self):
        assert _registry("a", "b", "c").realize(index=2, default_key="b") == {"key": "c"}

    def test_key_beats_default_key(self):
        assert _registry("a", "b").realize("a", default_key="b") == {"key": "a"}

    def test_key_lookup_ignores_case(self):
        assert _registry("Alpha", "beta").realize("ALPHA") == {"key": "Alpha"}

    def test_matching_key_and_index(self):
        assert _registry("a", "b").realize("b", 1) == {"key": "b"}

    def test_every_realize_is_a_fresh_blueprint(self):
        registry = _registry("a")
        assert registry.realize() is not registry.realize()


class TestResolutionFailures:
    """Errors raised while picking a blueprint."""

    def test_empty_registry(self):
        with pytest.raises(ConfigurationError, match="No blueprints defined"):
            BlueprintRegistry().resolve()

    def test_empty_registry_wins_over_bad_key(self):
        with pytest.raises(ConfigurationError):
            BlueprintRegistry().resolve("missing")

    def test_unknown_key_lists_available(self):
        with pytest.raises(BlueprintNotFoundError) as exc_info:
            _registry("default", "alternative").resolve("nope")
        assert str(exc_info.value) == "Blueprint 'nope' not found. Available blueprints: default, alternative"
        assert exc_info.value.available == ["default", "alternative"]

    def test_unknown_key_is_a_key_error(self):
        with pytest.raises(KeyError):
            _registry("a").resolve("nope")

    def test_unknown_default_key(self):
        with pytest.raises(BlueprintNotFoundError):
            _registry("a").resolve(default_key="nope")

    def test_key_and_index_mismatch(self):
        with pytest.raises(KeyIndexMismatchError) as exc_info:
            _registry("default", "alternative", "alternative2").resolve("alternative", 2)
        assert exc_info.value.key_position == 1
        assert "does not match" in str(exc_info.value)

    def test_unknown_key_reported_before_mismatch(self):
        with pytest.raises(BlueprintNotFoundError):
            _registry("a", "b").resolve("nope", 0)

    @pytest.mark.parametrize("index", [2, 5, -1])
    def test_index_out_of_range(self, index):
        with pytest.raises(BlueprintIndexError) as exc_info:
            _registry("a", "b").resolve(index=index)
        assert exc_info.value.size == 2


class TestBuilderRegistration:
    """Registration through configure_blueprints."""

    def test_registration_order_is_kept(self):
        builder = PlainPersonBuilder.create()
        assert builder.registered_blueprint_keys == ("default", "alternative")

    def test_duplicate_key_overwrites_in_place(self):
        builder = DuplicateKeyBuilder.create()

        assert builder.registered_blueprint_keys == ("default", "Alt", "other")
        assert builder.build("alt").name == "Second"
        assert builder.build(index=1).counter == 3

    def test_builder_without_blueprints_fails_on_build(self):
        builder = EmptyBuilder.create()

        assert builder.registered_blueprint_keys == ()
        with pytest.raises(ConfigurationError):
            builder.build()

    def test_registry_is_detached_from_registration_map(self):
        entries = OrderedMap(case_insensitive=True)
        entries["a"] = dict
        registry = BlueprintRegistry.from_entries(entries)
        entries["b"] = dict

        assert registry.keys == ["a"]
