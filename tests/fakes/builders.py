from __future__ import annotations

from typing import Any

from blueprint_builder import BlueprintBuilder, BlueprintSource

from tests.fakes.blueprints import AccountBlueprint, FrozenPersonBlueprint, PersonBlueprint, ReportBlueprint
from tests.fakes.targets import Account, Greeting, Person, Report


class PersonBuilder(BlueprintBuilder[PersonBlueprint, Person]):
    """Three blueprints plus a baseline counter override."""

    def configure_blueprints(self, blueprints):
        blueprints["default"] = lambda: PersonBlueprint("default", "SomeName", "SomeMetadata", 0)
        blueprints["alternative"] = lambda: PersonBlueprint("alternative", "AlternativeName", "AlternativeMetadata", 1)
        blueprints["alternative2"] = lambda: PersonBlueprint(
            "alternative2", "AlternativeName2", "AlternativeMetadata2", 2
        )

    def configure_default_values(self):
        self._index = 0
        self.set(lambda b: b.counter, factory=self._next_counter)

    def _next_counter(self, blueprint: PersonBlueprint) -> int:
        value = blueprint.counter + self._index
        self._index += 1
        return value


class HandBuiltPersonBuilder(PersonBuilder):
    def get_instance(self, blueprint: PersonBlueprint) -> Person:
        person = Person()
        person.name = blueprint.name.upper()
        person.metadata = blueprint.metadata
        person.counter = blueprint.counter
        return person


class PlainPersonBuilder(BlueprintBuilder[PersonBlueprint, Person]):
    """No baseline overrides."""

    def configure_blueprints(self, blueprints):
        blueprints["default"] = lambda: PersonBlueprint("default", "SomeName", "SomeMetadata", 0)
        blueprints["alternative"] = lambda: PersonBlueprint("alternative", "AlternativeName", "AlternativeMetadata", 1)


class DuplicateKeyBuilder(BlueprintBuilder[PersonBlueprint, Person]):
    def configure_blueprints(self, blueprints):
        blueprints["default"] = lambda: PersonBlueprint("default", "SomeName", "SomeMetadata", 0)
        blueprints["Alt"] = lambda: PersonBlueprint("Alt", "First", "FirstMetadata", 1)
        blueprints["other"] = lambda: PersonBlueprint("other", "Other", "OtherMetadata", 2)
        blueprints["ALT"] = lambda: PersonBlueprint("ALT", "Second", "SecondMetadata", 3)


class EmptyBuilder(BlueprintBuilder[PersonBlueprint, Person]):
    pass


class UntypedBuilder(BlueprintBuilder[Any, Any]):
    def configure_blueprints(self, blueprints):
        blueprints["default"] = lambda: PersonBlueprint("default", "SomeName", "SomeMetadata", 0)


class FrozenPersonBuilder(BlueprintBuilder[FrozenPersonBlueprint, Person]):
    def configure_blueprints(self, blueprints):
        blueprints["default"] = lambda: FrozenPersonBlueprint("Frozen")


class ReportBuilder(BlueprintBuilder[ReportBlueprint, Report]):
    def configure_blueprints(self, blueprints):
        blueprints["default"] = lambda: ReportBlueprint(tags=["a", "b"], metadata="ReportMetadata")
        blueprints["empty"] = lambda: ReportBlueprint(tags=[], metadata="")


class AccountBuilder(BlueprintBuilder[AccountBlueprint, Account]):
    def configure_blueprints(self, blueprints):
        blueprints["default"] = lambda: AccountBlueprint(owner="Ada", balance=10.5)
        blueprints["overdrawn"] = lambda: AccountBlueprint(owner="Tim", balance=-3)


class GreetingBuilder(BlueprintBuilder["GreetingBuilder", Greeting]):
    """The builder's own attributes are the blueprint."""

    blueprint_source = BlueprintSource.BUILDER

    name: str = "SomeName"
    metadata: str = "SomeMetadata"
    custom_value_outside_blueprint: int = 10
