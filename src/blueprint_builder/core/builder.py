from __future__ import annotations

"""Fluent builder that turns named blueprints into target objects."""

import copy
import logging
from enum import Enum
from typing import (
    Any,
    Callable,
    ClassVar,
    FrozenSet,
    Generic,
    Iterator,
    Optional,
    Tuple,
    Type,
    TypeVar,
    get_args,
    get_origin,
)

from blueprint_builder.utils.logging import log_calls

from .errors import ConfigurationError
from .instantiator import TargetInstantiator
from .ordered_map import OrderedMap
from .overrides import OverrideChain
from .registry import BlueprintFactory, BlueprintRegistry
from .selectors import MemberRef, MemberSelector

logger = logging.getLogger(__name__)

BlueprintT = TypeVar("BlueprintT")
TargetT = TypeVar("TargetT")
BuilderT = TypeVar("BuilderT", bound="BlueprintBuilder[Any, Any]")

_MISSING: Any = object()


def _is_concrete(arg: Any) -> bool:
    # typing.Any is a class on 3.11+ but names no target
    return isinstance(arg, type) and arg is not Any


class BlueprintSource(str, Enum):
    """Where blueprint snapshots come from."""

    DEDICATED = "dedicated"  # factories registered in configure_blueprints
    BUILDER = "builder"  # the builder's own attributes


class BlueprintBuilder(Generic[BlueprintT, TargetT]):
    """Base class for fixture builders.

    Subclasses register named blueprint factories and optionally baseline
    overrides::

        class UserBuilder(BlueprintBuilder[UserBlueprint, User]):
            def configure_blueprints(self, blueprints):
                blueprints["default"] = lambda: UserBlueprint(name="Ada", age=36)
                blueprints["minor"] = lambda: UserBlueprint(name="Tim", age=12)

            def configure_default_values(self):
                self.set("email", factory=lambda b: f"{b.name.lower()}@example.com")

        user = UserBuilder.create().set("age", 40).build()

    Builders must be obtained through :meth:`create` (or :func:`create_builder`),
    which runs both configuration hooks exactly once. ``target_type`` and
    ``blueprint_type`` are taken from the generic arguments unless the subclass
    sets them.
    """

    target_type: ClassVar[Optional[type]] = None
    blueprint_type: ClassVar[Optional[type]] = None
    blueprint_source: ClassVar[BlueprintSource] = BlueprintSource.DEDICATED
    default_blueprint_key: ClassVar[str] = "default"

    _STATE_ATTRS: ClassVar[Tuple[str, ...]] = ("default_key", "instantiator", "_registry", "_overrides")

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for base in cls.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if not (isinstance(origin, type) and issubclass(origin, BlueprintBuilder)):
                continue
            args = get_args(base)
            if len(args) != 2:
                continue
            blueprint_arg, target_arg = args
            if "blueprint_type" not in cls.__dict__ and _is_concrete(blueprint_arg):
                cls.blueprint_type = blueprint_arg
            if "target_type" not in cls.__dict__ and _is_concrete(target_arg):
                cls.target_type = target_arg

    def __init__(self) -> None:
        self.default_key: Optional[str] = None
        self.instantiator = TargetInstantiator()
        self._registry = BlueprintRegistry()
        self._overrides = OverrideChain()

    @classmethod
    def create(cls: Type[BuilderT], default_key: Optional[str] = None) -> BuilderT:
        """Create a configured builder.

        ``default_key`` selects the blueprint used by :meth:`build` when no key
        or index is passed; without it the first registered blueprint is used.
        """
        return create_builder(cls, default_key)

    # configuration hooks

    def configure_blueprints(self, blueprints: OrderedMap[str, BlueprintFactory]) -> None:
        """Register blueprint factories (keys are case-insensitive).

        The default registers the builder's own state under ``"default"`` when
        ``blueprint_source`` is ``BlueprintSource.BUILDER`` and nothing otherwise.
        """
        if self.blueprint_source is BlueprintSource.BUILDER:
            blueprints[self.default_blueprint_key] = self._copy_state

    def configure_default_values(self) -> None:
        """Hook for baseline ``set`` calls; runs once, after registration."""

    # fluent configuration

    def set(
        self: BuilderT,
        member: MemberRef,
        value: Any = _MISSING,
        *,
        factory: Optional[Callable[[Any], Any]] = None,
    ) -> BuilderT:
        """Override a blueprint member for every following build.

        ``member`` is a member name or a lambda such as ``lambda b: b.name``.
        Pass either a static ``value`` or a ``factory`` that receives the
        blueprint snapshot (with earlier overrides already applied).
        """
        if (value is _MISSING) == (factory is None):
            raise TypeError("set() takes either a value or a factory, not both or neither")
        selector = MemberSelector.resolve(member, self._blueprint_owner(), ignore=self._machinery_names())
        self._overrides.add(selector, None if value is _MISSING else value, factory=factory)
        return self

    # building

    def build(self, key: Optional[str] = None, index: Optional[int] = None) -> TargetT:
        """Build one target.

        ``key`` selects a blueprint by name; ``index`` by registration position.
        With both, they must refer to the same blueprint. With neither, the
        default key given to :meth:`create` is used, then the first blueprint.
        """
        blueprint = self._registry.realize(key, index, self.default_key)
        self._overrides.apply(blueprint)
        return self.get_instance(blueprint)

    def build_many(self, *keys: str) -> Iterator[TargetT]:
        """Lazily build one target per key, in order; no keys yields nothing."""
        if not keys:
            return iter(())
        return self.build_cycle(None, *keys)

    def build_cycle(self, size: Optional[int] = None, *keys: str) -> Iterator[TargetT]:
        """Lazily build ``size`` targets, cycling through ``keys``.

        Without keys every registered blueprint is cycled in registration
        order. ``size`` defaults to the number of keys, or of blueprints.
        """
        count = len(self._registry)
        if size is None:
            size = len(keys) if keys else count
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        for i in range(size):
            if keys:
                yield self.build(keys[i % len(keys)])
            else:
                yield self.build(index=i % count if count else None)

    def get_instance(self, blueprint: BlueprintT) -> TargetT:
        """Turn a prepared blueprint into the target.

        Override to construct targets by hand; the default delegates to
        ``self.instantiator``.
        """
        if blueprint is None:
            return None  # type: ignore[return-value]
        if self.target_type is None:
            raise ConfigurationError(
                f"{type(self).__qualname__} has no target_type; declare it or override get_instance()."
            )
        return self.instantiator.instantiate(blueprint, self.target_type, exclude=self._machinery_names())

    # introspection helpers

    @property
    def registered_blueprint_keys(self) -> Tuple[str, ...]:
        """Registered keys in registration order."""
        return tuple(self._registry.keys)

    def create_blueprint(self, key: str) -> BlueprintT:
        """A fresh blueprint for ``key`` with no overrides applied."""
        return self._registry.realize(key)

    def clone(self: BuilderT) -> BuilderT:
        """A newly created builder with the same default key, instantiator and overrides."""
        twin = create_builder(type(self), self.default_key)
        twin.instantiator = self.instantiator
        twin._overrides = self._overrides.copy()
        return twin

    def _copy_state(self: BuilderT) -> BuilderT:
        return copy.copy(self)

    def _blueprint_owner(self) -> Optional[type]:
        if self.blueprint_source is BlueprintSource.BUILDER:
            return type(self)
        return self.blueprint_type

    def _machinery_names(self) -> FrozenSet[str]:
        if self.blueprint_source is not BlueprintSource.BUILDER:
            return frozenset()
        return _builder_machinery()


def _builder_machinery() -> FrozenSet[str]:
    return frozenset(dir(BlueprintBuilder)) | frozenset(BlueprintBuilder._STATE_ATTRS)


@log_calls()
def create_builder(builder_cls: Type[BuilderT], default_key: Optional[str] = None) -> BuilderT:
    """Two-phase construction of a builder.

    The builder is instantiated, its blueprints are registered into a fresh
    map which is then frozen into the registry, and finally the baseline
    overrides are configured. No blueprint is resolved here.
    """
    builder = builder_cls()
    builder.default_key = default_key

    blueprints: OrderedMap[str, BlueprintFactory] = OrderedMap(case_insensitive=True)
    builder.configure_blueprints(blueprints)
    builder._registry = BlueprintRegistry.from_entries(blueprints)
    logger.debug(
        "Registered %d blueprint(s) for %s: %s",
        len(builder._registry),
        builder_cls.__qualname__,
        ", ".join(builder._registry.keys),
    )

    builder.configure_default_values()
    return builder


__all__ = [
    "BlueprintBuilder",
    "BlueprintSource",
    "create_builder",
]
