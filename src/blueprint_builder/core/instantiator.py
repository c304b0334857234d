from __future__ import annotations

import inspect
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

from .errors import InstantiationError
from .introspection import (
    ConstructorCandidate,
    ParameterInfo,
    describe_constructors,
    read_members,
    set_member_value,
    settable_members,
)
from .ordered_map import OrderedMap
from .typing_utils import is_assignable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TargetInstantiator:
    """Builds a target from a blueprint by constructor matching and member injection.

    1. Reads every member of the blueprint into a case-insensitive snapshot.
    2. Ranks the target's constructor candidates by parameter count, most first.
    3. Picks the first candidate whose parameters are all satisfied by
       same-named, type-compatible snapshot values.
    4. Calls it, then assigns remaining compatible snapshot values to settable
       members that were not constructor parameters.

    The instantiator keeps no state between calls.
    """

    def instantiate(self, blueprint: Any, target_type: Type[T], *, exclude: Iterable[str] = ()) -> T:
        snapshot = read_members(blueprint, exclude=exclude)
        candidate = self.select_constructor(snapshot, target_type)
        if candidate is None:
            raise InstantiationError(target_type, type(blueprint))

        logger.debug(
            "Constructing %s via %s(%s)",
            target_type.__qualname__,
            candidate.name,
            ", ".join(candidate.parameter_names()),
        )
        instance = self._invoke(candidate, snapshot)
        self._inject_members(instance, snapshot, candidate.parameter_names())
        return instance

    def select_constructor(
        self, snapshot: OrderedMap[str, Any], target_type: type
    ) -> Optional[ConstructorCandidate]:
        ranked = sorted(describe_constructors(target_type), key=lambda c: c.arity, reverse=True)
        for candidate in ranked:
            if all(self._parameter_satisfied(p, snapshot) for p in candidate.parameters):
                return candidate
        return None

    @staticmethod
    def _parameter_satisfied(param: ParameterInfo, snapshot: OrderedMap[str, Any]) -> bool:
        if param.name not in snapshot:
            return param.has_default
        return is_assignable(snapshot[param.name], param.annotation)

    @staticmethod
    def _invoke(candidate: ConstructorCandidate, snapshot: OrderedMap[str, Any]) -> Any:
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for param in candidate.parameters:
            present = param.name in snapshot
            if param.kind == inspect.Parameter.POSITIONAL_ONLY:
                args.append(snapshot[param.name] if present else param.default)
            elif present:
                kwargs[param.name] = snapshot[param.name]
        return candidate.factory(*args, **kwargs)

    @staticmethod
    def _inject_members(instance: Any, snapshot: OrderedMap[str, Any], constructor_params: List[str]) -> None:
        assigned = {name.casefold() for name in constructor_params}
        injected: List[Tuple[str, Any]] = []
        for member in settable_members(instance):
            if member.name.casefold() in assigned or member.name not in snapshot:
                continue
            value = snapshot[member.name]
            if not is_assignable(value, member.annotation):
                continue
            set_member_value(instance, member.name, value)
            injected.append((member.name, value))
        if injected:
            logger.debug("Injected members: %s", ", ".join(name for name, _ in injected))


__all__ = ["TargetInstantiator"]
