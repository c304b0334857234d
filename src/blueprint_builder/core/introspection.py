"""Runtime introspection of blueprint and target types.

This module is the only place that looks inside user types. It answers four
questions: which constructor candidates a target offers, which members of an
object can be read, which members of a target can be assigned, and how to read
and write a member.
"""

from __future__ import annotations

import dataclasses
import inspect
import typing
from typing import Any, Callable, ClassVar, Dict, Iterable, List, get_origin

from pydantic import BaseModel, Field

from .ordered_map import OrderedMap

CONSTRUCTOR_MARKER = "__blueprint_constructor__"


def constructor(func: Any) -> Any:
    """Mark a classmethod or staticmethod as an alternate constructor candidate.

    Works above or below ``@classmethod``::

        class Money:
            def __init__(self, cents: int): ...

            @classmethod
            @constructor
            def from_amount(cls, amount: float, currency: str) -> "Money": ...
    """
    target = func.__func__ if isinstance(func, (classmethod, staticmethod)) else func
    setattr(target, CONSTRUCTOR_MARKER, True)
    return func


class ParameterInfo(BaseModel):
    """One parameter of a constructor candidate."""

    name: str
    annotation: Any = Field(default=Any)
    kind: inspect._ParameterKind = inspect.Parameter.POSITIONAL_OR_KEYWORD
    has_default: bool = False
    default: Any = None

    model_config = {"arbitrary_types_allowed": True}


class ConstructorCandidate(BaseModel):
    """A callable that produces the target plus its parameter list."""

    name: str
    factory: Callable[..., Any]
    parameters: List[ParameterInfo]

    model_config = {"arbitrary_types_allowed": True}

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def parameter_names(self) -> List[str]:
        return [p.name for p in self.parameters]


class MemberInfo(BaseModel):
    """A named member of a type with its declared type."""

    name: str
    annotation: Any = Field(default=Any)

    model_config = {"arbitrary_types_allowed": True}


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _is_class_var(annotation: Any) -> bool:
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    return isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar"))


def _user_classes(tp: type) -> List[type]:
    # base classes first; pydantic's own BaseModel machinery is not user state
    return [
        klass
        for klass in reversed(tp.__mro__)
        if klass is not object and not klass.__module__.startswith(("pydantic", "typing"))
    ]


def type_hints(tp: type) -> Dict[str, Any]:
    """Class annotations across the MRO, resolved where possible.

    Annotations whose forward references cannot be resolved stay strings and
    are treated as unconstrained. Pydantic models report their field types.
    """
    hints: Dict[str, Any] = {}
    for klass in _user_classes(tp):
        try:
            hints.update(inspect.get_annotations(klass, eval_str=True))
        except (NameError, TypeError, SyntaxError, AttributeError):
            hints.update(inspect.get_annotations(klass))
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        hints.update({name: field.annotation for name, field in tp.model_fields.items()})
    return hints


def _properties(tp: type) -> Dict[str, property]:
    found: Dict[str, property] = {}
    for klass in _user_classes(tp):
        for name, attr in vars(klass).items():
            if isinstance(attr, property):
                found[name] = attr
    return found


def _slots(tp: type) -> List[str]:
    names: List[str] = []
    for klass in _user_classes(tp):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if not _is_dunder(s))
    return names


def _property_annotation(prop: property) -> Any:
    if prop.fset is not None:
        try:
            hints = typing.get_type_hints(prop.fset)
        except (NameError, TypeError):
            hints = {}
        params = list(inspect.signature(prop.fset).parameters)
        if len(params) >= 2 and params[1] in hints:
            return hints[params[1]]
    if prop.fget is not None:
        try:
            return typing.get_type_hints(prop.fget).get("return", Any)
        except (NameError, TypeError):
            return Any
    return Any


def _signature(obj: Callable[..., Any]) -> inspect.Signature:
    try:
        return inspect.signature(obj, eval_str=True)
    except (NameError, TypeError, SyntaxError):
        return inspect.signature(obj)


def _parameters(sig: inspect.Signature) -> List[ParameterInfo]:
    params: List[ParameterInfo] = []
    for p in sig.parameters.values():
        if p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        params.append(
            ParameterInfo(
                name=p.name,
                annotation=Any if p.annotation is inspect.Parameter.empty else p.annotation,
                kind=p.kind,
                has_default=p.default is not inspect.Parameter.empty,
                default=None if p.default is inspect.Parameter.empty else p.default,
            )
        )
    return params


def describe_constructors(target_type: type) -> List[ConstructorCandidate]:
    """List constructor candidates: the class call first, then marked constructors."""
    try:
        init_sig = _signature(target_type)
    except ValueError:
        init_sig = inspect.Signature()
    candidates = [ConstructorCandidate(name="__init__", factory=target_type, parameters=_parameters(init_sig))]

    for name, attr in vars(target_type).items():
        if not isinstance(attr, (classmethod, staticmethod)):
            continue
        if not getattr(attr.__func__, CONSTRUCTOR_MARKER, False):
            continue
        bound = getattr(target_type, name)
        candidates.append(ConstructorCandidate(name=name, factory=bound, parameters=_parameters(_signature(bound))))
    return candidates


def declared_members(tp: type) -> Dict[str, Any]:
    """Members a type declares statically (annotations, properties, slots)."""
    members: Dict[str, Any] = {}
    for name, annotation in type_hints(tp).items():
        if _is_dunder(name) or _is_class_var(annotation):
            continue
        members[name] = annotation
    for name in _slots(tp):
        members.setdefault(name, Any)
    for name, prop in _properties(tp).items():
        members[name] = _property_annotation(prop)
    return members


def member_type(tp: type, name: str) -> Any:
    """Declared type of ``name`` on ``tp``; ``Any`` when undeclared."""
    return declared_members(tp).get(name, Any)


def read_only_members(tp: type) -> List[str]:
    """Properties of ``tp`` that can be read but not assigned."""
    return [name for name, prop in _properties(tp).items() if prop.fset is None]


def read_members(obj: Any, *, exclude: Iterable[str] = ()) -> OrderedMap[str, Any]:
    """Case-insensitive map of every readable member of ``obj`` to its value."""
    skipped = set(exclude)
    snapshot: OrderedMap[str, Any] = OrderedMap(case_insensitive=True)
    tp = type(obj)

    names: List[str] = []
    for name, annotation in type_hints(tp).items():
        if not _is_class_var(annotation):
            names.append(name)
    names.extend(_slots(tp))
    names.extend(name for name, prop in _properties(tp).items() if prop.fget is not None)
    names.extend(getattr(obj, "__dict__", {}).keys())

    for name in names:
        if name in skipped or _is_dunder(name) or name in snapshot:
            continue
        try:
            value = get_member_value(obj, name)
        except AttributeError:
            # annotated but never assigned, or an unset slot
            continue
        snapshot[name] = value
    return snapshot


def settable_members(instance: Any) -> List[MemberInfo]:
    """Members of a constructed target that may be assigned."""
    tp = type(instance)
    members: Dict[str, Any] = {}
    for name, annotation in type_hints(tp).items():
        if not _is_dunder(name) and not _is_class_var(annotation):
            members[name] = annotation
    for name in _slots(tp):
        members.setdefault(name, Any)
    for name in getattr(instance, "__dict__", {}):
        if not _is_dunder(name):
            members.setdefault(name, Any)
    for name, prop in _properties(tp).items():
        if prop.fset is None:
            members.pop(name, None)
        else:
            members[name] = _property_annotation(prop)
    return [MemberInfo(name=name, annotation=annotation) for name, annotation in members.items()]


def _is_frozen(obj: Any) -> bool:
    if isinstance(obj, BaseModel):
        return bool(type(obj).model_config.get("frozen"))
    params = getattr(type(obj), "__dataclass_params__", None)
    return bool(params is not None and params.frozen)


def get_member_value(obj: Any, name: str) -> Any:
    return getattr(obj, name)


def set_member_value(obj: Any, name: str, value: Any) -> None:
    """Assign a member, bypassing frozen dataclass and pydantic guards."""
    if _is_frozen(obj):
        object.__setattr__(obj, name, value)
        return
    try:
        setattr(obj, name, value)
    except dataclasses.FrozenInstanceError:
        object.__setattr__(obj, name, value)


__all__ = [
    "ConstructorCandidate",
    "MemberInfo",
    "ParameterInfo",
    "constructor",
    "declared_members",
    "describe_constructors",
    "get_member_value",
    "member_type",
    "read_only_members",
    "read_members",
    "set_member_value",
    "settable_members",
    "type_hints",
]
