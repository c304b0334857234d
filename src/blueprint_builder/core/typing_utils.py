from __future__ import annotations

"""Type compatibility checks and the single override conversion step."""

import inspect
import types
from typing import Annotated, Any, Literal, TypeVar, Union, get_args, get_origin, is_typeddict

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError, PydanticUserError

from .errors import ConversionError

_NONE_TYPE = type(None)


def _is_unconstrained(declared: Any) -> bool:
    # unresolved string annotations and bare TypeVars carry no usable constraint
    return (
        declared is Any
        or declared is object
        or declared is inspect.Parameter.empty
        or isinstance(declared, (str, TypeVar))
    )


def _is_union(origin: Any) -> bool:
    return origin is Union or origin is types.UnionType


def is_nullable(declared: Any) -> bool:
    """True when ``None`` is a legal value for ``declared``."""
    if _is_unconstrained(declared) or declared is None or declared is _NONE_TYPE:
        return True
    origin = get_origin(declared)
    if _is_union(origin):
        return any(is_nullable(arg) for arg in get_args(declared))
    if origin is Annotated:
        return is_nullable(get_args(declared)[0])
    if origin is Literal:
        return None in get_args(declared)
    return False


def is_assignable(value: Any, declared: Any) -> bool:
    """Check whether ``value`` may be assigned to a member declared as ``declared``.

    Generic aliases are checked on their origin only (``list[str]`` accepts any
    list). ``int`` is accepted where ``float`` or ``complex`` is declared, as in
    the numeric tower of PEP 484; ``bool`` is not widened. A TypedDict accepts
    any dict, and a protocol that is not runtime-checkable accepts anything.
    """
    if _is_unconstrained(declared):
        return True
    if value is None:
        return is_nullable(declared)
    origin = get_origin(declared)
    if _is_union(origin):
        return any(is_assignable(value, arg) for arg in get_args(declared))
    if origin is Annotated:
        return is_assignable(value, get_args(declared)[0])
    if origin is Literal:
        return value in get_args(declared)
    if origin is type:
        return isinstance(value, type)
    if origin is not None:
        declared = origin
    supertype = getattr(declared, "__supertype__", None)
    if supertype is not None:  # typing.NewType
        return is_assignable(value, supertype)
    if declared in (float, complex) and isinstance(value, int) and not isinstance(value, bool):
        return True
    if declared is complex and isinstance(value, float):
        return True
    if is_typeddict(declared):
        return isinstance(value, dict)
    if isinstance(declared, type):
        try:
            return isinstance(value, declared)
        except TypeError:
            # protocols without @runtime_checkable cannot be checked
            return True
    return True


def convert_value(value: Any, declared: Any, *, member: str) -> Any:
    """Return ``value`` or its single best-effort conversion to ``declared``.

    Conversion runs through pydantic in lax mode (``"42"`` -> ``42``,
    ``1`` -> ``1.0``, ``"2024-01-01"`` -> ``date``). Raises
    :class:`ConversionError` when the value cannot be represented.
    """
    if is_assignable(value, declared):
        return value
    try:
        adapter = TypeAdapter(declared)
    except (PydanticSchemaGenerationError, PydanticUserError) as exc:
        raise ConversionError(member, value, declared, cause=exc) from exc
    try:
        return adapter.validate_python(value)
    except ValidationError as exc:
        raise ConversionError(member, value, declared, cause=exc) from exc


__all__ = ["convert_value", "is_assignable", "is_nullable"]
