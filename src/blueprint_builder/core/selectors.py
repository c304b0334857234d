from __future__ import annotations

import keyword
from typing import Any, Callable, Iterable, Optional, Union

from pydantic import BaseModel

from .errors import MemberSelectorError
from .introspection import declared_members, read_only_members

MemberRef = Union[str, Callable[[Any], Any]]


class _RecordedAccess:
    """Value handed back for the single attribute read by a selector."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name


class _MemberRecorder:
    """Stand-in blueprint that records which attributes a selector reads."""

    __slots__ = ("_recorded_names",)

    def __init__(self) -> None:
        self._recorded_names: list[str] = []

    def __getattr__(self, name: str) -> _RecordedAccess:
        self._recorded_names.append(name)
        return _RecordedAccess(name)


class MemberSelector(BaseModel):
    """Reference to one member of a blueprint, e.g. ``"name"`` or ``lambda b: b.name``."""

    name: str

    @classmethod
    def resolve(
        cls,
        ref: MemberRef,
        owner: Optional[type] = None,
        *,
        ignore: Iterable[str] = (),
    ) -> "MemberSelector":
        """Turn a member name or a single-access lambda into a selector.

        When ``owner`` declares its members statically (annotations, properties
        or slots, minus ``ignore``) the name must be one of them.
        """
        if isinstance(ref, str):
            name = ref.strip()
            if not name.isidentifier() or keyword.iskeyword(name):
                raise MemberSelectorError(ref, "expected a single member name")
        elif callable(ref):
            name = cls._record(ref)
        else:
            raise MemberSelectorError(ref, "expected a member name or a lambda like 'lambda b: b.name'")

        if owner is not None:
            skipped = set(ignore)
            known = [member for member in declared_members(owner) if member not in skipped]
            if known and name not in known:
                available = ", ".join(sorted(known))
                raise MemberSelectorError(ref, f"'{name}' is not a member of {owner.__qualname__}. Available: {available}")
            if name in read_only_members(owner):
                raise MemberSelectorError(ref, f"'{name}' is a read-only property of {owner.__qualname__}")
        return cls(name=name)

    @staticmethod
    def _record(ref: Callable[[Any], Any]) -> str:
        recorder = _MemberRecorder()
        try:
            result = ref(recorder)
        except (AttributeError, TypeError) as exc:
            raise MemberSelectorError(ref, f"selector must only read one member ({exc})") from exc
        if len(recorder._recorded_names) != 1 or not isinstance(result, _RecordedAccess):
            raise MemberSelectorError(ref, "selector must return exactly one member access")
        return result.name

    def __str__(self) -> str:
        return self.name


__all__ = ["MemberRef", "MemberSelector"]
