from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, Field

from .errors import ConversionError
from .introspection import member_type, set_member_value
from .selectors import MemberSelector
from .typing_utils import convert_value

logger = logging.getLogger(__name__)


class Override(BaseModel):
    """A deferred assignment of one blueprint member.

    Holds either a static ``value`` or a ``factory`` that receives the snapshot
    being built and returns the value.
    """

    member: MemberSelector
    value: Any = None
    factory: Optional[Callable[[Any], Any]] = None

    model_config = {"arbitrary_types_allowed": True}

    def apply(self, snapshot: Any) -> None:
        raw = self.factory(snapshot) if self.factory is not None else self.value
        declared = member_type(type(snapshot), self.member.name)
        value = convert_value(raw, declared, member=self.member.name)
        try:
            set_member_value(snapshot, self.member.name, value)
        except AttributeError as exc:
            # read-only property
            raise ConversionError(self.member.name, value, declared, cause=exc) from exc


class OverrideChain(BaseModel):
    """Ordered overrides replayed onto every fresh blueprint snapshot."""

    overrides: List[Override] = Field(default_factory=list)

    def add(self, member: MemberSelector, value: Any = None, *, factory: Optional[Callable[[Any], Any]] = None) -> None:
        self.overrides.append(Override(member=member, value=value, factory=factory))

    def apply(self, snapshot: Any) -> Any:
        """Run every override in registration order; later ones win."""
        for override in self.overrides:
            override.apply(snapshot)
        if self.overrides:
            logger.debug(
                "Applied %d override(s) to %s: %s",
                len(self.overrides),
                type(snapshot).__qualname__,
                ", ".join(o.member.name for o in self.overrides),
            )
        return snapshot

    def copy(self) -> "OverrideChain":  # type: ignore[override]
        return OverrideChain(overrides=list(self.overrides))

    def __len__(self) -> int:
        return len(self.overrides)


__all__ = ["Override", "OverrideChain"]
