from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from .errors import BlueprintIndexError, BlueprintNotFoundError, ConfigurationError, KeyIndexMismatchError
from .ordered_map import OrderedMap

logger = logging.getLogger(__name__)

BlueprintFactory = Callable[[], Any]


def _blueprint_map() -> OrderedMap[str, BlueprintFactory]:
    return OrderedMap(case_insensitive=True)


class BlueprintRegistry:
    """Named blueprint factories in registration order, keyed case-insensitively."""

    def __init__(self, entries: Optional[OrderedMap[str, BlueprintFactory]] = None):
        self.entries = entries if entries is not None else _blueprint_map()

    @classmethod
    def from_entries(cls, entries: OrderedMap[str, BlueprintFactory]) -> "BlueprintRegistry":
        """Snapshot ``entries`` so later changes to the caller's map do not leak in."""
        frozen = _blueprint_map()
        for key, factory in entries.items():
            frozen[key] = factory
        return cls(entries=frozen)

    @property
    def keys(self) -> List[str]:
        return list(self.entries.keys())

    def __len__(self) -> int:
        return len(self.entries)

    def _require_key(self, key: str) -> None:
        if key not in self.entries:
            raise BlueprintNotFoundError(key, self.keys)

    def resolve(
        self,
        key: Optional[str] = None,
        index: Optional[int] = None,
        default_key: Optional[str] = None,
    ) -> BlueprintFactory:
        """Pick one factory.

        Precedence: explicit key (checked against ``index`` when both are given),
        then explicit index, then the builder's default key, then the first
        registered blueprint.
        """
        if len(self.entries) == 0:
            raise ConfigurationError("No blueprints defined for this builder.")

        if key is not None:
            self._require_key(key)
            if index is not None:
                position = self.entries.index_of(key)
                if position != index:
                    raise KeyIndexMismatchError(key, index, position)
            logger.debug("Resolved blueprint by key: %s", key)
            return self.entries[key]

        if index is not None:
            if index < 0 or index >= len(self.entries):
                raise BlueprintIndexError(index, len(self.entries))
            resolved, factory = self.entries.get_at(index)
            logger.debug("Resolved blueprint by index %d: %s", index, resolved)
            return factory

        if default_key is not None:
            self._require_key(default_key)
            logger.debug("Resolved blueprint by default key: %s", default_key)
            return self.entries[default_key]

        first, factory = self.entries.get_at(0)
        logger.debug("Resolved first registered blueprint: %s", first)
        return factory

    def realize(
        self,
        key: Optional[str] = None,
        index: Optional[int] = None,
        default_key: Optional[str] = None,
    ) -> Any:
        """Resolve a factory and invoke it for a fresh blueprint."""
        return self.resolve(key, index, default_key)()


__all__ = ["BlueprintFactory", "BlueprintRegistry"]
