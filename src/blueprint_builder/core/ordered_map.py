from __future__ import annotations

from typing import Any, Dict, Iterator, MutableMapping, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class OrderedMap(MutableMapping[K, V]):
    """Insertion-ordered mapping with positional lookup.

    With ``case_insensitive=True`` string keys are compared by their casefolded
    form. Re-assigning an existing key replaces the value in place and keeps both
    its position and the spelling it was first registered with.
    """

    def __init__(self, *, case_insensitive: bool = False) -> None:
        self.case_insensitive = case_insensitive
        # normalized key -> (original key, value)
        self._items: Dict[Any, Tuple[K, V]] = {}

    def _norm(self, key: Any) -> Any:
        if self.case_insensitive and isinstance(key, str):
            return key.casefold()
        return key

    def __getitem__(self, key: K) -> V:
        try:
            return self._items[self._norm(key)][1]
        except KeyError:
            raise KeyError(key) from None

    def __setitem__(self, key: K, value: V) -> None:
        norm = self._norm(key)
        if norm in self._items:
            original, _ = self._items[norm]
            self._items[norm] = (original, value)
        else:
            self._items[norm] = (key, value)

    def __delitem__(self, key: K) -> None:
        try:
            del self._items[self._norm(key)]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return self._norm(key) in self._items

    def __iter__(self) -> Iterator[K]:
        return (original for original, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self._items.values())
        return f"{type(self).__name__}({{{body}}})"

    def set(self, key: K, value: V) -> None:
        self[key] = value

    def contains_key(self, key: K) -> bool:
        return key in self

    def get_at(self, index: int) -> Tuple[K, V]:
        """Return the ``(key, value)`` pair registered at ``index``."""
        if index < 0 or index >= len(self._items):
            raise IndexError(f"Index {index} out of range for {len(self._items)} item(s)")
        return list(self._items.values())[index]

    def index_of(self, key: K) -> int:
        """Position of ``key`` in insertion order, or -1 when absent."""
        norm = self._norm(key)
        for position, candidate in enumerate(self._items):
            if candidate == norm:
                return position
        return -1

    def copy(self) -> "OrderedMap[K, V]":
        clone: OrderedMap[K, V] = OrderedMap(case_insensitive=self.case_insensitive)
        clone._items = dict(self._items)
        return clone


__all__ = ["OrderedMap"]
