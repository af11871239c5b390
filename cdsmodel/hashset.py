"""An insertion-ordered hash set.

Members are kept in the order they were first added. Removing a member
leaves the order of the others unchanged. An optional ``key`` function
decides which members count as equal.
"""

from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterator, Optional, TypeVar

__all__ = ["LinkedHashSet"]

T = TypeVar("T")


def _identity(item):
    return item


class LinkedHashSet(Generic[T]):
    """A set that remembers insertion order and the original stored members."""

    def __init__(self, items=(), key: Optional[Callable[[T], Hashable]] = None):
        self._key = key if key is not None else _identity
        self._items: dict[Hashable, T] = {}
        for item in items:
            self.add(item)

    def add(self, key: T) -> bool:
        """Add ``key``; return False if an equal member is already present."""
        k = self._key(key)
        if k in self._items:
            return False
        self._items[k] = key
        return True

    def remove(self, key: T) -> bool:
        """Remove the member equal to ``key``; return False if there was none."""
        return self._items.pop(self._key(key), _MISSING) is not _MISSING

    def contains(self, key: T) -> bool:
        """Return True if a member equal to ``key`` is present."""
        return self._key(key) in self._items

    def get(self, key: T) -> Optional[T]:
        """Return the stored member equal to ``key``, or None."""
        return self._items.get(self._key(key))

    def first(self) -> T:
        """Return the oldest member; raise KeyError if the set is empty."""
        try:
            return next(iter(self._items.values()))
        except StopIteration:
            raise KeyError("first(): set is empty") from None

    def copy(self) -> "LinkedHashSet[T]":
        """Return an independent set with the same members in the same order."""
        duplicate: LinkedHashSet[T] = LinkedHashSet(key=self._key)
        duplicate._items = dict(self._items)
        return duplicate

    def reset(self) -> None:
        """Remove every member."""
        self._items.clear()

    def is_empty(self) -> bool:
        return not self._items

    def __contains__(self, key) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        # Iterate over a snapshot so that members may be removed meanwhile.
        return iter(tuple(self._items.values()))

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"LinkedHashSet({list(self._items.values())!r})"


class _Missing:
    pass


_MISSING = _Missing()