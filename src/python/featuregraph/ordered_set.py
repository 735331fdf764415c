# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""Insertion-ordered sets.

Coordinates and descriptors are collected in the order they are discovered, so every set handed
back to callers remembers first-seen order. `OrderedSet` is the mutable variant used for the
visited ledger of a traversal; `FrozenOrderedSet` is the hashable variant used for results.
"""

from __future__ import annotations

import itertools
from typing import AbstractSet, Any, Hashable, Iterable, Iterator, MutableSet, TypeVar, cast

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
_TAbstractOrderedSet = TypeVar("_TAbstractOrderedSet", bound="_AbstractOrderedSet")


class _AbstractOrderedSet(AbstractSet[T]):
    def __init__(self, iterable: Iterable[T] | None = None) -> None:
        # NB: Dictionaries are ordered in Python 3.7+.
        self._items: dict[T, None] = {v: None for v in iterable or ()}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: Any) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        name = self.__class__.__name__
        if not self:
            return f"{name}()"
        return f"{name}({list(self)!r})"

    def __eq__(self, other: Any) -> bool:
        """Equal to any set with the same members, in any order.

        Compare `list(...)` values to take order into account.
        """
        if not isinstance(other, AbstractSet):
            return NotImplemented
        return len(self) == len(other) and all(item in other for item in self)

    def __or__(self: _TAbstractOrderedSet, other: Iterable[T]) -> _TAbstractOrderedSet:  # type: ignore[override]
        return self.union(other)

    def union(self: _TAbstractOrderedSet, *others: Iterable[T]) -> _TAbstractOrderedSet:
        """Combines all unique items.

        Each item's order is defined by its first appearance.
        """
        merged_iterables = itertools.chain([cast(Iterable[T], self)], others)
        return self.__class__(itertools.chain.from_iterable(merged_iterables))


class OrderedSet(_AbstractOrderedSet[T], MutableSet[T]):
    """A mutable set that retains its order."""

    __hash__ = None  # type: ignore[assignment]

    def add(self, key: T) -> None:
        self._items[key] = None

    def update(self, iterable: Iterable[T]) -> None:
        for item in iterable:
            self.add(item)

    def discard(self, key: T) -> None:
        self._items.pop(key, None)


class FrozenOrderedSet(_AbstractOrderedSet[T_co], Hashable):  # type: ignore[type-var]
    """An immutable set that retains its order."""

    def __init__(self, iterable: Iterable[T_co] | None = None) -> None:
        super().__init__(iterable)
        self.__hash: int | None = None

    def __hash__(self) -> int:
        if self.__hash is None:
            # Agrees with `frozenset` so that equal sets hash alike.
            self.__hash = self._hash()
        return self.__hash
