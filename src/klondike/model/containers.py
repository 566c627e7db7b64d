"""Ordered containers used to model every pile of cards.

None of these containers raise on underflow or out-of-range access. Empty
or missing positions come back as ``None`` and callers branch on that, since
"no card there" is a routine answer while validating moves.
"""

from __future__ import annotations

from collections import deque
from typing import Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class Stack(Generic[T]):
    """Last-in, first-out container."""

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: list[T] = list(items) if items is not None else []

    def push(self, item: T) -> None:
        self._items.append(item)

    def pop(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items.pop()

    def peek(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def size(self) -> int:
        return len(self._items)

    def snapshot(self) -> tuple[T, ...]:
        """Elements from bottom to top."""
        return tuple(self._items)

    def clear(self) -> None:
        self._items.clear()

    def drop_bottom(self, count: int = 1) -> int:
        """Discard up to ``count`` of the oldest entries; returns how many went."""
        dropped = max(0, min(count, len(self._items)))
        del self._items[:dropped]
        return dropped

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Stack({self._items!r})"


class Queue(Generic[T]):
    """First-in, first-out container."""

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: deque[T] = deque(items) if items is not None else deque()

    def enqueue(self, item: T) -> None:
        self._items.append(item)

    def dequeue(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items.popleft()

    def front(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items[0]

    def is_empty(self) -> bool:
        return not self._items

    def size(self) -> int:
        return len(self._items)

    def snapshot(self) -> tuple[T, ...]:
        """Elements from front to back."""
        return tuple(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Queue({list(self._items)!r})"


class Sequence(Generic[T]):
    """Positionally indexed, append-biased sequence.

    Tableau columns are Sequences: cards are appended at the tail and runs
    are detached with :meth:`splice`.
    """

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: list[T] = list(items) if items is not None else []

    def append(self, item: T) -> None:
        self._items.append(item)

    def remove_last(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items.pop()

    def get_last(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items[-1]

    def get_at(self, index: int) -> Optional[T]:
        if index < 0 or index >= len(self._items):
            return None
        return self._items[index]

    def set_at(self, index: int, item: T) -> bool:
        """Replace the item at ``index``; False when out of range."""
        if index < 0 or index >= len(self._items):
            return False
        self._items[index] = item
        return True

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def snapshot(self) -> tuple[T, ...]:
        return tuple(self._items)

    def clear(self) -> None:
        self._items.clear()

    def slice(self, start: int, end: Optional[int] = None) -> "Sequence[T]":
        """New independent Sequence over ``[start, end)``.

        ``end`` is clamped to the size. An out-of-range ``start`` gives an
        empty Sequence.
        """
        if start < 0 or start >= len(self._items):
            return Sequence()
        if end is None or end > len(self._items):
            end = len(self._items)
        return Sequence(self._items[start:end])

    def splice(self, start: int, delete_count: int, *items: T) -> "Sequence[T]":
        """Remove ``delete_count`` items at ``start`` and insert ``items`` there.

        Returns the removed items as a new Sequence. Items after the removed
        range shift to follow the inserted ones. A ``start`` outside
        ``[0, size]`` changes nothing.
        """
        if start < 0 or start > len(self._items):
            return Sequence()
        stop = start + max(0, delete_count)
        removed = self._items[start:stop]
        self._items[start:stop] = list(items)
        return Sequence(removed)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Sequence({self._items!r})"
