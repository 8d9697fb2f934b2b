"""A fixed-size FIFO that overwrites its oldest item when full."""

from __future__ import annotations

from collections import deque
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """Bounded first-in first-out buffer."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items: deque[T] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self.capacity}, items={list(self._items)!r})"

    def is_full(self) -> bool:
        return len(self._items) == self.capacity

    def is_empty(self) -> bool:
        return not self._items

    def push(self, item: T) -> bool:
        """Add an item, dropping the oldest one if the buffer is full.

        Returns False when an item had to be dropped, True otherwise.
        """
        was_full = self.is_full()
        self._items.append(item)
        return not was_full

    def pop(self) -> T:
        """Remove and return the oldest item."""
        if not self._items:
            raise IndexError("pop from an empty ring buffer")
        return self._items.popleft()

    def front(self) -> Optional[T]:
        """The oldest item, or None when the buffer is empty."""
        return self._items[0] if self._items else None