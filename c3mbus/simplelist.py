"""An ordered list with an optional comparison function.

Items are kept in insertion order until a comparison function is set.
After that ``sort`` orders them, ``insert`` places new items in order,
and ``bin_search`` can find items by bisection.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")

Compare = Callable[[T, T], int]


class SimpleList(Generic[T]):
    """A list that can keep itself sorted with a three-way comparison."""

    def __init__(self, compare: Optional[Compare] = None) -> None:
        self._items: list[T] = []
        self._compare: Optional[Compare] = None
        self._sorted = True
        if compare is not None:
            self.set_compare(compare)

    def set_compare(self, compare: Optional[Compare]) -> None:
        """Set the comparison function and sort the list with it."""
        self._compare = compare
        self.sort()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def is_sorted(self) -> bool:
        """Whether the list is known to be in comparison order."""
        return self._sorted

    def is_empty(self) -> bool:
        return not self._items

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexError(f"index {index} out of range for list of {len(self._items)}")

    def _matches(self, a: T, b: T) -> bool:
        if self._compare is None:
            return a == b
        return self._compare(a, b) == 0

    def add(self, obj: T) -> None:
        """Append an item at the end."""
        self._items.append(obj)
        self._sorted = False

    def insert_at(self, index: int, obj: T) -> None:
        """Insert an item before the existing item at ``index``."""
        self._check_index(index)
        self._items.insert(index, obj)
        self._sorted = False

    def insert(self, obj: T) -> None:
        """Insert an item in comparison order, after any equal items.

        Without a comparison function the item is appended.
        """
        if self._compare is None:
            self.add(obj)
            return
        if not self._sorted:
            self.sort()
        position = next(
            (i for i, item in enumerate(self._items) if self._compare(obj, item) < 0),
            len(self._items),
        )
        self._items.insert(position, obj)

    def replace(self, index: int, obj: T) -> None:
        self._check_index(index)
        self._items[index] = obj

    def swap(self, x: int, y: int) -> None:
        """Exchange the items at two positions."""
        if x == y:
            return
        self._check_index(x)
        self._check_index(y)
        self._items[x], self._items[y] = self._items[y], self._items[x]

    def remove(self, index: int) -> None:
        self._check_index(index)
        del self._items[index]

    def remove_first(self) -> None:
        self.remove(0)

    def remove_last(self) -> None:
        self.remove(len(self._items) - 1)

    def has(self, obj: T) -> bool:
        return self.bin_search(obj) >= 0

    def count(self, obj: T) -> int:
        """Number of items equal to ``obj``."""
        return sum(1 for item in self._items if self._matches(obj, item))

    def shift(self) -> T:
        """Remove and return the first item."""
        data = self.first()
        self.remove_first()
        return data

    def pop(self) -> T:
        """Remove and return the last item."""
        data = self.last()
        self.remove_last()
        return data

    def get(self, index: int) -> T:
        self._check_index(index)
        return self._items[index]

    def first(self) -> T:
        return self.get(0)

    def last(self) -> T:
        return self.get(len(self._items) - 1)

    def move_to_end(self) -> None:
        """Move the first item to the end of the list."""
        if not self._items:
            return
        self._items.append(self._items.pop(0))
        self._sorted = False

    def search(self, obj: T) -> int:
        """Index of the first item equal to ``obj``, or -1."""
        return next(
            (i for i, item in enumerate(self._items) if self._matches(obj, item)),
            -1,
        )

    def bin_search(self, obj: T) -> int:
        """Index of an item equal to ``obj``, or -1.

        Bisects when the list is sorted with a comparison function and
        falls back to a linear search otherwise.
        """
        if self._compare is None or not self._sorted:
            return self.search(obj)
        low, high = 0, len(self._items) - 1
        while low <= high:
            mid = (low + high) // 2
            result = self._compare(obj, self._items[mid])
            if result == 0:
                return mid
            if result < 0:
                high = mid - 1
            else:
                low = mid + 1
        return -1

    def sort(self) -> None:
        """Order the items with the comparison function, if one is set."""
        if self._compare is None:
            return
        self._items.sort(key=cmp_to_key(self._compare))
        self._sorted = True

    def clear(self) -> None:
        self._items.clear()
        self._sorted = True