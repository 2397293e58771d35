from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class OrderedQueue(Generic[T]):
    # FIFO over an append-only list with a logical head index.
    # Items before the head stay in the list but are logically gone; push/shift stay O(1).
    def __init__(self, items: Iterable[T] = ()) -> None:
        self._data: list[T] = list(items)
        self._head = 0

    def __len__(self) -> int:
        return len(self._data) - self._head

    def __iter__(self) -> Iterator[T]:
        return iter(self._data[self._head :])

    def __repr__(self) -> str:
        return f"OrderedQueue({self._data[self._head :]!r})"

    def front(self) -> T | None:
        # Peek without mutating; None means empty.
        if len(self) == 0:
            return None
        return self._data[self._head]

    def push(self, item: T) -> None:
        self._data.append(item)

    def push_all(self, items: Iterable[T]) -> None:
        self._data.extend(items)

    def shift(self) -> T | None:
        if len(self) == 0:
            return None
        item = self._data[self._head]
        self._head += 1
        return item
