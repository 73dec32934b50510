from __future__ import annotations

import random
from typing import Any, Generic, Iterator, List, Optional, TypeVar

from .errors import ConstructionError, OutOfRangeError

T = TypeVar("T")


def _validate_source(source: object) -> None:
    if source is None or isinstance(source, (list, tuple, OrderedContainer)):
        return
    if isinstance(source, bool) or not isinstance(source, int):
        raise ConstructionError(
            f"OrderedContainer initialized with faulty parameter of type {type(source).__name__}: {source!r}"
        )
    if source < 0:
        raise ConstructionError(f"OrderedContainer length must be non-negative, got {source}")


class OrderedContainer(Generic[T]):
    """Ordered, indexable sequence with in-place shuffling.

    The container owns its storage. Building one from another container, a
    list or a tuple copies the elements, so mutating the copy never touches
    the source. An integer argument reserves that many ``None`` slots, which
    ``init_with_indices`` can then fill. Mutating methods return ``self`` so
    calls chain: ``OrderedContainer(16).init_with_indices().shuffle(rng)``.
    """

    __slots__ = ("_items",)

    def __init__(self, source: Any = None) -> None:
        _validate_source(source)
        if source is None:
            self._items: List[Any] = []
        elif isinstance(source, int):
            self._items = [None] * source
        else:
            self._items = list(source)

    def swap(self, index_a: int, index_b: int) -> "OrderedContainer[T]":
        self._check_index(index_a)
        self._check_index(index_b)
        items = self._items
        items[index_a], items[index_b] = items[index_b], items[index_a]
        return self

    def shuffle(self, rng: Optional[random.Random] = None) -> "OrderedContainer[T]":
        """Fisher-Yates shuffle in place."""
        rng = rng or random.Random()
        current_index = len(self._items)
        while current_index > 0:
            random_index = rng.randrange(current_index)
            current_index -= 1
            self.swap(current_index, random_index)
        return self

    def init_with_indices(self) -> "OrderedContainer[int]":
        for i in range(len(self._items)):
            self._items[i] = i
        return self  # type: ignore[return-value]

    def append(self, item: T) -> "OrderedContainer[T]":
        self._items.append(item)
        return self

    def pop(self) -> T:
        if not self._items:
            raise OutOfRangeError("pop from empty OrderedContainer")
        return self._items.pop()

    def copy(self) -> "OrderedContainer[T]":
        return type(self)(self)

    def to_list(self) -> List[T]:
        return list(self._items)

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise OutOfRangeError(f"index must be an int, got {index!r}")
        if not 0 <= index < len(self._items):
            raise OutOfRangeError(f"index {index} out of range for length {len(self._items)}")

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        self._check_index(index)
        return self._items[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._check_index(index)
        self._items[index] = value

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedContainer):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"
