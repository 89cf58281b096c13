from __future__ import annotations

import math
import random as _random
from itertools import batched
from numbers import Real

import numpy as np

from .types import *
from .config import settings
from .errors import (
    EmptySequenceError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    require_callable,
)

# --- accessors ---
from .extensions.terminal import TerminalAccessor


class _SeenValues:
    """membership tracking that also copes with unhashable values"""

    def __init__(self, values: Iterable[Any] = ()):
        self._hashable = set()
        self._unhashable = []
        for value in values:
            self.add(value)

    def add(self, value: Any) -> None:
        try:
            self._hashable.add(value)
        except TypeError:
            self._unhashable.append(value)

    def __contains__(self, value: Any) -> bool:
        try:
            return value in self._hashable
        except TypeError:
            return value in self._unhashable


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


class ContainorArray(Generic[T]):
    """
    an ordered list of values with array-style conveniences.
    wraps a plain list rather than subclassing it; the list is reachable
    through iteration, indexing and the `.to` accessor.
    """

    def __init__(self, *items: T):
        self._items: List[T] = list(items)
        self.to = TerminalAccessor(self)

    @classmethod
    def from_(cls, items: Iterable[Any], map_fn: Optional[Callable[[Any, int], T]] = None) -> 'ContainorArray[T]':
        """build from any iterable, optionally mapping (value, index) -> item"""
        result = cls()
        if map_fn is None:
            result._items = list(items)
        else:
            require_callable(map_fn, "map function")
            fn = adapt_callback(map_fn, 2)
            result._items = [fn(item, index) for index, item in enumerate(items)]
        return result

    def _get_data(self) -> List[T]:
        return self._items

    # --- list protocol ---

    @property
    def length(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: Any) -> bool:
        return item in self._items

    def __getitem__(self, index):
        if isinstance(index, slice):
            return type(self).from_(self._items[index])
        return self._items[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._items[index] = value

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ContainorArray):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        limit = settings.repr_limit
        shown = ", ".join(repr(item) for item in self._items[:limit])
        remaining = len(self._items) - limit
        if remaining > 0:
            shown = f"{shown}, ... +{remaining} more" if shown else f"... +{remaining} more"
        return f"{type(self).__name__}([{shown}])"

    def append(self, item: T) -> None:
        self._items.append(item)

    def extend(self, items: Iterable[T]) -> None:
        self._items.extend(items)

    # --- element access ---

    def first(self) -> Union[T, Empty]:
        """first element or EMPTY"""
        return self._items[0] if self._items else EMPTY

    def last(self) -> Union[T, Empty]:
        """last element or EMPTY"""
        return self._items[-1] if self._items else EMPTY

    # --- in-place removal ---

    def delete(self, *values: T) -> 'ContainorArray[T]':
        """remove every occurrence of each value, in place"""
        if not values: return self
        self._items[:] = [item for item in self._items if item not in values]
        return self

    def delete_at(self, *indices: int) -> 'ContainorArray[T]':
        """remove elements by position, in place; all indices are checked first"""
        if not indices: return self
        unique_indices = set()
        for index in indices:
            if not isinstance(index, int) or isinstance(index, bool):
                raise InvalidArgumentError(f"index {index!r} is not an integer.")
            if index < 0 or index >= len(self._items):
                raise IndexOutOfRangeError(f"the index {index} is out of bounds for the array.")
            unique_indices.add(index)
        self._items[:] = [item for i, item in enumerate(self._items) if i not in unique_indices]
        return self

    def remove_duplicates(self, source: Optional[Iterable[T]] = None, *ignore: T) -> 'ContainorArray[T]':
        """
        rebuild in place keeping the first occurrence of each value.
        values listed in `ignore` skip the seen-check and are kept every time.
        `source` replaces the current contents as the input when given.
        """
        items = list(self._items) if source is None else list(source)
        ignored = _SeenValues(ignore)
        seen = _SeenValues()
        result = []
        for item in items:
            if item in ignored or item not in seen:
                seen.add(item)
                result.append(item)
        self._items[:] = result
        return self

    # --- derived copies ---

    def clone(self) -> 'ContainorArray[T]':
        """shallow copy"""
        return type(self).from_(self._items)

    def shuffle(self, random_state: Optional[int] = None) -> 'ContainorArray[T]':
        """fisher-yates shuffle of a clone, self is left untouched"""
        rng = _random.Random(random_state)
        shuffled = self.clone()
        items = shuffled._items
        for i in range(len(items) - 1, 0, -1):
            j = rng.randint(0, i)
            items[i], items[j] = items[j], items[i]
        return shuffled

    def chunk(self, size: int) -> 'ContainorArray[ContainorArray[T]]':
        """split into consecutive chunks of `size`, the last may be shorter"""
        if not isinstance(size, int) or isinstance(size, bool) or size < 1:
            raise InvalidArgumentError("chunk size must be a positive integer.")
        cls = type(self)
        return ContainorArray.from_(cls.from_(batch) for batch in batched(self._items, size))

    def random(self, quantity: int = 1, random_state: Optional[int] = None) -> 'ContainorArray[T]':
        """sample up to `quantity` elements without replacement"""
        if not _is_number(quantity) or quantity < 1:
            raise InvalidArgumentError("quantity must be a positive number.")
        rng = _random.Random(random_state)
        count = min(math.floor(quantity), len(self._items))
        return type(self).from_(rng.sample(self._items, count))

    # --- aggregates ---

    def average(self) -> float:
        """arithmetic mean of the elements"""
        data = self._items
        if not data: raise EmptySequenceError("cannot calculate average of empty sequence")
        if not all(isinstance(x, (int, float)) for x in data):
            raise InvalidArgumentError("sequence contains non-numeric types for average.")
        result = np.mean(data)
        return result.item() if hasattr(result, 'item') else result


class HasResult(ContainorArray[bool]):
    """per-key membership flags returned by Containor.has with several keys"""

    @property
    def has_all(self) -> bool:
        return all(self._items)

    @property
    def has_any(self) -> bool:
        return any(self._items)
