from __future__ import annotations

import logging
import math
import sys
import random as _random
from collections.abc import Iterable as _IterableABC, Mapping
from functools import cmp_to_key
from numbers import Real

from .types import *
from .config import settings
from .containor_array import ContainorArray, HasResult
from .errors import (
    InvalidArgumentError,
    InvalidKeyError,
    UnsupportedSourceError,
    require_callable,
)

# --- accessors ---
from .extensions.terminal import MapTerminalAccessor

logger = logging.getLogger(__name__)

_MISSING = object()


def _normalize_amount(amount: Any) -> int:
    """first/last style count: anything that is not a positive number means 1"""
    if not isinstance(amount, Real) or isinstance(amount, bool) or not math.isfinite(amount) or amount <= 0:
        return 1
    return math.floor(amount) or 1


def _to_position(value: Any) -> int:
    """array-style index coercion: non-numbers and nan become 0, inf saturates, floats are floored"""
    if not isinstance(value, Real) or isinstance(value, bool) or math.isnan(value):
        return 0
    if math.isinf(value):
        return sys.maxsize if value > 0 else -sys.maxsize
    return math.floor(value)


def _has_pair_prefix(item: Any) -> bool:
    """merge sources take the first two items of any list/tuple that has at least two"""
    return isinstance(item, Pair) or (isinstance(item, (list, tuple)) and len(item) >= 2)


def _as_entry(item: Any) -> Tuple[Any, Any]:
    key, value = item
    return key, value


class Containor(Generic[K, V]):
    """
    an ordered key-value container with array-style query methods.

    entries keep their insertion order. updating the value of an existing key
    never moves it; only sort() and splice() reorder.

    example:
        c = Containor({'a': 1, 'b': 2})
        c.set('c', 3)
        c.first(2)   # Containor (2) {'a': 1, 'b': 2}
        c.last()     # Pair(key='c', value=3)
    """

    def __init__(self, source: Any = None):
        # (key, value) tuples in order, plus key -> position in that list
        self._pairs: List[Tuple[K, V]] = []
        self._index: Dict[K, int] = {}
        self.to = MapTerminalAccessor(self)
        if source is not None:
            self.add_map(source)

    # --- backing store ---

    def _get_entries(self) -> List[Tuple[K, V]]:
        return self._pairs

    def _snapshot(self) -> List[Tuple[K, V]]:
        return list(self._pairs)

    def _put(self, key: K, value: V) -> None:
        position = self._index.get(key)
        if position is None:
            self._index[key] = len(self._pairs)
            self._pairs.append((key, value))
        else:
            self._pairs[position] = (key, value)

    def _remove(self, key: K) -> bool:
        position = self._index.pop(key, None)
        if position is None:
            return False
        del self._pairs[position]
        self._reindex(position)
        return True

    def _reindex(self, start: int = 0) -> None:
        for position in range(start, len(self._pairs)):
            self._index[self._pairs[position][0]] = position

    def _rebuild(self, entries: Iterable[Tuple[K, V]]) -> None:
        """replace all entries; a repeated key keeps its first slot and last value"""
        self._pairs = []
        self._index = {}
        for key, value in entries:
            self._put(key, value)

    @classmethod
    def _from_entries(cls, entries: Iterable[Tuple[K, V]]) -> 'Containor[K, V]':
        result = cls()
        result._rebuild(entries)
        return result

    # --- mapping protocol ---

    @property
    def length(self) -> int:
        return len(self._pairs)

    @property
    def size(self) -> int:
        return len(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[K]:
        return iter([key for key, _ in self._pairs])

    def __contains__(self, key: Any) -> bool:
        try:
            return key in self._index
        except TypeError:
            return False

    def __getitem__(self, key: K) -> V:
        position = self._index.get(key)
        if position is None:
            raise KeyError(key)
        return self._pairs[position][1]

    def __setitem__(self, key: K, value: V) -> None:
        self.set(key, value)

    def __delitem__(self, key: K) -> None:
        if not self._remove(key):
            raise KeyError(key)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Containor):
            return self._pairs == other._pairs
        if isinstance(other, dict):
            return len(other) == len(self._pairs) and all(
                k in other and other[k] == v for k, v in self._pairs)
        return NotImplemented

    __hash__ = None

    def __bool__(self) -> bool:
        return bool(self._pairs)

    def __repr__(self) -> str:
        limit = settings.repr_limit
        parts = [f"{k!r}: {v!r}" for k, v in self._pairs[:limit]]
        remaining = len(self._pairs) - limit
        if remaining > 0:
            parts.insert(0, f"'+{remaining} more': '...'")
        return f"{type(self).__name__} ({len(self._pairs)}) {{{', '.join(parts)}}}"

    # --- basic access ---

    def set(self, key: Any, value: Any = _MISSING) -> 'Containor[K, V]':
        """
        store value under key. called with only a mapping, another containor or
        a list of pairs, merges all of it in instead.
        """
        if key is None:
            raise InvalidKeyError("key cannot be None.")
        if value is _MISSING:
            if isinstance(key, (Mapping, Containor, list)):
                return self.add_map(key)
            value = None
        self._put(key, value)
        return self

    def get(self, key: K, default: Any = EMPTY) -> Union[V, Any]:
        """value stored under key, or `default` (EMPTY) when absent"""
        try:
            position = self._index.get(key)
        except TypeError:
            return default
        if position is None:
            return default
        return self._pairs[position][1]

    def has(self, *keys: K) -> Union[bool, HasResult]:
        """
        one key -> bool. several keys -> HasResult of per-key flags
        with has_all / has_any.
        """
        if not keys: return False
        if len(keys) == 1: return keys[0] in self
        return HasResult.from_(key in self for key in keys)

    def ensure(self, key: K, generator: Callable[..., V]) -> V:
        """existing value, or generator(key, containor) stored and returned"""
        position = self._index.get(key)
        if position is not None:
            return self._pairs[position][1]
        require_callable(generator, "value generator")
        value = adapt_callback(generator, 2)(key, self)
        self.set(key, value)
        return value

    def delete(self, *keys: Any) -> int:
        """
        remove literal keys, or every entry a single predicate
        (value, key, containor, deleted_so_far) accepts. returns how many went.
        """
        if len(keys) == 1 and callable(keys[0]) and keys[0] not in self:
            predicate = adapt_callback(keys[0], 4)
            deleted = 0
            for key, value in self._snapshot():
                if key not in self:
                    continue
                if predicate(value, key, self, deleted) and self._remove(key):
                    deleted += 1
            logger.debug("predicate delete removed %d entries", deleted)
            return deleted

        deleted = 0
        for key in keys:
            if key in self and self._remove(key):
                deleted += 1
        return deleted

    def clear(self) -> None:
        self._rebuild([])

    # --- positional access ---

    def first(self, amount: Optional[int] = None) -> Union['Containor[K, V]', Pair[K, V], Empty]:
        """first entry as a Pair, or the first `amount` entries as a new containor"""
        if _normalize_amount(amount) <= 1:
            if not self._pairs: return EMPTY
            return Pair(*self._pairs[0])
        return self._from_entries(self._pairs[:_normalize_amount(amount)])

    def last(self, amount: Optional[int] = None) -> Union['Containor[K, V]', Pair[K, V], Empty]:
        """last entry as a Pair, or the last `amount` entries as a new containor"""
        if _normalize_amount(amount) <= 1:
            if not self._pairs: return EMPTY
            return Pair(*self._pairs[-1])
        return self._from_entries(self._pairs[-_normalize_amount(amount):])

    def first_keys(self, amount: Optional[int] = None) -> ContainorArray[K]:
        return ContainorArray.from_(k for k, _ in self._pairs[:_normalize_amount(amount)])

    def first_values(self, amount: Optional[int] = None) -> ContainorArray[V]:
        return ContainorArray.from_(v for _, v in self._pairs[:_normalize_amount(amount)])

    def last_keys(self, amount: Optional[int] = None) -> ContainorArray[K]:
        return ContainorArray.from_(k for k, _ in self._pairs[-_normalize_amount(amount):])

    def last_values(self, amount: Optional[int] = None) -> ContainorArray[V]:
        return ContainorArray.from_(v for _, v in self._pairs[-_normalize_amount(amount):])

    def at(self, index: int) -> Union[Pair[K, V], Empty]:
        """entry at index, negative counts from the end, clamped into range"""
        if not isinstance(index, Real) or isinstance(index, bool) or not math.isfinite(index):
            raise InvalidArgumentError("index must be a number.")
        if not self._pairs: return EMPTY
        size = len(self._pairs)
        index = max(-size, min(size - 1, math.floor(index)))
        return Pair(*self._pairs[index])

    def random(self, amount: Optional[int] = None,
               random_state: Optional[int] = None) -> Union['Containor[K, V]', Pair[K, V], Empty]:
        """one random Pair, or a containor of up to `amount` distinct entries"""
        rng = _random.Random(random_state)
        if amount is None:
            if not self._pairs: return EMPTY
            return Pair(*rng.choice(self._pairs))
        if not isinstance(amount, Real) or isinstance(amount, bool) or not math.isfinite(amount):
            raise InvalidArgumentError("amount must be a number.")
        count = max(0, min(math.floor(amount), len(self._pairs)))
        return self._from_entries(rng.sample(self._pairs, count))

    # --- queries ---

    def find(self, predicate: EntryPredicate) -> Union[Pair[K, V], Empty]:
        """first entry matching predicate(value, key, containor), or EMPTY"""
        require_callable(predicate)
        predicate = adapt_callback(predicate, 3)
        for key, value in self._snapshot():
            if predicate(value, key, self):
                return Pair(key, value)
        return EMPTY

    def filter(self, predicate: EntryPredicate) -> 'Containor[K, V]':
        """new containor with the matching entries, order kept"""
        require_callable(predicate)
        predicate = adapt_callback(predicate, 3)
        return self._from_entries([(k, v) for k, v in self._snapshot() if predicate(v, k, self)])

    def partition(self, predicate: EntryPredicate) -> ContainorArray['Containor[K, V]']:
        """[matches, non-matches] as two new containors"""
        require_callable(predicate)
        predicate = adapt_callback(predicate, 3)
        true_items, false_items = [], []
        for key, value in self._snapshot():
            (true_items if predicate(value, key, self) else false_items).append((key, value))
        return ContainorArray(self._from_entries(true_items), self._from_entries(false_items))

    def map(self, transform: EntryTransform) -> ContainorArray[R]:
        """transform(value, key, containor) for every entry"""
        require_callable(transform, "transform")
        transform = adapt_callback(transform, 3)
        return ContainorArray.from_([transform(v, k, self) for k, v in self._snapshot()])

    def some(self, predicate: EntryPredicate) -> bool:
        require_callable(predicate)
        predicate = adapt_callback(predicate, 3)
        return any(predicate(v, k, self) for k, v in self._snapshot())

    def every(self, predicate: EntryPredicate) -> bool:
        require_callable(predicate)
        predicate = adapt_callback(predicate, 3)
        return all(predicate(v, k, self) for k, v in self._snapshot())

    def for_each(self, action: Callable[..., Any]) -> None:
        """action(value, key, containor, index) for every entry"""
        require_callable(action, "action")
        action = adapt_callback(action, 4)
        for index, (key, value) in enumerate(self._snapshot()):
            action(value, key, self, index)

    # --- reordering ---

    def sort(self, comparator: EntryComparer) -> 'Containor[K, V]':
        """in-place sort by comparator(value_a, value_b, key_a, key_b)"""
        require_callable(comparator, "comparator")
        comparator = adapt_callback(comparator, 4)
        snapshot = self._snapshot()
        ordered = sorted(snapshot, key=cmp_to_key(lambda a, b: comparator(a[1], b[1], a[0], b[0])))
        # keep whatever the comparator set or deleted: live values in sorted order,
        # entries it added go after them
        sorted_keys = {key for key, _ in snapshot}
        entries = [(key, self._pairs[self._index[key]][1]) for key, _ in ordered if key in self._index]
        entries.extend(pair for pair in self._pairs if pair[0] not in sorted_keys)
        self._rebuild(entries)
        logger.debug("sorted %d entries", len(entries))
        return self

    def slice(self, start: Optional[int] = None, end: Optional[int] = None) -> 'Containor[K, V]':
        """new containor over the entries in [start, end)"""
        start = None if start is None else _to_position(start)
        end = None if end is None else _to_position(end)
        return self._from_entries(self._pairs[start:end])

    def splice(self, start: Any = 0, delete_count: Optional[int] = None, *items: Any) -> 'Containor[K, V]':
        """
        remove `delete_count` entries at `start`, insert `items` (key-value pairs)
        there, and return the removed entries as a new containor.
        """
        size = len(self._pairs)
        start = _to_position(start)
        if start < 0: start = size + start
        start = max(0, min(size, start))
        if delete_count is None:
            delete_count = size - start
        delete_count = max(0, min(size - start, _to_position(delete_count)))

        inserted = []
        for item in items:
            if not is_pair(item):
                raise InvalidArgumentError(f"splice items must be key-value pairs, got {item!r}.")
            key, value = _as_entry(item)
            if key is None:
                raise InvalidKeyError("key cannot be None.")
            inserted.append((key, value))

        entries = self._snapshot()
        removed = entries[start:start + delete_count]
        entries[start:start + delete_count] = inserted
        self._rebuild(entries)
        logger.debug("splice at %d removed %d, inserted %d", start, len(removed), len(inserted))
        return self._from_entries(removed)

    # --- merging and copies ---

    def add_map(self, source: Any, reducer: Optional[Reducer] = None) -> 'Containor[K, V]':
        """
        merge entries from another containor, a mapping or a list of pairs.
        for keys already present, reducer(incoming, existing, key, containor)
        decides the stored value; without a reducer the incoming value wins.
        list items that are not pairs are skipped.
        """
        if source is None: return self
        if reducer is not None:
            require_callable(reducer, "reducer")
            reducer = adapt_callback(reducer, 4)

        if isinstance(source, Containor):
            entries = source._snapshot()
        elif isinstance(source, Mapping):
            entries = list(source.items())
        elif isinstance(source, (list, tuple)):
            entries = [_as_entry(tuple(item)[:2]) for item in source if _has_pair_prefix(item)]
        else:
            raise UnsupportedSourceError(f"cannot merge entries from {type(source).__name__}.")

        if any(key is None for key, _ in entries):
            raise InvalidKeyError("key cannot be None.")
        for key, value in entries:
            if reducer is not None and key in self:
                value = reducer(value, self.get(key), key, self)
            self._put(key, value)
        logger.debug("merged %d entries, size is now %d", len(entries), len(self._pairs))
        return self

    def clone(self) -> 'Containor[K, V]':
        """shallow copy keeping order"""
        return self._from_entries(self._pairs)

    def to_json(self) -> Dict[str, V]:
        """plain dict view with stringified keys"""
        return {str(key): value for key, value in self._pairs}

    def keys(self, transform: Optional[Callable[..., Any]] = None) -> ContainorArray:
        """keys in order, or transform(key, containor) of each"""
        if transform is None:
            return ContainorArray.from_(k for k, _ in self._pairs)
        require_callable(transform, "transform")
        transform = adapt_callback(transform, 2)
        return ContainorArray.from_([transform(k, self) for k, _ in self._snapshot()])

    def values(self, transform: Optional[Callable[..., Any]] = None) -> ContainorArray:
        """values in order, or transform(value, containor) of each"""
        if transform is None:
            return ContainorArray.from_(v for _, v in self._pairs)
        require_callable(transform, "transform")
        transform = adapt_callback(transform, 2)
        return ContainorArray.from_([transform(v, self) for _, v in self._snapshot()])

    def entries(self, transform: Optional[Callable[..., Any]] = None) -> ContainorArray:
        """(key, value) tuples in order, or transform(key, value, containor) of each"""
        if transform is None:
            return ContainorArray.from_(self._pairs)
        require_callable(transform, "transform")
        transform = adapt_callback(transform, 3)
        return ContainorArray.from_([transform(k, v, self) for k, v in self._snapshot()])

    # --- construction ---

    @classmethod
    def from_(cls, source: Any, map_fn: Optional[Callable[..., Any]] = None) -> 'Containor':
        """
        build a containor from:
          - None (empty)
          - {'length': n} (keys 0..n-1, values from map_fn(i, None, containor) or i)
          - another containor or any mapping
          - an iterable of pairs, or of bare values keyed by their index
        map_fn(value, key, containor) transforms each value; returning a Pair
        stores that pair instead. anything else raises UnsupportedSourceError.
        """
        containor = cls()
        if source is None: return containor
        if map_fn is not None:
            require_callable(map_fn, "map function")
            map_fn = adapt_callback(map_fn, 3)

        def store(key, value):
            if isinstance(value, Pair): containor.set(value.key, value.value)
            else: containor.set(key, value)

        if isinstance(source, dict) and set(source) == {'length'} and isinstance(source['length'], int):
            for i in range(source['length']):
                store(i, map_fn(i, None, containor) if map_fn else i)
            return containor

        if isinstance(source, (Containor, Mapping)):
            entries = source._snapshot() if isinstance(source, Containor) else list(source.items())
            for key, value in entries:
                containor.set(key, map_fn(value, key, containor) if map_fn else value)
            return containor

        if isinstance(source, (str, bytes)) or not isinstance(source, _IterableABC):
            raise UnsupportedSourceError(f"containor.from_: unsupported source type {type(source).__name__}")

        items = list(source)
        if not (items and all(is_pair(item) for item in items)):
            items = list(enumerate(items))
        for key, value in items:
            store(key, map_fn(value, key, containor) if map_fn else value)
        return containor
