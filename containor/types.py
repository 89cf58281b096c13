import inspect
from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set
)

T = TypeVar('T')
K = TypeVar('K')
V = TypeVar('V')
R = TypeVar('R')

# (value, key, containor) -> result
EntryPredicate = Callable[..., bool]
EntryTransform = Callable[..., R]
# (value_a, value_b, key_a, key_b) -> int
EntryComparer = Callable[..., int]
# (incoming, existing, key, containor) -> merged value
Reducer = Callable[..., V]


class Empty:
    """the 'no result' indicator, distinct from None and any stored value"""

    _instance: Optional['Empty'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY"

    def __reduce__(self):
        return (Empty, ())


EMPTY = Empty()


class Pair(Generic[K, V]):
    """a single key-value entry returned from lookups"""

    __slots__ = ('key', 'value')

    def __init__(self, key: K, value: V):
        self.key = key
        self.value = value

    def __iter__(self) -> Iterator[Any]:
        yield self.key
        yield self.value

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Pair):
            return self.key == other.key and self.value == other.value
        if isinstance(other, tuple) and len(other) == 2:
            return self.key == other[0] and self.value == other[1]
        return NotImplemented

    def __hash__(self):
        return hash((self.key, self.value))

    def to_dict(self) -> Dict[str, Any]:
        return {'key': self.key, 'value': self.value}

    def __repr__(self) -> str:
        return f"Pair(key={self.key!r}, value={self.value!r})"


def is_pair(item: Any) -> bool:
    """true for Pair instances and 2-item lists/tuples"""
    if isinstance(item, Pair):
        return True
    return isinstance(item, (list, tuple)) and len(item) == 2


def _positional_arity(func: Callable) -> Optional[int]:
    """number of positional params func accepts, None when unbounded"""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # builtins such as bool or len
        return 1

    count = 0
    for param in signature.parameters.values():
        if param.kind == param.VAR_POSITIONAL:
            return None
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            count += 1
    return count


def adapt_callback(func: Callable, max_args: int) -> Callable:
    """
    wraps func so that it can be called with max_args positional arguments
    while only receiving as many as it declares.
    lets `lambda v: ...` stand in for `lambda v, k, c: ...`.
    """
    arity = _positional_arity(func)
    if arity is None or arity >= max_args:
        return func
    return lambda *args: func(*args[:arity])
