import typing
from .types import *

if typing.TYPE_CHECKING:
    from .containor import Containor
    from .containor_array import ContainorArray

def from_iterable(data: Iterable[T]) -> 'ContainorArray[T]':
    """create containor array from iterable"""
    from .containor_array import ContainorArray
    return ContainorArray.from_(data)

def from_range(start: int, count: int) -> 'ContainorArray[int]':
    """create containor array from range"""
    from .containor_array import ContainorArray
    return ContainorArray.from_(range(start, start + count))

def from_source(source: Any, map_fn: Optional[Callable[..., Any]] = None) -> 'Containor':
    """create containor from a mapping, pairs, bare values or {'length': n}"""
    from .containor import Containor
    return Containor.from_(source, map_fn)

def empty() -> 'Containor[Any, Any]':
    """create empty containor"""
    from .containor import Containor
    return Containor()

# --- aliases ---
A = from_iterable
C = from_source
