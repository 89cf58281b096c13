"""
containor: ordered key-value containers and arrays with array-style query methods
"""

# expose the main classes
from .containor import Containor
from .containor_array import ContainorArray, HasResult

# expose the factory functions
from .factories import (
    from_iterable,
    from_range,
    from_source,
    empty,
    A,
    C,
)

# expose supporting types
from .types import Pair, Empty, EMPTY

# errors and settings
from .errors import (
    ContainorError,
    InvalidKeyError,
    InvalidArgumentError,
    IndexOutOfRangeError,
    UnsupportedSourceError,
    EmptySequenceError,
)
from .config import ContainorConfig, settings, configure

# define what `import *` does
__all__ = [
    "Containor",
    "ContainorArray",
    "HasResult",
    "from_iterable",
    "from_range",
    "from_source",
    "empty",
    "A",
    "C",
    "Pair",
    "Empty",
    "EMPTY",
    "ContainorError",
    "InvalidKeyError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "UnsupportedSourceError",
    "EmptySequenceError",
    "ContainorConfig",
    "settings",
    "configure",
]
