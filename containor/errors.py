class ContainorError(Exception):
    """base class for every error raised by containor"""
    pass


class InvalidKeyError(ContainorError, KeyError):
    """a key that can never be stored, e.g. None"""

    def __str__(self) -> str:
        # KeyError quotes its message, keep it readable
        return str(self.args[0]) if self.args else ''


class InvalidArgumentError(ContainorError, TypeError):
    """a callback is not callable or a numeric argument is out of its domain"""
    pass


class IndexOutOfRangeError(ContainorError, IndexError):
    """a positional index falls outside the sequence"""
    pass


class UnsupportedSourceError(ContainorError, TypeError):
    """a source value whose shape cannot be turned into entries"""
    pass


class EmptySequenceError(ContainorError, ValueError):
    """an aggregate was requested over no elements"""
    pass


def require_callable(func, name: str = "callback") -> None:
    """raise InvalidArgumentError unless func is callable"""
    if not callable(func):
        raise InvalidArgumentError(f"provided {name} is not a function.")
