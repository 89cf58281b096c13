from __future__ import annotations
import typing
import json as _json
import numpy as np
import pandas as pd
from ..types import *

if typing.TYPE_CHECKING:
    from ..containor import Containor
    from ..containor_array import ContainorArray


class TerminalAccessor(Generic[T]):
    """conversions out of a ContainorArray"""

    def __init__(self, array_instance: 'ContainorArray[T]'):
        self._array = array_instance

    def list(self) -> List[T]:
        """convert to a plain list (copy)"""
        return list(self._array._get_data())

    def set(self) -> Set[T]:
        """convert to set"""
        return set(self._array._get_data())

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self._array._get_data())

    def series(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self._array._get_data())


class MapTerminalAccessor(Generic[K, V]):
    """conversions out of a Containor"""

    def __init__(self, containor_instance: 'Containor[K, V]'):
        self._containor = containor_instance

    def dict(self) -> Dict[K, V]:
        """convert to dict, keys kept as-is"""
        return dict(self._containor._get_entries())

    def list(self) -> List[Tuple[K, V]]:
        """convert to a list of (key, value) tuples"""
        return list(self._containor._get_entries())

    def json(self, **kwargs) -> str:
        """serialize to_json() with json.dumps, kwargs are passed through"""
        return _json.dumps(self._containor.to_json(), **kwargs)

    def series(self) -> pd.Series:
        """convert to pandas series indexed by key"""
        entries = self._containor._get_entries()
        return pd.Series([v for _, v in entries], index=[k for k, _ in entries], dtype=object if not entries else None)

    def df(self) -> pd.DataFrame:
        """convert to a two column (key, value) dataframe"""
        return pd.DataFrame(self._containor._get_entries(), columns=['key', 'value'])
