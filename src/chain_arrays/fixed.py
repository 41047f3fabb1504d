from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List

import numpy as np

from chain_core.errors import ChainIndexOutOfBoundsError


def _object_array(values: Iterable[Any]) -> np.ndarray:
    values = list(values)
    # Element-wise fill keeps nested sequences as single elements.
    out = np.empty(len(values), dtype=object)
    for i, value in enumerate(values):
        out[i] = value
    return out


class FixedArray:
    """Bounds-checked array whose length is set at construction."""

    def __init__(self, data: Iterable[Any]):
        self._data = _object_array(data)

    @classmethod
    def filled(cls, length: int, value: Any = 0) -> "FixedArray":
        if length < 0:
            raise ValueError(f"length must be >= 0, got {length}")
        return cls([value] * length)

    def len(self) -> int:
        return int(self._data.shape[0])

    def is_empty(self) -> bool:
        return self._data.shape[0] == 0

    def __len__(self) -> int:
        return int(self._data.shape[0])

    def _in_bounds(self, index) -> bool:
        return 0 <= index < self._data.shape[0]

    def get(self, index: int):
        """Element at `index`, or None when out of range."""
        if not self._in_bounds(index):
            return None
        return self._data[index]

    def set(self, index: int, value: Any) -> None:
        if not self._in_bounds(index):
            raise ChainIndexOutOfBoundsError(index=index, length=self.len(), op="set")
        self._data[index] = value

    def update(self, fn: Callable[[Any], Any]) -> None:
        """Replace every element with fn(element), in place."""
        for i in range(self._data.shape[0]):
            self._data[i] = fn(self._data[i])

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data.tolist())

    def copy(self) -> "FixedArray":
        return type(self)(self._data.tolist())

    def to_list(self) -> List[Any]:
        return self._data.tolist()

    def __repr__(self) -> str:
        return f"FixedArray({self.to_list()!r})"


__all__ = ["FixedArray", "_object_array"]
