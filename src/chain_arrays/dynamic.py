from __future__ import annotations

from typing import Any, Callable, Iterator, List

import numpy as np

from chain_core.errors import ChainIndexOutOfBoundsError

MIN_GROW_CAPACITY = 4


class DynamicArray:
    """Growable array over an object buffer with explicit capacity.

    Slots [0, len) hold elements; [len, capacity) are spare. Growth doubles
    capacity (at least MIN_GROW_CAPACITY).
    """

    def __init__(self):
        self._buf = np.empty(0, dtype=object)
        self._len = 0

    @classmethod
    def with_capacity(cls, capacity: int) -> "DynamicArray":
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        arr = cls()
        arr._buf = np.empty(capacity, dtype=object)
        return arr

    def len(self) -> int:
        return self._len

    def is_empty(self) -> bool:
        return self._len == 0

    def __len__(self) -> int:
        return self._len

    def capacity(self) -> int:
        return int(self._buf.shape[0])

    def _resize(self, capacity: int) -> None:
        buf = np.empty(capacity, dtype=object)
        buf[: self._len] = self._buf[: self._len]
        self._buf = buf

    def _grow_for(self, needed: int) -> None:
        if needed <= self.capacity():
            return
        self._resize(max(needed, self.capacity() * 2, MIN_GROW_CAPACITY))

    def reserve(self, additional: int) -> None:
        """Ensure room for `additional` more elements without regrowing."""
        if additional < 0:
            raise ValueError(f"additional must be >= 0, got {additional}")
        needed = self._len + additional
        if needed > self.capacity():
            self._resize(needed)

    def shrink_to_fit(self) -> None:
        if self.capacity() > self._len:
            self._resize(self._len)

    def push(self, value: Any) -> None:
        self._grow_for(self._len + 1)
        self._buf[self._len] = value
        self._len += 1

    def pop(self):
        if self._len == 0:
            return None
        self._len -= 1
        value = self._buf[self._len]
        self._buf[self._len] = None
        return value

    def get(self, index: int):
        if not 0 <= index < self._len:
            return None
        return self._buf[index]

    def set(self, index: int, value: Any) -> None:
        if not 0 <= index < self._len:
            raise ChainIndexOutOfBoundsError(index=index, length=self._len, op="set")
        self._buf[index] = value

    def insert(self, index: int, value: Any) -> None:
        if not 0 <= index <= self._len:
            raise ChainIndexOutOfBoundsError(index=index, length=self._len, op="insert")
        self._grow_for(self._len + 1)
        self._buf[index + 1 : self._len + 1] = self._buf[index : self._len]
        self._buf[index] = value
        self._len += 1

    def remove(self, index: int):
        if not 0 <= index < self._len:
            raise ChainIndexOutOfBoundsError(index=index, length=self._len, op="remove")
        value = self._buf[index]
        self._buf[index : self._len - 1] = self._buf[index + 1 : self._len]
        self._len -= 1
        self._buf[self._len] = None
        return value

    def clear(self) -> None:
        self._buf[: self._len] = None
        self._len = 0

    def update(self, fn: Callable[[Any], Any]) -> None:
        for i in range(self._len):
            self._buf[i] = fn(self._buf[i])

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    def copy(self) -> "DynamicArray":
        arr = type(self).with_capacity(self.capacity())
        arr._buf[: self._len] = self._buf[: self._len]
        arr._len = self._len
        return arr

    def to_list(self) -> List[Any]:
        return self._buf[: self._len].tolist()

    def __repr__(self) -> str:
        return f"DynamicArray({self.to_list()!r}, capacity={self.capacity()})"


__all__ = ["DynamicArray", "MIN_GROW_CAPACITY"]
