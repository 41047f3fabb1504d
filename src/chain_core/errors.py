from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ChainErrorKind(str, Enum):
    INDEX_OUT_OF_BOUNDS = "index_out_of_bounds"
    EMPTY_LIST = "empty_list"
    INVALID_INDEX = "invalid_index"


class ChainError(Exception):
    """Base for expected, recoverable precondition failures on a container."""

    kind: ClassVar[ChainErrorKind]


@dataclass(frozen=True)
class ChainIndexOutOfBoundsError(ChainError, IndexError):
    index: object
    length: int
    op: str | None = None

    kind: ClassVar[ChainErrorKind] = ChainErrorKind.INDEX_OUT_OF_BOUNDS

    def __str__(self) -> str:
        where = f"{self.op}: " if self.op else ""
        return f"{where}index {self.index!r} out of bounds for length {self.length}"


@dataclass(frozen=True)
class ChainEmptyListError(ChainError, LookupError):
    op: str | None = None

    kind: ClassVar[ChainErrorKind] = ChainErrorKind.EMPTY_LIST

    def __str__(self) -> str:
        where = f"{self.op}: " if self.op else ""
        return f"{where}list is empty"


@dataclass(frozen=True)
class ChainInvalidIndexError(ChainError, LookupError):
    index: object
    op: str | None = None

    kind: ClassVar[ChainErrorKind] = ChainErrorKind.INVALID_INDEX

    def __str__(self) -> str:
        where = f"{self.op}: " if self.op else ""
        return f"{where}no node reachable at index {self.index!r}"


@dataclass(frozen=True)
class ChainArenaCorruptError(RuntimeError):
    message: str
    context: str | None = None

    def __str__(self) -> str:
        if self.context:
            return f"CORRUPT: {self.message} ({self.context})"
        return f"CORRUPT: {self.message}"


@dataclass(frozen=True)
class ChainCapacityError(MemoryError):
    capacity: int
    context: str | None = None

    def __str__(self) -> str:
        return f"chain arena capacity exceeded (max={self.capacity})"


@dataclass(frozen=True)
class ChainConfigError(ValueError):
    name: str
    value: object
    expected: str | None = None

    def __str__(self) -> str:
        msg = f"invalid {self.name}={self.value!r}"
        if self.expected:
            msg += f" (expected {self.expected})"
        return msg


__all__ = [
    "ChainErrorKind",
    "ChainError",
    "ChainIndexOutOfBoundsError",
    "ChainEmptyListError",
    "ChainInvalidIndexError",
    "ChainArenaCorruptError",
    "ChainCapacityError",
    "ChainConfigError",
]
