from __future__ import annotations

from typing import Protocol, Tuple, runtime_checkable

import jax.numpy as jnp


@runtime_checkable
class WalkFn(Protocol):
    # (state, start, steps) -> node reached (NULL if the chain ran out)
    def __call__(self, state, start, steps) -> jnp.ndarray:
        ...


@runtime_checkable
class SeekFn(Protocol):
    # (state, head) -> (node, steps taken)
    def __call__(self, state, head) -> Tuple[jnp.ndarray, jnp.ndarray]:
        ...


@runtime_checkable
class ReverseFn(Protocol):
    # (state, head) -> (state, new head, steps taken)
    def __call__(self, state, head) -> Tuple[object, jnp.ndarray, jnp.ndarray]:
        ...


@runtime_checkable
class CheckChainFn(Protocol):
    def __call__(self, state, head, count: int, *, context: str | None = None) -> None:
        ...


__all__ = [
    "WalkFn",
    "SeekFn",
    "ReverseFn",
    "CheckChainFn",
]
