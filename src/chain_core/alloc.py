"""Node-arena allocator (host side).

These helpers assume a state object with fields:
  next_node, live, free_stack, free_top, oom, corrupt
and a `_replace` method (e.g. NamedTuple). Free ids sit in
free_stack[:free_top]; the top of the stack is popped first.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Tuple

import jax.numpy as jnp

from chain_core.domains import NULL_NODE, NodeId, _node_id
from chain_core.errors import ChainConfigError
from chain_core.host import _host_bool_value, _host_int_value
from chain_metrics.metrics import _arena_metrics_update

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_CAPACITY = 16
DEFAULT_GROWTH_FACTOR = 2


def _env_int(name: str, default: int, minimum: int) -> int:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    if not value.isdigit() or int(value) < minimum:
        raise ChainConfigError(name=name, value=value, expected=f"integer >= {minimum}")
    return int(value)


@dataclass(frozen=True, slots=True)
class AllocConfig:
    """Allocator DI bundle.

    None fields fall back to CHAIN_ARENA_CAPACITY / CHAIN_ARENA_GROWTH at use
    time. max_capacity=None means the arena grows without bound.
    """

    initial_capacity: int | None = None
    growth_factor: int | None = None
    max_capacity: int | None = None


DEFAULT_ALLOC_CONFIG = AllocConfig()


def _max_capacity_cfg(cfg: AllocConfig) -> int | None:
    if cfg.max_capacity is not None and cfg.max_capacity < 2:
        raise ChainConfigError(
            name="max_capacity", value=cfg.max_capacity, expected="integer >= 2"
        )
    return cfg.max_capacity


def initial_capacity_cfg(cfg: AllocConfig = DEFAULT_ALLOC_CONFIG) -> int:
    if cfg.initial_capacity is not None:
        if cfg.initial_capacity < 2:
            raise ChainConfigError(
                name="initial_capacity",
                value=cfg.initial_capacity,
                expected="integer >= 2",
            )
        capacity = cfg.initial_capacity
    else:
        capacity = _env_int("CHAIN_ARENA_CAPACITY", DEFAULT_INITIAL_CAPACITY, 2)
    max_capacity = _max_capacity_cfg(cfg)
    if max_capacity is not None:
        capacity = min(capacity, max_capacity)
    return capacity


def growth_factor_cfg(cfg: AllocConfig = DEFAULT_ALLOC_CONFIG) -> int:
    if cfg.growth_factor is not None:
        if cfg.growth_factor < 2:
            raise ChainConfigError(
                name="growth_factor", value=cfg.growth_factor, expected="integer >= 2"
            )
        return cfg.growth_factor
    return _env_int("CHAIN_ARENA_GROWTH", DEFAULT_GROWTH_FACTOR, 2)


def next_capacity(capacity: int, *, cfg: AllocConfig = DEFAULT_ALLOC_CONFIG) -> int | None:
    """Capacity after one growth step, or None when max_capacity is reached."""
    grown = capacity * growth_factor_cfg(cfg)
    max_capacity = _max_capacity_cfg(cfg)
    if max_capacity is not None:
        if capacity >= max_capacity:
            return None
        grown = min(grown, max_capacity)
    return grown


def grow_arena(state, capacity: int):
    old_cap = int(state.next_node.shape[0])
    if capacity <= old_cap:
        return state
    extra = capacity - old_cap
    top = _host_int_value(state.free_top)
    pad = jnp.zeros((extra,), dtype=jnp.uint32)
    next_node = jnp.concatenate([state.next_node, pad])
    live = jnp.concatenate([state.live, jnp.zeros((extra,), dtype=jnp.bool_)])
    # Lowest new id ends on top so it is handed out first.
    new_ids = jnp.arange(old_cap, capacity, dtype=jnp.uint32)[::-1]
    free_stack = jnp.concatenate([state.free_stack, pad])
    free_stack = free_stack.at[top:top + extra].set(new_ids)
    logger.debug("chain arena grow %d -> %d (free=%d)", old_cap, capacity, top + extra)
    _arena_metrics_update(grows=1)
    return state._replace(
        next_node=next_node,
        live=live,
        free_stack=free_stack,
        free_top=jnp.uint32(top + extra),
    )


def alloc_node(state, *, cfg: AllocConfig = DEFAULT_ALLOC_CONFIG) -> Tuple[object, NodeId]:
    """Pop one free id, growing the arena first if the stack is empty.

    Returns NULL_NODE with `oom` set when a bounded arena is exhausted, and
    NULL_NODE unchanged when the arena is already halted.
    """
    if _host_bool_value(state.corrupt) or _host_bool_value(state.oom):
        return state, NULL_NODE
    top = _host_int_value(state.free_top)
    if top == 0:
        capacity = int(state.next_node.shape[0])
        grown = next_capacity(capacity, cfg=cfg)
        if grown is None:
            logger.warning("chain arena exhausted at capacity %d", capacity)
            return state._replace(oom=jnp.bool_(True)), NULL_NODE
        state = grow_arena(state, grown)
        top = _host_int_value(state.free_top)
    node = _node_id(state.free_stack[top - 1])
    _arena_metrics_update(allocs=1)
    return (
        state._replace(
            next_node=state.next_node.at[node].set(jnp.uint32(NULL_NODE)),
            live=state.live.at[node].set(True),
            free_top=jnp.uint32(top - 1),
        ),
        node,
    )


def free_node(state, node):
    """Release one live id back to the free stack.

    Freeing NULL, a dead id, or overflowing the stack marks the arena corrupt
    (a double free or a dangling owner).
    """
    if _host_bool_value(state.corrupt):
        return state
    node_i = _host_int_value(node)
    capacity = int(state.next_node.shape[0])
    top = _host_int_value(state.free_top)
    if not (NULL_NODE < node_i < capacity):
        return state._replace(corrupt=jnp.bool_(True))
    if not _host_bool_value(state.live[node_i]) or top + 1 > capacity:
        return state._replace(corrupt=jnp.bool_(True))
    _arena_metrics_update(frees=1)
    return state._replace(
        next_node=state.next_node.at[node_i].set(jnp.uint32(NULL_NODE)),
        live=state.live.at[node_i].set(False),
        free_stack=state.free_stack.at[top].set(jnp.uint32(node_i)),
        free_top=jnp.uint32(top + 1),
    )


__all__ = [
    "AllocConfig",
    "DEFAULT_ALLOC_CONFIG",
    "DEFAULT_INITIAL_CAPACITY",
    "DEFAULT_GROWTH_FACTOR",
    "initial_capacity_cfg",
    "growth_factor_cfg",
    "next_capacity",
    "grow_arena",
    "alloc_node",
    "free_node",
]
