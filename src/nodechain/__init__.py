"""Flat facade over the chain list, its arena, and the array peers."""

from chain_arrays import DynamicArray, FixedArray
from chain_core.alloc import (
    AllocConfig,
    DEFAULT_ALLOC_CONFIG,
    alloc_node,
    free_node,
    grow_arena,
    initial_capacity_cfg,
    next_capacity,
)
from chain_core.domains import NULL_NODE, NodeId
from chain_core.errors import (
    ChainArenaCorruptError,
    ChainCapacityError,
    ChainConfigError,
    ChainEmptyListError,
    ChainError,
    ChainErrorKind,
    ChainIndexOutOfBoundsError,
    ChainInvalidIndexError,
)
from chain_list import (
    ChainArena,
    ChainGuardConfig,
    ChainListConfig,
    DEFAULT_CHAIN_GUARD_CONFIG,
    DEFAULT_CHAIN_LIST_CONFIG,
    NodeChainList,
    arena_capacity,
    arena_init,
    arena_link_jax,
    arena_reverse_jax,
    arena_seek_last_jax,
    arena_seek_penultimate_jax,
    arena_splice_after_jax,
    arena_unlink_after_jax,
    arena_walk_jax,
    chain_nodes,
    check_chain_invariants,
)
from chain_metrics import (
    arena_metrics_get,
    arena_metrics_reset,
    walk_metrics_get,
    walk_metrics_reset,
)

__all__ = [
    "NodeChainList",
    "ChainListConfig",
    "DEFAULT_CHAIN_LIST_CONFIG",
    "ChainGuardConfig",
    "DEFAULT_CHAIN_GUARD_CONFIG",
    "AllocConfig",
    "DEFAULT_ALLOC_CONFIG",
    "ChainArena",
    "NodeId",
    "NULL_NODE",
    "arena_init",
    "arena_capacity",
    "arena_link_jax",
    "arena_splice_after_jax",
    "arena_unlink_after_jax",
    "arena_walk_jax",
    "arena_seek_last_jax",
    "arena_seek_penultimate_jax",
    "arena_reverse_jax",
    "chain_nodes",
    "check_chain_invariants",
    "alloc_node",
    "free_node",
    "grow_arena",
    "initial_capacity_cfg",
    "next_capacity",
    "ChainError",
    "ChainErrorKind",
    "ChainIndexOutOfBoundsError",
    "ChainEmptyListError",
    "ChainInvalidIndexError",
    "ChainArenaCorruptError",
    "ChainCapacityError",
    "ChainConfigError",
    "FixedArray",
    "DynamicArray",
    "walk_metrics_get",
    "walk_metrics_reset",
    "arena_metrics_get",
    "arena_metrics_reset",
]
