from __future__ import annotations

import operator
from typing import Any, Iterable, List, Tuple

from chain_core.alloc import alloc_node, free_node, initial_capacity_cfg
from chain_core.domains import NULL_NODE, NodeId, _node_id
from chain_core.errors import (
    ChainArenaCorruptError,
    ChainEmptyListError,
    ChainIndexOutOfBoundsError,
    ChainInvalidIndexError,
)
from chain_list.arena import (
    ChainArena,
    arena_capacity,
    arena_init,
    arena_link_jax,
    arena_splice_after_jax,
    arena_unlink_after_jax,
    chain_nodes,
)
from chain_list.config import ChainListConfig, DEFAULT_CHAIN_LIST_CONFIG
from chain_list.engine import (
    arena_reverse_jax,
    arena_seek_last_jax,
    arena_seek_penultimate_jax,
    arena_walk_jax,
)
from chain_list.guards import _host_raise_if_bad, check_chain_cfg
from chain_metrics.metrics import _walk_metrics_update


class NodeChainList:
    """Singly linked list over a node arena.

    `head` is the list's first-node slot and every node's link is the slot
    for the rest of the chain; each node id is held by exactly one of them.
    Element values live in a host table indexed by node id. No tail pointer
    is cached, so tail operations walk the chain.
    """

    def __init__(self, *, cfg: ChainListConfig = DEFAULT_CHAIN_LIST_CONFIG):
        self.cfg = cfg
        self.arena: ChainArena = arena_init(initial_capacity_cfg(cfg.alloc_cfg))
        self._values: List[Any] = [None] * arena_capacity(self.arena)
        self._head: NodeId = NULL_NODE
        self._count = 0
        self._walk_fn = cfg.walk_fn or arena_walk_jax
        self._seek_last_fn = cfg.seek_last_fn or arena_seek_last_jax
        self._seek_penultimate_fn = cfg.seek_penultimate_fn or arena_seek_penultimate_jax
        self._reverse_fn = cfg.reverse_fn or arena_reverse_jax

    @classmethod
    def from_values(cls, values: Iterable[Any], *, cfg: ChainListConfig | None = None):
        lst = cls(cfg=cfg or DEFAULT_CHAIN_LIST_CONFIG)
        for value in values:
            lst.insert_at_tail(value)
        return lst

    @property
    def head(self) -> NodeId:
        return self._head

    def len(self) -> int:
        return self._count

    def is_empty(self) -> bool:
        return self._count == 0

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_list()!r})"

    # ---- host plumbing ----

    def _check_index(self, index, upper: int, op: str) -> int:
        if isinstance(index, bool):
            raise TypeError(f"{op}: index must be an integer, got bool")
        try:
            idx = operator.index(index)
        except TypeError:
            raise TypeError(
                f"{op}: index must be an integer, got {type(index).__name__}"
            ) from None
        if idx < 0 or idx > upper:
            raise ChainIndexOutOfBoundsError(index=index, length=self._count, op=op)
        return idx

    def _next_of(self, node) -> NodeId:
        return _node_id(self.arena.next_node[node])

    def _walk_to(self, steps: int) -> NodeId:
        node = _node_id(self._walk_fn(self.arena, self._head, steps))
        _walk_metrics_update(steps)
        return node

    def _seek(self, seek_fn, context: str) -> NodeId:
        node, steps = seek_fn(self.arena, self._head)
        steps = int(steps)
        _walk_metrics_update(steps)
        # A terminated chain is shorter than the arena.
        if steps >= arena_capacity(self.arena):
            raise ChainArenaCorruptError("chain does not terminate", context=context)
        return _node_id(node)

    def _alloc(self, context: str) -> Tuple[ChainArena, NodeId]:
        arena, node = alloc_node(self.arena, cfg=self.cfg.alloc_cfg)
        _host_raise_if_bad(arena, context=context)
        capacity = arena_capacity(arena)
        if len(self._values) < capacity:
            self._values.extend([None] * (capacity - len(self._values)))
        return arena, node

    def _commit(self, arena: ChainArena, head, count: int, context: str) -> None:
        head = _node_id(head)
        _host_raise_if_bad(arena, context=context)
        check_chain_cfg(arena, head, count, context=context, cfg=self.cfg.guard_cfg)
        self.arena = arena
        self._head = head
        self._count = count

    def _release(self, arena: ChainArena, node: NodeId, context: str) -> Tuple[ChainArena, Any]:
        arena = free_node(arena, node)
        _host_raise_if_bad(arena, context=context)
        value = self._values[node]
        self._values[node] = None
        return arena, value

    # ---- insertion ----

    def insert_at_head(self, value) -> None:
        arena, node = self._alloc("insert_at_head")
        arena = arena_link_jax(arena, node, self._head)
        self._commit(arena, node, self._count + 1, "insert_at_head")
        self._values[node] = value

    def insert_at_tail(self, value) -> None:
        if self._head == NULL_NODE:
            self.insert_at_head(value)
            return
        last = self._seek(self._seek_last_fn, "insert_at_tail")
        arena, node = self._alloc("insert_at_tail")
        arena = arena_link_jax(arena, last, node)
        self._commit(arena, self._head, self._count + 1, "insert_at_tail")
        self._values[node] = value

    def insert_at_index(self, index, value) -> None:
        """Insert so that `value` ends up at `index` (0..=len; len appends)."""
        idx = self._check_index(index, self._count, "insert_at_index")
        if idx == 0:
            self.insert_at_head(value)
            return
        pred = self._walk_to(idx - 1)
        if pred == NULL_NODE:
            raise ChainInvalidIndexError(index=index, op="insert_at_index")
        arena, node = self._alloc("insert_at_index")
        arena = arena_splice_after_jax(arena, pred, node)
        self._commit(arena, self._head, self._count + 1, "insert_at_index")
        self._values[node] = value

    # ---- removal ----

    def remove_from_head(self, *, return_ok: bool = False):
        """Remove and return the first value.

        An empty list is a normal outcome: returns None, or (None, False)
        when return_ok is set.
        """
        if self._head == NULL_NODE:
            return (None, False) if return_ok else None
        node = self._head
        new_head = self._next_of(node)
        arena, value = self._release(self.arena, node, "remove_from_head")
        self._commit(arena, new_head, self._count - 1, "remove_from_head")
        return (value, True) if return_ok else value

    def remove_from_tail(self, *, return_ok: bool = False):
        if self._head == NULL_NODE:
            return (None, False) if return_ok else None
        if self._next_of(self._head) == NULL_NODE:
            return self.remove_from_head(return_ok=return_ok)
        pred = self._seek(self._seek_penultimate_fn, "remove_from_tail")
        arena, node = arena_unlink_after_jax(self.arena, pred)
        _host_raise_if_bad(arena, context="remove_from_tail")
        arena, value = self._release(arena, _node_id(node), "remove_from_tail")
        self._commit(arena, self._head, self._count - 1, "remove_from_tail")
        return (value, True) if return_ok else value

    def remove_from_index(self, index):
        idx = self._check_index(index, self._count - 1, "remove_from_index")
        if idx == 0:
            value, ok = self.remove_from_head(return_ok=True)
            if not ok:
                raise ChainEmptyListError(op="remove_from_index")
            return value
        pred = self._walk_to(idx - 1)
        if pred == NULL_NODE or self._next_of(pred) == NULL_NODE:
            raise ChainInvalidIndexError(index=index, op="remove_from_index")
        arena, node = arena_unlink_after_jax(self.arena, pred)
        _host_raise_if_bad(arena, context="remove_from_index")
        arena, value = self._release(arena, _node_id(node), "remove_from_index")
        self._commit(arena, self._head, self._count - 1, "remove_from_index")
        return value

    def clear(self) -> None:
        """Release every node, head first."""
        arena = self.arena
        for node in chain_nodes(arena, self._head):
            arena, _ = self._release(arena, node, "clear")
        self._commit(arena, NULL_NODE, 0, "clear")

    # ---- whole-chain ----

    def reverse(self) -> None:
        arena, new_head, steps = self._reverse_fn(self.arena, self._head)
        _walk_metrics_update(steps, reversal=True)
        self._commit(arena, new_head, self._count, "reverse")

    def get(self, index):
        idx = self._check_index(index, self._count - 1, "get")
        node = self._walk_to(idx)
        if node == NULL_NODE:
            raise ChainInvalidIndexError(index=index, op="get")
        return self._values[node]

    def to_list(self) -> List[Any]:
        return [self._values[node] for node in chain_nodes(self.arena, self._head)]


__all__ = ["NodeChainList"]
