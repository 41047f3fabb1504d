import jax
import jax.numpy as jnp
from typing import List, NamedTuple, Tuple

from chain_core.domains import NULL_NODE, NodeId
from chain_core.errors import ChainArenaCorruptError
from chain_core.host import _host_array, _host_int_value
from chain_core.jax_safe import guard_link_index

# Node arena + single-link edit kernels.

NULL_U32 = jnp.uint32(NULL_NODE)


class ChainArena(NamedTuple):
    next_node: jnp.ndarray
    live: jnp.ndarray
    free_stack: jnp.ndarray
    free_top: jnp.ndarray
    oom: jnp.ndarray
    corrupt: jnp.ndarray


def _halted(state: ChainArena) -> jnp.ndarray:
    return state.oom | state.corrupt


def _capacity(state: ChainArena) -> jnp.ndarray:
    return jnp.asarray(state.next_node.shape[0], dtype=jnp.int32)


def arena_capacity(state: ChainArena) -> int:
    return int(state.next_node.shape[0])


def arena_init(capacity: int) -> ChainArena:
    if capacity < 1:
        raise ValueError(f"arena capacity must be >= 1, got {capacity}")
    next_node = jnp.zeros((capacity,), dtype=jnp.uint32)
    live = jnp.zeros((capacity,), dtype=jnp.bool_)
    free_stack = jnp.arange(capacity - 1, -1, -1, dtype=jnp.uint32)
    # Node 0 is reserved (NULL); it sits just above the free top.
    free_top = jnp.array(capacity - 1, dtype=jnp.uint32)
    oom = jnp.array(False, dtype=jnp.bool_)
    corrupt = jnp.array(False, dtype=jnp.bool_)
    return ChainArena(
        next_node=next_node,
        live=live,
        free_stack=free_stack,
        free_top=free_top,
        oom=oom,
        corrupt=corrupt,
    )


@jax.jit
def arena_link_jax(state: ChainArena, node: jnp.ndarray, successor: jnp.ndarray) -> ChainArena:
    """Give `node`'s link ownership of `successor` (NULL clears it)."""

    def _do(s):
        node_u = jnp.asarray(node, dtype=jnp.uint32)
        succ_u = jnp.asarray(successor, dtype=jnp.uint32)
        guard_link_index(node_u, _capacity(s), "arena_link_jax.node")
        guard_link_index(succ_u, _capacity(s), "arena_link_jax.successor")
        bad = node_u == NULL_U32
        links = jnp.where(bad, s.next_node, s.next_node.at[node_u].set(succ_u))
        return s._replace(next_node=links, corrupt=s.corrupt | bad)

    return jax.lax.cond(_halted(state), lambda s: s, _do, state)


@jax.jit
def arena_splice_after_jax(state: ChainArena, pred: jnp.ndarray, node: jnp.ndarray) -> ChainArena:
    """`node` takes `pred`'s successor, then `pred` takes `node`."""

    def _do(s):
        pred_u = jnp.asarray(pred, dtype=jnp.uint32)
        node_u = jnp.asarray(node, dtype=jnp.uint32)
        guard_link_index(pred_u, _capacity(s), "arena_splice_after_jax.pred")
        guard_link_index(node_u, _capacity(s), "arena_splice_after_jax.node")
        bad = (pred_u == NULL_U32) | (node_u == NULL_U32)
        succ = s.next_node[pred_u]
        spliced = s.next_node.at[node_u].set(succ).at[pred_u].set(node_u)
        links = jnp.where(bad, s.next_node, spliced)
        return s._replace(next_node=links, corrupt=s.corrupt | bad)

    return jax.lax.cond(_halted(state), lambda s: s, _do, state)


@jax.jit
def arena_unlink_after_jax(state: ChainArena, pred: jnp.ndarray) -> Tuple[ChainArena, jnp.ndarray]:
    """Detach `pred`'s successor; `pred` takes the detached node's successor.

    Returns the detached node with its own link cleared. The node stays live:
    the caller owns it until it is freed.
    """

    def _do(s):
        pred_u = jnp.asarray(pred, dtype=jnp.uint32)
        guard_link_index(pred_u, _capacity(s), "arena_unlink_after_jax.pred")
        node_u = s.next_node[pred_u]
        bad = (pred_u == NULL_U32) | (node_u == NULL_U32)
        succ = s.next_node[node_u]
        unlinked = s.next_node.at[pred_u].set(succ).at[node_u].set(NULL_U32)
        links = jnp.where(bad, s.next_node, unlinked)
        taken = jnp.where(bad, NULL_U32, node_u)
        return s._replace(next_node=links, corrupt=s.corrupt | bad), taken

    return jax.lax.cond(_halted(state), lambda s: (s, NULL_U32), _do, state)


def chain_nodes(state: ChainArena, head) -> List[NodeId]:
    """Host walk: node ids from `head` to the NULL terminator."""
    links = _host_array(state.next_node)
    capacity = links.shape[0]
    node = _host_int_value(head)
    out: List[NodeId] = []
    while node != NULL_NODE:
        if len(out) >= capacity or not (0 < node < capacity):
            raise ChainArenaCorruptError(
                "chain does not terminate", context="chain_nodes"
            )
        out.append(NodeId(node))
        node = int(links[node])
    return out


__all__ = [
    "ChainArena",
    "NULL_U32",
    "arena_init",
    "arena_capacity",
    "arena_link_jax",
    "arena_splice_after_jax",
    "arena_unlink_after_jax",
    "chain_nodes",
    "_halted",
]
