import jax
import jax.numpy as jnp
from typing import Tuple

from chain_core.jax_safe import safe_link_gather
from chain_list.arena import NULL_U32, ChainArena, _halted

# Chain-walking kernels. Every loop is bounded by arena capacity: a chain
# longer than the arena can only be a cycle.


@jax.jit
def arena_walk_jax(state: ChainArena, start: jnp.ndarray, steps: jnp.ndarray) -> jnp.ndarray:
    """Follow `steps` links from `start`; running off the chain yields NULL."""
    links = state.next_node
    start_u = jnp.asarray(start, dtype=jnp.uint32)
    steps_i = jnp.asarray(steps, dtype=jnp.int32)

    def body(_, node):
        return safe_link_gather(links, node, "arena_walk_jax")

    return jax.lax.fori_loop(jnp.int32(0), steps_i, body, start_u)


@jax.jit
def arena_seek_last_jax(state: ChainArena, head: jnp.ndarray) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """Return (node whose link is NULL, steps taken).

    steps == capacity means the chain never reached NULL (a cycle).
    """
    links = state.next_node
    cap = links.shape[0]

    def cond(carry):
        node, steps = carry
        return (links[node] != NULL_U32) & (steps < cap)

    def body(carry):
        node, steps = carry
        return safe_link_gather(links, node, "arena_seek_last_jax"), steps + 1

    init = (jnp.asarray(head, dtype=jnp.uint32), jnp.int32(0))
    return jax.lax.while_loop(cond, body, init)


@jax.jit
def arena_seek_penultimate_jax(
    state: ChainArena, head: jnp.ndarray
) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """Return (node whose successor's link is NULL, steps taken)."""
    links = state.next_node
    cap = links.shape[0]

    def cond(carry):
        node, steps = carry
        return (links[links[node]] != NULL_U32) & (steps < cap)

    def body(carry):
        node, steps = carry
        return safe_link_gather(links, node, "arena_seek_penultimate_jax"), steps + 1

    init = (jnp.asarray(head, dtype=jnp.uint32), jnp.int32(0))
    return jax.lax.while_loop(cond, body, init)


@jax.jit
def arena_reverse_jax(
    state: ChainArena, head: jnp.ndarray
) -> Tuple[ChainArena, jnp.ndarray, jnp.ndarray]:
    """Rotate every link in the chain at `head`; no node is allocated or freed.

    Returns (state, new head, steps). A chain that outlives the capacity
    budget, or one that loops back on itself, marks the arena corrupt.
    """
    head_u = jnp.asarray(head, dtype=jnp.uint32)

    def _halt(s):
        return s, head_u, jnp.int32(0)

    def _run(s):
        cap = s.next_node.shape[0]

        def cond(carry):
            _, _, current, steps = carry
            return (current != NULL_U32) & (steps < cap)

        def body(carry):
            links, previous, current, steps = carry
            following = safe_link_gather(links, current, "arena_reverse_jax")
            links = links.at[current].set(previous)
            return links, current, following, steps + 1

        init = (s.next_node, NULL_U32, head_u, jnp.int32(0))
        links, previous, current, steps = jax.lax.while_loop(cond, body, init)
        # The old head must end as the tail. On a cycle the rotation retraces
        # back to it and leaves its link non-NULL.
        looped = links[head_u] != NULL_U32
        stuck = (current != NULL_U32) | (steps >= cap) | looped
        return s._replace(next_node=links, corrupt=s.corrupt | stuck), previous, steps

    return jax.lax.cond(_halted(state), _halt, _run, state)


__all__ = [
    "arena_walk_jax",
    "arena_seek_last_jax",
    "arena_seek_penultimate_jax",
    "arena_reverse_jax",
]
