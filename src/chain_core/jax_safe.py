import os

import jax
import jax.numpy as jnp

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


TEST_GUARDS = _env_flag("CHAIN_TEST_GUARDS")
LINK_GUARD = TEST_GUARDS or _env_flag("CHAIN_LINK_GUARD")
HAS_DEBUG_CALLBACK = hasattr(jax, "debug") and hasattr(jax.debug, "callback")


def guard_link_index(node, capacity, label, guard=None):
    """Raise (via debug callback) when a link points outside the arena."""
    if guard is None:
        guard = LINK_GUARD
    if not guard or not HAS_DEBUG_CALLBACK:
        return
    node_i = jnp.asarray(node, dtype=jnp.int32)
    if node_i.size == 0:
        return
    min_idx = jnp.min(node_i)
    max_idx = jnp.max(node_i)
    bad = (min_idx < 0) | (max_idx >= capacity)

    def _raise(bad_val, min_val, max_val, cap_val):
        if bad_val:
            raise RuntimeError(
                f"link index out of bounds in {label} "
                f"(min={int(min_val)}, max={int(max_val)}, capacity={int(cap_val)})"
            )

    jax.debug.callback(_raise, bad, min_idx, max_idx, capacity)


def safe_link_gather(links, node, label="safe_link_gather", guard=None):
    """Guarded successor read; out-of-range ids read as NULL."""
    capacity = jnp.asarray(links.shape[0], dtype=jnp.int32)
    guard_link_index(node, capacity, label, guard=guard)
    node_i = jnp.asarray(node, dtype=jnp.int32)
    ok = (node_i >= 0) & (node_i < capacity)
    node_safe = jnp.where(ok, node_i, jnp.int32(0))
    return jnp.where(ok, links[node_safe], jnp.zeros((), dtype=links.dtype))


__all__ = [
    "TEST_GUARDS",
    "LINK_GUARD",
    "HAS_DEBUG_CALLBACK",
    "guard_link_index",
    "safe_link_gather",
]
