from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from chain_core import jax_safe as _jax_safe
from chain_core.domains import NULL_NODE
from chain_core.errors import ChainArenaCorruptError, ChainCapacityError
from chain_core.host import _host_array, _host_bool_value, _host_int_value
from chain_core.protocols import CheckChainFn

_TEST_GUARDS = _jax_safe.TEST_GUARDS


def _guards_enabled():
    return _TEST_GUARDS


@dataclass(frozen=True, slots=True)
class ChainGuardConfig:
    """Guard DI bundle for chain lists (host-side control surface)."""

    guards_enabled_fn: Optional[Callable[[], bool]] = None
    check_chain_fn: CheckChainFn | None = None


DEFAULT_CHAIN_GUARD_CONFIG = ChainGuardConfig()


def _host_raise_if_bad(state, context: str | None = None) -> None:
    # SYNC: host check after device-side edits.
    if _host_bool_value(state.corrupt):
        raise ChainArenaCorruptError("arena marked corrupt", context=context)
    if _host_bool_value(state.oom):
        raise ChainCapacityError(
            capacity=int(state.next_node.shape[0]), context=context
        )


def check_chain_invariants(state, head, count: int, *, context: str | None = None) -> None:
    """Validate single ownership of every node in the arena.

    Checks: NULL stays unowned; the chain from `head` is acyclic and reaches
    NULL after exactly `count` live nodes; no live node sits outside the chain
    (leak); no free-stack id is live (double owner); the free stack plus the
    chain account for every non-NULL slot.
    """
    links = _host_array(state.next_node)
    live = _host_array(state.live, dtype=bool)
    free_stack = _host_array(state.free_stack)
    free_top = _host_int_value(state.free_top)
    capacity = links.shape[0]

    def _fail(message):
        raise ChainArenaCorruptError(message, context=context)

    if _host_bool_value(state.corrupt):
        _fail("arena marked corrupt")
    if int(links[NULL_NODE]) != NULL_NODE or bool(live[NULL_NODE]):
        _fail("NULL slot owns a node")
    seen = set()
    node = _host_int_value(head)
    while node != NULL_NODE:
        if not (0 < node < capacity):
            _fail(f"link to node {node} outside arena of {capacity}")
        if node in seen:
            _fail(f"cycle through node {node}")
        if not live[node]:
            _fail(f"dangling link to freed node {node}")
        seen.add(node)
        node = int(links[node])
    if len(seen) != count:
        _fail(f"count {count} != {len(seen)} reachable nodes")
    live_total = int(live.sum())
    if live_total != count:
        _fail(f"{live_total - count} live nodes unreachable from head")
    free_ids = free_stack[:free_top]
    if free_ids.size and bool(live[free_ids].any()):
        _fail("free stack holds a live node")
    if free_top + count != capacity - 1:
        _fail(f"free_top {free_top} + count {count} != capacity - 1 ({capacity - 1})")


def guards_enabled_cfg(*, cfg: ChainGuardConfig = DEFAULT_CHAIN_GUARD_CONFIG) -> bool:
    fn = cfg.guards_enabled_fn or _guards_enabled
    return bool(fn())


def check_chain_cfg(
    state,
    head,
    count: int,
    *,
    context: str | None = None,
    cfg: ChainGuardConfig = DEFAULT_CHAIN_GUARD_CONFIG,
) -> None:
    """Run the configured invariant check when guards are enabled."""
    if not guards_enabled_cfg(cfg=cfg):
        return
    fn = cfg.check_chain_fn or check_chain_invariants
    fn(state, head, count, context=context)


__all__ = [
    "ChainGuardConfig",
    "DEFAULT_CHAIN_GUARD_CONFIG",
    "_host_raise_if_bad",
    "check_chain_invariants",
    "guards_enabled_cfg",
    "check_chain_cfg",
]
