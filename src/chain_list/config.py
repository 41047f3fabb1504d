from __future__ import annotations

from dataclasses import dataclass

from chain_core.alloc import AllocConfig, DEFAULT_ALLOC_CONFIG
from chain_core.protocols import ReverseFn, SeekFn, WalkFn
from chain_list.guards import ChainGuardConfig, DEFAULT_CHAIN_GUARD_CONFIG


@dataclass(frozen=True, slots=True)
class ChainListConfig:
    """List-level DI bundle.

    Kernel fields left as None resolve to the jitted defaults in
    chain_list.engine.
    """

    alloc_cfg: AllocConfig = DEFAULT_ALLOC_CONFIG
    guard_cfg: ChainGuardConfig = DEFAULT_CHAIN_GUARD_CONFIG
    walk_fn: WalkFn | None = None
    seek_last_fn: SeekFn | None = None
    seek_penultimate_fn: SeekFn | None = None
    reverse_fn: ReverseFn | None = None


DEFAULT_CHAIN_LIST_CONFIG = ChainListConfig()


__all__ = ["ChainListConfig", "DEFAULT_CHAIN_LIST_CONFIG"]
