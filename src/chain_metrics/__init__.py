"""Env-gated counters for chain walks and arena traffic."""

from chain_metrics.metrics import (
    arena_metrics_get,
    arena_metrics_reset,
    walk_metrics_get,
    walk_metrics_reset,
)

__all__ = [
    "arena_metrics_get",
    "arena_metrics_reset",
    "walk_metrics_get",
    "walk_metrics_reset",
]
