import os

_walk_metrics_walks = 0
_walk_metrics_steps = 0
_walk_metrics_reversals = 0
_arena_metrics_allocs = 0
_arena_metrics_frees = 0
_arena_metrics_grows = 0


def _walk_metrics_enabled():
    value = os.environ.get("CHAIN_WALK_METRICS", "").strip().lower()
    return value in ("1", "true", "yes", "on")


def _arena_metrics_enabled():
    value = os.environ.get("CHAIN_ARENA_METRICS", "").strip().lower()
    return value in ("1", "true", "yes", "on")


def walk_metrics_reset():
    global _walk_metrics_walks
    global _walk_metrics_steps
    global _walk_metrics_reversals
    _walk_metrics_walks = 0
    _walk_metrics_steps = 0
    _walk_metrics_reversals = 0


def arena_metrics_reset():
    global _arena_metrics_allocs
    global _arena_metrics_frees
    global _arena_metrics_grows
    _arena_metrics_allocs = 0
    _arena_metrics_frees = 0
    _arena_metrics_grows = 0


def walk_metrics_get():
    if not _walk_metrics_enabled():
        return {
            "walks": 0,
            "steps": 0,
            "reversals": 0,
            "mean_steps": 0.0,
        }
    walks = int(_walk_metrics_walks)
    steps = int(_walk_metrics_steps)
    return {
        "walks": walks,
        "steps": steps,
        "reversals": int(_walk_metrics_reversals),
        "mean_steps": float(steps / walks) if walks else 0.0,
    }


def arena_metrics_get():
    if not _arena_metrics_enabled():
        return {
            "allocs": 0,
            "frees": 0,
            "grows": 0,
            "live": 0,
        }
    return {
        "allocs": int(_arena_metrics_allocs),
        "frees": int(_arena_metrics_frees),
        "grows": int(_arena_metrics_grows),
        "live": int(_arena_metrics_allocs - _arena_metrics_frees),
    }


def _walk_metrics_update(steps, reversal=False):
    global _walk_metrics_walks
    global _walk_metrics_steps
    global _walk_metrics_reversals
    if not _walk_metrics_enabled():
        return
    _walk_metrics_walks += 1
    _walk_metrics_steps += int(steps)
    if reversal:
        _walk_metrics_reversals += 1


def _arena_metrics_update(allocs=0, frees=0, grows=0):
    global _arena_metrics_allocs
    global _arena_metrics_frees
    global _arena_metrics_grows
    if not _arena_metrics_enabled():
        return
    _arena_metrics_allocs += int(allocs)
    _arena_metrics_frees += int(frees)
    _arena_metrics_grows += int(grows)


__all__ = [
    "walk_metrics_reset",
    "walk_metrics_get",
    "arena_metrics_reset",
    "arena_metrics_get",
    "_walk_metrics_enabled",
    "_arena_metrics_enabled",
    "_walk_metrics_update",
    "_arena_metrics_update",
]
