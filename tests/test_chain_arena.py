import jax.numpy as jnp
import pytest

import nodechain as nc


def test_arena_init_free_stack():
    arena = nc.arena_init(5)
    assert nc.arena_capacity(arena) == 5
    assert int(arena.free_top) == 4
    assert [int(x) for x in arena.free_stack[:4]] == [4, 3, 2, 1]
    assert int(arena.next_node[0]) == nc.NULL_NODE
    assert not bool(arena.live.any())
    assert not bool(arena.oom)
    assert not bool(arena.corrupt)


def test_arena_init_rejects_zero():
    with pytest.raises(ValueError):
        nc.arena_init(0)


def test_alloc_pops_lowest_first_and_free_pushes_back():
    arena = nc.arena_init(4)
    arena, a = nc.alloc_node(arena)
    arena, b = nc.alloc_node(arena)
    assert (a, b) == (1, 2)
    assert bool(arena.live[a]) and bool(arena.live[b])
    arena = nc.free_node(arena, a)
    assert not bool(arena.live[a])
    arena, c = nc.alloc_node(arena)
    assert c == a
    assert not bool(arena.corrupt)


def test_alloc_grows_when_exhausted():
    cfg = nc.AllocConfig(initial_capacity=2, growth_factor=2)
    arena = nc.arena_init(2)
    arena, a = nc.alloc_node(arena, cfg=cfg)
    assert a == 1
    arena, b = nc.alloc_node(arena, cfg=cfg)
    assert nc.arena_capacity(arena) == 4
    assert b == 2
    arena, c = nc.alloc_node(arena, cfg=cfg)
    assert c == 3
    assert int(arena.free_top) == 0


def test_alloc_bounded_sets_oom():
    cfg = nc.AllocConfig(initial_capacity=2, max_capacity=2)
    arena = nc.arena_init(2)
    arena, a = nc.alloc_node(arena, cfg=cfg)
    arena, b = nc.alloc_node(arena, cfg=cfg)
    assert a == 1
    assert b == nc.NULL_NODE
    assert bool(arena.oom)


def test_next_capacity():
    assert nc.next_capacity(4, cfg=nc.AllocConfig(growth_factor=3)) == 12
    assert nc.next_capacity(4, cfg=nc.AllocConfig(growth_factor=2, max_capacity=6)) == 6
    assert nc.next_capacity(6, cfg=nc.AllocConfig(growth_factor=2, max_capacity=6)) is None


def test_double_free_marks_corrupt():
    arena = nc.arena_init(4)
    arena, a = nc.alloc_node(arena)
    arena = nc.free_node(arena, a)
    arena = nc.free_node(arena, a)
    assert bool(arena.corrupt)


def test_free_null_marks_corrupt():
    arena = nc.free_node(nc.arena_init(4), nc.NULL_NODE)
    assert bool(arena.corrupt)


def _linked(n):
    arena = nc.arena_init(n + 1)
    nodes = []
    for _ in range(n):
        arena, node = nc.alloc_node(arena)
        nodes.append(node)
    for node, successor in zip(nodes, nodes[1:]):
        arena = nc.arena_link_jax(arena, node, successor)
    return arena, nodes


def test_walk_follows_links_and_stops_at_null():
    arena, nodes = _linked(3)
    head = nodes[0]
    assert int(nc.arena_walk_jax(arena, head, 0)) == nodes[0]
    assert int(nc.arena_walk_jax(arena, head, 2)) == nodes[2]
    assert int(nc.arena_walk_jax(arena, head, 3)) == nc.NULL_NODE
    assert int(nc.arena_walk_jax(arena, head, 10)) == nc.NULL_NODE


def test_seek_last_and_penultimate():
    arena, nodes = _linked(4)
    last, steps = nc.arena_seek_last_jax(arena, nodes[0])
    assert int(last) == nodes[-1]
    assert int(steps) == 3
    pred, steps = nc.arena_seek_penultimate_jax(arena, nodes[0])
    assert int(pred) == nodes[-2]
    assert int(steps) == 2


def test_splice_and_unlink_after():
    arena, nodes = _linked(2)
    arena, extra = nc.alloc_node(arena, cfg=nc.AllocConfig(initial_capacity=3))
    arena = nc.arena_splice_after_jax(arena, nodes[0], extra)
    assert nc.chain_nodes(arena, nodes[0]) == [nodes[0], extra, nodes[1]]
    arena, taken = nc.arena_unlink_after_jax(arena, nodes[0])
    assert int(taken) == extra
    assert int(arena.next_node[extra]) == nc.NULL_NODE
    assert nc.chain_nodes(arena, nodes[0]) == nodes
    assert not bool(arena.corrupt)


def test_unlink_after_tail_marks_corrupt():
    arena, nodes = _linked(2)
    arena, taken = nc.arena_unlink_after_jax(arena, nodes[-1])
    assert int(taken) == nc.NULL_NODE
    assert bool(arena.corrupt)
    assert nc.chain_nodes(arena, nodes[0]) == nodes


def test_link_null_marks_corrupt():
    arena = nc.arena_link_jax(nc.arena_init(3), nc.NULL_NODE, 1)
    assert bool(arena.corrupt)
    assert int(arena.next_node[0]) == nc.NULL_NODE


def test_halted_arena_ignores_edits():
    arena, nodes = _linked(2)
    arena = arena._replace(corrupt=jnp.bool_(True))
    edited = nc.arena_link_jax(arena, nodes[-1], nodes[0])
    assert int(edited.next_node[nodes[-1]]) == nc.NULL_NODE


def test_reverse_kernel():
    arena, nodes = _linked(3)
    arena, new_head, steps = nc.arena_reverse_jax(arena, nodes[0])
    assert int(new_head) == nodes[-1]
    assert int(steps) == 3
    assert nc.chain_nodes(arena, new_head) == nodes[::-1]


def test_reverse_kernel_on_cycle_marks_corrupt():
    arena, nodes = _linked(3)
    arena = nc.arena_link_jax(arena, nodes[-1], nodes[0])
    arena, _, _ = nc.arena_reverse_jax(arena, nodes[0])
    assert bool(arena.corrupt)


def test_chain_nodes_rejects_cycle():
    arena, nodes = _linked(2)
    arena = nc.arena_link_jax(arena, nodes[-1], nodes[0])
    with pytest.raises(nc.ChainArenaCorruptError):
        nc.chain_nodes(arena, nodes[0])


def test_reverse_kernel_on_inner_cycle_marks_corrupt():
    arena, nodes = _linked(3)
    arena = nc.arena_link_jax(arena, nodes[-1], nodes[1])
    arena, _, _ = nc.arena_reverse_jax(arena, nodes[0])
    assert bool(arena.corrupt)


def test_reverse_kernel_on_self_loop_marks_corrupt():
    arena, nodes = _linked(1)
    arena = nc.arena_link_jax(arena, nodes[0], nodes[0])
    arena, _, _ = nc.arena_reverse_jax(arena, nodes[0])
    assert bool(arena.corrupt)


def test_reverse_kernel_full_arena_stays_clean():
    arena, nodes = _linked(7)
    assert int(arena.free_top) == 0
    arena, new_head, steps = nc.arena_reverse_jax(arena, nodes[0])
    assert int(steps) == 7
    assert not bool(arena.corrupt)
    assert nc.chain_nodes(arena, new_head) == nodes[::-1]


def test_seek_kernels_on_cycle_use_whole_budget():
    arena, nodes = _linked(3)
    arena = nc.arena_link_jax(arena, nodes[-1], nodes[0])
    cap = nc.arena_capacity(arena)
    _, steps = nc.arena_seek_last_jax(arena, nodes[0])
    assert int(steps) == cap
    _, steps = nc.arena_seek_penultimate_jax(arena, nodes[0])
    assert int(steps) == cap
