import pytest

import nodechain as nc
from tests import harness


def test_new_list_is_empty():
    lst = nc.NodeChainList()
    assert lst.len() == 0
    assert len(lst) == 0
    assert lst.is_empty()
    assert lst.head == nc.NULL_NODE
    assert lst.to_list() == []
    harness.assert_chain_valid(lst)


def test_insert_at_head_prepends():
    lst = nc.NodeChainList()
    lst.insert_at_head(1)
    lst.insert_at_head(2)
    lst.insert_at_head(3)
    assert lst.to_list() == [3, 2, 1]
    assert lst.len() == 3
    assert not lst.is_empty()
    harness.assert_chain_valid(lst)


def test_remove_from_head_drains_in_order():
    lst = harness.build_list_from_head([1, 2, 3])
    assert lst.remove_from_head() == 1
    assert lst.remove_from_head() == 2
    assert lst.remove_from_head() == 3
    assert lst.is_empty()
    harness.assert_chain_valid(lst)


def test_remove_from_head_empty_is_not_found():
    lst = nc.NodeChainList()
    assert lst.remove_from_head() is None
    assert lst.remove_from_head(return_ok=True) == (None, False)
    assert lst.len() == 0
    harness.assert_chain_valid(lst)


def test_remove_from_head_return_ok_distinguishes_none_values():
    lst = nc.NodeChainList()
    lst.insert_at_head(None)
    assert lst.remove_from_head(return_ok=True) == (None, True)
    assert lst.remove_from_head(return_ok=True) == (None, False)


def test_values_are_stored_without_copy():
    payload = {"k": [1, 2]}
    lst = nc.NodeChainList()
    lst.insert_at_head(payload)
    assert lst.get(0) is payload


def test_removed_node_ids_are_reused():
    lst = harness.build_list([10, 20])
    top_before = int(lst.arena.free_top)
    lst.remove_from_head()
    assert int(lst.arena.free_top) == top_before + 1
    lst.insert_at_head(30)
    assert int(lst.arena.free_top) == top_before
    assert lst.to_list() == [30, 20]
    harness.assert_chain_valid(lst)


def test_clear_releases_every_node():
    lst = harness.build_list(range(5))
    capacity = nc.arena_capacity(lst.arena)
    lst.clear()
    assert lst.is_empty()
    assert lst.head == nc.NULL_NODE
    assert int(lst.arena.free_top) == capacity - 1
    assert not bool(lst.arena.live.any())
    lst.insert_at_tail("again")
    assert lst.to_list() == ["again"]
    harness.assert_chain_valid(lst)


def test_from_values_and_repr():
    lst = nc.NodeChainList.from_values(["a", "b"])
    assert lst.to_list() == ["a", "b"]
    assert repr(lst) == "NodeChainList(['a', 'b'])"


def test_len_after_mixed_inserts():
    lst = nc.NodeChainList()
    for i in range(6):
        if i % 3 == 0:
            lst.insert_at_head(i)
        elif i % 3 == 1:
            lst.insert_at_tail(i)
        else:
            lst.insert_at_index(lst.len() // 2, i)
        assert lst.len() == i + 1
        assert not lst.is_empty()
    harness.assert_chain_valid(lst)


@pytest.mark.parametrize("count", [0, 1, 15, 16, 40])
def test_arena_growth_preserves_order(count):
    cfg = nc.ChainListConfig(alloc_cfg=nc.AllocConfig(initial_capacity=4))
    lst = harness.build_list(range(count), cfg=cfg)
    assert lst.to_list() == list(range(count))
    assert nc.arena_capacity(lst.arena) > count
    harness.assert_chain_valid(lst)
