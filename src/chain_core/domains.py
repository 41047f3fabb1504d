"""Node-id domain and NULL sentinel conventions.

Arena slots are addressed by plain integer ids. Id 0 never holds an element:
it is the empty ownership slot, and its own link stays NULL so a walk that
runs off the end of a chain keeps landing on NULL.
"""

from typing import NewType

from chain_core.host import _host_int_value

# Host-only domain tag (type checkers only).
NodeId = NewType("NodeId", int)

NULL_NODE = NodeId(0)


def _node_id(value) -> NodeId:
    if isinstance(value, bool):
        raise TypeError("expected node id, got bool")
    return NodeId(_host_int_value(value))


__all__ = [
    "NodeId",
    "NULL_NODE",
    "_node_id",
]
