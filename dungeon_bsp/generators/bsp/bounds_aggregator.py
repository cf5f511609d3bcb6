"""
Bottom-up aggregation of room bounds.
"""

import logging

from .partition_tree import BSPNode

logger = logging.getLogger(__name__)


def aggregate_bounds(node: BSPNode) -> None:
    """
    Compute room bounds for a subtree, children first.

    Leaves keep the room carved for them.  Internal nodes get the smallest
    volume enclosing the rooms of their children.
    """
    if node.is_leaf:
        return

    # Visit children first and update their bounds
    for child in node.children:
        aggregate_bounds(child)

    update_room_bounds(node)


def update_room_bounds(node: BSPNode) -> None:
    """Encapsulate the room bounds of a node's children"""
    if node.is_leaf:
        return

    bounds = None
    for child in node.children:
        if child.room is None:
            continue
        bounds = child.room if bounds is None else bounds.union(child.room)

    if bounds is None:
        logger.warning("Node %d has no child rooms to aggregate", node.node_id)
        return

    if not node.cell.contains(bounds):
        raise RuntimeError(
            f"Room bounds of node {node.node_id} escape its cell: {bounds} not in {node.cell}"
        )

    node.set_room(bounds)
    logger.debug("Room bounds for node %d: size=%s", node.node_id, bounds.size)
