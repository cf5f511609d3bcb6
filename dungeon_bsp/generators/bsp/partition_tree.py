"""
Binary space-partitioning tree for dungeon generation.

Nodes are created top-down while splitting and never removed.  After
construction only two fields change: ``room`` is written exactly once and
``connected`` flips once, both during later passes.  The tree keeps every
node in a flat list indexed by ``node_id`` so callers can address nodes
without walking the hierarchy.
"""

import logging
import random
from enum import Enum, auto
from typing import List, Optional, Tuple

from .split_policy import SplitPolicy
from .volume import SplitAxis, Volume
from ...scene.collaborators import Color, WHITE

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Where a node stands in the connectivity pass"""
    LEAF = auto()       # Never transitions; always ready from the parent's view
    PENDING = auto()    # Has children, corridor not yet built
    CONNECTED = auto()  # Corridor between its children exists


class BSPNode:
    """Node in the BSP tree"""

    def __init__(self, node_id: int, cell: Volume, depth: int = 0, color: Color = WHITE):
        self.node_id = node_id
        self.cell = cell
        self.depth = depth
        self.color = color
        self.split_axis: Optional[SplitAxis] = None
        self.children: Optional[Tuple['BSPNode', 'BSPNode']] = None
        self.connected = False
        self._room: Optional[Volume] = None

    def __repr__(self) -> str:
        return f"BSPNode(id={self.node_id}, depth={self.depth}, state={self.state.name})"

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def room(self) -> Optional[Volume]:
        """Generated room for a leaf, union of descendant rooms otherwise"""
        return self._room

    @property
    def state(self) -> ConnectionState:
        if self.is_leaf:
            return ConnectionState.LEAF
        return ConnectionState.CONNECTED if self.connected else ConnectionState.PENDING

    @property
    def is_ready(self) -> bool:
        """True once a parent may connect to this subtree"""
        return self.state is not ConnectionState.PENDING

    def set_room(self, room: Volume) -> None:
        if self._room is not None:
            raise RuntimeError(f"Room of node {self.node_id} was already set")
        self._room = room

    def attach_children(self, child_a: 'BSPNode', child_b: 'BSPNode', axis: SplitAxis) -> None:
        if self.children is not None:
            raise RuntimeError(f"Node {self.node_id} is already split")
        self.children = (child_a, child_b)
        self.split_axis = axis

    def mark_connected(self) -> None:
        if self.is_leaf:
            raise RuntimeError(f"Leaf node {self.node_id} cannot be connected")
        if self.connected:
            raise RuntimeError(f"Node {self.node_id} is already connected")
        self.connected = True

    def get_leaves(self) -> List['BSPNode']:
        """Get all leaf nodes in this subtree"""
        if self.is_leaf:
            return [self]

        leaves = []
        for child in self.children:
            leaves.extend(child.get_leaves())
        return leaves

    def get_nodes_at_depth(self, depth: int) -> List['BSPNode']:
        """Get all nodes ``depth`` levels below this one (0 = this node)"""
        if depth == 0:
            return [self]
        if self.is_leaf:
            return []

        nodes = []
        for child in self.children:
            nodes.extend(child.get_nodes_at_depth(depth - 1))
        return nodes


class PartitionTree:
    """
    Owns the BSP nodes produced by recursively splitting a root cell.
    """

    def __init__(self, root_cell: Volume, policy: SplitPolicy, rng: random.Random,
                 max_depth: Optional[int] = None):
        self.policy = policy
        self.rng = rng
        self.max_depth = max_depth
        self.nodes: List[BSPNode] = []
        self.root = self._new_node(root_cell, 0)

    @classmethod
    def build(cls, root_cell: Volume, policy: SplitPolicy, rng: random.Random,
              max_depth: Optional[int] = None) -> 'PartitionTree':
        """Create a tree and split it until the policy rejects every cell"""
        tree = cls(root_cell, policy, rng, max_depth)
        splits = tree.split_recursively(tree.root)
        logger.info("Partitioned root cell into %d leaves (%d splits, height %d)",
                    len(tree.leaves()), splits, tree.height)
        return tree

    def _new_node(self, cell: Volume, depth: int) -> BSPNode:
        color = Color.from_hsv(self.rng.random(), 0.8, 1.0)
        node = BSPNode(len(self.nodes), cell, depth, color)
        self.nodes.append(node)
        return node

    def split_recursively(self, node: BSPNode) -> int:
        """
        Split a node and, depth-first, its descendants.

        Returns:
            Number of splits performed
        """
        # Do not attempt to split an invalid cell
        if not self.policy.is_valid(node.cell):
            return 0
        if self.max_depth is not None and node.depth >= self.max_depth:
            return 0

        splits = 0
        if node.is_leaf:
            result = self.policy.try_split(node.cell, self.rng)
            if result is None:
                return 0
            lower, upper, axis = result
            node.attach_children(
                self._new_node(lower, node.depth + 1),
                self._new_node(upper, node.depth + 1),
                axis,
            )
            logger.debug("Split node %d along %s at depth %d",
                         node.node_id, axis.name, node.depth)
            splits = 1

        for child in node.children:
            splits += self.split_recursively(child)
        return splits

    def node(self, node_id: int) -> BSPNode:
        return self.nodes[node_id]

    @property
    def height(self) -> int:
        """Depth of the deepest leaf"""
        return max(leaf.depth for leaf in self.leaves())

    def leaves(self) -> List[BSPNode]:
        return self.root.get_leaves()

    def nodes_at_depth(self, depth: int) -> List[BSPNode]:
        return self.root.get_nodes_at_depth(depth)

    def internal_nodes(self) -> List[BSPNode]:
        return [n for n in self.nodes if not n.is_leaf]

    def pending_nodes(self) -> List[BSPNode]:
        return [n for n in self.nodes if n.state is ConnectionState.PENDING]
