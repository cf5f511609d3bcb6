"""
Structural checks over a generated partition tree.

Validates:
- Child cells tile their parent (TREE-001)
- Leaf cells pass the split policy (TREE-002)
- Rooms stay inside their cells (ROOM-001)
- Leaf rooms cover half their cell (ROOM-002)
- Internal room bounds are the union of their children (ROOM-003)
- Every node has a room bound (ROOM-004)
- Every internal node is connected (CONN-001)
- One corridor per internal node (CONN-002)
"""

import math
from typing import List, Optional

from ..core import ValidationIssue, ValidationResult
from ..rules import (
    TREE_001, TREE_002, ROOM_001, ROOM_002, ROOM_003, ROOM_004, CONN_001, CONN_002,
)
from ...generators.bsp.partition_tree import BSPNode, ConnectionState, PartitionTree
from ...generators.bsp.settings import GeneratorSettings
from ...generators.bsp.split_policy import SplitPolicy
from ...generators.bsp.volume import SplitAxis, Volume

TOLERANCE = 1e-6


def _same_volume(a: Volume, b: Volume, tolerance: float = TOLERANCE) -> bool:
    return all(
        math.isclose(x, y, abs_tol=tolerance)
        for x, y in zip(a.minimum + a.maximum, b.minimum + b.maximum)
    )


def check_cell_tiling(node: BSPNode) -> List[ValidationIssue]:
    """Check that a node's children are disjoint halves of its cell."""
    if node.is_leaf:
        return []

    a, b = node.children
    issues = []
    if a.cell.overlaps(b.cell):
        issues.append(TREE_001.issue(node.node_id, detail="children overlap"))
    if not _same_volume(a.cell.union(b.cell), node.cell):
        issues.append(TREE_001.issue(node.node_id, detail="union differs from parent"))
    if not math.isclose(a.cell.volume + b.cell.volume, node.cell.volume,
                        rel_tol=1e-9, abs_tol=TOLERANCE):
        issues.append(TREE_001.issue(node.node_id, detail="volumes do not sum to parent"))
    return issues


def check_leaf_cell(node: BSPNode, policy: SplitPolicy) -> List[ValidationIssue]:
    """Check that a non-root leaf cell passes the validity predicate."""
    if not node.is_leaf or node.depth == 0 or policy.is_valid(node.cell):
        return []
    return [TREE_002.issue(node.node_id, volume=node.cell.volume, ratio=node.cell.aspect_ratio)]


def check_room(node: BSPNode, min_room_coverage: float) -> List[ValidationIssue]:
    """Check room presence, containment and (for leaves) coverage."""
    room = node.room
    if room is None:
        return [ROOM_004.issue(node.node_id)]

    issues = []
    if not node.cell.contains(room):
        issues.append(ROOM_001.issue(node.node_id, room=room, cell=node.cell))

    if node.is_leaf:
        for axis in (SplitAxis.X, SplitAxis.Z):
            required = node.cell.extents[axis.value] * min_room_coverage
            room_extent = room.extents[axis.value]
            if room_extent < required - TOLERANCE:
                issues.append(ROOM_002.issue(
                    node.node_id, room_extent=room_extent, axis=axis.name, required=required))
    return issues


def check_room_aggregation(node: BSPNode) -> List[ValidationIssue]:
    """Check that an internal room bound is the union of its children's."""
    if node.is_leaf or node.room is None:
        return []

    a, b = node.children
    if a.room is None or b.room is None:
        return []

    expected = a.room.union(b.room)
    if _same_volume(node.room, expected):
        return []
    return [ROOM_003.issue(node.node_id, room=node.room, expected=expected)]


def check_connected(node: BSPNode) -> List[ValidationIssue]:
    if node.state is ConnectionState.PENDING:
        return [CONN_001.issue(node.node_id, state=node.state.name)]
    return []


def validate_tree(tree: PartitionTree,
                  settings: Optional[GeneratorSettings] = None,
                  corridor_count: Optional[int] = None) -> ValidationResult:
    """
    Run every structural check over a tree.

    Args:
        tree: Generated partition tree
        settings: Settings the tree was generated with (defaults if omitted)
        corridor_count: Number of corridors produced, if known

    Returns:
        ValidationResult with all issues found
    """
    settings = settings or GeneratorSettings()
    policy = SplitPolicy(settings)
    result = ValidationResult()

    for node in tree.nodes:
        result.extend(check_cell_tiling(node))
        result.extend(check_leaf_cell(node, policy))
        result.extend(check_room(node, settings.min_room_coverage))
        result.extend(check_room_aggregation(node))
        result.extend(check_connected(node))

    if corridor_count is not None:
        expected = len(tree.internal_nodes())
        if corridor_count != expected:
            result.add_issue(CONN_002.issue(expected=expected, found=corridor_count))

    return result
