"""
Validation check modules.

- tree_checks: Partition tiling, room containment and coverage,
  bounds aggregation, connectivity
"""

from .tree_checks import (
    check_cell_tiling,
    check_leaf_cell,
    check_room,
    check_room_aggregation,
    check_connected,
    validate_tree,
)

__all__ = [
    'check_cell_tiling',
    'check_leaf_cell',
    'check_room',
    'check_room_aggregation',
    'check_connected',
    'validate_tree',
]
