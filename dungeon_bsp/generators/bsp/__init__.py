"""
BSP (Binary Space Partitioning) Generator Module

This module provides the BSP tree, room carving and corridor connectivity
used to generate connected dungeon layouts.
"""

from .volume import Volume, Vec3, SplitAxis
from .settings import GeneratorSettings
from .split_policy import SplitPolicy
from .room_generator import RoomGenerator
from .partition_tree import BSPNode, PartitionTree, ConnectionState
from .bounds_aggregator import aggregate_bounds, update_room_bounds
from .connectivity import (
    ConnectivitySolver,
    ConnectivityReport,
    overlap_interval,
    pick_connection_point,
)
from .dungeon_generator import DungeonGenerator, Dungeon
from .errors import (
    DungeonGenerationError,
    InvalidSettingsError,
    RoomPlacementError,
    OverlapPreconditionError,
    ProbeMissError,
    DegenerateCorridorError,
    ConnectivityStalledError,
)

__all__ = [
    'Volume',
    'Vec3',
    'SplitAxis',
    'GeneratorSettings',
    'SplitPolicy',
    'RoomGenerator',
    'BSPNode',
    'PartitionTree',
    'ConnectionState',
    'aggregate_bounds',
    'update_room_bounds',
    'ConnectivitySolver',
    'ConnectivityReport',
    'overlap_interval',
    'pick_connection_point',
    'DungeonGenerator',
    'Dungeon',
    # Errors
    'DungeonGenerationError',
    'InvalidSettingsError',
    'RoomPlacementError',
    'OverlapPreconditionError',
    'ProbeMissError',
    'DegenerateCorridorError',
    'ConnectivityStalledError',
]

__version__ = '1.0.0'
