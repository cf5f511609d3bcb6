#!/usr/bin/env python3
"""
BSP Dungeon Generator

Drives the three generation phases over a partition tree:

1. Split the root cell recursively until the split policy rejects every cell
2. Carve a room in every leaf and aggregate room bounds bottom-up
3. Connect sibling subtrees with straight corridors, sweeping the tree until
   it reaches a fixed point

Rooms and corridors are handed to a scene collaborator as they are created;
the corridor pass probes that scene to find where corridors meet existing
geometry.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .bounds_aggregator import aggregate_bounds
from .connectivity import ConnectivityReport, ConnectivitySolver
from .partition_tree import PartitionTree
from .room_generator import RoomGenerator
from .settings import GeneratorSettings
from .split_policy import SplitPolicy
from .volume import Volume
from ...scene.collaborators import SceneCollaborator

logger = logging.getLogger(__name__)


@dataclass
class Dungeon:
    """Result of a generation run"""
    tree: PartitionTree
    seed: int
    rooms: List[Volume] = field(default_factory=list)
    corridors: List[Volume] = field(default_factory=list)
    corridor_nodes: List[int] = field(default_factory=list)  # owner of each corridor
    sweeps: int = 0


class DungeonGenerator:
    """
    Main BSP dungeon generator class.

    Every random decision is drawn from a single ``random.Random`` seeded per
    generator, so a seed and a root cell fully determine the layout.
    """

    def __init__(self, scene: SceneCollaborator,
                 settings: Optional[GeneratorSettings] = None,
                 seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            scene: Collaborator that instantiates geometry and answers probes
            settings: Generation parameters (defaults if omitted)
            seed: Seed for the random source; None picks one at random
        """
        self.settings = settings or GeneratorSettings()
        self.settings.validate()
        self.scene = scene
        self.seed = seed if seed is not None else random.randint(0, 2**31 - 1)
        self.rng = random.Random(self.seed)

        self.split_policy = SplitPolicy(self.settings)
        self.room_generator = RoomGenerator(self.settings, self.rng, scene)
        self.solver = ConnectivitySolver(self.settings, self.rng, scene)

        self.dungeon: Optional[Dungeon] = None

    def build_tree(self, root_cell: Volume) -> PartitionTree:
        """Phase 1: recursively partition the root cell"""
        return PartitionTree.build(root_cell, self.split_policy, self.rng,
                                   self.settings.max_depth)

    def generate_rooms(self, tree: PartitionTree) -> List[Volume]:
        """
        Phase 2: carve a room in every leaf, then aggregate bounds.

        The scene is advanced once so that rooms are probe-visible before the
        first connectivity sweep.
        """
        rooms = [self.room_generator.generate(leaf) for leaf in tree.leaves()]
        self.scene.advance()
        aggregate_bounds(tree.root)
        logger.info("Generated %d room(s)", len(rooms))
        return rooms

    def connect_rooms(self, tree: PartitionTree) -> ConnectivityReport:
        """Phase 3: sweep the tree until every subtree is connected"""
        return self.solver.solve(tree)

    def generate(self, root_cell: Volume) -> Dungeon:
        """
        Generate a complete dungeon inside a root cell.

        The scene is reset first, so only this run's geometry is probed.

        Raises:
            DungeonGenerationError: on any geometry-consistency failure
        """
        logger.info("Starting BSP generation (seed %d) in cell of size %s",
                    self.seed, root_cell.size)

        # Probes must only see this run's geometry
        self.scene.reset()

        tree = self.build_tree(root_cell)
        rooms = self.generate_rooms(tree)
        report = self.connect_rooms(tree)
        return self.assemble(tree, rooms, report)

    def assemble(self, tree: PartitionTree, rooms: List[Volume],
                 report: ConnectivityReport) -> Dungeon:
        """Record the outcome of the three phases as a Dungeon"""
        self.dungeon = Dungeon(
            tree=tree,
            seed=self.seed,
            rooms=rooms,
            corridors=list(report.corridors),
            corridor_nodes=list(report.connected_nodes),
            sweeps=report.sweeps,
        )
        logger.info("Generation complete: %d rooms, %d corridors",
                    len(rooms), len(report.corridors))
        return self.dungeon

    def get_layout_stats(self) -> Dict:
        """
        Get statistics about the generated layout.

        Returns:
            Dictionary with layout statistics
        """
        stats = {
            'seed': self.seed,
            'room_count': 0,
            'corridor_count': 0,
            'leaf_count': 0,
            'node_count': 0,
            'tree_height': 0,
            'total_room_volume': 0.0,
            'average_room_volume': 0.0,
            'total_corridor_length': 0.0,
            'sweeps': 0,
        }
        if self.dungeon is None:
            return stats

        dungeon = self.dungeon
        stats['room_count'] = len(dungeon.rooms)
        stats['corridor_count'] = len(dungeon.corridors)
        stats['leaf_count'] = len(dungeon.tree.leaves())
        stats['node_count'] = len(dungeon.tree.nodes)
        stats['tree_height'] = dungeon.tree.height
        stats['total_room_volume'] = sum(r.volume for r in dungeon.rooms)
        if dungeon.rooms:
            stats['average_room_volume'] = stats['total_room_volume'] / len(dungeon.rooms)
        stats['total_corridor_length'] = sum(
            corridor.size[dungeon.tree.node(node_id).split_axis.value]
            for corridor, node_id in zip(dungeon.corridors, dungeon.corridor_nodes)
        )
        stats['sweeps'] = dungeon.sweeps
        return stats


def main():
    """Generate a sample dungeon against an in-memory scene"""
    from ...scene.box_scene import BoxScene

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=== BSP Dungeon Generator Test ===\n")

    scene = BoxScene()
    generator = DungeonGenerator(scene, GeneratorSettings(), seed=1234)
    root = Volume.from_center_extents((0.0, 0.0, 0.0), (50.0, 5.0, 50.0))
    generator.generate(root)

    print("\n=== Layout Statistics ===")
    for key, value in generator.get_layout_stats().items():
        print(f"{key}: {value}")


if __name__ == "__main__":
    main()
