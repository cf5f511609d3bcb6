import random

import pytest

from dungeon_bsp.generators.bsp import (
    DungeonGenerator,
    GeneratorSettings,
    PartitionTree,
    SplitAxis,
    SplitPolicy,
    Volume,
)
from dungeon_bsp.scene import BoxScene


class FixedAxisPolicy(SplitPolicy):
    """Split policy that accepts every split along one axis"""

    def __init__(self, axis: SplitAxis, settings: GeneratorSettings = None):
        super().__init__(settings or GeneratorSettings())
        self.axis = axis

    def is_valid(self, cell):
        return True

    def try_split(self, cell, rng):
        lower, upper = cell.halve(self.axis)
        return lower, upper, self.axis


def make_two_leaf_tree(cell: Volume, axis: SplitAxis, seed: int = 0) -> PartitionTree:
    """Root split once along ``axis`` into two leaves"""
    return PartitionTree.build(cell, FixedAxisPolicy(axis), random.Random(seed), max_depth=1)


# --- Fixtures for common test data ---

@pytest.fixture
def settings():
    return GeneratorSettings()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def scene():
    return BoxScene()


@pytest.fixture
def root_cell():
    # Reference scenario: 100 x 10 x 100 centered on the origin
    return Volume.from_center_extents((0.0, 0.0, 0.0), (50.0, 5.0, 50.0))


@pytest.fixture
def generator(scene, settings):
    return DungeonGenerator(scene, settings, seed=2024)


@pytest.fixture
def dungeon(generator, root_cell):
    return generator.generate(root_cell)
