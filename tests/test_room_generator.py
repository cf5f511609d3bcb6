import random

import pytest

from dungeon_bsp.generators.bsp import (
    BSPNode,
    GeneratorSettings,
    RoomGenerator,
    RoomPlacementError,
    Volume,
)
from dungeon_bsp.scene import BoxScene, Color, GeometryKind


@pytest.fixture
def room_generator(settings, rng, scene):
    return RoomGenerator(settings, rng, scene)


@pytest.mark.parametrize("size", [
    (12.5, 10.0, 12.5),
    (25.0, 10.0, 6.25),
    (50.0, 10.0, 100.0),
])
def test_room_inside_cell_and_covers_half(room_generator, size):
    cell = Volume.from_center_size((10.0, 0.0, -20.0), size)
    for _ in range(200):
        room = room_generator.carve(cell)
        assert cell.contains(room)
        # Edge buffer keeps the room off the cell walls
        for axis in (0, 2):
            assert room.minimum[axis] >= cell.minimum[axis] + 1.0 - 1e-9
            assert room.maximum[axis] <= cell.maximum[axis] - 1.0 + 1e-9
            assert room.extents[axis] >= cell.extents[axis] / 2 - 1e-9
        # Vertical extent is never shrunk
        assert room.interval(1) == cell.interval(1)


def test_room_always_contains_middle_half_of_cell(room_generator):
    cell = Volume.from_center_size((0.0, 0.0, 0.0), (40.0, 10.0, 40.0))
    for _ in range(100):
        room = room_generator.carve(cell)
        assert room.minimum[0] <= -10.0 and room.maximum[0] >= 10.0
        assert room.minimum[2] <= -10.0 and room.maximum[2] >= 10.0


def test_cell_too_small_for_buffers(room_generator):
    cell = Volume.from_center_size((0.0, 0.0, 0.0), (4.0, 10.0, 40.0))
    with pytest.raises(RoomPlacementError) as excinfo:
        room_generator.carve(cell, node_id=7)
    assert excinfo.value.node_id == 7


def test_generate_sets_room_and_requests_geometry():
    scene = BoxScene()
    generator = RoomGenerator(GeneratorSettings(), random.Random(1), scene)
    color = Color(0.1, 0.2, 0.3)
    node = BSPNode(3, Volume.from_center_size((0.0, 0.0, 0.0), (20.0, 10.0, 20.0)), color=color)

    room = generator.generate(node)

    assert node.room == room
    assert len(scene.requests) == 1
    request = scene.requests[0]
    assert request.kind is GeometryKind.ROOM
    assert request.volume == room
    assert request.color == color
    # Not visible until the scene advances
    assert scene.visible_count == 0
    assert scene.pending_count == 1


def test_room_is_written_once():
    generator = RoomGenerator(GeneratorSettings(), random.Random(1), BoxScene())
    node = BSPNode(0, Volume.from_center_size((0.0, 0.0, 0.0), (20.0, 10.0, 20.0)))
    generator.generate(node)
    with pytest.raises(RuntimeError):
        generator.generate(node)
