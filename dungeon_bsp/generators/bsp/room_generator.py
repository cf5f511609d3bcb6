"""
Room carving for BSP leaf cells.

Each horizontal edge of a room is pushed out from the cell center by an
independent random offset.  Offsets never drop below half the cell extent,
so every room covers at least the middle half of its cell on X and Z.  That
keeps sibling room bounds overlapping, which lets every corridor be straight.
"""

import logging
import random
from typing import TYPE_CHECKING, Tuple

from .errors import RoomPlacementError
from .settings import GeneratorSettings
from .volume import SplitAxis, Volume
from ...scene.collaborators import GeometryKind, SceneCollaborator

if TYPE_CHECKING:
    from .partition_tree import BSPNode

logger = logging.getLogger(__name__)


class RoomGenerator:
    """Generates one room per leaf and registers it with the scene."""

    def __init__(self, settings: GeneratorSettings, rng: random.Random,
                 scene: SceneCollaborator):
        self.edge_buffer = settings.edge_buffer
        self.center_buffer = settings.center_buffer
        self.min_room_coverage = settings.min_room_coverage
        self.rng = rng
        self.scene = scene

    def offset_range(self, extent: float) -> Tuple[float, float]:
        """Allowed distance from the cell center to one room edge"""
        low = max(self.center_buffer, extent * self.min_room_coverage)
        high = extent - self.edge_buffer
        return low, high

    def carve(self, cell: Volume, node_id: int = -1) -> Volume:
        """
        Randomly place a room inside a cell.

        Args:
            cell: Leaf cell
            node_id: Owning node, for error messages

        Returns:
            Room volume with the cell's full height

        Raises:
            RoomPlacementError: if the cell cannot fit the buffers
        """
        extents = cell.extents
        cx, cy, cz = cell.center

        offsets = {}
        for axis in (SplitAxis.X, SplitAxis.Z):
            low, high = self.offset_range(extents[axis.value])
            if low > high:
                raise RoomPlacementError(
                    node_id,
                    f"cell extent {extents[axis.value]:.3f} on {axis.name} cannot fit "
                    f"edge buffer {self.edge_buffer} and center buffer {low:.3f}"
                )
            offsets[axis] = (self.rng.uniform(low, high), self.rng.uniform(low, high))

        top_x, bot_x = offsets[SplitAxis.X]
        top_z, bot_z = offsets[SplitAxis.Z]

        return Volume(
            (cx - bot_x, cell.minimum[1], cz - bot_z),
            (cx + top_x, cell.maximum[1], cz + top_z),
        )

    def generate(self, node: 'BSPNode') -> Volume:
        """Carve a room for a leaf node, store it and request its geometry"""
        room = self.carve(node.cell, node.node_id)
        node.set_room(room)
        self.scene.instantiate(room, GeometryKind.ROOM, node.color)
        logger.debug("Room for node %d: center=%s size=%s",
                     node.node_id, room.center, room.size)
        return room
