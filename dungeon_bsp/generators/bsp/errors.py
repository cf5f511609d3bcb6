"""
Exceptions raised while generating a BSP dungeon.

Rejected splits are not errors; they end recursion.  Everything here aborts
the generation run, since retrying with the same random state would
reproduce the same failure.
"""

from typing import Optional, Sequence, Tuple

from .volume import Vec3


class DungeonGenerationError(Exception):
    """Base class for unrecoverable generation failures"""
    pass


class InvalidSettingsError(ValueError):
    pass


class RoomPlacementError(DungeonGenerationError):
    """A leaf cell is too small to hold a room with the configured buffers"""

    def __init__(self, node_id: int, message: str):
        self.node_id = node_id
        super().__init__(f"Node {node_id}: {message}")


class OverlapPreconditionError(DungeonGenerationError):
    """Sibling room bounds do not overlap by at least one corridor width"""

    def __init__(self, node_id: int, interval: Tuple[float, float], corridor_width: float):
        self.node_id = node_id
        self.interval = interval
        self.corridor_width = corridor_width
        super().__init__(
            f"Node {node_id}: room bounds overlap [{interval[0]:.3f}, {interval[1]:.3f}] "
            f"is narrower than corridor width {corridor_width}"
        )


class ProbeMissError(DungeonGenerationError):
    """A surface probe expected to hit scene geometry did not"""

    def __init__(self, node_id: int, origin: Vec3, direction: Vec3,
                 hit: Optional[Vec3] = None):
        self.node_id = node_id
        self.origin = origin
        self.direction = direction
        self.hit = hit
        if hit is None:
            detail = "no surface hit"
        else:
            detail = f"hit {hit} lies outside the node cell"
        super().__init__(
            f"Node {node_id}: probe from {origin} along {direction} failed: {detail}"
        )


class DegenerateCorridorError(DungeonGenerationError):
    """Probe hits on either side of a split leave a corridor of no length"""

    def __init__(self, node_id: int, hit_a: Vec3, hit_b: Vec3):
        self.node_id = node_id
        self.hit_a = hit_a
        self.hit_b = hit_b
        super().__init__(
            f"Node {node_id}: corridor between {hit_a} and {hit_b} has no length"
        )


class ConnectivityStalledError(DungeonGenerationError):
    """Connectivity sweeps stopped making progress with nodes still pending"""

    def __init__(self, pending_ids: Sequence[int], sweeps: int):
        self.pending_ids = list(pending_ids)
        self.sweeps = sweeps
        super().__init__(
            f"Connectivity stalled after {sweeps} sweep(s); "
            f"pending nodes: {self.pending_ids}"
        )
