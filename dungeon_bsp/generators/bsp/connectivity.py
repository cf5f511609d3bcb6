"""
Corridor synthesis between sibling subtrees.

Connectivity is solved bottom-up over several sweeps.  A node connects its
two children only once both are ready (a leaf, or already connected in an
earlier sweep).  Geometry instantiated during a sweep is not assumed to be
probe-visible until the scene has been advanced, so a parent always waits
one sweep after a child connects before probing into that child.

To connect two children, the solver finds where their room bounds overlap
on the axis perpendicular to the split, picks a point inside that overlap,
and probes from the splitting plane towards each child.  The two hit points
are the ends of a straight corridor.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Tuple

from .errors import (
    ConnectivityStalledError,
    DegenerateCorridorError,
    OverlapPreconditionError,
    ProbeMissError,
)
from .partition_tree import BSPNode, ConnectionState, PartitionTree
from .settings import GeneratorSettings
from .volume import Volume, Y_AXIS
from ...scene.collaborators import GeometryKind, SceneCollaborator, WHITE

logger = logging.getLogger(__name__)


def overlap_interval(a: Volume, b: Volume, axis: int) -> Tuple[float, float]:
    """
    Overlap of two volumes projected onto one axis.

    The result may be empty (min > max) when the projections are disjoint.
    """
    a_min, a_max = a.interval(axis)
    b_min, b_max = b.interval(axis)
    return max(a_min, b_min), min(a_max, b_max)


def pick_connection_point(interval: Tuple[float, float], corridor_width: float,
                          rng: random.Random) -> float:
    """Random point in an interval, inset by half a corridor on each side"""
    low, high = interval
    half = corridor_width / 2
    return rng.uniform(low + half, high - half)


@dataclass
class ConnectivityReport:
    """Outcome of one call to ConnectivitySolver.solve()"""
    sweeps: int = 0  # sweeps that changed at least one node
    corridors: List[Volume] = field(default_factory=list)
    connected_nodes: List[int] = field(default_factory=list)


class ConnectivitySolver:
    """Wires sibling subtrees together with straight corridors."""

    def __init__(self, settings: GeneratorSettings, rng: random.Random,
                 scene: SceneCollaborator):
        self.corridor_width = settings.corridor_width
        self.rng = rng
        self.scene = scene
        self._report = ConnectivityReport()

    def solve(self, tree: PartitionTree) -> ConnectivityReport:
        """
        Sweep the tree until no node changes state.

        Raises:
            ConnectivityStalledError: if nodes are still pending at the fixed point
            OverlapPreconditionError: if sibling room bounds do not overlap enough
            ProbeMissError: if a probe fails to find child geometry
            DegenerateCorridorError: if the two hits leave no room for a corridor
        """
        self._report = ConnectivityReport()
        max_sweeps = len(tree.nodes)

        while True:
            changed = self.sweep(tree.root)
            self.scene.advance()
            if not changed:
                break
            self._report.sweeps += 1
            logger.debug("Connectivity sweep %d: %d node(s) pending",
                         self._report.sweeps, len(tree.pending_nodes()))
            if self._report.sweeps > max_sweeps:
                raise ConnectivityStalledError(
                    [n.node_id for n in tree.pending_nodes()], self._report.sweeps)

        pending = tree.pending_nodes()
        if pending:
            raise ConnectivityStalledError([n.node_id for n in pending], self._report.sweeps)

        logger.info("Connectivity reached a fixed point after %d sweep(s): %d corridor(s)",
                    self._report.sweeps, len(self._report.corridors))
        return self._report

    def sweep(self, node: BSPNode) -> bool:
        """
        Run one bottom-up sweep over a subtree.

        Returns:
            True if any node in the subtree changed or is waiting on a change
        """
        # Leaves and connected nodes never change again
        if node.state is not ConnectionState.PENDING:
            return False

        child_updated = False
        for child in node.children:
            child_updated |= self.sweep(child)

        # A child changed this sweep; its geometry is not probe-visible yet
        if child_updated:
            return True

        if not all(child.is_ready for child in node.children):
            return False

        self.connect_children(node)
        node.mark_connected()
        self._report.connected_nodes.append(node.node_id)
        return True

    def connect_children(self, node: BSPNode) -> Volume:
        """
        Build the corridor joining the two children of a node.

        Returns:
            The corridor volume that was instantiated
        """
        child_a, child_b = node.children
        if child_a.room is None or child_b.room is None:
            raise RuntimeError(f"Node {node.node_id}: child room bounds were not aggregated")

        split = node.split_axis.value
        perpendicular = node.split_axis.perpendicular.value
        width = self.corridor_width

        # Interval where both children's rooms overlap across the split plane
        interval = overlap_interval(child_a.room, child_b.room, perpendicular)
        if interval[0] + width > interval[1]:
            raise OverlapPreconditionError(node.node_id, interval, width)

        point = pick_connection_point(interval, width, self.rng)

        origin = list(node.cell.center)
        origin[perpendicular] = point
        origin = (origin[0], origin[1], origin[2])

        # child_a is the lower half on the split axis, child_b the upper
        hit_a = self._probe_child(node, child_a, origin, node.split_axis.unit(-1.0))
        hit_b = self._probe_child(node, child_b, origin, node.split_axis.unit(1.0))
        if hit_b[split] - hit_a[split] <= 0.0:
            raise DegenerateCorridorError(node.node_id, hit_a, hit_b)

        minimum = [0.0, 0.0, 0.0]
        maximum = [0.0, 0.0, 0.0]
        minimum[split], maximum[split] = hit_a[split], hit_b[split]
        minimum[perpendicular], maximum[perpendicular] = point - width / 2, point + width / 2
        minimum[Y_AXIS], maximum[Y_AXIS] = origin[Y_AXIS] - width / 2, origin[Y_AXIS] + width / 2
        corridor = Volume(tuple(minimum), tuple(maximum))

        self.scene.instantiate(corridor, GeometryKind.CORRIDOR, WHITE)
        self._report.corridors.append(corridor)
        logger.debug("Corridor for node %d along %s: center=%s length=%.3f",
                     node.node_id, node.split_axis.name, corridor.center,
                     corridor.size[split])
        return corridor

    def _probe_child(self, node: BSPNode, child: BSPNode, origin, direction):
        hit = self.scene.probe(origin, direction)
        if hit is None or not child.cell.contains_point(hit):
            raise ProbeMissError(node.node_id, origin, direction, hit)
        return hit
