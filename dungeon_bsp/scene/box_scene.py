"""
In-memory scene of axis-aligned boxes.

Stands in for an engine scene when generating outside one: instantiated
volumes are queued and only become probe-visible on the next ``advance()``,
the same one-sweep latency an engine physics scene has for freshly spawned
colliders.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from .collaborators import Color, GeometryKind, SceneCollaborator

if TYPE_CHECKING:
    from ..generators.bsp.volume import Vec3, Volume

logger = logging.getLogger(__name__)


@dataclass
class InstantiationRequest:
    """Record of one instantiate() call"""
    volume: 'Volume'
    kind: GeometryKind
    color: Color
    sweep: int  # value of BoxScene.sweep when requested


class BoxScene(SceneCollaborator):
    """Scene that probes against visible boxes with a vectorised slab test."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Drop every box and request, visible or pending"""
        self.sweep = 0
        self.requests: List[InstantiationRequest] = []
        self._pending: List['Volume'] = []
        self._mins = np.zeros((0, 3), dtype=np.float64)
        self._maxs = np.zeros((0, 3), dtype=np.float64)

    @property
    def visible_count(self) -> int:
        return int(self._mins.shape[0])

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def requests_of_kind(self, kind: GeometryKind) -> List[InstantiationRequest]:
        return [r for r in self.requests if r.kind == kind]

    def instantiate(self, volume: 'Volume', kind: GeometryKind, color: Color) -> None:
        self.requests.append(InstantiationRequest(volume, kind, color, self.sweep))
        self._pending.append(volume)

    def advance(self) -> None:
        """Make every pending box visible to probes"""
        if self._pending:
            mins = np.array([v.minimum for v in self._pending], dtype=np.float64)
            maxs = np.array([v.maximum for v in self._pending], dtype=np.float64)
            self._mins = np.vstack([self._mins, mins])
            self._maxs = np.vstack([self._maxs, maxs])
            logger.debug("Sweep %d: registered %d box(es), %d visible",
                         self.sweep, len(self._pending), self.visible_count)
            self._pending = []
        self.sweep += 1

    def probe(self, origin: 'Vec3', direction: 'Vec3') -> Optional['Vec3']:
        """
        Nearest box surface along a ray.

        Boxes that contain the origin are ignored, so a probe started on a
        splitting plane only sees faces ahead of it.
        """
        if self.visible_count == 0:
            return None

        o = np.asarray(origin, dtype=np.float64)
        d = np.asarray(direction, dtype=np.float64)
        parallel = d == 0.0

        with np.errstate(divide='ignore', invalid='ignore'):
            t1 = (self._mins - o) / d
            t2 = (self._maxs - o) / d

        t_near = np.where(parallel, -np.inf, np.minimum(t1, t2))
        t_far = np.where(parallel, np.inf, np.maximum(t1, t2))

        # Parallel axes never bound t; the origin has to sit inside the slab instead
        in_slab = np.all(~parallel | ((self._mins <= o) & (o <= self._maxs)), axis=1)

        enter = t_near.max(axis=1)
        leave = t_far.min(axis=1)
        hits = in_slab & (enter <= leave) & (enter > 0.0)
        if not np.any(hits):
            return None

        t = float(enter[hits].min())
        point = o + t * d
        return (float(point[0]), float(point[1]), float(point[2]))
