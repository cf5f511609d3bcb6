"""
Contracts between the generator and the scene it populates.

The generator never builds meshes or casts rays itself.  It asks a scene to
instantiate room and corridor volumes and to probe for the nearest surface
along a direction.  Geometry instantiated before ``advance()`` must be
visible to probes after it, and ``reset()`` clears everything from an earlier
run.  The connectivity solver calls ``advance()`` once per sweep and never
relies on same-sweep visibility.
"""

from __future__ import annotations
import colorsys
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple, Optional

if TYPE_CHECKING:
    from ..generators.bsp.volume import Vec3, Volume


class GeometryKind(Enum):
    """Kinds of volumes the generator asks the scene to instantiate"""
    ROOM = "room"
    CORRIDOR = "corridor"


class Color(NamedTuple):
    """RGB color tag in [0, 1]"""
    r: float
    g: float
    b: float

    @classmethod
    def from_hsv(cls, hue: float, saturation: float, value: float) -> 'Color':
        return cls(*colorsys.hsv_to_rgb(hue, saturation, value))


WHITE = Color(1.0, 1.0, 1.0)


class SceneCollaborator(ABC):
    """
    Scene that materializes generated volumes and answers surface probes.
    """

    @abstractmethod
    def instantiate(self, volume: Volume, kind: GeometryKind, color: Color) -> None:
        """Request that a volume be materialized as probe-able geometry."""
        pass

    @abstractmethod
    def probe(self, origin: Vec3, direction: Vec3) -> Optional[Vec3]:
        """
        Find the first surface hit along a ray.

        Args:
            origin: Ray start
            direction: Unit ray direction

        Returns:
            The hit point, or None if nothing was hit
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """
        Remove all geometry from earlier runs.

        Called before a run starts; after it, probes must only see geometry
        instantiated by the current run.
        """
        pass

    def advance(self) -> None:
        """
        Mark a sweep boundary.

        Geometry instantiated before this call must be visible to ``probe``
        afterwards.  Scenes that register geometry immediately need not
        override this.
        """
        pass
