"""
Axis-aligned volumes for BSP dungeon generation.

A Volume is stored as its min/max corners so that unions, halving and
containment stay exact.  Center/extents are derived on demand.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Vec3 = Tuple[float, float, float]

EPSILON = 1e-6

# Vertical axis index; never partitioned
Y_AXIS = 1


class SplitAxis(Enum):
    """Horizontal axis along which a cell is halved.

    The value is the component index in a Vec3.
    """
    X = 0
    Z = 2

    @property
    def perpendicular(self) -> 'SplitAxis':
        """The other horizontal axis"""
        return SplitAxis.Z if self is SplitAxis.X else SplitAxis.X

    def unit(self, sign: float = 1.0) -> Vec3:
        """Unit direction along this axis"""
        direction = [0.0, 0.0, 0.0]
        direction[self.value] = float(sign)
        return (direction[0], direction[1], direction[2])


def _add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _with_component(v: Vec3, index: int, value: float) -> Vec3:
    out = list(v)
    out[index] = value
    return (out[0], out[1], out[2])


@dataclass(frozen=True)
class Volume:
    """Axis-aligned box in world space"""
    minimum: Vec3
    maximum: Vec3

    def __post_init__(self):
        for lo, hi in zip(self.minimum, self.maximum):
            if lo > hi:
                raise ValueError(f"Volume minimum {self.minimum} exceeds maximum {self.maximum}")

    @classmethod
    def from_center_extents(cls, center: Vec3, extents: Vec3) -> 'Volume':
        """Build a volume from its center and half-size"""
        return cls(_sub(center, extents), _add(center, extents))

    @classmethod
    def from_center_size(cls, center: Vec3, size: Vec3) -> 'Volume':
        """Build a volume from its center and full size"""
        half = (size[0] / 2, size[1] / 2, size[2] / 2)
        return cls.from_center_extents(center, half)

    @property
    def center(self) -> Vec3:
        """Center point of the box"""
        return (
            (self.minimum[0] + self.maximum[0]) / 2,
            (self.minimum[1] + self.maximum[1]) / 2,
            (self.minimum[2] + self.maximum[2]) / 2,
        )

    @property
    def size(self) -> Vec3:
        """Full size along each axis"""
        return _sub(self.maximum, self.minimum)

    @property
    def extents(self) -> Vec3:
        """Half-size along each axis"""
        sx, sy, sz = self.size
        return (sx / 2, sy / 2, sz / 2)

    @property
    def volume(self) -> float:
        sx, sy, sz = self.size
        return sx * sy * sz

    @property
    def aspect_ratio(self) -> float:
        """Horizontal aspect ratio (width / depth)"""
        sx, _, sz = self.size
        if sz <= 0:
            return float('inf')
        return abs(sx / sz)

    def interval(self, axis: int) -> Tuple[float, float]:
        """Projection of this volume onto a single axis"""
        return (self.minimum[axis], self.maximum[axis])

    def union(self, other: 'Volume') -> 'Volume':
        """Smallest volume enclosing both volumes"""
        return Volume(
            (min(self.minimum[0], other.minimum[0]),
             min(self.minimum[1], other.minimum[1]),
             min(self.minimum[2], other.minimum[2])),
            (max(self.maximum[0], other.maximum[0]),
             max(self.maximum[1], other.maximum[1]),
             max(self.maximum[2], other.maximum[2])),
        )

    def overlaps(self, other: 'Volume') -> bool:
        """Check if the interiors of two volumes intersect"""
        return all(
            self.minimum[i] < other.maximum[i] and other.minimum[i] < self.maximum[i]
            for i in range(3)
        )

    def contains(self, other: 'Volume', tolerance: float = EPSILON) -> bool:
        """Check if another volume lies entirely inside this one"""
        return all(
            self.minimum[i] - tolerance <= other.minimum[i]
            and other.maximum[i] <= self.maximum[i] + tolerance
            for i in range(3)
        )

    def contains_point(self, point: Vec3, tolerance: float = EPSILON) -> bool:
        return all(
            self.minimum[i] - tolerance <= point[i] <= self.maximum[i] + tolerance
            for i in range(3)
        )

    def halve(self, axis: SplitAxis) -> Tuple['Volume', 'Volume']:
        """
        Split this volume in two along one axis.

        Both halves share the boundary plane at the center, so together they
        reconstruct this volume exactly.

        Returns:
            (lower, upper) halves along the axis
        """
        mid = (self.minimum[axis.value] + self.maximum[axis.value]) / 2
        lower = Volume(self.minimum, _with_component(self.maximum, axis.value, mid))
        upper = Volume(_with_component(self.minimum, axis.value, mid), self.maximum)
        return lower, upper
