"""
Validity predicate and halving rule for BSP cells.
"""

import random
from typing import Optional, Tuple

from .settings import GeneratorSettings
from .volume import SplitAxis, Volume


class SplitPolicy:
    """
    Decides whether a cell is usable and how to split it.

    A cell is valid when its volume reaches the configured minimum and its
    horizontal aspect ratio stays inside the configured band.  Splits halve
    a cell along X or Z and are only accepted when both halves are valid.
    """

    def __init__(self, settings: GeneratorSettings):
        self.min_cell_volume = settings.min_cell_volume
        self.min_aspect_ratio = settings.min_aspect_ratio
        self.max_aspect_ratio = settings.max_aspect_ratio

    def is_valid(self, cell: Volume) -> bool:
        if cell.volume < self.min_cell_volume:
            return False

        ratio = cell.aspect_ratio
        if ratio > self.max_aspect_ratio or ratio < self.min_aspect_ratio:
            return False

        return True

    def try_split(self, cell: Volume,
                  rng: random.Random) -> Optional[Tuple[Volume, Volume, SplitAxis]]:
        """
        Attempt to halve a cell along a random horizontal axis.

        Args:
            cell: Cell to split
            rng: Random source used to pick the axis

        Returns:
            (lower, upper, axis) if both halves are valid, otherwise None
        """
        axis = rng.choice((SplitAxis.X, SplitAxis.Z))
        lower, upper = cell.halve(axis)

        if not self.is_valid(lower) or not self.is_valid(upper):
            return None

        return lower, upper, axis
