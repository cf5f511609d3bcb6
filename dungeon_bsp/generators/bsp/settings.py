"""
Generation parameters for the BSP dungeon generator.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

from .errors import InvalidSettingsError


# Defaults follow the reference scenario: a 100x10x100 root cell
DEFAULT_MIN_CELL_VOLUME = 20.0 * 2.0 * 20.0
DEFAULT_MIN_ASPECT_RATIO = 0.2
DEFAULT_MAX_ASPECT_RATIO = 5.0
DEFAULT_EDGE_BUFFER = 1.0
DEFAULT_CENTER_BUFFER = 2.0
DEFAULT_MIN_ROOM_COVERAGE = 0.5
DEFAULT_CORRIDOR_WIDTH = 1.0


@dataclass
class GeneratorSettings:
    # Split policy
    min_cell_volume: float = DEFAULT_MIN_CELL_VOLUME
    min_aspect_ratio: float = DEFAULT_MIN_ASPECT_RATIO
    max_aspect_ratio: float = DEFAULT_MAX_ASPECT_RATIO
    max_depth: Optional[int] = None  # None = bounded only by the validity predicate

    # Room generation
    edge_buffer: float = DEFAULT_EDGE_BUFFER
    center_buffer: float = DEFAULT_CENTER_BUFFER
    min_room_coverage: float = DEFAULT_MIN_ROOM_COVERAGE  # fraction of cell extent per edge

    # Corridors
    corridor_width: float = DEFAULT_CORRIDOR_WIDTH

    def validate(self) -> None:
        """
        Check parameter ranges.

        Raises:
            InvalidSettingsError: listing every problem found
        """
        errors = []
        if self.min_cell_volume <= 0:
            errors.append("Minimum cell volume must be positive")
        if self.min_aspect_ratio <= 0:
            errors.append("Minimum aspect ratio must be positive")
        if self.max_aspect_ratio < self.min_aspect_ratio:
            errors.append("Maximum aspect ratio must be >= minimum aspect ratio")
        if self.max_depth is not None and self.max_depth < 0:
            errors.append("Maximum depth cannot be negative")
        if self.edge_buffer <= 0:
            errors.append("Edge buffer must be positive")
        if self.center_buffer < 0:
            errors.append("Center buffer cannot be negative")
        if not 0.5 <= self.min_room_coverage < 1.0:
            errors.append("Minimum room coverage must be in [0.5, 1.0)")
        if self.corridor_width <= 0:
            errors.append("Corridor width must be positive")
        if errors:
            raise InvalidSettingsError(f"Invalid settings: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeneratorSettings':
        """Create settings from a dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
