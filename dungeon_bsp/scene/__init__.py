"""
Scene collaborators for the BSP dungeon generator.

The generator talks to its scene only through ``SceneCollaborator``;
``BoxScene`` is an in-memory implementation for running without an engine.
"""

from .collaborators import (
    SceneCollaborator,
    GeometryKind,
    Color,
    WHITE,
)
from .box_scene import BoxScene, InstantiationRequest

__all__ = [
    'SceneCollaborator',
    'GeometryKind',
    'Color',
    'WHITE',
    'BoxScene',
    'InstantiationRequest',
]
