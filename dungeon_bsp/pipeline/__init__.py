"""
BSP Dungeon Generation Pipeline Module.

Provides seeded, staged generation runs and settings files.
"""

from .generation_pipeline import (
    GenerationPipeline,
    PipelineSettings,
    PipelineResult,
    PipelineStage,
    PipelineError,
)
from .settings_storage import load_settings, save_settings

__all__ = [
    'GenerationPipeline',
    'PipelineSettings',
    'PipelineResult',
    'PipelineStage',
    'PipelineError',
    'load_settings',
    'save_settings',
]
