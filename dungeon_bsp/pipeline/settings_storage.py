"""
Persistence of pipeline settings as JSON files.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Union

from .generation_pipeline import PipelineSettings

logger = logging.getLogger(__name__)


def save_settings(settings: PipelineSettings, file_path: Union[str, Path]) -> Path:
    """
    Save pipeline settings to a JSON file.

    Args:
        settings: The settings to save
        file_path: Destination file; parent directories are created

    Returns:
        Path to the saved file
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)

    logger.debug("Saved settings to %s", path)
    return path


def load_settings(file_path: Union[str, Path]) -> PipelineSettings:
    """
    Load pipeline settings from a JSON file.

    Unknown keys are ignored and missing keys take their defaults.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not a JSON object
    """
    path = Path(file_path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a JSON object, got {type(data).__name__}")

    logger.debug("Loaded settings from %s", path)
    return PipelineSettings.from_dict(data)
