"""
Staged generation pipeline for BSP dungeons.

Resolves the seed, builds the generator against a scene, then runs the
split, room, connectivity and validation stages in order.  Generation
failures are recorded on the result instead of propagating, so callers get
the seed and the stage that failed alongside the error.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..generators.bsp.connectivity import ConnectivityReport
from ..generators.bsp.dungeon_generator import Dungeon, DungeonGenerator
from ..generators.bsp.errors import DungeonGenerationError, InvalidSettingsError
from ..generators.bsp.partition_tree import PartitionTree
from ..generators.bsp.settings import GeneratorSettings
from ..generators.bsp.volume import Vec3, Volume
from ..scene.box_scene import BoxScene
from ..scene.collaborators import SceneCollaborator
from ..validation.checks import validate_tree
from ..validation.core import ValidationError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PipelineStage(Enum):
    INITIALIZE = "initialize"
    SPLIT = "split"
    ROOMS = "rooms"
    CONNECT = "connect"
    VALIDATE = "validate"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class PipelineError(Exception):
    pass


# ---------------------------------------------------------------------------
# Settings / Result dataclasses
# ---------------------------------------------------------------------------

@dataclass
class PipelineSettings:
    # Root cell
    root_center: Vec3 = (0.0, 0.0, 0.0)
    root_extents: Vec3 = (50.0, 5.0, 50.0)

    # Generation
    generator: GeneratorSettings = field(default_factory=GeneratorSettings)

    # Seeding for reproducible generation
    seed: Optional[int] = None  # None = random seed, otherwise deterministic

    # Run structural checks on the finished tree
    validate_result: bool = True

    @property
    def root_cell(self) -> Volume:
        return Volume.from_center_extents(tuple(self.root_center), tuple(self.root_extents))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'root_center': list(self.root_center),
            'root_extents': list(self.root_extents),
            'generator': self.generator.to_dict(),
            'seed': self.seed,
            'validate_result': self.validate_result,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PipelineSettings':
        """Create settings from a dictionary; missing keys take defaults"""
        defaults = cls()
        return cls(
            root_center=tuple(data.get('root_center', defaults.root_center)),
            root_extents=tuple(data.get('root_extents', defaults.root_extents)),
            generator=GeneratorSettings.from_dict(data.get('generator', {})),
            seed=data.get('seed', defaults.seed),
            validate_result=data.get('validate_result', defaults.validate_result),
        )


@dataclass
class PipelineResult:
    success: bool
    dungeon: Optional[Dungeon] = None
    stages_completed: List[PipelineStage] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_time(self) -> float:
        return self.metrics.get("total_time", 0.0)

    @property
    def seed(self) -> Optional[int]:
        return self.metrics.get("seed")

    def add_error(self, error: str, stage: Optional[PipelineStage] = None):
        if stage:
            error = f"[{stage.value}] {error}"
        self.errors.append(error)

    def add_warning(self, warning: str, stage: Optional[PipelineStage] = None):
        if stage:
            warning = f"[{stage.value}] {warning}"
        self.warnings.append(warning)


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------

class GenerationPipeline:
    """Runs one seeded dungeon generation per generate() call."""

    def __init__(self, settings: Optional[PipelineSettings] = None,
                 scene: Optional[SceneCollaborator] = None):
        self.settings = settings or PipelineSettings()
        self.is_running = False
        self.current_stage = PipelineStage.INITIALIZE

        # A pipeline without an external scene builds a fresh BoxScene per run
        self._owns_scene = scene is None
        self.scene = scene

        # Components / data for the current run
        self.generator: Optional[DungeonGenerator] = None
        self.tree: Optional[PartitionTree] = None
        self.rooms: List[Volume] = []
        self.report: Optional[ConnectivityReport] = None

        self._validate_settings()

    def _validate_settings(self):
        errors = []
        if any(e <= 0 for e in self.settings.root_extents):
            errors.append("Root extents must be positive")
        try:
            self.settings.generator.validate()
        except InvalidSettingsError as e:
            errors.append(str(e))
        if errors:
            raise PipelineError(f"Invalid settings: {'; '.join(errors)}")

    # -- stages --

    def _initialize(self, seed: int):
        self.current_stage = PipelineStage.INITIALIZE
        if self._owns_scene:
            self.scene = BoxScene()
        else:
            # Probes must only see this run's geometry
            self.scene.reset()
        self.generator = DungeonGenerator(self.scene, self.settings.generator, seed)
        self.tree = None
        self.rooms = []
        self.report = None

    def _split(self):
        self.current_stage = PipelineStage.SPLIT
        self.tree = self.generator.build_tree(self.settings.root_cell)

    def _generate_rooms(self):
        self.current_stage = PipelineStage.ROOMS
        self.rooms = self.generator.generate_rooms(self.tree)

    def _connect(self):
        self.current_stage = PipelineStage.CONNECT
        self.report = self.generator.connect_rooms(self.tree)

    def _validate(self, result: PipelineResult):
        self.current_stage = PipelineStage.VALIDATE
        validation = validate_tree(self.tree, self.settings.generator,
                                   corridor_count=len(self.report.corridors))
        for issue in validation.warnings:
            logger.warning(str(issue))
            result.add_warning(str(issue), PipelineStage.VALIDATE)
        if validation.failed:
            logger.error("Validation failed: %d errors", len(validation.errors))
            raise ValidationError(validation)

    # -- main entry --

    def generate(self) -> PipelineResult:
        if self.is_running:
            raise PipelineError("Pipeline is already running")
        self.is_running = True
        result = PipelineResult(success=False)
        start_time = time.time()

        try:
            # Resolve seed for reproducible generation
            if self.settings.seed is not None:
                actual_seed = self.settings.seed
            else:
                actual_seed = random.randint(0, 2**31 - 1)
            result.metrics['seed'] = actual_seed
            logger.info("Generation seed: %d", actual_seed)

            stages = [
                (lambda: self._initialize(actual_seed), "Initialize"),
                (self._split, "Split cells"),
                (self._generate_rooms, "Generate rooms"),
                (self._connect, "Connect rooms"),
            ]
            if self.settings.validate_result:
                stages.append((lambda: self._validate(result), "Validate"))

            for stage_fn, desc in stages:
                try:
                    logger.info("Stage: %s", desc)
                    stage_start = time.time()
                    stage_fn()
                    result.metrics[f"{self.current_stage.value}_time"] = time.time() - stage_start
                    result.stages_completed.append(self.current_stage)
                except (DungeonGenerationError, ValidationError) as e:
                    logger.error("Generation aborted during %s: %s", self.current_stage.value, e)
                    result.add_error(str(e), self.current_stage)
                    return result

            result.dungeon = self.generator.assemble(self.tree, self.rooms, self.report)
            result.metrics.update(self.generator.get_layout_stats())
            result.stages_completed.append(PipelineStage.COMPLETE)
            result.success = True
            logger.info("Pipeline complete in %.2fs", time.time() - start_time)
        except Exception as e:
            logger.exception("Unexpected pipeline error")
            result.add_error(f"Unexpected error: {e}")
        finally:
            result.metrics["total_time"] = time.time() - start_time
            self.is_running = False
        return result
